# product_ranker/api/v1/routers/algorithm.py
from fastapi import APIRouter, Depends

from product_ranker.api.deps import engine_dep, profile_store_dep
from product_ranker.api.v1.schemas.ranking import AnalyticsOut

router = APIRouter(prefix="/algorithm", tags=["algorithm"])


@router.get("/analytics", response_model=AnalyticsOut)
async def algorithm_analytics(engine = Depends(engine_dep), store = Depends(profile_store_dep)):
    """Weights, seasonal table and number of tracked profiles."""
    return engine.algorithm_analytics(active_users=await store.count())
