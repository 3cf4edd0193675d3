# product_ranker/api/v1/routers/experiments.py
from fastapi import APIRouter, Depends, Query

from product_ranker.api.deps import engine_dep
from product_ranker.api.v1.schemas.ranking import VariantOut

router = APIRouter(tags=["experiments"])


@router.get("/experiments/{test_name}/variant", response_model=VariantOut)
def ab_test_variant(
    test_name: str,
    user_id: str = Query(..., min_length=1),
    engine = Depends(engine_dep),
):
    """Deterministic A/B bucket for (user_id, test_name)."""
    return {"user_id": user_id, "test_name": test_name, "variant": engine.get_ab_test_variant(user_id, test_name)}
