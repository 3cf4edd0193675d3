# product_ranker/api/v1/routers/recommendations.py
from fastapi import APIRouter, Depends, Query
import logging
import time

from product_ranker.api.deps import engine_dep, product_repo_dep, profile_store_dep
from product_ranker.api.v1.schemas.ranking import RecoListOut
from product_ranker.domain.services.recommendation_svc import get_category_svc, get_personalized_svc

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recommendations"])


@router.get("/users/{user_id}/recommendations", response_model=RecoListOut)
async def personalized_recommendations(
    user_id: str,
    limit: int = Query(20, ge=1, le=200),
    include_breakdown: bool = Query(False, description="Include the full score explanation per item"),
    engine = Depends(engine_dep),
    repo = Depends(product_repo_dep),
    store = Depends(profile_store_dep),
):
    logger.info("Request: personalized_recommendations user_id=%s limit=%s", user_id, limit)
    t0 = time.perf_counter()
    res = await get_personalized_svc(engine, repo, store, user_id, limit, include_breakdown)
    logger.info(
        "Response: personalized_recommendations user_id=%s count=%s elapsed_time=%.4fs",
        user_id, res["count"], time.perf_counter() - t0,
    )
    return res


@router.get("/categories/{category_slug}/recommendations", response_model=RecoListOut)
async def category_recommendations(
    category_slug: str,
    limit: int = Query(20, ge=1, le=200),
    include_breakdown: bool = Query(False, description="Include the full score explanation per item"),
    engine = Depends(engine_dep),
    repo = Depends(product_repo_dep),
):
    logger.info("Request: category_recommendations slug=%s limit=%s", category_slug, limit)
    t0 = time.perf_counter()
    res = await get_category_svc(engine, repo, category_slug, limit, include_breakdown)
    logger.info(
        "Response: category_recommendations slug=%s count=%s elapsed_time=%.4fs",
        category_slug, res["count"], time.perf_counter() - t0,
    )
    return res
