# product_ranker/api/v1/routers/scoring.py
from fastapi import APIRouter, Depends
import logging
import time

from product_ranker.api.deps import engine_dep, profile_store_dep
from product_ranker.api.v1.schemas.ranking import RankIn, RecoListOut, ScoreIn
from product_ranker.domain.models.score import ScoreResult
from product_ranker.domain.services.engine import ScoringContext
from product_ranker.domain.services.recommendation_svc import load_profile, rank_products_svc

logger = logging.getLogger(__name__)

router = APIRouter(tags=["scoring"])


@router.post("/products/score", response_model=ScoreResult)
async def score_product(
    body: ScoreIn,
    engine = Depends(engine_dep),
    store = Depends(profile_store_dep),
):
    """Score one product and explain the score."""
    user = await load_profile(store, body.user_id)
    context = ScoringContext(type=body.context_type, market=body.market, user=user)
    result = engine.calculate_product_score(body.product, context)
    logger.info(
        "Response: score_product product_id=%s context=%s score=%.2f",
        body.product.product_id, body.context_type, result.score,
    )
    return result


@router.post("/products/rank", response_model=RecoListOut)
async def rank_products(
    body: RankIn,
    engine = Depends(engine_dep),
    store = Depends(profile_store_dep),
):
    """
    Rank an inline candidate list.
    With `category_slug`: category recommendations; otherwise personalized
    for `user_id` (or anonymous).
    """
    t0 = time.perf_counter()
    scored = await rank_products_svc(
        engine, store, body.products,
        user_id=body.user_id, category_slug=body.category_slug, limit=body.limit,
    )
    items = [
        {
            "product_id": s.product.product_id,
            "score": s.recommendation.score,
            "recommendation": s.recommendation if body.include_breakdown else None,
        }
        for s in scored
    ]
    logger.info(
        "Response: rank_products candidates=%s returned=%s user_id=%s category_slug=%s in %.4fs",
        len(body.products), len(items), body.user_id, body.category_slug, time.perf_counter() - t0,
    )
    return {"items": items, "count": len(items)}
