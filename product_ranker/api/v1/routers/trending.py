# product_ranker/api/v1/routers/trending.py
from fastapi import APIRouter, Depends, Query
from typing import Optional
import logging
import time

from product_ranker.api.deps import engine_dep, product_repo_dep, redis_dep
from product_ranker.api.v1.schemas.ranking import TrendingIn, TrendingListOut
from product_ranker.domain.services.recommendation_svc import get_trending_svc

logger = logging.getLogger(__name__)

router = APIRouter(tags=["trending"])


@router.post("/products/trending", response_model=TrendingListOut)
async def trending_inline(body: TrendingIn, engine = Depends(engine_dep)):
    trending = engine.get_trending_products(body.products, body.limit)
    items = [{"product_id": t.product.product_id, "trending_score": t.trending_score} for t in trending]
    logger.info("Response: trending_inline candidates=%s returned=%s", len(body.products), len(items))
    return {"items": items, "count": len(items)}


@router.get("/products/trending", response_model=TrendingListOut)
async def trending_catalog(
    limit: int = Query(20, ge=1, le=200),
    category_slug: Optional[str] = Query(None),
    engine = Depends(engine_dep),
    repo = Depends(product_repo_dep),
    redis = Depends(redis_dep),
):
    """Trending products over the catalog by 7-day velocity; cached in Redis."""
    t0 = time.perf_counter()
    result = await get_trending_svc(engine, repo, redis, limit, category_slug)
    logger.info(
        "Response: trending_catalog returned %s items in %.4fs category_slug=%s",
        result["count"], time.perf_counter() - t0, category_slug,
    )
    return result
