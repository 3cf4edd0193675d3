import logging
import time
from datetime import datetime
from typing import Any, Dict, List, Optional

from product_ranker.core.config import get_settings
from product_ranker.domain.models.product import Product
from product_ranker.domain.models.profile import UserProfile
from product_ranker.domain.models.score import ScoredProduct
from product_ranker.domain.repositories.product_repo import ProductRepo
from product_ranker.domain.repositories.profile_store import ProfileStore
from product_ranker.domain.services.engine import RecommendationEngine
from product_ranker.utils.cache import cache_get, cache_key, cache_set

logger = logging.getLogger(__name__)


async def load_profile(store: ProfileStore, user_id: Optional[str]) -> Optional[UserProfile]:
    """
    Profile used for personalization. A known user without history still
    gets an empty profile (neutral category/brand terms, default price).
    """
    if not user_id:
        return None
    return await store.get(user_id) or UserProfile(user_id=user_id)


def _items(scored: List[ScoredProduct], include_breakdown: bool) -> List[Dict[str, Any]]:
    items = []
    for s in scored:
        item: Dict[str, Any] = {"product_id": s.product.product_id, "score": s.recommendation.score}
        if include_breakdown:
            item["recommendation"] = s.recommendation.model_dump(mode="json")
        items.append(item)
    return items


async def rank_products_svc(
    engine: RecommendationEngine,
    store: ProfileStore,
    products: List[Product],
    *,
    user_id: Optional[str] = None,
    category_slug: Optional[str] = None,
    limit: int = 20,
    now: Optional[datetime] = None,
) -> List[ScoredProduct]:
    """Rank an inline candidate list, by category when a slug is given, else personalized."""
    if category_slug:
        return engine.get_category_recommendations(products, category_slug, limit, now=now)
    user = await load_profile(store, user_id)
    return engine.get_personalized_recommendations(products, user, limit, now=now)


async def get_personalized_svc(
    engine: RecommendationEngine,
    repo: ProductRepo,
    store: ProfileStore,
    user_id: str,
    limit: int = 20,
    include_breakdown: bool = False,
) -> Dict[str, Any]:
    t0 = time.perf_counter()
    logger.info("personalized start user_id=%s limit=%s", user_id, limit)
    settings = get_settings()

    user = await load_profile(store, user_id)
    candidates = await repo.list_candidates(limit=settings.catalog_candidate_limit)
    scored = engine.get_personalized_recommendations(candidates, user, limit)

    items = _items(scored, include_breakdown)
    logger.info(
        "personalized done user_id=%s candidates=%s items=%s total_time=%.3fs",
        user_id, len(candidates), len(items), time.perf_counter() - t0,
    )
    return {"items": items, "count": len(items)}


async def get_category_svc(
    engine: RecommendationEngine,
    repo: ProductRepo,
    category_slug: str,
    limit: int = 20,
    include_breakdown: bool = False,
) -> Dict[str, Any]:
    t0 = time.perf_counter()
    logger.info("category start slug=%s limit=%s", category_slug, limit)
    settings = get_settings()

    candidates = await repo.list_candidates(category_slug=category_slug, limit=settings.catalog_candidate_limit)
    scored = engine.get_category_recommendations(candidates, category_slug, limit)

    items = _items(scored, include_breakdown)
    logger.info(
        "category done slug=%s candidates=%s items=%s total_time=%.3fs",
        category_slug, len(candidates), len(items), time.perf_counter() - t0,
    )
    return {"items": items, "count": len(items)}


async def get_trending_svc(
    engine: RecommendationEngine,
    repo: ProductRepo,
    redis,
    limit: int = 20,
    category_slug: Optional[str] = None,
) -> Dict[str, Any]:
    t0 = time.perf_counter()
    logger.info("trending start limit=%s category_slug=%s", limit, category_slug)
    settings = get_settings()

    key = cache_key("trending", {"limit": limit, "category_slug": category_slug})
    if redis is not None:
        try:
            cached = await cache_get(redis, key)
        except Exception as e:
            logger.warning("trending redis.get error key=%s err=%s", key, e)
            cached = None
        if cached:
            logger.info("trending cache_hit key=%s items=%s", key, cached.get("count"))
            return cached
        logger.info("trending cache_miss key=%s", key)

    candidates = await repo.list_candidates(category_slug=category_slug, limit=settings.catalog_candidate_limit)
    trending = engine.get_trending_products(candidates, limit)
    items = [{"product_id": t.product.product_id, "trending_score": t.trending_score} for t in trending]
    result = {"items": items, "count": len(items)}

    if redis is not None:
        try:
            await cache_set(redis, key, result, ex=settings.trending_cache_ttl)
            logger.debug("trending cache_set key=%s ttl=%ds", key, settings.trending_cache_ttl)
        except Exception as e:
            logger.warning("trending redis.set error key=%s err=%s", key, e)

    logger.info("trending done items=%s total_time=%.3fs", len(items), time.perf_counter() - t0)
    return result
