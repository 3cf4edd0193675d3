# product_ranker/api/deps.py
from functools import lru_cache
from fastapi import Depends, HTTPException
from product_ranker.core.config import get_settings
from product_ranker.db.mongo import get_db
from product_ranker.db.redis import get_redis
from product_ranker.domain.models.ranking_config import get_ranking_config
from product_ranker.domain.repositories.product_repo import ProductRepo
from product_ranker.domain.repositories.profile_store import (
    InMemoryProfileStore,
    ProfileStore,
    RedisProfileStore,
)
from product_ranker.domain.services.engine import RecommendationEngine

# Fallback store when Redis is not configured or unreachable
_memory_profiles = InMemoryProfileStore()


# Dependency for injecting the MongoDB catalog; 503 when Mongo is not configured
async def mongo_db():
    try:
        return get_db()
    except RuntimeError:
        raise HTTPException(status_code=503, detail="Product catalog is not configured.")


# Dependency for injecting the Redis client (or None) into endpoints/services
def redis_dep():
    return get_redis()


async def product_repo_dep(db = Depends(mongo_db)) -> ProductRepo:
    return ProductRepo(db)


def profile_store_dep(redis = Depends(redis_dep)) -> ProfileStore:
    if redis is None:
        return _memory_profiles
    settings = get_settings()
    return RedisProfileStore(
        redis,
        key_prefix=settings.profile_cache_prefix,
        ttl=settings.profile_cache_ttl,
        lock_ttl=settings.profile_lock_ttl,
    )


@lru_cache
def engine_dep() -> RecommendationEngine:
    return RecommendationEngine(get_ranking_config())
