# product_ranker/db/redis.py
import logging
import redis.asyncio as redis
from product_ranker.core.config import get_settings

logger = logging.getLogger(__name__)

redis_client: redis.Redis | None = None


async def connect():
    """
    Connect Redis when REDIS_URL is set.
    On failure the client stays None: profiles fall back to memory and the
    trending cache is skipped.
    """
    global redis_client
    settings = get_settings()
    if not settings.REDIS_URL:
        logger.warning("no REDIS_URL configured, using in-memory profiles")
        redis_client = None
        return

    try:
        client = redis.from_url(settings.REDIS_URL, decode_responses=True)
        await client.ping()
        redis_client = client
        logger.info("redis connected")
    except Exception as e:
        logger.warning("redis connection failed, using in-memory profiles: %s", e)
        redis_client = None


async def disconnect():
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
        logger.info("redis disconnected")


def get_redis() -> redis.Redis | None:
    """Redis client, or None when not configured / unavailable."""
    return redis_client
