import hashlib
import json
from typing import Any, Dict
from redis.asyncio import Redis


def cache_key(namespace: str, params: Dict[str, Any]) -> str:
    """Stable key from request parameters: '<namespace>:<md5 of sorted JSON>'."""
    digest = hashlib.md5(json.dumps(params, sort_keys=True, default=str).encode()).hexdigest()
    return f"{namespace}:{digest}"


async def cache_get(redis: Redis, key: str):
    if val := await redis.get(key):
        return json.loads(val)
    return None


async def cache_set(redis: Redis, key: str, value, ex: int = 60):
    await redis.set(key, json.dumps(value, default=str), ex=ex)
