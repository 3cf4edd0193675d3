# product_ranker/utils/locks.py
from __future__ import annotations
from typing import Optional
from redis.asyncio import Redis
import uuid, asyncio

# Compare-and-delete in one round trip, so an expired lock taken over by
# another writer is never dropped by its previous holder.
RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
end
return 0
"""


class RedisLock:
    """
    Single-instance lock using SET NX EX, held for the length of one
    profile read-modify-write. The TTL bounds how long a crashed holder
    can block other writers.
    """
    def __init__(self, redis: Redis, key: str, ttl: int = 5, acquire_timeout: float = 5.0):
        self.redis = redis
        self.key = f"lock:{key}"
        self.ttl = ttl
        self.acquire_timeout = acquire_timeout
        self._token: Optional[str] = None

    async def acquire(self, timeout: float = 5.0, poll: float = 0.05) -> bool:
        """Try to take the lock, polling until `timeout` seconds elapse."""
        token = uuid.uuid4().hex
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while True:
            if await self.redis.set(self.key, token, nx=True, ex=self.ttl):
                self._token = token
                return True
            if loop.time() >= deadline:
                return False
            await asyncio.sleep(poll)

    async def release(self) -> bool:
        """Drop the lock if we still own it. False means it expired while held."""
        token, self._token = self._token, None
        if not token:
            return False
        return bool(await self.redis.eval(RELEASE_SCRIPT, 1, self.key, token))

    async def __aenter__(self) -> "RedisLock":
        if not await self.acquire(timeout=self.acquire_timeout):
            raise TimeoutError(f"could not acquire {self.key}")
        return self

    async def __aexit__(self, *exc) -> None:
        await self.release()
