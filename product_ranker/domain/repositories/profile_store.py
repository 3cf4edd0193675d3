# product_ranker/domain/repositories/profile_store.py
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Dict, Optional, Protocol

from redis.asyncio import Redis

from product_ranker.domain.models.profile import UserProfile
from product_ranker.utils.locks import RedisLock

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    """Port for user preference profiles. Adapters: memory, Redis."""

    async def get(self, user_id: str) -> Optional[UserProfile]: ...

    async def save(self, profile: UserProfile) -> None: ...

    async def count(self) -> int: ...

    def locked(self, user_id: str) -> AsyncContextManager[None]: ...


class InMemoryProfileStore:
    """
    Process-local profiles, lost on restart.
    Runs on one event loop, so updates need no lock.
    """

    def __init__(self):
        self._profiles: Dict[str, UserProfile] = {}

    async def get(self, user_id: str) -> Optional[UserProfile]:
        profile = self._profiles.get(user_id)
        # hand out copies so callers can't mutate the stored profile without save()
        return profile.model_copy(deep=True) if profile else None

    async def save(self, profile: UserProfile) -> None:
        self._profiles[profile.user_id] = profile.model_copy(deep=True)

    async def count(self) -> int:
        return len(self._profiles)

    @asynccontextmanager
    async def locked(self, user_id: str) -> AsyncIterator[None]:
        yield


class RedisProfileStore:
    """
    Profiles as JSON documents under '<prefix>:<user_id>' with a sliding TTL.
    A sorted set 'index:<prefix>' maps each user id to its last save time so
    count() needs no keyspace scan. Errors from Redis propagate: a lost write
    is a real failure here.
    """

    def __init__(self, redis: Redis, key_prefix: str = "profile", ttl: int = 30 * 24 * 3600, lock_ttl: int = 5):
        self.cache = redis
        self.prefix = key_prefix
        self.ttl = ttl
        self.lock_ttl = lock_ttl

    def key(self, user_id: str) -> str:
        return f"{self.prefix}:{user_id}"

    @property
    def index_key(self) -> str:
        return f"index:{self.prefix}"

    async def get(self, user_id: str) -> Optional[UserProfile]:
        raw = await self.cache.get(self.key(user_id))
        if not raw:
            return None
        return UserProfile.model_validate_json(raw)

    async def save(self, profile: UserProfile) -> None:
        await self.cache.set(self.key(profile.user_id), profile.model_dump_json(), ex=self.ttl)
        await self.cache.zadd(self.index_key, {profile.user_id: time.time()})
        logger.debug("profile saved key=%s ttl=%ss", self.key(profile.user_id), self.ttl)

    async def count(self) -> int:
        # members older than the TTL belong to expired profiles
        await self.cache.zremrangebyscore(self.index_key, "-inf", time.time() - self.ttl)
        return await self.cache.zcard(self.index_key)

    @asynccontextmanager
    async def locked(self, user_id: str) -> AsyncIterator[None]:
        lock = RedisLock(self.cache, self.key(user_id), ttl=self.lock_ttl)
        if not await lock.acquire(timeout=lock.acquire_timeout):
            raise TimeoutError(f"could not acquire {lock.key}")
        try:
            yield
        finally:
            if not await lock.release():
                logger.warning(
                    "profile lock expired before release user_id=%s ttl=%ss; a concurrent update may be lost",
                    user_id, self.lock_ttl,
                )
