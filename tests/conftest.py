from datetime import datetime, timezone

import pytest

from product_ranker.domain.models.product import Product
from product_ranker.domain.services.engine import RecommendationEngine

FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


class FakeRedis:
    """Just enough of redis.asyncio.Redis for the cache, lock and profile store."""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, nx=False, ex=None):
        if nx and key in self.data:
            return None
        self.data[key] = value
        self.ttls[key] = ex
        return True

    async def delete(self, key):
        self.ttls.pop(key, None)
        return 1 if self.data.pop(key, None) is not None else 0

    async def ping(self):
        return True

    async def eval(self, script, numkeys, *args):
        # only the lock release script: compare-and-delete
        key, token = args[0], args[numkeys]
        if self.data.get(key) == token:
            return await self.delete(key)
        return 0

    async def zadd(self, key, mapping):
        self.data.setdefault(key, {}).update(mapping)

    async def zremrangebyscore(self, key, lo, hi):
        members = self.data.get(key, {})
        lo = float(lo)
        for m in [m for m, s in members.items() if lo <= s <= hi]:
            del members[m]

    async def zcard(self, key):
        return len(self.data.get(key, {}))


@pytest.fixture
def engine():
    return RecommendationEngine()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def make_product():
    def _make(product_id="p1", **fields):
        return Product(product_id=product_id, **fields)
    return _make


@pytest.fixture
def now():
    return FIXED_NOW
