"""Unit tests for safeher/cache/redis_client.py.

Uses fakeredis so no real Redis server is needed.
"""

import asyncio

import fakeredis.aioredis
import pytest

from safeher.cache.redis_client import delete, push_json, range_json


@pytest.fixture
async def redis():
    """Provide a fresh in-memory FakeRedis client for each test."""
    client = fakeredis.aioredis.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.mark.unit
async def test_push_and_range_json(redis):
    await push_json(redis, "test:key", {"percentage": 40, "level": "MEDIUM"}, ttl=60, max_len=5)
    await push_json(redis, "test:key", {"percentage": 80, "level": "HIGH"}, ttl=60, max_len=5)
    assert await range_json(redis, "test:key") == [
        {"percentage": 40, "level": "MEDIUM"},
        {"percentage": 80, "level": "HIGH"},
    ]


@pytest.mark.unit
async def test_range_json_returns_empty_for_missing_key(redis):
    assert await range_json(redis, "does:not:exist") == []


@pytest.mark.unit
async def test_push_json_trims_to_newest_items(redis):
    for i in range(6):
        await push_json(redis, "test:key", {"i": i}, ttl=60, max_len=3)
    assert [item["i"] for item in await range_json(redis, "test:key")] == [3, 4, 5]


@pytest.mark.unit
async def test_push_json_refreshes_ttl(redis):
    await push_json(redis, "test:key", {"x": 1}, ttl=300, max_len=5)
    ttl = await redis.ttl("test:key")
    assert 0 < ttl <= 300


@pytest.mark.unit
async def test_concurrent_pushes_are_all_kept(redis):
    await asyncio.gather(
        *(push_json(redis, "test:key", {"i": i}, ttl=60, max_len=10) for i in range(4))
    )
    assert sorted(item["i"] for item in await range_json(redis, "test:key")) == [0, 1, 2, 3]


@pytest.mark.unit
@pytest.mark.parametrize("ttl", [0, -1])
async def test_push_json_rejects_non_positive_ttl(redis, ttl):
    with pytest.raises(ValueError, match="ttl must be positive"):
        await push_json(redis, "test:key", {"x": 1}, ttl=ttl, max_len=5)


@pytest.mark.unit
async def test_push_json_rejects_zero_max_len(redis):
    with pytest.raises(ValueError, match="max_len"):
        await push_json(redis, "test:key", {"x": 1}, ttl=60, max_len=0)


@pytest.mark.unit
async def test_delete_removes_key(redis):
    await push_json(redis, "test:key", {"x": 1}, ttl=60, max_len=5)
    await delete(redis, "test:key")
    assert await range_json(redis, "test:key") == []
