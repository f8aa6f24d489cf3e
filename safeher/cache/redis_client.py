"""Capped JSON lists in Redis.

Invariant: push_json() always requires a TTL, so per-session risk history
cannot accumulate indefinitely. Append, trim and expiry run in one MULTI
block, so concurrent writers to the same key never drop each other's items.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


async def push_json(
    client: Redis[str], key: str, value: dict[str, Any], ttl: int, max_len: int
) -> int:
    """Append value to the list at key, keep the newest max_len items and refresh the TTL.

    Returns the list length reported by RPUSH, before trimming.
    """
    if ttl <= 0:
        raise ValueError(f"ttl must be positive, got {ttl}")
    if max_len < 1:
        raise ValueError(f"max_len must be at least 1, got {max_len}")
    async with client.pipeline(transaction=True) as pipe:
        pipe.rpush(key, json.dumps(value, default=str))
        pipe.ltrim(key, -max_len, -1)
        pipe.expire(key, ttl)
        length, _, _ = await pipe.execute()
    logger.debug("redis push key=%s ttl=%ds max_len=%d", key, ttl, max_len)
    return int(length)


async def range_json(client: Redis[str], key: str) -> list[dict[str, Any]]:
    """All items of the list at key, oldest first. A missing key is an empty list."""
    raw_items = await client.lrange(key, 0, -1)
    return [json.loads(raw) for raw in raw_items]


async def delete(client: Redis[str], key: str) -> None:
    await client.delete(key)
    logger.debug("redis delete key=%s", key)
