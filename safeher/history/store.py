"""Rolling per-session risk history, kept in Redis.

Each session is a Redis list of JSON entries. Only the most recent
``max_entries`` readings are retained, and every record() refreshes the TTL.
"""

from __future__ import annotations

import logging

from redis.asyncio import Redis

from safeher.cache.redis_client import delete, push_json, range_json
from safeher.models.history import RiskHistoryEntry, RiskSummary
from safeher.models.risk import RiskAssessment, RiskLevel
from safeher.risk.grammar import clamp_percentage

logger = logging.getLogger(__name__)

_KEY_PREFIX = "risk_history:"


class RiskHistoryStore:
    def __init__(
        self,
        redis: Redis[str],
        max_entries: int = 5,
        ttl_seconds: int = 86400,
        trend_threshold: int = 3,
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self._redis = redis
        self._max_entries = max_entries
        self._ttl = ttl_seconds
        self._trend_threshold = trend_threshold

    @staticmethod
    def _key(session_id: str) -> str:
        return f"{_KEY_PREFIX}{session_id}"

    async def entries(self, session_id: str) -> list[RiskHistoryEntry]:
        """Entries for a session, oldest first."""
        items = await range_json(self._redis, self._key(session_id))
        return [RiskHistoryEntry.model_validate(item) for item in items]

    async def record(self, session_id: str, assessment: RiskAssessment) -> RiskHistoryEntry:
        percentage = clamp_percentage(assessment.percentage)
        entry = RiskHistoryEntry(
            percentage=percentage,
            level=RiskLevel.from_percentage(percentage),
        )
        length = await push_json(
            self._redis,
            self._key(session_id),
            entry.model_dump(mode="json"),
            ttl=self._ttl,
            max_len=self._max_entries,
        )
        logger.debug(
            "risk history session=%s percentage=%d size=%d",
            session_id,
            percentage,
            min(length, self._max_entries),
        )
        return entry

    async def summary(self, session_id: str) -> RiskSummary | None:
        entries = await self.entries(session_id)
        return summarize(entries, self._trend_threshold)

    async def clear(self, session_id: str) -> None:
        await delete(self._redis, self._key(session_id))


def summarize(entries: list[RiskHistoryEntry], trend_threshold: int = 3) -> RiskSummary | None:
    """Current/previous reading, mean, and direction of the last change."""
    if not entries:
        return None
    current = entries[-1].percentage
    previous = entries[-2].percentage if len(entries) > 1 else None

    trend = "stable"
    if previous is not None:
        if current > previous + trend_threshold:
            trend = "increasing"
        elif current < previous - trend_threshold:
            trend = "decreasing"

    return RiskSummary(
        current=current,
        previous=previous,
        average=round(sum(e.percentage for e in entries) / len(entries), 1),
        trend=trend,
        entries=len(entries),
    )
