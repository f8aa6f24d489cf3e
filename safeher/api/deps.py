"""FastAPI dependency providers.

The companion agent and Redis client are app-state singletons created in the
lifespan; the history store is built per request around the shared client.
"""

from fastapi import Depends, Request
from redis.asyncio import Redis

from safeher.agents.companion import SafetyCompanionAgent
from safeher.history.store import RiskHistoryStore
from safeher.risk.engine import RiskEngine


async def get_redis(request: Request) -> Redis:
    """Return the shared Redis client from app state."""
    redis: Redis = request.app.state.redis
    return redis


async def get_companion(request: Request) -> SafetyCompanionAgent:
    companion: SafetyCompanionAgent = request.app.state.companion
    return companion


async def get_engine(request: Request) -> RiskEngine:
    engine: RiskEngine = request.app.state.risk_engine
    return engine


async def get_history_store(
    request: Request,
    redis: Redis = Depends(get_redis),
) -> RiskHistoryStore:
    cfg = request.app.state.settings
    return RiskHistoryStore(
        redis,
        max_entries=cfg.risk_history_max_entries,
        ttl_seconds=cfg.risk_history_ttl_seconds,
        trend_threshold=cfg.risk_trend_threshold,
    )
