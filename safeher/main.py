"""FastAPI application factory for the SafeHer companion service."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import FastAPI

from safeher.agents.companion import SafetyCompanionAgent
from safeher.api.v1 import chat as chat_router_module
from safeher.api.v1 import risk as risk_router_module
from safeher.config import Settings
from safeher.config import settings as default_settings
from safeher.risk.engine import RiskEngine

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Install a root handler if none exists and set the root level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger().setLevel(level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: initialize resources on startup, clean up on shutdown."""
    cfg: Settings = app.state.settings
    configure_logging(cfg.log_level)

    # --- Startup ---

    redis_client = aioredis.from_url(cfg.redis_url, decode_responses=True)
    app.state.redis = redis_client

    # Stateless singletons: safe to reuse across requests
    app.state.risk_engine = RiskEngine()
    app.state.companion = SafetyCompanionAgent(cfg, engine=app.state.risk_engine)

    if not app.state.companion.configured:
        logger.warning("No LLM API key configured; /v1/chat will return NO_API_KEY")

    logger.info("SafeHer companion started (environment=%s)", cfg.environment)

    yield

    # --- Shutdown ---
    await redis_client.aclose()

    logger.info("SafeHer companion shut down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    cfg = settings or default_settings

    app = FastAPI(
        title="SafeHer Companion",
        description="Safety companion chat with risk assessment of assistant replies",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings on app.state so lifespan + deps can access them
    app.state.settings = cfg

    app.include_router(chat_router_module.router, prefix="/v1/chat", tags=["chat"])
    app.include_router(risk_router_module.router, prefix="/v1/risk", tags=["risk"])

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/readyz", tags=["health"])
    async def readyz() -> dict[str, str]:
        """Check Redis connectivity."""
        try:
            await app.state.redis.ping()
        except Exception as exc:
            logger.warning("Redis readyz check failed: %s", exc)
            return {"status": "degraded", "reason": "redis_unavailable"}

        return {"status": "ready"}

    return app


# Module-level app instance for uvicorn
app = create_app()
