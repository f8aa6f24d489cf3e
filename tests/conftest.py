"""
Shared test fixtures.
"""

from collections.abc import Iterable
from itertools import cycle

import pytest

from safeher.config import Settings
from safeher.risk.engine import RiskEngine


class FixedRandom:
    """Deterministic RandomSource: replays the given values in a loop."""

    def __init__(self, values: Iterable[float] = (0.5,)) -> None:
        self._values = cycle(list(values))

    def random(self) -> float:
        return next(self._values)


@pytest.fixture
def midpoint_rng() -> FixedRandom:
    return FixedRandom([0.5])


@pytest.fixture
def engine(midpoint_rng: FixedRandom) -> RiskEngine:
    return RiskEngine(midpoint_rng)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        llm_provider="openai_compat",
        llm_base_url="http://localhost",
        llm_api_key="test-key",
        llm_model="test-model",
        llm_timeout_seconds=5.0,
        llm_max_retries=0,
        redis_url="redis://localhost:6379/0",
        chat_history_window=10,
    )
