"""Shared fixtures for scenario tests.

Scenario tests are DETERMINISTIC: realistic assistant replies go through
parse_risk_from_response / remove_risk_tag with a pinned random source.
No LLM calls, no Redis. All scenario tests use @pytest.mark.scenario.
"""

import pytest

from safeher.risk.engine import RiskEngine
from tests.conftest import FixedRandom


@pytest.fixture(scope="session")
def scenario_engine() -> RiskEngine:
    return RiskEngine(FixedRandom([0.5]))
