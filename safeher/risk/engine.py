"""RiskEngine: recovers a RiskAssessment from a free-text assistant reply.

Strategies are tried in order; the first non-None result wins:
  1. StructuredTagStrategy: full tag with optional FACTORS / ACTIONS
  2. SimpleTagStrategy: minimal level + percentage tag
  3. LexicalStrategy: keyword scoring over the reply text

No input raises: a reply with no recognisable signal yields None, which
callers treat as "no risk update this turn".
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from safeher.models.risk import RiskAssessment
from safeher.risk.defaults import RandomSource, default_random
from safeher.risk.grammar import excise
from safeher.risk.strategies import (
    ClassifierStrategy,
    LexicalStrategy,
    SimpleTagStrategy,
    StructuredTagStrategy,
)

logger = logging.getLogger(__name__)


def default_strategies(rng: RandomSource) -> list[ClassifierStrategy]:
    return [StructuredTagStrategy(rng), SimpleTagStrategy(rng), LexicalStrategy(rng)]


class RiskEngine:
    def __init__(
        self,
        rng: RandomSource | None = None,
        strategies: Sequence[ClassifierStrategy] | None = None,
    ) -> None:
        self._rng = rng or default_random()
        self._strategies = (
            list(strategies) if strategies is not None else default_strategies(self._rng)
        )

    @property
    def strategies(self) -> list[ClassifierStrategy]:
        return list(self._strategies)

    def parse(self, reply: str) -> RiskAssessment | None:
        for strategy in self._strategies:
            assessment = strategy.attempt(reply)
            if assessment is not None:
                logger.debug(
                    "Risk assessed by %s: level=%s percentage=%d",
                    strategy.name,
                    assessment.level.value,
                    assessment.percentage,
                )
                return assessment
        logger.debug("No risk signal found in reply (%d chars)", len(reply))
        return None

    @staticmethod
    def strip(reply: str) -> str:
        return excise(reply)


_default_engine = RiskEngine()


def parse_risk_from_response(reply: str, rng: RandomSource | None = None) -> RiskAssessment | None:
    """Parse a reply with the default strategy order."""
    engine = _default_engine if rng is None else RiskEngine(rng)
    return engine.parse(reply)


def remove_risk_tag(reply: str) -> str:
    """Remove every risk tag from reply text and trim it for display."""
    return excise(reply)
