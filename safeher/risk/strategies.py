"""Classifier strategies tried in priority order by RiskEngine.

Each strategy either recovers a complete RiskAssessment from a reply or
returns None so the next one can try.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from safeher.models.risk import Recommendation, RiskAssessment, RiskFactor, RiskLevel
from safeher.risk.defaults import (
    RandomSource,
    default_factor,
    default_factor_percentage,
    generate_default_factors,
    generate_default_recommendations,
)
from safeher.risk.grammar import (
    ACTION_ITEM,
    FACTOR_VALUE,
    SIMPLE_TAG,
    STRUCTURED_TAG,
    parse_level,
    parse_percentage,
)
from safeher.risk.lexicon import (
    FACTOR_CATALOG,
    FACTOR_KEYS,
    HIGH_RISK_TERMS,
    LOW_RISK_TERMS,
    MEDIUM_RISK_TERMS,
    icon_for_action,
    score,
)

logger = logging.getLogger(__name__)

_MAX_ACTIONS = 3
_FALLBACK_FACTOR_PERCENTAGE = 50


class ClassifierStrategy(ABC):
    name: ClassVar[str]

    def __init__(self, rng: RandomSource) -> None:
        self._rng = rng

    @abstractmethod
    def attempt(self, reply: str) -> RiskAssessment | None: ...


# ---------------------------------------------------------------------------
# Segment sub-parsers
# ---------------------------------------------------------------------------


def parse_factors(segment: str, rng: RandomSource) -> dict[str, RiskFactor]:
    """Parse ``key:LEVEL[-N]`` pairs into factors keyed by canonical key.

    Unknown keys and values without a level word are skipped. The first
    occurrence of a key wins. A level without a number gets a percentage
    drawn from that level's band.
    """
    factors: dict[str, RiskFactor] = {}
    for part in segment.split(","):
        key, _, value = part.strip().partition(":")
        key = key.strip().lower()
        if key not in FACTOR_KEYS or not value.strip():
            if key:
                logger.debug("Ignoring factor entry %r", part)
            continue
        if key in factors:
            logger.debug("Duplicate factor key %r ignored", key)
            continue

        match = FACTOR_VALUE.search(value)
        if match is None:
            logger.debug("No level in factor entry %r", part)
            continue

        level = parse_level(match.group(1))
        if match.group(2) is not None:
            percentage = parse_percentage(match.group(2))
        else:
            percentage = default_factor_percentage(level, rng)

        name, icon = FACTOR_KEYS[key]
        factors[key] = RiskFactor(name=name, icon=icon, level=level, percentage=percentage)
    return factors


def parse_recommendations(segment: str) -> list[Recommendation]:
    """Parse ``N.text;N.text`` items. Only the first three items are considered.

    Priorities are assigned by position among the kept items, so they stay
    dense even when an item is blank.
    """
    recommendations: list[Recommendation] = []
    for part in segment.split(";")[:_MAX_ACTIONS]:
        part = part.strip()
        if not part:
            continue
        match = ACTION_ITEM.match(part)
        action = match.group(2).strip() if match else part
        recommendations.append(
            Recommendation(
                priority=len(recommendations) + 1,
                action=action,
                icon=icon_for_action(action),
            )
        )
    return recommendations


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class StructuredTagStrategy(ClassifierStrategy):
    """``[RISK: LEVEL - N% | FACTORS: ... | ACTIONS: ...]`` with optional segments."""

    name = "structured_tag"

    def attempt(self, reply: str) -> RiskAssessment | None:
        match = STRUCTURED_TAG.search(reply)
        if match is None:
            return None

        level = parse_level(match.group("level"))
        percentage = parse_percentage(match.group("percentage"))

        factors = None
        if match.group("factors"):
            factors = self._complete_factors(match.group("factors"), percentage)

        recommendations = None
        if match.group("actions"):
            recommendations = parse_recommendations(match.group("actions"))
            if not recommendations:
                logger.debug("ACTIONS segment had no usable items; using defaults")
                recommendations = generate_default_recommendations(RiskLevel.MEDIUM, 50)

        return RiskAssessment(
            level=level,
            percentage=percentage,
            factors=factors or generate_default_factors(percentage, self._rng),
            recommendations=recommendations or generate_default_recommendations(level, percentage),
        )

    def _complete_factors(self, segment: str, percentage: int) -> list[RiskFactor]:
        parsed = parse_factors(segment, self._rng)
        if not parsed:
            logger.debug("FACTORS segment had no recognised keys; using defaults")
            return generate_default_factors(_FALLBACK_FACTOR_PERCENTAGE, self._rng)
        # Keys the tag left out are synthesised around the tag's percentage.
        return [
            parsed[key] if key in parsed else default_factor(key, percentage, self._rng)
            for key, _, _ in FACTOR_CATALOG
        ]


class SimpleTagStrategy(ClassifierStrategy):
    """``[RISK: LEVEL - N%]``; factors and actions are always synthesised."""

    name = "simple_tag"

    def attempt(self, reply: str) -> RiskAssessment | None:
        match = SIMPLE_TAG.search(reply)
        if match is None:
            return None

        level = parse_level(match.group("level"))
        percentage = parse_percentage(match.group("percentage"))
        return RiskAssessment(
            level=level,
            percentage=percentage,
            factors=generate_default_factors(percentage, self._rng),
            recommendations=generate_default_recommendations(level, percentage),
        )


class LexicalStrategy(ClassifierStrategy):
    """Keyword scoring over the whole reply when no tag is present."""

    name = "lexical"

    def attempt(self, reply: str) -> RiskAssessment | None:
        high = score(reply, HIGH_RISK_TERMS)
        medium = score(reply, MEDIUM_RISK_TERMS)
        low = score(reply, LOW_RISK_TERMS)
        logger.debug("Lexical scores high=%d medium=%d low=%d", high, medium, low)

        if high > medium and high > low:
            level, percentage = RiskLevel.HIGH, min(100, 70 + 5 * high)
        elif medium > low:
            level, percentage = RiskLevel.MEDIUM, min(66, 35 + 5 * medium)
        elif low > 0:
            level, percentage = RiskLevel.LOW, max(10, 25 - 3 * low)
        else:
            return None

        return RiskAssessment(
            level=level,
            percentage=percentage,
            factors=generate_default_factors(percentage, self._rng),
            recommendations=generate_default_recommendations(level, percentage),
        )
