"""Synthesis of factor breakdowns and recommendation lists.

Used whenever a parse succeeds but the reply did not carry factors or actions.
Randomness comes from an injected ``RandomSource`` so tests can pin it; only
the banding (factors skew toward the overall level) is contractual.
"""

from __future__ import annotations

import math
import random
from typing import Protocol

from safeher.models.risk import (
    Recommendation,
    RecommendationIcon,
    RiskFactor,
    RiskLevel,
)
from safeher.risk.grammar import clamp_percentage
from safeher.risk.lexicon import FACTOR_CATALOG


class RandomSource(Protocol):
    def random(self) -> float: ...


_system_random = random.Random()


def default_random() -> RandomSource:
    return _system_random


# level -> (base, span): percentage drawn from [base, base + span)
_FACTOR_PERCENTAGE_BANDS: dict[RiskLevel, tuple[int, int]] = {
    RiskLevel.LOW: (10, 20),
    RiskLevel.MEDIUM: (40, 25),
    RiskLevel.HIGH: (75, 20),
}

# overall level -> cumulative (threshold, factor level) draws
_FACTOR_LEVEL_DRAWS: dict[RiskLevel, tuple[tuple[float, RiskLevel], ...]] = {
    RiskLevel.LOW: ((0.7, RiskLevel.LOW), (1.0, RiskLevel.MEDIUM)),
    RiskLevel.MEDIUM: (
        (0.3, RiskLevel.LOW),
        (0.8, RiskLevel.MEDIUM),
        (1.0, RiskLevel.HIGH),
    ),
    RiskLevel.HIGH: ((0.3, RiskLevel.MEDIUM), (1.0, RiskLevel.HIGH)),
}

_FACTOR_JITTER = 10
_FACTOR_FLOOR = 5
_FACTOR_CEILING = 95

_RECOMMENDATION_TIERS: dict[RiskLevel, tuple[tuple[str, RecommendationIcon], ...]] = {
    RiskLevel.HIGH: (
        ("Contact emergency services or someone you trust immediately", RecommendationIcon.PHONE),
        ("Move to a safe, well-lit public area if possible", RecommendationIcon.MOVE),
        ("Activate SOS to share your location with emergency contacts", RecommendationIcon.ALERT),
    ),
    RiskLevel.MEDIUM: (
        ("Share your live location with a trusted friend or family member", RecommendationIcon.MAP_PIN),
        ("Stay in well-lit areas and be aware of your surroundings", RecommendationIcon.SHIELD),
        ("Keep your phone charged and easily accessible", RecommendationIcon.PHONE),
    ),
    RiskLevel.LOW: (
        ("Continue staying aware of your surroundings", RecommendationIcon.SHIELD),
        ("Keep emergency contacts easily accessible", RecommendationIcon.USERS),
        ("Trust your instincts if something feels off", RecommendationIcon.ALERT),
    ),
}


def default_factor_percentage(level: RiskLevel, rng: RandomSource) -> int:
    """Percentage for a factor tagged with a level but no number."""
    base, span = _FACTOR_PERCENTAGE_BANDS[level]
    return base + math.floor(rng.random() * span)


def _draw_factor_level(overall: RiskLevel, rng: RandomSource) -> RiskLevel:
    roll = rng.random()
    draws = _FACTOR_LEVEL_DRAWS[overall]
    for threshold, level in draws:
        if roll < threshold:
            return level
    return draws[-1][1]


def _jittered_percentage(overall_percentage: int, rng: RandomSource) -> int:
    offset = rng.random() * (2 * _FACTOR_JITTER) - _FACTOR_JITTER
    return clamp_percentage(round(overall_percentage + offset), _FACTOR_FLOOR, _FACTOR_CEILING)


def default_factor(key: str, overall_percentage: int, rng: RandomSource) -> RiskFactor:
    """One canonical factor synthesised around the overall percentage."""
    for catalog_key, name, icon in FACTOR_CATALOG:
        if catalog_key == key:
            overall = RiskLevel.from_percentage(clamp_percentage(overall_percentage))
            return RiskFactor(
                name=name,
                icon=icon,
                level=_draw_factor_level(overall, rng),
                percentage=_jittered_percentage(overall_percentage, rng),
            )
    raise KeyError(key)


def generate_default_factors(overall_percentage: int, rng: RandomSource | None = None) -> list[RiskFactor]:
    """Exactly four factors, canonical names and order.

    Factor level and factor percentage are drawn independently, so they may disagree.
    """
    rng = rng or default_random()
    return [default_factor(key, overall_percentage, rng) for key, _, _ in FACTOR_CATALOG]


def generate_default_recommendations(level: RiskLevel, percentage: int) -> list[Recommendation]:
    if level is RiskLevel.HIGH or percentage > 66:
        tier = RiskLevel.HIGH
    elif level is RiskLevel.MEDIUM or percentage > 33:
        tier = RiskLevel.MEDIUM
    else:
        tier = RiskLevel.LOW
    return [
        Recommendation(priority=i, action=action, icon=icon)
        for i, (action, icon) in enumerate(_RECOMMENDATION_TIERS[tier], start=1)
    ]
