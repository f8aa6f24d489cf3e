"""Unit tests for risk model invariants."""

import pytest
from pydantic import ValidationError

from safeher.models.risk import (
    Recommendation,
    RecommendationIcon,
    RiskAssessment,
    RiskLevel,
)
from safeher.risk.defaults import generate_default_factors
from tests.conftest import FixedRandom


@pytest.mark.unit
def test_risk_level_total_order() -> None:
    assert RiskLevel.LOW < RiskLevel.MEDIUM < RiskLevel.HIGH
    assert max([RiskLevel.MEDIUM, RiskLevel.HIGH, RiskLevel.LOW]) is RiskLevel.HIGH
    assert sorted([RiskLevel.HIGH, RiskLevel.LOW, RiskLevel.MEDIUM]) == [
        RiskLevel.LOW,
        RiskLevel.MEDIUM,
        RiskLevel.HIGH,
    ]


@pytest.mark.unit
@pytest.mark.parametrize(
    ("percentage", "level"),
    [(0, RiskLevel.LOW), (33, RiskLevel.LOW), (34, RiskLevel.MEDIUM), (66, RiskLevel.MEDIUM),
     (67, RiskLevel.HIGH), (100, RiskLevel.HIGH)],
)
def test_risk_level_banding(percentage: int, level: RiskLevel) -> None:
    assert RiskLevel.from_percentage(percentage) is level


def _recs(*priorities: int) -> list[Recommendation]:
    return [Recommendation(priority=p, action=f"step {p}", icon=RecommendationIcon.SHIELD) for p in priorities]


@pytest.mark.unit
def test_assessment_requires_exactly_four_factors() -> None:
    factors = generate_default_factors(50, FixedRandom())
    with pytest.raises(ValidationError):
        RiskAssessment(level=RiskLevel.MEDIUM, percentage=50, factors=factors[:3], recommendations=_recs(1))


@pytest.mark.unit
def test_assessment_rejects_priority_gaps() -> None:
    factors = generate_default_factors(50, FixedRandom())
    with pytest.raises(ValidationError, match="priorities"):
        RiskAssessment(level=RiskLevel.MEDIUM, percentage=50, factors=factors, recommendations=_recs(1, 3))


@pytest.mark.unit
def test_assessment_rejects_more_than_three_recommendations() -> None:
    factors = generate_default_factors(50, FixedRandom())
    with pytest.raises(ValidationError):
        RiskAssessment(level=RiskLevel.MEDIUM, percentage=50, factors=factors, recommendations=_recs(1, 2, 3, 4))


@pytest.mark.unit
def test_assessment_serialises_enum_values() -> None:
    factors = generate_default_factors(50, FixedRandom())
    assessment = RiskAssessment(level=RiskLevel.MEDIUM, percentage=50, factors=factors, recommendations=_recs(1))
    data = assessment.model_dump(mode="json")
    assert data["level"] == "MEDIUM"
    assert data["factors"][0]["icon"] == "clock"
    assert data["recommendations"] == [{"priority": 1, "action": "step 1", "icon": "shield"}]
