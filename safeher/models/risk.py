from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

_LEVEL_RANK = {"LOW": 0, "MEDIUM": 1, "HIGH": 2}


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _LEVEL_RANK[self.value]

    @classmethod
    def from_percentage(cls, percentage: int) -> "RiskLevel":
        """Band a percentage: LOW 0-33, MEDIUM 34-66, HIGH 67-100."""
        if percentage <= 33:
            return cls.LOW
        if percentage <= 66:
            return cls.MEDIUM
        return cls.HIGH

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank


class FactorIcon(str, Enum):
    CLOCK = "clock"
    MAP = "map"
    PERSON = "person"
    EYE = "eye"


class RecommendationIcon(str, Enum):
    SHIELD = "shield"
    PHONE = "phone"
    MAP_PIN = "map-pin"
    USERS = "users"
    ALERT = "alert"
    MOVE = "move"


class RiskFactor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    icon: FactorIcon
    level: RiskLevel
    percentage: int = Field(ge=0, le=100)


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    priority: int = Field(ge=1)
    action: str
    icon: RecommendationIcon


class RiskAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: RiskLevel
    percentage: int = Field(ge=0, le=100)
    factors: tuple[RiskFactor, ...] = Field(min_length=4, max_length=4)
    recommendations: tuple[Recommendation, ...] = Field(min_length=1, max_length=3)

    @model_validator(mode="after")
    def _priorities_are_dense(self) -> "RiskAssessment":
        priorities = [rec.priority for rec in self.recommendations]
        if priorities != list(range(1, len(priorities) + 1)):
            raise ValueError(f"recommendation priorities must be 1..n, got {priorities}")
        return self
