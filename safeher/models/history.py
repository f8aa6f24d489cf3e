from datetime import UTC, datetime
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field

from safeher.models.risk import RiskLevel


class RiskHistoryEntry(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    percentage: int = Field(ge=0, le=100)
    level: RiskLevel
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class RiskSummary(BaseModel):
    current: int
    previous: int | None = None
    average: float
    trend: Literal["increasing", "decreasing", "stable"]
    entries: int


class RiskHistoryResponse(BaseModel):
    session_id: str
    entries: list[RiskHistoryEntry] = Field(default_factory=list)
    summary: RiskSummary | None = None
