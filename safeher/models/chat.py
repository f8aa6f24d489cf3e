from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator

from safeher.models.history import RiskSummary
from safeher.models.risk import RiskAssessment


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    session_id: str = Field(default_factory=lambda: str(uuid4()))
    messages: list[ChatMessage] = Field(min_length=1)

    @model_validator(mode="after")
    def _has_user_message(self) -> "ChatRequest":
        if not any(m.role == "user" for m in self.messages):
            raise ValueError("messages must contain at least one user message")
        return self


class ChatTurn(BaseModel):
    """One assistant reply: the raw model text, its display form and the parsed assessment."""

    raw: str
    display: str
    assessment: RiskAssessment | None = None


class ChatResponse(BaseModel):
    session_id: str
    role: Literal["assistant"] = "assistant"
    content: str
    assessment: RiskAssessment | None = None
    history_summary: RiskSummary | None = None


class ParseRequest(BaseModel):
    text: str


class ParseResponse(BaseModel):
    assessment: RiskAssessment | None = None
    display: str
