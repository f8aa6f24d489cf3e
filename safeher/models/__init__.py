from safeher.models.risk import (
    FactorIcon,
    Recommendation,
    RecommendationIcon,
    RiskAssessment,
    RiskFactor,
    RiskLevel,
)
from safeher.models.history import RiskHistoryEntry, RiskHistoryResponse, RiskSummary
from safeher.models.chat import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ChatTurn,
    ParseRequest,
    ParseResponse,
)

__all__ = [
    "FactorIcon",
    "Recommendation",
    "RecommendationIcon",
    "RiskAssessment",
    "RiskFactor",
    "RiskLevel",
    "RiskHistoryEntry",
    "RiskHistoryResponse",
    "RiskSummary",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ChatTurn",
    "ParseRequest",
    "ParseResponse",
]
