"""Risk endpoints: direct reply parsing and per-session history."""

from fastapi import APIRouter, Depends, Response

from safeher.api.deps import get_engine, get_history_store
from safeher.history.store import RiskHistoryStore
from safeher.models.chat import ParseRequest, ParseResponse
from safeher.models.history import RiskHistoryResponse
from safeher.risk.engine import RiskEngine

router = APIRouter()


@router.post("/parse", response_model=ParseResponse)
async def parse(
    request: ParseRequest,
    engine: RiskEngine = Depends(get_engine),
) -> ParseResponse:
    """Assess a reply without calling the model; returns the display text too."""
    return ParseResponse(assessment=engine.parse(request.text), display=engine.strip(request.text))


@router.get("/history/{session_id}", response_model=RiskHistoryResponse)
async def get_history(
    session_id: str,
    history: RiskHistoryStore = Depends(get_history_store),
) -> RiskHistoryResponse:
    entries = await history.entries(session_id)
    return RiskHistoryResponse(
        session_id=session_id,
        entries=entries,
        summary=await history.summary(session_id),
    )


@router.delete("/history/{session_id}", status_code=204)
async def clear_history(
    session_id: str,
    history: RiskHistoryStore = Depends(get_history_store),
) -> Response:
    await history.clear(session_id)
    return Response(status_code=204)
