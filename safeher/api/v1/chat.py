"""POST /v1/chat: one companion turn plus its risk update."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from redis.exceptions import RedisError

from safeher.agents.companion import SafetyCompanionAgent
from safeher.agents.errors import CompanionNotConfiguredError, CompanionUnavailableError
from safeher.api.deps import get_companion, get_history_store
from safeher.history.store import RiskHistoryStore
from safeher.models.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    companion: SafetyCompanionAgent = Depends(get_companion),
    history: RiskHistoryStore = Depends(get_history_store),
) -> ChatResponse:
    """Send the conversation to the companion and record the parsed assessment.

    A reply without any risk signal leaves the session history untouched. If
    Redis is unreachable the turn is still returned, without a history summary.
    """
    try:
        turn = await companion.converse(request.messages)
    except CompanionNotConfiguredError as exc:
        raise HTTPException(
            status_code=400, detail={"error": str(exc), "code": "NO_API_KEY"}
        ) from exc
    except CompanionUnavailableError as exc:
        logger.warning("Companion unavailable for session=%s: %s", request.session_id, exc.reason)
        raise HTTPException(
            status_code=502, detail="Failed to get a response from the AI. Please try again."
        ) from exc

    summary = None
    try:
        if turn.assessment is not None:
            await history.record(request.session_id, turn.assessment)
        summary = await history.summary(request.session_id)
    except RedisError as exc:
        logger.warning("Risk history unavailable for session=%s: %s", request.session_id, exc)

    return ChatResponse(
        session_id=request.session_id,
        content=turn.display,
        assessment=turn.assessment,
        history_summary=summary,
    )
