"""SafetyCompanionAgent: the conversational safety advisor.

Each turn forwards the recent conversation to the LLM with a fixed system
prompt that asks for a trailing ``[RISK: LEVEL - N%]`` tag, then runs the
reply through the risk engine: the tag is parsed into a RiskAssessment and
stripped from the text shown to the user.
"""

from __future__ import annotations

import asyncio
import logging
from typing import ClassVar

from anthropic import APIError as AnthropicAPIError
from openai import APIError as OpenAIAPIError

from safeher.agents.base import BaseAgent
from safeher.agents.errors import CompanionNotConfiguredError, CompanionUnavailableError
from safeher.config import Settings
from safeher.models.chat import ChatMessage, ChatTurn
from safeher.risk.engine import RiskEngine

logger = logging.getLogger(__name__)

# Returned when the provider blocks or drops the reply; keeps the turn at MEDIUM.
SAFETY_FALLBACK_REPLY = (
    "I understand you're going through something difficult. I'm here to help. "
    "Could you tell me more about your situation so I can provide appropriate guidance?"
    "\n\n[RISK: MEDIUM - 50%]"
)


class SafetyCompanionAgent(BaseAgent):
    SYSTEM_PROMPT: ClassVar[str] = """You are SafeHer, an empathetic AI safety advisor and companion for women. Your primary role is to:

1. LISTEN with genuine empathy to women's safety concerns, fears, and experiences
2. ASSESS the risk level of their situation (Low, Medium, or High)
3. PROVIDE specific, actionable safety advice tailored to their situation
4. SUPPORT them emotionally without judgment
5. EMPOWER them to trust their instincts

IMPORTANT FORMATTING RULES:
- Always end your response with a risk assessment in this EXACT format on a new line:
  [RISK: LOW|MEDIUM|HIGH - percentage%]
- Example: [RISK: MEDIUM - 55%]

RISK ASSESSMENT GUIDELINES:
- LOW (0-33%): Safe environment, routine situations, positive check-ins, feeling good
- MEDIUM (34-66%): Potentially concerning situations like being alone at night, unfamiliar areas, feeling uneasy, uncomfortable situations
- HIGH (67-100%): Immediate danger signs like being followed, threatened, harassed, domestic violence, or in an emergency

RESPONSE STYLE:
- Be warm, supportive, and non-judgmental like a caring friend
- Use clear, simple language
- Provide numbered steps when giving safety advice
- Acknowledge their feelings first before offering solutions
- Keep responses concise but thorough (2-4 paragraphs max)
- Include relevant emergency numbers when appropriate:
  * Women Helpline: 1090
  * Police: 100
  * Ambulance: 102
  * National Commission for Women: 7827-170-170

Remember: Every concern is valid. Trust and validate their instincts. Never dismiss their feelings."""

    def __init__(self, settings: Settings, engine: RiskEngine | None = None) -> None:
        super().__init__(settings)
        self._history_window = settings.chat_history_window
        self._engine = engine or RiskEngine()

    async def converse(self, messages: list[ChatMessage]) -> ChatTurn:
        """Send the conversation and return the parsed assistant turn.

        Raises:
            CompanionNotConfiguredError: no API key for the selected provider.
            CompanionUnavailableError: the provider kept failing after retries.
        """
        if not self.configured:
            raise CompanionNotConfiguredError(
                "API key not configured. Please add your API key in Settings."
            )

        conversation = self._build_conversation(messages)
        try:
            reply = await self._call(self.SYSTEM_PROMPT, conversation)
        except asyncio.TimeoutError as exc:
            raise CompanionUnavailableError("timed out waiting for the model") from exc
        except (AnthropicAPIError, OpenAIAPIError) as exc:
            raise CompanionUnavailableError(str(exc)) from exc

        raw = reply.text
        if reply.blocked or not raw.strip():
            logger.info("Model reply withheld (finish_reason=%s); using fallback", reply.finish_reason)
            raw = SAFETY_FALLBACK_REPLY
        return self.parse_response(raw)

    def _build_conversation(self, messages: list[ChatMessage]) -> list[dict[str, str]]:
        """Keep the last N user/assistant messages, ending at the latest user message."""
        turns = [m for m in messages if m.role in ("user", "assistant")]
        while turns and turns[-1].role != "user":
            turns.pop()
        turns = turns[-self._history_window:]
        # Anthropic requires the conversation to open with a user turn.
        while turns and turns[0].role != "user":
            turns.pop(0)
        return [{"role": m.role, "content": m.content} for m in turns]

    def parse_response(self, raw: str) -> ChatTurn:
        return ChatTurn(
            raw=raw,
            display=self._engine.strip(raw),
            assessment=self._engine.parse(raw),
        )
