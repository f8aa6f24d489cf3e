"""BaseAgent: abstract base class for LLM-backed agents.

Handles:
- Provider-aware client init (Anthropic or OpenAI-compat: Gemini, Groq, Ollama, etc.)
- Retry loop with configurable max retries
- Timeout enforcement via asyncio.wait_for
- DEBUG-level logging of prompts and responses (never INFO)
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

from anthropic import APIError as AnthropicAPIError
from anthropic import AsyncAnthropic
from anthropic.types import TextBlock
from openai import APIError as OpenAIAPIError
from openai import AsyncOpenAI
from pydantic import BaseModel

from safeher.config import Settings

logger = logging.getLogger(__name__)

# Finish reasons meaning the provider withheld the reply
BLOCKED_FINISH_REASONS = frozenset({"content_filter", "safety", "refusal"})


class LLMReply(BaseModel):
    text: str
    finish_reason: str | None = None

    @property
    def blocked(self) -> bool:
        return (self.finish_reason or "").lower() in BLOCKED_FINISH_REASONS


class BaseAgent(ABC):
    def __init__(self, settings: Settings) -> None:
        self._provider = settings.llm_provider
        self._model = settings.llm_model
        self._timeout = settings.llm_timeout_seconds
        self._max_retries = settings.llm_max_retries
        self._temperature = settings.llm_temperature
        self._max_tokens = settings.llm_max_output_tokens

        if settings.llm_provider == "anthropic":
            self._api_key = settings.anthropic_api_key
            self._anthropic_client: AsyncAnthropic | None = AsyncAnthropic(
                api_key=settings.anthropic_api_key
            )
            self._openai_client: AsyncOpenAI | None = None
        else:
            self._api_key = settings.llm_api_key
            self._anthropic_client = None
            self._openai_client = AsyncOpenAI(
                base_url=settings.llm_base_url,
                api_key=settings.llm_api_key,
            )

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def _call(self, system: str, messages: list[dict[str, str]]) -> LLMReply:
        """Make an LLM call with timeout + retry.

        ``messages`` is the provider-neutral conversation: dicts with
        ``role`` ("user" / "assistant") and ``content``.
        Raises the last exception after exhausting retries.
        """
        logger.debug(
            "LLM call | model=%s system=%.100r turns=%d last=%.200r",
            self._model,
            system,
            len(messages),
            messages[-1]["content"] if messages else "",
        )
        last_exc: BaseException = RuntimeError("no attempts made")

        for attempt in range(self._max_retries + 1):
            try:
                reply = await asyncio.wait_for(
                    self._invoke(system, messages),
                    timeout=self._timeout,
                )
                logger.debug(
                    "LLM response | attempt=%d finish=%s text=%.200r",
                    attempt,
                    reply.finish_reason,
                    reply.text,
                )
                return reply
            except (AnthropicAPIError, OpenAIAPIError, asyncio.TimeoutError) as exc:
                last_exc = exc
                if attempt < self._max_retries:
                    logger.debug("LLM attempt %d/%d failed: %s", attempt + 1, self._max_retries, exc)

        raise last_exc

    async def _invoke(self, system: str, messages: list[dict[str, str]]) -> LLMReply:
        """Single provider-specific API call, no retry logic."""
        if self._anthropic_client is not None:
            response = await self._anthropic_client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                system=system,
                messages=messages,  # type: ignore[arg-type]
            )
            text = "".join(
                block.text for block in response.content if isinstance(block, TextBlock)
            )
            return LLMReply(text=text, finish_reason=response.stop_reason)
        else:
            assert self._openai_client is not None
            response = await self._openai_client.chat.completions.create(
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                messages=[{"role": "system", "content": system}, *messages],  # type: ignore[list-item]
            )
            if not response.choices:
                return LLMReply(text="", finish_reason=None)
            choice = response.choices[0]
            return LLMReply(text=choice.message.content or "", finish_reason=choice.finish_reason)

    @abstractmethod
    def parse_response(self, raw: str) -> BaseModel: ...

    # Expose clients for test patching without accessing private attrs directly
    def _get_client(self) -> Any:
        return self._anthropic_client if self._anthropic_client is not None else self._openai_client
