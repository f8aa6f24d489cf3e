"""Unit tests for BaseAgent.

All LLM calls are mocked: no real API key required.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import BaseModel

from safeher.agents.base import BaseAgent, LLMReply
from safeher.config import Settings


# ---------------------------------------------------------------------------
# Minimal concrete subclass for testing the abstract BaseAgent
# ---------------------------------------------------------------------------

class _ConcreteAgent(BaseAgent):
    def parse_response(self, raw: str) -> BaseModel:
        return LLMReply(text=raw)


@pytest.fixture
def openai_settings(settings: Settings) -> Settings:
    return settings.model_copy(update={"llm_max_retries": 2})


@pytest.fixture
def agent(openai_settings: Settings) -> _ConcreteAgent:
    with patch("safeher.agents.base.AsyncOpenAI"):
        return _ConcreteAgent(openai_settings)


def _completion(content: str | None, finish_reason: str = "stop") -> MagicMock:
    resp = MagicMock()
    resp.choices = [MagicMock()]
    resp.choices[0].message.content = content
    resp.choices[0].finish_reason = finish_reason
    return resp


_TURNS = [{"role": "user", "content": "hi"}]


# ---------------------------------------------------------------------------
# LLMReply
# ---------------------------------------------------------------------------

@pytest.mark.unit
@pytest.mark.parametrize("reason", ["content_filter", "SAFETY", "refusal"])
def test_reply_blocked_finish_reasons(reason: str) -> None:
    assert LLMReply(text="", finish_reason=reason).blocked is True


@pytest.mark.unit
@pytest.mark.parametrize("reason", ["stop", "length", None])
def test_reply_not_blocked(reason: str | None) -> None:
    assert LLMReply(text="x", finish_reason=reason).blocked is False


@pytest.mark.unit
def test_configured_reflects_api_key(openai_settings: Settings) -> None:
    with patch("safeher.agents.base.AsyncOpenAI"):
        assert _ConcreteAgent(openai_settings).configured is True
        empty = openai_settings.model_copy(update={"llm_api_key": ""})
        assert _ConcreteAgent(empty).configured is False


@pytest.mark.unit
def test_anthropic_provider_uses_anthropic_key(openai_settings: Settings) -> None:
    cfg = openai_settings.model_copy(
        update={"llm_provider": "anthropic", "anthropic_api_key": "ak", "llm_api_key": ""}
    )
    with patch("safeher.agents.base.AsyncAnthropic") as anthropic_cls:
        agent = _ConcreteAgent(cfg)
    anthropic_cls.assert_called_once_with(api_key="ak")
    assert agent.configured is True


# ---------------------------------------------------------------------------
# _call tests: mock the underlying OpenAI client
# ---------------------------------------------------------------------------

@pytest.mark.unit
async def test_call_returns_text_on_success(agent: _ConcreteAgent) -> None:
    agent._openai_client = MagicMock()  # type: ignore[assignment]
    agent._openai_client.chat.completions.create = AsyncMock(return_value=_completion("hello world"))  # type: ignore[union-attr]

    result = await agent._call("system", _TURNS)
    assert result.text == "hello world"
    assert result.finish_reason == "stop"


@pytest.mark.unit
async def test_call_prepends_system_message(agent: _ConcreteAgent) -> None:
    agent._openai_client = MagicMock()  # type: ignore[assignment]
    create = AsyncMock(return_value=_completion("ok"))
    agent._openai_client.chat.completions.create = create  # type: ignore[union-attr]

    await agent._call("be kind", _TURNS)

    messages = create.call_args.kwargs["messages"]
    assert messages[0] == {"role": "system", "content": "be kind"}
    assert messages[1:] == _TURNS


@pytest.mark.unit
async def test_call_retries_on_timeout_then_succeeds(agent: _ConcreteAgent) -> None:
    agent._openai_client = MagicMock()  # type: ignore[assignment]
    agent._openai_client.chat.completions.create = AsyncMock(  # type: ignore[union-attr]
        side_effect=[asyncio.TimeoutError(), _completion("recovered")]
    )

    result = await agent._call("system", _TURNS)
    assert result.text == "recovered"
    assert agent._openai_client.chat.completions.create.call_count == 2  # type: ignore[union-attr]


@pytest.mark.unit
async def test_call_raises_after_exhausting_retries(agent: _ConcreteAgent) -> None:
    agent._openai_client = MagicMock()  # type: ignore[assignment]
    agent._openai_client.chat.completions.create = AsyncMock(  # type: ignore[union-attr]
        side_effect=asyncio.TimeoutError()
    )

    with pytest.raises(asyncio.TimeoutError):
        await agent._call("system", _TURNS)

    # max_retries=2 means 3 total attempts (0, 1, 2)
    assert agent._openai_client.chat.completions.create.call_count == 3  # type: ignore[union-attr]


@pytest.mark.unit
async def test_call_returns_empty_string_on_none_content(agent: _ConcreteAgent) -> None:
    agent._openai_client = MagicMock()  # type: ignore[assignment]
    agent._openai_client.chat.completions.create = AsyncMock(return_value=_completion(None))  # type: ignore[union-attr]

    result = await agent._call("system", _TURNS)
    assert result.text == ""


@pytest.mark.unit
async def test_call_handles_no_choices(agent: _ConcreteAgent) -> None:
    resp = MagicMock()
    resp.choices = []
    agent._openai_client = MagicMock()  # type: ignore[assignment]
    agent._openai_client.chat.completions.create = AsyncMock(return_value=resp)  # type: ignore[union-attr]

    result = await agent._call("system", _TURNS)
    assert result.text == ""
    assert result.finish_reason is None
