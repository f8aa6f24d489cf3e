from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: str = "INFO"

    # Redis (rolling risk history)
    redis_url: str = "redis://localhost:6379/0"

    # LLM: provider selection
    # "anthropic": uses AsyncAnthropic + anthropic_api_key
    # "openai_compat": uses AsyncOpenAI with custom base_url + llm_api_key (Gemini, Groq, Ollama, etc.)
    llm_provider: Literal["anthropic", "openai_compat"] = "openai_compat"
    llm_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    llm_api_key: str = ""
    anthropic_api_key: str = ""
    llm_model: str = "gemini-2.5-flash"
    llm_timeout_seconds: float = 30.0
    llm_max_retries: int = 2
    llm_temperature: float = 0.7
    llm_max_output_tokens: int = 1024

    # Chat
    chat_history_window: int = 10  # user/assistant messages forwarded per turn

    # Risk history
    risk_history_max_entries: int = 5
    risk_history_ttl_seconds: int = 86400  # 1 day
    risk_trend_threshold: int = 3  # points of change before a trend is reported


settings = Settings()
