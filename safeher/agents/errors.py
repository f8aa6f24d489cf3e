"""Custom exception types for the companion chat transport."""


class CompanionNotConfiguredError(Exception):
    """Raised when no API key is configured for the selected LLM provider."""


class CompanionUnavailableError(Exception):
    """Raised when the LLM provider keeps failing after all retries."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Companion unavailable: {reason}")
