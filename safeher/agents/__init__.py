from safeher.agents.base import BaseAgent
from safeher.agents.companion import SafetyCompanionAgent

__all__ = ["BaseAgent", "SafetyCompanionAgent"]
