"""Inline risk tag grammar shared by the parser and the tag stripper.

Structured form (FACTORS and ACTIONS are optional and independent):

    [RISK: HIGH - 85% | FACTORS: time:HIGH,location:MEDIUM-40 | ACTIONS: 1.Call 100;2.Move]

Simple form:

    [RISK: MEDIUM - 55%]

Matching is case-insensitive and unanchored. Both the parser and ``excise``
use the same compiled patterns, so anything recognised as a tag is also
removed from display text.
"""

from __future__ import annotations

import re

from safeher.models.risk import RiskLevel

_HEAD = r"\[RISK\s*:\s*(?P<level>LOW|MEDIUM|HIGH)\s*-\s*(?P<percentage>\d+)%?"

STRUCTURED_TAG = re.compile(
    _HEAD
    + r"\s*(?:\|\s*FACTORS\s*:\s*(?P<factors>[^\]|]+))?"
    + r"\s*(?:\|\s*ACTIONS\s*:\s*(?P<actions>[^\]]+))?"
    + r"\]",
    re.IGNORECASE,
)

SIMPLE_TAG = re.compile(_HEAD + r"\]", re.IGNORECASE)

# Order matters for excise(): the broader form first.
TAG_PATTERNS: tuple[re.Pattern[str], ...] = (STRUCTURED_TAG, SIMPLE_TAG)

# Value half of a FACTORS entry: "HIGH", "medium-40", "LOW 15"
FACTOR_VALUE = re.compile(r"(LOW|MEDIUM|HIGH)(?:\s*-?\s*(\d+))?", re.IGNORECASE)

# Leading explicit priority of an ACTIONS item: "1. Call someone"
ACTION_ITEM = re.compile(r"^(\d+)\.\s*(.+)", re.DOTALL)


def clamp_percentage(value: int, low: int = 0, high: int = 100) -> int:
    """Pull value into [low, high]. Out-of-range values are never rejected."""
    return max(low, min(high, value))


def parse_percentage(digits: str) -> int:
    """Clamp a run of digits to [0, 100] without converting arbitrarily long input."""
    significant = digits.lstrip("0")
    if len(significant) > 3:
        return 100
    return clamp_percentage(int(significant or "0"))


def parse_level(raw: str) -> RiskLevel:
    return RiskLevel(raw.strip().upper())


def excise(text: str) -> str:
    """Remove every tag span, then trim.

    Repeats until no pattern matches, so a tag exposed by removing a nested
    one is also removed and the result is a fixed point.
    """
    while True:
        removed = 0
        for pattern in TAG_PATTERNS:
            text, count = pattern.subn("", text)
            removed += count
        if not removed:
            return text.strip()
