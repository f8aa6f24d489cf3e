"""Replay sample companion replies against a running service.

Each reply is POSTed to /v1/risk/parse and the returned level is compared
with the expected one. No model call is made, so no API key is needed.

Requires:
    Service running:  uvicorn safeher.main:app

Usage:
    python scripts/run_replay.py
    SAFEHER_URL=http://localhost:8000 python scripts/run_replay.py

Exit code: 0 = all pass, 1 = one or more failures
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass

import httpx

# ---------------------------------------------------------------------------
# ANSI colour helpers
# ---------------------------------------------------------------------------

GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"


def _green(text: str) -> str:
    return f"{GREEN}{text}{RESET}"


def _red(text: str) -> str:
    return f"{RED}{text}{RESET}"


# ---------------------------------------------------------------------------
# Reply definitions
# ---------------------------------------------------------------------------


@dataclass
class Replay:
    name: str
    reply: str
    expected_level: str  # "LOW" | "MEDIUM" | "HIGH" | "NONE"


REPLAYS: list[Replay] = [
    # --- Tagged replies ---
    Replay(
        name="simple-tag-high",
        reply="Please move toward a crowded, well-lit place now.\n[RISK: HIGH - 85%]",
        expected_level="HIGH",
    ),
    Replay(
        name="simple-tag-lowercase",
        reply="Sounds like a calm evening.\n[risk: low - 12]",
        expected_level="LOW",
    ),
    Replay(
        name="structured-tag",
        reply=(
            "Let's plan your route home.\n"
            "[RISK: MEDIUM - 50% | FACTORS: time:HIGH,alone:MEDIUM-55 | ACTIONS: 1.Share your location;2.Stay on main roads]"
        ),
        expected_level="MEDIUM",
    ),
    Replay(
        name="out-of-range-percentage",
        reply="[RISK: HIGH - 140%]",
        expected_level="HIGH",
    ),
    # --- Untagged replies (keyword fallback) ---
    Replay(
        name="keywords-high",
        reply="Being followed and threatened is serious. Call police if you can.",
        expected_level="HIGH",
    ),
    Replay(
        name="keywords-medium",
        reply="Please be careful in an unfamiliar area and stay alert.",
        expected_level="MEDIUM",
    ),
    Replay(
        name="keywords-low",
        reply="I'm relieved you're home and feeling secure.",
        expected_level="LOW",
    ),
    Replay(
        name="no-signal",
        reply="Hello! What would you like to talk about today?",
        expected_level="NONE",
    ),
]


# ---------------------------------------------------------------------------
# HTTP helper
# ---------------------------------------------------------------------------


def _parse(client: httpx.Client, base_url: str, replay: Replay) -> str:
    """POST /v1/risk/parse and return the assessed level, or NONE."""
    response = client.post(f"{base_url}/v1/risk/parse", json={"text": replay.reply}, timeout=10.0)
    response.raise_for_status()
    assessment = response.json()["assessment"]
    return assessment["level"] if assessment else "NONE"


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main() -> int:
    base_url = os.environ.get("SAFEHER_URL", "http://localhost:8000")

    print(f"SafeHer reply replay: {base_url}")
    print(f"{'Replay':<40} {'Expected':<10} {'Actual':<10} {'Result'}")
    print("-" * 70)

    passed = 0
    failed = 0

    with httpx.Client() as client:
        for replay in REPLAYS:
            try:
                actual = _parse(client, base_url, replay)
            except httpx.HTTPError as exc:
                actual = f"ERROR: {exc}"

            if actual == replay.expected_level:
                status = _green("PASS")
                passed += 1
            else:
                status = _red("FAIL")
                failed += 1

            print(f"{status}  {replay.name:<38} {replay.expected_level:<10} {actual:<10}")

    print("-" * 70)
    total = passed + failed
    summary = f"Results: {passed}/{total} passed"
    print(_green(summary) if failed == 0 else _red(summary))

    return 0 if failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
