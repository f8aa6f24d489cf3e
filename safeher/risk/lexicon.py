"""Fixed keyword tables used by the lexical classifier and the action sub-parser."""

from safeher.models.risk import FactorIcon, RecommendationIcon

HIGH_RISK_TERMS: tuple[str, ...] = (
    "immediate danger",
    "call police",
    "emergency",
    "being followed",
    "threatened",
    "attack",
    "assault",
    "violence",
    "urgent",
    "get help now",
    "leave immediately",
    "domestic violence",
    "stalking",
    "harassed",
)

MEDIUM_RISK_TERMS: tuple[str, ...] = (
    "be careful",
    "stay alert",
    "trust your instincts",
    "potentially unsafe",
    "unfamiliar area",
    "alone at night",
    "cautious",
    "concerning",
    "share your location",
    "uncomfortable",
    "uneasy",
    "nervous",
)

LOW_RISK_TERMS: tuple[str, ...] = (
    "safe",
    "glad you're okay",
    "relieved",
    "good to hear",
    "no immediate concern",
    "stay safe",
    "doing well",
    "secure",
    "comfortable",
)

# Canonical factor set, in display order. Every assessment carries exactly these.
FACTOR_CATALOG: tuple[tuple[str, str, FactorIcon], ...] = (
    ("time", "Time of Day Risk", FactorIcon.CLOCK),
    ("location", "Location Familiarity", FactorIcon.MAP),
    ("alone", "Alone Status", FactorIcon.PERSON),
    ("visibility", "Environment Visibility", FactorIcon.EYE),
)

FACTOR_KEYS: dict[str, tuple[str, FactorIcon]] = {
    key: (name, icon) for key, name, icon in FACTOR_CATALOG
}

# First keyword found in the action text wins.
ACTION_ICON_KEYWORDS: tuple[tuple[str, RecommendationIcon], ...] = (
    ("call", RecommendationIcon.PHONE),
    ("phone", RecommendationIcon.PHONE),
    ("share", RecommendationIcon.MAP_PIN),
    ("location", RecommendationIcon.MAP_PIN),
    ("friend", RecommendationIcon.USERS),
    ("contact", RecommendationIcon.USERS),
    ("move", RecommendationIcon.MOVE),
    ("leave", RecommendationIcon.MOVE),
    ("alert", RecommendationIcon.ALERT),
    ("sos", RecommendationIcon.ALERT),
    ("safe", RecommendationIcon.SHIELD),
    ("stay", RecommendationIcon.SHIELD),
)


def icon_for_action(action: str) -> RecommendationIcon:
    lowered = action.lower()
    for keyword, icon in ACTION_ICON_KEYWORDS:
        if keyword in lowered:
            return icon
    return RecommendationIcon.SHIELD


def score(text: str, terms: tuple[str, ...]) -> int:
    """Count how many distinct terms occur in text (case-insensitive)."""
    lowered = text.lower()
    return sum(1 for term in terms if term in lowered)
