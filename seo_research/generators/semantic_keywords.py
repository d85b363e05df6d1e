"""Semantic keyword variations for a primary keyword."""

from typing import List

MAX_SEMANTIC_KEYWORDS = 5

ONLINE_INCOME_KEYWORDS = [
    "online earning opportunities",
    "digital income streams",
    "remote work options",
    "internet-based revenue",
    "online business ventures",
]

BUSINESS_KEYWORDS = [
    "entrepreneurial ventures",
    "business opportunities",
    "commercial strategies",
    "enterprise solutions",
    "startup approaches",
]

HEALTH_KEYWORDS = [
    "wellness strategies",
    "health optimization",
    "fitness approaches",
    "wellbeing methods",
    "healthy lifestyle",
]

TECHNOLOGY_KEYWORDS = [
    "technological solutions",
    "digital innovations",
    "tech developments",
    "technological advances",
    "digital transformation",
]


def generate_semantic_keywords(primary_keyword: str) -> List[str]:
    """
    Related keywords to use instead of repeating the primary keyword.

    Args:
        primary_keyword: Article keyword

    Returns:
        At most five semantic keywords
    """
    keyword = primary_keyword.lower()

    if "make money" in keyword or "online income" in keyword:
        variations = ONLINE_INCOME_KEYWORDS
    elif "business" in keyword:
        variations = BUSINESS_KEYWORDS
    elif "health" in keyword or "fitness" in keyword:
        variations = HEALTH_KEYWORDS
    elif "technology" in keyword or "tech" in keyword:
        variations = TECHNOLOGY_KEYWORDS
    else:
        variations = [
            f"{primary_keyword} {suffix}"
            for suffix in ("strategies", "solutions", "approaches", "methods", "techniques")
        ]

    return list(variations[:MAX_SEMANTIC_KEYWORDS])
