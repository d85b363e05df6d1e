"""
Natural language keyword variations.

Helpers that replace rigid repetition of the primary keyword with natural
alternatives. Any choice between alternatives goes through a selector, so
output is reproducible unless a seeded or custom selector is supplied.
"""

import random
import re
from typing import List, Optional, Sequence

MAX_VARIATIONS = 5

TOPIC_VARIATIONS = [
    (
        "vitamin d deficiency",
        [
            "low vitamin D levels",
            "vitamin D insufficiency",
            "inadequate vitamin D status",
            "vitamin D shortfall",
            "suboptimal vitamin D levels",
        ],
    ),
    (
        "make money online",
        [
            "online income generation",
            "digital revenue streams",
            "internet-based earnings",
            "remote income opportunities",
            "online financial success",
        ],
    ),
    (
        "weight loss",
        [
            "fat reduction strategies",
            "sustainable weight management",
            "healthy weight achievement",
            "body composition improvement",
            "metabolic optimization",
        ],
    ),
    (
        "programming",
        [
            "software development",
            "coding practices",
            "application development",
            "software engineering",
            "programming methodologies",
        ],
    ),
    (
        "marketing",
        [
            "promotional strategies",
            "customer acquisition",
            "brand development",
            "audience engagement",
            "market penetration",
        ],
    ),
]


class RoundRobinSelector:
    """Selects options in turn, starting with the first."""

    def __init__(self):
        self._position = 0

    def choose(self, options: Sequence[str]) -> str:
        option = options[self._position % len(options)]
        self._position += 1
        return option


class SeededSelector:
    """Pseudo-random selection, reproducible for a given seed."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def choose(self, options: Sequence[str]) -> str:
        return self._random.choice(list(options))


def generate_natural_language_variations(primary_keyword: str) -> List[str]:
    """
    Semantic variations of the primary keyword.

    Args:
        primary_keyword: Article keyword

    Returns:
        At most five variations
    """
    keyword = primary_keyword.lower()

    for topic, variations in TOPIC_VARIATIONS:
        if topic in keyword:
            return list(variations[:MAX_VARIATIONS])

    main_topic = keyword.split(" ")[0]
    return [
        f"{main_topic} strategies",
        f"{main_topic} implementation",
        f"{main_topic} optimization",
        f"{main_topic} best practices",
        f"effective {main_topic} approaches",
    ]


def create_natural_phrases(keyword: str, context: str) -> str:
    """Natural phrase for the keyword in an introduction, conclusion or header."""
    keyword_lower = keyword.lower()

    if context == "introduction":
        if "vitamin d deficiency" in keyword_lower:
            return "insufficient vitamin D levels"
        if "make money online" in keyword_lower:
            return "generating income through digital channels"
        return f"effective {keyword_lower} strategies"

    if context == "conclusion":
        if "vitamin d deficiency" in keyword_lower:
            return "maintaining optimal vitamin D status"
        if "make money online" in keyword_lower:
            return "building sustainable online revenue"
        return f"successful {keyword_lower} implementation"

    if context == "section_header":
        return f"understanding {keyword_lower}"

    return keyword_lower


def naturalize_content(content: str, primary_keyword: str) -> str:
    """
    Replace repeated keyword occurrences with natural variations.

    The first occurrence is kept; the n-th later occurrence is replaced with
    variation ``n % len(variations)``. Matching is case-insensitive.
    """
    if not primary_keyword:
        return content

    variations = generate_natural_language_variations(primary_keyword)
    keyword_pattern = re.compile(re.escape(primary_keyword), re.IGNORECASE)
    occurrence = 0

    def replace(match):
        nonlocal occurrence
        index = occurrence
        occurrence += 1
        if index == 0:
            return match.group(0)
        return variations[index % len(variations)]

    return keyword_pattern.sub(replace, content)


def generate_contextual_keyword_usage(
    keyword: str, section_type: str, sentence_position: str, selector=None
) -> str:
    """
    Keyword phrase suited to the section and sentence position.

    Args:
        keyword: Article keyword
        section_type: ``intro``, ``body`` or ``conclusion``
        sentence_position: ``start``, ``middle`` or ``end`` (intro only)
        selector: Object with ``choose(options)`` for body phrases; a fresh
            ``RoundRobinSelector`` when omitted

    Returns:
        Keyword phrase
    """
    keyword_lower = keyword.lower()

    if section_type == "intro":
        if sentence_position == "start":
            return f"Understanding {keyword_lower}"
        if sentence_position == "middle":
            return f"the principles of {keyword_lower}"
        return f"successful {keyword_lower} implementation"

    if section_type == "body":
        selector = selector or RoundRobinSelector()
        return selector.choose(
            [
                f"effective {keyword_lower} approaches",
                f"{keyword_lower} best practices",
                f"optimizing {keyword_lower} outcomes",
                f"evidence-based {keyword_lower} strategies",
            ]
        )

    if section_type == "conclusion":
        return f"mastering {keyword_lower}"

    return keyword_lower
