"""Small text helpers shared by the research analysis and real-time clients."""

import re
from typing import Iterable, List

STATISTIC_PATTERN = re.compile(
    r"\d+(?:\.\d+)?%"
    r"|\$[\d,]+(?:\.\d+)?[BM]?"
    r"|\d+(?:,\d+)*(?:\.\d+)?\s*(?:billion|million|thousand|people|adults|patients)",
    re.IGNORECASE,
)


def dedupe(items: Iterable[str]) -> List[str]:
    """Drop repeated strings, keeping the first occurrence and the order."""
    seen = set()
    unique = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


def find_statistics(text: str) -> List[str]:
    """Percentages, dollar amounts and counted quantities mentioned in text."""
    return [match.group(0) for match in STATISTIC_PATTERN.finditer(text)]
