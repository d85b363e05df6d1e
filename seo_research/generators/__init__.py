"""Keyword and filler content generators."""

from .gap_filler import fill_content_gaps
from .natural_language import (
    RoundRobinSelector,
    SeededSelector,
    create_natural_phrases,
    generate_contextual_keyword_usage,
    generate_natural_language_variations,
    naturalize_content,
)
from .semantic_keywords import generate_semantic_keywords

__all__ = [
    "fill_content_gaps",
    "generate_natural_language_variations",
    "create_natural_phrases",
    "naturalize_content",
    "generate_contextual_keyword_usage",
    "RoundRobinSelector",
    "SeededSelector",
    "generate_semantic_keywords",
]
