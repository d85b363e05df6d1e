"""
SEO Research Copilot Package.

Multi-source keyword research for long-form SEO content generation: SERP,
Wikipedia, Reddit, PubMed, Jina AI and Perplexity results merged into one
research record with derived content gaps, questions and statistics.
"""

__version__ = "1.0.0"
__author__ = "SEO Research Team"
__description__ = "SEO Content Research Aggregator"

from .agent.research_aggregator import ResearchAggregator, perform_enhanced_research
from .models.research import (
    EnhancedResearchData,
    JinaResearchData,
    RealTimeResearchData,
    ResearchQuery,
    SerpData,
    SourceResult,
    SourceStatus,
)

__all__ = [
    "ResearchAggregator",
    "perform_enhanced_research",
    "EnhancedResearchData",
    "JinaResearchData",
    "RealTimeResearchData",
    "ResearchQuery",
    "SerpData",
    "SourceResult",
    "SourceStatus",
]
