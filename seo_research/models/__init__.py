"""Data models for the SEO Research Copilot."""

from .research import (
    CompetitorAnalysis,
    ContentRecord,
    EnhancedResearchData,
    FactualValidation,
    GroundingReference,
    JinaResearchData,
    RealTimeResearchData,
    ResearchJob,
    ResearchQuery,
    SearchResult,
    SerpData,
    SourceName,
    SourceResult,
    SourceStatus,
)

__all__ = [
    "CompetitorAnalysis",
    "ContentRecord",
    "EnhancedResearchData",
    "FactualValidation",
    "GroundingReference",
    "JinaResearchData",
    "RealTimeResearchData",
    "ResearchJob",
    "ResearchQuery",
    "SearchResult",
    "SerpData",
    "SourceName",
    "SourceResult",
    "SourceStatus",
]
