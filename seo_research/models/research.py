"""
Pydantic models for keyword research data.

This module defines the records exchanged between the research source
fetchers, the Jina research service and the research aggregator. Aggregate
records serialise with the camelCase field names the content generator UI
expects (``serpData``, ``competitorGaps`` ...) while Python code uses the
snake_case attributes.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class SourceName(str, Enum):
    """Enumeration of research sources."""

    SERP = "serp"
    WIKIPEDIA = "wikipedia"
    REDDIT = "reddit"
    PUBMED = "pubmed"
    JINA = "jina"
    PERPLEXITY = "perplexity"


class SourceStatus(str, Enum):
    """Outcome of a single source fetch."""

    SUCCESS = "success"
    FAILED = "failed"


class ResearchQuery(BaseModel):
    """Immutable input to one research run."""

    model_config = ConfigDict(frozen=True)

    keyword: str = Field(..., description="Topic keyword to research")
    jina_api_key: Optional[str] = Field(
        default=None, description="Credential for the Jina AI research service"
    )
    perplexity_api_key: Optional[str] = Field(
        default=None, description="Credential for Perplexity real-time research"
    )

    @field_validator("keyword")
    @classmethod
    def keyword_not_empty(cls, v):
        """Validate that the keyword is not blank."""
        if not v.strip():
            raise ValueError("Keyword cannot be empty")
        return v.strip()


class SourceResult(BaseModel):
    """
    Per-source outcome of a fetch call.

    A tagged variant: ``success`` carries the source-specific payload,
    ``failed`` carries only a diagnostic error string. Consumers read the
    payload through :meth:`payload_or` so a failed source always degrades
    to an empty default.
    """

    source: str
    status: SourceStatus
    payload: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, source: str, payload: Any) -> "SourceResult":
        return cls(source=source, status=SourceStatus.SUCCESS, payload=payload)

    @classmethod
    def failed(cls, source: str, error: str) -> "SourceResult":
        return cls(source=source, status=SourceStatus.FAILED, error=error)

    @property
    def ok(self) -> bool:
        return self.status == SourceStatus.SUCCESS

    def payload_or(self, default: Any) -> Any:
        """Return the payload on success, otherwise ``default``."""
        if self.ok and self.payload is not None:
            return self.payload
        return default


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchResult(_CamelModel):
    """Single organic search result."""

    title: str
    snippet: str = ""
    url: str = ""
    position: int = Field(default=1, ge=1)


class SerpData(_CamelModel):
    """Search engine result page research for a keyword."""

    top_results: List[SearchResult] = Field(default_factory=list)
    related_questions: List[str] = Field(default_factory=list)
    key_statistics: List[str] = Field(default_factory=list)
    authority_content: str = ""

    @property
    def result_urls(self) -> List[str]:
        """URLs of the top results, in rank order, skipping blanks."""
        return [result.url for result in self.top_results if result.url]


class ContentRecord(_CamelModel):
    """Extracted page content or semantic search hit."""

    title: str = ""
    content: str = ""
    url: str = ""
    description: str = ""


class GroundingReference(_CamelModel):
    """Web evidence returned by the grounding endpoint."""

    url: str = ""
    title: str = ""
    snippet: str = ""


class FactualValidation(_CamelModel):
    """Factual grounding verdict for a statement about the keyword."""

    score: float = Field(default=0.0, ge=0.0, le=1.0)
    is_factual: bool = False
    references: List[GroundingReference] = Field(default_factory=list)


class JinaResearchData(_CamelModel):
    """Composite result of the Jina reader, search and grounding calls."""

    extracted_content: List[ContentRecord] = Field(default_factory=list)
    semantic_results: List[ContentRecord] = Field(default_factory=list)
    factual_validation: FactualValidation = Field(default_factory=FactualValidation)
    content_gaps: List[str] = Field(default_factory=list)
    structured_insights: List[str] = Field(default_factory=list)


class CompetitorAnalysis(_CamelModel):
    """Competitor landscape summary from real-time research."""

    top_ranking_pages: List[str] = Field(default_factory=list)
    content_gaps: List[str] = Field(default_factory=list)
    average_word_count: int = 3500
    common_keywords: List[str] = Field(default_factory=list)


class RealTimeResearchData(_CamelModel):
    """Real-time statistics, studies and quotes for a keyword."""

    latest_statistics: List[str] = Field(default_factory=list)
    recent_studies: List[str] = Field(default_factory=list)
    expert_quotes: List[str] = Field(default_factory=list)
    current_trends: List[str] = Field(default_factory=list)
    competitor_analysis: CompetitorAnalysis = Field(default_factory=CompetitorAnalysis)


class EnhancedResearchData(_CamelModel):
    """
    Aggregate research record for one generation request.

    Source slots are always present; a failed source leaves its empty
    default in place. The derived sequences are filled after the merge.
    """

    keyword: str
    serp_data: SerpData = Field(default_factory=SerpData)
    wikipedia_data: List[str] = Field(default_factory=list)
    reddit_insights: List[str] = Field(default_factory=list)
    recent_studies: List[str] = Field(default_factory=list)
    jina_research_data: JinaResearchData = Field(default_factory=JinaResearchData)
    expert_opinions: List[str] = Field(default_factory=list)
    real_time_data: Optional[RealTimeResearchData] = None

    competitor_gaps: List[str] = Field(default_factory=list)
    trending_questions: List[str] = Field(default_factory=list)
    statistical_data: List[str] = Field(default_factory=list)

    source_status: Dict[str, SourceStatus] = Field(default_factory=dict)
    is_fallback: bool = False
    researched_at: datetime = Field(default_factory=datetime.utcnow)

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dictionary using the UI field names."""
        return self.model_dump(mode="json", by_alias=True)


class ResearchJob(BaseModel):
    """Batch research entry loaded from a YAML job file."""

    keyword: str = Field(..., description="Keyword to research")
    output_file: Optional[str] = Field(
        default=None, description="File name for the research output"
    )
    enabled: bool = Field(default=True, description="Whether the job should run")

    @field_validator("keyword")
    @classmethod
    def keyword_not_empty(cls, v):
        """Validate that the keyword is not blank."""
        if not v.strip():
            raise ValueError("Keyword cannot be empty")
        return v.strip()
