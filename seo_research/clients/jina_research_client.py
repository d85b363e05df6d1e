"""
Jina AI research service.

Wraps three Jina AI capabilities behind one composite call:

1. Reader: clean content extraction from seed URLs
2. Search: semantic web search around the keyword
3. Grounding: factual verification of a statement about the keyword

The three calls run concurrently and settle independently, so a partial
result is the normal outcome rather than an error.
"""

import asyncio
import logging
from typing import Any, List, Optional, Sequence
from urllib.parse import quote, urlparse

import aiohttp
from bs4 import BeautifulSoup

from .base_fetcher import BaseSourceFetcher, require_success
from ..config.settings import Settings
from ..models.research import (
    ContentRecord,
    FactualValidation,
    GroundingReference,
    JinaResearchData,
    SourceName,
)

logger = logging.getLogger(__name__)

MAX_SEMANTIC_RESULTS = 10
THIN_CONTENT_THRESHOLD = 5000
MIN_SEMANTIC_RESULTS = 3
RICH_SEMANTIC_THRESHOLD = 5
HIGH_FACTUAL_SCORE = 0.7
MODERATE_FACTUAL_SCORE = 0.5

AUTHORITY_DOMAIN_MARKERS = ["mayo", "harvard", "nih", "webmd", "healthline"]

VITAMIN_D_GAPS = [
    "Detailed bioavailability studies and absorption mechanisms",
    "Genetic factors affecting vitamin D metabolism (CYP24A1, VDR polymorphisms)",
    "Interaction protocols with other nutrients and medications",
    "Population-specific deficiency patterns and treatment protocols",
    "Cost-effectiveness analysis of different testing and treatment approaches",
]

ZINC_GAPS = [
    "Bioavailability comparison between different zinc forms",
    "Interaction timing with other minerals and phytates",
    "Age-specific absorption rates and requirements",
    "Food preparation effects on zinc content and absorption",
]

GENERIC_GAPS = [
    "Evidence-based implementation frameworks",
    "Measurable outcome tracking systems",
    "Individual variation factors and personalization",
    "Long-term sustainability and maintenance protocols",
    "Cost-benefit analysis with alternative approaches",
]

THIN_CONTENT_GAP = "Comprehensive implementation details and step-by-step guidance"
FEW_PERSPECTIVES_GAP = "Diverse expert perspectives and alternative approaches"


class JinaResearchService(BaseSourceFetcher):
    """Composite Jina AI research for a keyword."""

    source_name = SourceName.JINA.value

    def __init__(
        self,
        api_key: Optional[str] = None,
        settings: Optional[Settings] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the Jina research service.

        Args:
            api_key: Jina AI credential; without it only fallback data is returned
            settings: Application settings
            session: Optional shared HTTP session
        """
        super().__init__(settings=settings, session=session)
        self.api_key = api_key
        self.reader_url = self.settings.jina.reader_url.rstrip("/")
        self.search_url = self.settings.jina.search_url.rstrip("/")
        self.grounding_url = self.settings.jina.grounding_url
        self.max_seed_urls = self.settings.jina.max_seed_urls

    def empty_payload(self) -> JinaResearchData:
        return JinaResearchData()

    async def _fetch(self, keyword: str) -> JinaResearchData:
        return await self.perform_comprehensive_research(keyword)

    async def perform_comprehensive_research(
        self, keyword: str, seed_urls: Sequence[str] = ()
    ) -> JinaResearchData:
        """
        Perform comprehensive research using Jina AI.

        Args:
            keyword: Topic keyword
            seed_urls: Pages to extract content from (usually SERP result URLs)

        Returns:
            Jina research data; fallback data when no credential is configured
        """
        if not self.api_key:
            return self.get_fallback_data(keyword)

        try:
            logger.info(f"Starting Jina AI research for '{keyword}'")

            extracted, semantic, grounding = await asyncio.gather(
                self._extract_content_from_urls(list(seed_urls)[: self.max_seed_urls]),
                self._perform_semantic_search(keyword),
                self._validate_factual_content(keyword),
                return_exceptions=True,
            )

            research_data = JinaResearchData(
                extracted_content=self._settled(extracted, "content extraction", []),
                semantic_results=self._settled(semantic, "semantic search", []),
                factual_validation=self._settled(
                    grounding, "factual validation", FactualValidation()
                ),
            )

            research_data.content_gaps = self.analyze_content_gaps(research_data, keyword)
            research_data.structured_insights = self.generate_structured_insights(
                research_data
            )

            logger.info(
                f"Jina AI research completed for '{keyword}': "
                f"{len(research_data.extracted_content)} pages, "
                f"{len(research_data.semantic_results)} search results"
            )
            return research_data

        except Exception as e:
            logger.error(f"Jina AI research failed: {e}", exc_info=True)
            return self.get_fallback_data(keyword)

    def _settled(self, outcome: Any, label: str, default: Any) -> Any:
        if isinstance(outcome, BaseException):
            logger.warning(f"Jina {label} failed: {outcome!r}")
            return default
        return outcome

    def _auth_headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "X-Return-Format": "text",
            "Accept": "application/json",
        }

    async def _extract_content_from_urls(self, urls: List[str]) -> List[ContentRecord]:
        """
        Extract clean content from URLs using Jina Reader.

        Each URL is isolated: a failed page is skipped, the rest are kept.
        """
        if not urls:
            return []

        outcomes = await asyncio.gather(
            *(self._read_url(url) for url in urls), return_exceptions=True
        )

        records = []
        for url, outcome in zip(urls, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning(f"Failed to extract content from {url}: {outcome!r}")
            elif outcome is not None:
                records.append(outcome)
        return records

    async def _read_url(self, url: str) -> Optional[ContentRecord]:
        status, data = await self._request_json(
            "GET", f"{self.reader_url}/{quote(url, safe='')}", headers=self._auth_headers()
        )
        require_success("Jina Reader", status)

        payload = self._response_data(data)
        if not isinstance(payload, dict):
            return None

        return ContentRecord(
            title=payload.get("title") or "Extracted Content",
            content=clean_text(payload.get("content") or ""),
            url=payload.get("url") or url,
            description=payload.get("description") or "",
        )

    async def _perform_semantic_search(self, keyword: str) -> List[ContentRecord]:
        search_query = f"{keyword} comprehensive guide research latest 2024"
        status, data = await self._request_json(
            "GET",
            f"{self.search_url}/{quote(search_query, safe='')}",
            headers=self._auth_headers(),
        )
        require_success("Jina Search", status)

        items = self._response_data(data)
        if not isinstance(items, list):
            return []

        return [
            ContentRecord(
                title=item.get("title") or "Search Result",
                url=item.get("url") or "",
                content=clean_text(item.get("content") or ""),
                description=item.get("description") or "",
            )
            for item in items[:MAX_SEMANTIC_RESULTS]
            if isinstance(item, dict)
        ]

    async def _validate_factual_content(self, keyword: str) -> FactualValidation:
        statement = (
            f"{keyword} is beneficial for health and has scientific evidence "
            f"supporting its use"
        )
        headers = self._auth_headers()
        headers["Content-Type"] = "application/json"

        status, data = await self._request_json(
            "POST",
            self.grounding_url,
            json_body={"statement": statement, "sources": "web"},
            headers=headers,
        )
        require_success("Jina Grounding", status)

        payload = self._response_data(data)
        if not isinstance(payload, dict):
            return FactualValidation()

        references = [
            GroundingReference(
                url=reference.get("url") or "",
                title=reference.get("title") or "",
                snippet=reference.get("snippet") or "",
            )
            for reference in payload.get("references") or []
            if isinstance(reference, dict)
        ]

        return FactualValidation(
            score=payload.get("score") or 0.0,
            is_factual=bool(payload.get("factual")),
            references=references,
        )

    def _response_data(self, data: Any) -> Any:
        """Unwrap the ``{"code": 200, "data": ...}`` envelope."""
        if not isinstance(data, dict) or data.get("code") != 200:
            return None
        return data.get("data")

    def analyze_content_gaps(
        self, research_data: JinaResearchData, keyword: str
    ) -> List[str]:
        """
        Content gaps for the keyword, adjusted for how thin the research was.

        Args:
            research_data: Merged Jina research data
            keyword: Topic keyword

        Returns:
            List of gap descriptions
        """
        lower_keyword = keyword.lower()
        if "vitamin d" in lower_keyword:
            gaps = list(VITAMIN_D_GAPS)
        elif "zinc" in lower_keyword:
            gaps = list(ZINC_GAPS)
        else:
            gaps = list(GENERIC_GAPS)

        content_length = sum(len(item.content) for item in research_data.extracted_content)
        if content_length < THIN_CONTENT_THRESHOLD:
            gaps.append(THIN_CONTENT_GAP)

        if len(research_data.semantic_results) < MIN_SEMANTIC_RESULTS:
            gaps.append(FEW_PERSPECTIVES_GAP)

        return gaps

    def generate_structured_insights(self, research_data: JinaResearchData) -> List[str]:
        """Quality, accuracy and authority observations about the research."""
        insights = []

        extracted = research_data.extracted_content
        if extracted:
            average_length = sum(len(item.content) for item in extracted) / len(extracted)
            insights.append(
                f"Average competitor content length: {round(average_length)} characters"
            )

        score = research_data.factual_validation.score
        if score > HIGH_FACTUAL_SCORE:
            insights.append(f"High factual accuracy score: {round(score * 100)}%")
        elif score > MODERATE_FACTUAL_SCORE:
            insights.append(
                "Moderate factual validation - recommend additional expert sources"
            )

        semantic_count = len(research_data.semantic_results)
        if semantic_count > RICH_SEMANTIC_THRESHOLD:
            insights.append(
                f"Rich semantic context available - {semantic_count} related topics found"
            )

        authority_domains = [
            hostname
            for hostname in (urlparse(item.url).hostname for item in extracted)
            if hostname and any(marker in hostname for marker in AUTHORITY_DOMAIN_MARKERS)
        ]
        if authority_domains:
            insights.append(f"Authority sources identified: {', '.join(authority_domains)}")

        return insights

    def get_fallback_data(self, keyword: str) -> JinaResearchData:
        """Research data used when Jina AI is not configured."""
        return jina_fallback_data(keyword)


def clean_text(content: str) -> str:
    """Reduce HTML markup to plain text; plain text passes through unchanged."""
    if "<" not in content or ">" not in content:
        return content.strip()

    soup = BeautifulSoup(content, "html.parser")
    for element in soup(["script", "style", "nav", "footer", "aside"]):
        element.decompose()

    lines = (line.strip() for line in soup.get_text("\n").splitlines())
    return "\n".join(line for line in lines if line)


def jina_fallback_data(keyword: str) -> JinaResearchData:
    """Basic-mode research data; makes no network calls."""
    return JinaResearchData(
        content_gaps=[
            "Enhanced content extraction not available - API key required",
            "Semantic search capabilities disabled",
            "Fact verification features unavailable",
        ],
        structured_insights=[
            f"Basic research mode active for: {keyword}",
            "Connect Jina AI for enhanced research capabilities",
        ],
    )
