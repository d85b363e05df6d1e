"""Shared test configuration and fixtures for the SEO Research Copilot."""

from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from seo_research.config.settings import Settings
from seo_research.models.research import (
    ContentRecord,
    EnhancedResearchData,
    FactualValidation,
    JinaResearchData,
    SearchResult,
    SerpData,
)


class MockAsyncContextManager:
    """Mock async context manager for testing."""

    def __init__(self, return_value=None):
        self.return_value = return_value

    async def __aenter__(self):
        return self.return_value

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass


def create_mock_response(status=200, json_data=None):
    """Create a mock HTTP response."""
    mock_response = MagicMock()
    mock_response.status = status
    mock_response.json = AsyncMock(return_value=json_data)
    return mock_response


Route = Tuple[str, str, Any]


def create_routed_session(routes: Optional[List[Route]] = None) -> MagicMock:
    """
    Create a mock HTTP session answering by method and URL prefix.

    Each route is ``(method, url_prefix, outcome)``; the outcome is a mock
    response, an exception instance to raise, or a list of those consumed
    one per request. The first matching route wins. Unrouted requests
    raise ``aiohttp.ClientError``.
    """
    routes = routes or []

    def request(method, url, **kwargs):
        for route_method, prefix, outcome in routes:
            if route_method == method and url.startswith(prefix):
                if isinstance(outcome, list):
                    outcome = outcome.pop(0)
                if isinstance(outcome, BaseException):
                    raise outcome
                return MockAsyncContextManager(outcome)
        raise aiohttp.ClientConnectionError(f"No route for {method} {url}")

    session = MagicMock(spec=aiohttp.ClientSession)
    session.closed = False
    session.request = MagicMock(side_effect=request)
    session.close = AsyncMock()
    return session


@pytest.fixture
def settings() -> Settings:
    """Application settings with default endpoints."""
    return Settings()


@pytest.fixture
def failing_session() -> MagicMock:
    """HTTP session where every request fails with a transport error."""
    return create_routed_session()


@pytest.fixture
def duckduckgo_payload() -> Dict[str, Any]:
    """Sample DuckDuckGo Instant Answer response."""
    return {
        "Heading": "Zinc",
        "Abstract": "Zinc is a chemical element and an essential trace mineral.",
        "AbstractURL": "https://en.wikipedia.org/wiki/Zinc",
        "RelatedTopics": [
            {
                "Text": "Zinc deficiency - A condition where insufficient zinc is available.",
                "FirstURL": "https://www.healthline.com/zinc-deficiency",
            },
            {"Name": "Category group without text", "Topics": []},
            {
                "Text": "Zinc in biology - Zinc is found in many enzymes.",
                "FirstURL": "https://duckduckgo.com/Zinc_in_biology",
            },
        ],
    }


@pytest.fixture
def sample_research_data() -> EnhancedResearchData:
    """Merged research record with data from every source."""
    return EnhancedResearchData(
        keyword="zinc absorption",
        serp_data=SerpData(
            top_results=[
                SearchResult(
                    title="Zinc",
                    snippet="Zinc is an essential trace mineral.",
                    url="https://en.wikipedia.org/wiki/Zinc",
                    position=1,
                )
            ],
            related_questions=["What blocks zinc absorption?"],
            key_statistics=["17% of the world's population has inadequate zinc intake"],
            authority_content="Zinc: Zinc is an essential trace mineral.",
        ),
        wikipedia_data=["Zinc is a chemical element with symbol Zn."],
        reddit_insights=["Zinc timing: I take zinc with dinner..."],
        recent_studies=["Recent study (PMID: 123) investigating zinc absorption."],
        jina_research_data=JinaResearchData(
            extracted_content=[
                ContentRecord(
                    title="Mayo Clinic zinc guide",
                    content="About 31% of adults and 2 billion people are at risk.",
                    url="https://www.mayoclinic.org/zinc",
                )
            ],
            factual_validation=FactualValidation(score=0.8, is_factual=True),
        ),
        competitor_gaps=["Zinc bioavailability comparison between different food preparation methods"],
        trending_questions=["What time of day is best for zinc supplementation?"],
        statistical_data=["31%"],
    )


@pytest.fixture
def routed_session():
    """Factory for mock HTTP sessions routed by method and URL prefix."""
    return create_routed_session


@pytest.fixture
def mock_response():
    """Factory for mock HTTP responses."""
    return create_mock_response
