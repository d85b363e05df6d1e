"""Unit tests for the Perplexity real-time data client."""

import pytest

from seo_research.clients.perplexity_client import (
    RealTimeDataClient,
    curated_research_data,
    extract_competitor_data,
    extract_expert_quotes,
    extract_statistics,
    extract_studies,
    extract_trends,
    research_queries,
)
from seo_research.models.research import SourceStatus

SAMPLE_ANSWER = (
    "A 2024 study found that 42% of adults were deficient. "
    "Experts noted emerging research on dosing; "
    '"Vitamin D status should be tested in every adult with persistent fatigue symptoms." '
    "said Michael Holick at the conference. "
    "Mayo Clinic and Healthline lead, but lack of detailed information on dosing. "
    "Typical pages run 2800 words."
)


def completion(content):
    return {"choices": [{"message": {"content": content}}]}


class TestExtraction:
    """Test answer text extraction."""

    def test_statistics_with_context(self):
        """Test statistics carry surrounding words."""
        statistics = extract_statistics(SAMPLE_ANSWER)

        assert len(statistics) == 1
        assert statistics[0].startswith("42% ")
        assert "study found" in statistics[0]

    def test_statistics_capped(self):
        """Test at most five statistics are kept."""
        text = " ".join(f"{value}% rise." for value in range(10, 20))

        assert len(extract_statistics(text)) == 5

    def test_studies(self):
        """Test study sentences are extracted."""
        assert extract_studies(SAMPLE_ANSWER) == [
            "study found that 42% of adults were deficient."
        ]

    def test_expert_quotes(self):
        """Test attributed quotes are extracted."""
        assert extract_expert_quotes(SAMPLE_ANSWER) == [
            '"Vitamin D status should be tested in every adult with persistent '
            'fatigue symptoms." - Michael Holick'
        ]

    def test_short_quotes_ignored(self):
        """Test quotes under 50 characters are ignored."""
        assert extract_expert_quotes('"Too short to count." said Jane Doe') == []

    def test_trends(self):
        """Test trend sentences are extracted."""
        assert extract_trends(SAMPLE_ANSWER) == ["emerging research on dosing;"]

    def test_competitor_data(self):
        """Test authority sites, gaps and word count."""
        analysis = extract_competitor_data(SAMPLE_ANSWER)

        assert analysis.top_ranking_pages == ["Mayo Clinic", "Healthline"]
        assert analysis.content_gaps == ["lack of detailed information on dosing."]
        assert analysis.average_word_count == 2800
        assert 0 < len(analysis.common_keywords) <= 10

    def test_default_word_count(self):
        """Test word count default when none is mentioned."""
        assert extract_competitor_data("No numbers here.").average_word_count == 3500


class TestCuratedResearchData:
    """Test curated research data."""

    def test_vitamin_d_deficiency(self):
        """Test vitamin D deficiency curated data."""
        research_data = curated_research_data("Vitamin D Deficiency")

        assert len(research_data.latest_statistics) == 5
        assert research_data.competitor_analysis.average_word_count == 4200
        assert "Mayo Clinic" in research_data.competitor_analysis.top_ranking_pages

    def test_generic(self):
        """Test generic curated data is built around the keyword."""
        research_data = curated_research_data("remote work")

        assert all("remote work" in stat for stat in research_data.latest_statistics)
        assert research_data.competitor_analysis.common_keywords[:2] == ["remote", "work"]
        assert research_data.competitor_analysis.average_word_count == 3500


class TestRealTimeDataClient:
    """Test suite for RealTimeDataClient."""

    @pytest.mark.asyncio
    async def test_without_key_returns_curated_data(self, settings, failing_session):
        """Test no requests are made without a credential."""
        client = RealTimeDataClient(settings=settings, session=failing_session)

        research_data = await client.fetch_real_time_data("remote work")

        assert research_data == curated_research_data("remote work")
        failing_session.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_queries_and_extraction(self, settings, routed_session, mock_response):
        """Test the four research prompts and extracted fields."""
        session = routed_session(
            [("POST", settings.perplexity.url, mock_response(200, completion(SAMPLE_ANSWER)))]
        )
        client = RealTimeDataClient(api_key="pplx_key", settings=settings, session=session)

        research_data = await client.fetch_real_time_data("vitamin d")

        assert session.request.call_count == 4
        prompts = [
            call.kwargs["json"]["messages"][1]["content"]
            for call in session.request.call_args_list
        ]
        assert sorted(prompts) == sorted(research_queries("vitamin d"))

        first_call = session.request.call_args_list[0].kwargs
        assert first_call["headers"]["Authorization"] == "Bearer pplx_key"
        assert first_call["json"]["model"] == settings.perplexity.model
        assert first_call["json"]["search_recency_filter"] == "month"

        assert research_data.recent_studies == [
            "study found that 42% of adults were deficient."
        ]
        assert research_data.expert_quotes[0].endswith("- Michael Holick")
        assert research_data.competitor_analysis.average_word_count == 2800

    @pytest.mark.asyncio
    async def test_failure_returns_curated_data(self, settings, routed_session, mock_response):
        """Test an API error falls back to curated data."""
        session = routed_session([("POST", settings.perplexity.url, mock_response(401))])
        client = RealTimeDataClient(api_key="pplx_key", settings=settings, session=session)

        research_data = await client.fetch_real_time_data("remote work")

        assert research_data == curated_research_data("remote work")

    @pytest.mark.asyncio
    async def test_fetch_result_reports_failure(self, settings, routed_session, mock_response):
        """Test fetch_result reports failures instead of curated data."""
        session = routed_session([("POST", settings.perplexity.url, mock_response(500))])
        client = RealTimeDataClient(api_key="pplx_key", settings=settings, session=session)

        result = await client.fetch_result("remote work")

        assert result.status == SourceStatus.FAILED
        assert result.payload_or(None) is None

    @pytest.mark.asyncio
    async def test_malformed_completion(self, settings, routed_session, mock_response):
        """Test a completion without choices yields empty fields."""
        session = routed_session(
            [("POST", settings.perplexity.url, mock_response(200, {"choices": []}))]
        )
        client = RealTimeDataClient(api_key="pplx_key", settings=settings, session=session)

        research_data = await client.fetch_real_time_data("remote work")

        assert research_data.latest_statistics == []
        assert research_data.expert_quotes == []
        assert research_data.competitor_analysis.average_word_count == 3500
