"""Unit tests for the plain-text research brief."""

from seo_research.models.research import EnhancedResearchData
from seo_research.utils.research_analysis import build_fallback_research_data
from seo_research.utils.research_brief import format_research_brief


class TestFormatResearchBrief:
    """Test research brief formatting."""

    def test_full_brief(self, sample_research_data):
        """Test every populated section appears in order."""
        brief = format_research_brief(sample_research_data)

        assert brief.startswith("COMPREHENSIVE RESEARCH DATA FOR: zinc absorption\n\n")
        assert (
            "TOP SEARCH RESULTS:\n1. Zinc\nZinc is an essential trace mineral.\n"
            "Source: https://en.wikipedia.org/wiki/Zinc\n" in brief
        )
        assert "• 17% of the world's population has inadequate zinc intake" in brief
        assert "Q1: What blocks zinc absorption?" in brief
        assert "AUTHORITY CONTENT:\nZinc: Zinc is an essential trace mineral.\n\n" in brief
        assert "WIKIPEDIA:\n• Zinc is a chemical element with symbol Zn.\n\n" in brief
        assert "COMMUNITY INSIGHTS:\n• Zinc timing" in brief

        headings = [
            "TOP SEARCH RESULTS:",
            "KEY STATISTICS:",
            "RELATED QUESTIONS:",
            "AUTHORITY CONTENT:",
            "WIKIPEDIA:",
            "COMMUNITY INSIGHTS:",
            "RECENT STUDIES:",
            "STATISTICAL DATA:",
            "CONTENT GAPS:",
            "TRENDING QUESTIONS:",
            "RESEARCH METADATA:",
        ]
        positions = [brief.index(heading) for heading in headings]
        assert positions == sorted(positions)

    def test_metadata_counts(self, sample_research_data):
        """Test the metadata block counts."""
        brief = format_research_brief(sample_research_data)

        metadata = brief[brief.index("RESEARCH METADATA:") :]
        assert (
            f"Research Date: {sample_research_data.researched_at.isoformat()}\n" in metadata
        )
        assert "Sources Analyzed: 1\n" in metadata
        assert "Statistics Found: 1\n" in metadata
        assert "Related Questions: 1\n" in metadata
        assert "Mode: fallback" not in metadata

    def test_empty_sections_omitted(self):
        """Test a record without data only has the header and metadata."""
        brief = format_research_brief(EnhancedResearchData(keyword="zinc"))

        assert "TOP SEARCH RESULTS" not in brief
        assert "EXPERT OPINIONS" not in brief
        assert "CONTENT GAPS" not in brief
        assert brief.endswith("Related Questions: 0\n")

    def test_fallback_mode_noted(self):
        """Test fallback records are marked."""
        brief = format_research_brief(build_fallback_research_data("remote work"))

        assert brief.endswith("Mode: fallback research data\n")
        assert "CONTENT GAPS:" in brief
