"""Plain-text research brief handed to the article template assembler."""

from typing import List

from ..models.research import EnhancedResearchData


def _section(title: str, lines: List[str]) -> str:
    return f"{title}:\n" + "\n".join(lines) + "\n\n"


def format_research_brief(research_data: EnhancedResearchData) -> str:
    """
    Format merged research data as a plain-text brief.

    Empty sections are omitted; the metadata block is always present.

    Args:
        research_data: Merged research record

    Returns:
        Brief text starting with ``COMPREHENSIVE RESEARCH DATA FOR:``
    """
    serp = research_data.serp_data
    brief = f"COMPREHENSIVE RESEARCH DATA FOR: {research_data.keyword}\n\n"

    if serp.top_results:
        results = [
            f"{index}. {result.title}\n{result.snippet}\nSource: {result.url}\n"
            for index, result in enumerate(serp.top_results, start=1)
        ]
        brief += _section("TOP SEARCH RESULTS", results)

    if serp.key_statistics:
        brief += _section("KEY STATISTICS", [f"• {stat}" for stat in serp.key_statistics])

    if serp.related_questions:
        brief += _section(
            "RELATED QUESTIONS",
            [
                f"Q{index}: {question}"
                for index, question in enumerate(serp.related_questions, start=1)
            ],
        )

    if serp.authority_content:
        brief += f"AUTHORITY CONTENT:\n{serp.authority_content}\n\n"

    list_sections = [
        ("WIKIPEDIA", research_data.wikipedia_data),
        ("COMMUNITY INSIGHTS", research_data.reddit_insights),
        ("RECENT STUDIES", research_data.recent_studies),
        ("EXPERT OPINIONS", research_data.expert_opinions),
        ("STATISTICAL DATA", research_data.statistical_data),
        ("CONTENT GAPS", research_data.competitor_gaps),
        ("TRENDING QUESTIONS", research_data.trending_questions),
    ]
    for title, items in list_sections:
        if items:
            brief += _section(title, [f"• {item}" for item in items])

    brief += "RESEARCH METADATA:\n"
    brief += f"Research Date: {research_data.researched_at.isoformat()}\n"
    brief += f"Sources Analyzed: {len(serp.top_results)}\n"
    brief += f"Statistics Found: {len(research_data.statistical_data)}\n"
    brief += f"Related Questions: {len(serp.related_questions)}\n"

    if research_data.is_fallback:
        brief += "Mode: fallback research data\n"

    return brief
