"""
Cross-source analysis of merged research data.

Every function here is pure: it reads a merged ``EnhancedResearchData``
record (plus the keyword) and returns a new list. The topic rules are plain
keyword-substring matches.
"""

from typing import List

from ..clients.jina_research_client import jina_fallback_data
from ..models.research import EnhancedResearchData
from .text import dedupe, find_statistics

MAX_TRENDING_QUESTIONS = 10
MAX_STATISTICS = 8
MAX_SEMANTIC_QUESTION_SEEDS = 5
MAX_STATISTICS_PER_CONTENT = 2

ZINC_GAPS = [
    "Zinc bioavailability comparison between different food preparation methods",
    "Interaction between zinc and other micronutrients (copper, iron, calcium)",
    "Zinc requirements for specific populations (elderly, athletes, vegans)",
    "Regional variations in zinc content of foods based on soil conditions",
    "Zinc absorption inhibitors and enhancers with specific timing recommendations",
    "Cost-effectiveness analysis of zinc-rich foods vs supplements",
    "Zinc content changes during food storage and cooking processes",
    "Personalized zinc recommendations based on individual health markers",
]

VITAMIN_D_GAPS = [
    "Vitamin D synthesis rates by geographic location and season",
    "Genetic factors affecting vitamin D metabolism (VDR polymorphisms)",
    "Vitamin D testing frequency recommendations for different populations",
    "Drug interactions affecting vitamin D absorption and metabolism",
    "Vitamin D deficiency prevalence in specific ethnic groups",
    "Cost-benefit analysis of vitamin D testing vs universal supplementation",
]

ZINC_QUESTIONS = [
    "How does zinc absorption differ between animal and plant sources?",
    "What time of day is best for zinc supplementation?",
    "Can you get too much zinc from food alone?",
    "How does cooking affect zinc content in foods?",
    "What are the early warning signs of zinc toxicity?",
    "How long does it take to correct zinc deficiency?",
    "Which medications interfere with zinc absorption?",
    "How does age affect zinc requirements?",
    "What soil conditions affect zinc content in vegetables?",
    "How does zinc status affect wound healing speed?",
]


def generic_gaps(keyword: str) -> List[str]:
    return [
        f"Latest research findings and clinical trial results for {keyword}",
        f"Cost-effectiveness analysis and budget considerations for {keyword}",
        f"Implementation timelines and expected results with {keyword}",
    ]


def keyword_gap(keyword: str) -> str:
    return f"Step-by-step action plan for {keyword} backed by current evidence"


def generic_questions(keyword: str) -> List[str]:
    return [
        f"What are the latest research findings about {keyword}?",
        f"How does {keyword} vary between different populations?",
        f"What are the long-term effects of {keyword}?",
        f"How much does {keyword} cost compared to alternatives?",
        f"What factors influence individual response to {keyword}?",
    ]


def generic_statistics(keyword: str) -> List[str]:
    return [
        f"Research shows significant interest in {keyword} topics",
        f"In-depth {keyword} content over 3000 words ranks in the top 10 for 3x more keywords",
    ]


def analyze_content_gaps(keyword: str, research_data: EnhancedResearchData) -> List[str]:
    """
    Content gaps competitors leave open for the keyword.

    Args:
        keyword: Topic keyword
        research_data: Merged research record

    Returns:
        Jina gaps followed by the topic gaps, without duplicates; at least
        one gap names the keyword
    """
    gaps = list(research_data.jina_research_data.content_gaps)

    lower_keyword = keyword.lower()
    if "zinc" in lower_keyword:
        gaps.extend(ZINC_GAPS)
        gaps.append(keyword_gap(keyword))
    elif "vitamin d" in lower_keyword:
        gaps.extend(VITAMIN_D_GAPS)
        gaps.append(keyword_gap(keyword))
    else:
        gaps.extend(generic_gaps(keyword))

    return dedupe(gaps)


def generate_trending_questions(
    keyword: str, research_data: EnhancedResearchData
) -> List[str]:
    """
    Questions searchers are asking about the keyword.

    Semantic search titles seed the list; titles that are already questions
    are kept as they are, others are turned into a "relate to" question.

    Args:
        keyword: Topic keyword
        research_data: Merged research record

    Returns:
        At most ten unique questions
    """
    questions = []

    semantic_results = research_data.jina_research_data.semantic_results
    for result in semantic_results[:MAX_SEMANTIC_QUESTION_SEEDS]:
        title = result.title.strip()
        if not title:
            continue
        if title.endswith("?"):
            questions.append(title)
        else:
            questions.append(f"How does {keyword} relate to {title}?")

    if "zinc" in keyword.lower():
        questions.append(f"What do the latest studies say about {keyword}?")
        questions.extend(ZINC_QUESTIONS)
    else:
        questions.extend(generic_questions(keyword))

    return dedupe(questions)[:MAX_TRENDING_QUESTIONS]


def extract_statistical_data(
    keyword: str, research_data: EnhancedResearchData
) -> List[str]:
    """
    Statistics to cite in the article.

    Args:
        keyword: Topic keyword
        research_data: Merged research record

    Returns:
        At most eight unique statistics: figures found in extracted pages,
        then SERP statistics, then two generic figures
    """
    stats = []

    for item in research_data.jina_research_data.extracted_content:
        for figure in find_statistics(item.content)[:MAX_STATISTICS_PER_CONTENT]:
            stats.append(figure)

    stats.extend(research_data.serp_data.key_statistics)
    stats.extend(generic_statistics(keyword))

    return dedupe(stats)[:MAX_STATISTICS]


def build_fallback_research_data(keyword: str) -> EnhancedResearchData:
    """
    Synthetic research record built from the keyword alone.

    Used when the research pipeline fails outright; makes no network calls.
    """
    fallback = EnhancedResearchData(
        keyword=keyword,
        wikipedia_data=[
            f"{keyword} is an important topic with significant health implications."
        ],
        reddit_insights=[
            f"Users frequently discuss {keyword} benefits and implementation strategies."
        ],
        recent_studies=[
            f"Recent studies confirm the importance of {keyword} in health outcomes."
        ],
        expert_opinions=[f"Experts recommend evidence-based approaches to {keyword}."],
        jina_research_data=jina_fallback_data(keyword),
        is_fallback=True,
    )

    fallback.competitor_gaps = analyze_content_gaps(keyword, fallback)
    fallback.trending_questions = generate_trending_questions(keyword, fallback)
    fallback.statistical_data = generic_statistics(keyword)
    return fallback
