"""Client modules for research source integrations."""

from .base_fetcher import BaseSourceFetcher, SourceFetchError
from .jina_research_client import JinaResearchService, clean_text, jina_fallback_data
from .perplexity_client import RealTimeDataClient, curated_research_data
from .pubmed_fetcher import PubMedFetcher
from .reddit_fetcher import RedditFetcher
from .serp_fetcher import SerpFetcher
from .wikipedia_fetcher import WikipediaFetcher

__all__ = [
    "BaseSourceFetcher",
    "SourceFetchError",
    "SerpFetcher",
    "WikipediaFetcher",
    "RedditFetcher",
    "PubMedFetcher",
    "JinaResearchService",
    "jina_fallback_data",
    "clean_text",
    "RealTimeDataClient",
    "curated_research_data",
]
