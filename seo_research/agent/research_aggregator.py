"""
Research aggregator.

Fans one keyword out to every research source concurrently, merges the
per-source outcomes into a single ``EnhancedResearchData`` record and
derives gaps, trending questions and statistics from the merged record.

The SERP request is issued exactly once. The Jina branch waits on that same
task and receives the SERP result URLs as its seed pages, so the other
sources never wait on SERP.
"""

import asyncio
import time
from typing import Any, Callable, Dict, Optional

import aiohttp
import structlog

from ..clients.base_fetcher import BaseSourceFetcher
from ..clients.jina_research_client import JinaResearchService
from ..clients.perplexity_client import RealTimeDataClient
from ..clients.pubmed_fetcher import PubMedFetcher
from ..clients.reddit_fetcher import RedditFetcher
from ..clients.serp_fetcher import SerpFetcher
from ..clients.wikipedia_fetcher import WikipediaFetcher
from ..config.settings import Settings, get_settings
from ..models.research import (
    EnhancedResearchData,
    JinaResearchData,
    ResearchQuery,
    SerpData,
    SourceName,
    SourceResult,
)
from ..utils import research_analysis

logger = structlog.get_logger(__name__)

ServiceFactory = Callable[[Optional[str], aiohttp.ClientSession], BaseSourceFetcher]


class ResearchAggregator:
    """
    Concurrent multi-source keyword research.

    Every source settles independently: a failed or hung source leaves its
    empty default in the merged record and is reported as ``failed`` in
    ``source_status``. ``research`` never raises; an unexpected error
    anywhere in the pipeline yields the keyword-only fallback record.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[aiohttp.ClientSession] = None,
        serp_fetcher: Optional[BaseSourceFetcher] = None,
        wikipedia_fetcher: Optional[BaseSourceFetcher] = None,
        reddit_fetcher: Optional[BaseSourceFetcher] = None,
        pubmed_fetcher: Optional[BaseSourceFetcher] = None,
        jina_service_factory: Optional[ServiceFactory] = None,
        real_time_client_factory: Optional[ServiceFactory] = None,
    ):
        """
        Initialize the aggregator.

        Args:
            settings: Application settings (defaults to the global settings)
            session: Shared HTTP session; one is created per run when omitted
            serp_fetcher: SERP source override
            wikipedia_fetcher: Wikipedia source override
            reddit_fetcher: Reddit source override
            pubmed_fetcher: PubMed source override
            jina_service_factory: Builds the Jina service from a credential
            real_time_client_factory: Builds the Perplexity client from a credential
        """
        self.settings = settings or get_settings()
        self.session = session
        self.serp_fetcher = serp_fetcher
        self.wikipedia_fetcher = wikipedia_fetcher
        self.reddit_fetcher = reddit_fetcher
        self.pubmed_fetcher = pubmed_fetcher
        self.jina_service_factory = jina_service_factory or self._default_jina_service
        self.real_time_client_factory = (
            real_time_client_factory or self._default_real_time_client
        )

    def _default_jina_service(
        self, api_key: Optional[str], session: aiohttp.ClientSession
    ) -> JinaResearchService:
        return JinaResearchService(api_key=api_key, settings=self.settings, session=session)

    def _default_real_time_client(
        self, api_key: Optional[str], session: aiohttp.ClientSession
    ) -> RealTimeDataClient:
        return RealTimeDataClient(api_key=api_key, settings=self.settings, session=session)

    async def research(
        self,
        keyword: str,
        jina_api_key: Optional[str] = None,
        perplexity_api_key: Optional[str] = None,
    ) -> EnhancedResearchData:
        """
        Research a keyword across all sources.

        Args:
            keyword: Topic keyword
            jina_api_key: Jina AI credential; basic mode without it
            perplexity_api_key: Perplexity credential; real-time research is
                skipped without it

        Returns:
            Merged research record, or the fallback record on failure
        """
        start_time = time.monotonic()
        logger.info(
            "Starting enhanced research",
            keyword=keyword,
            jina_enabled=bool(jina_api_key),
            perplexity_enabled=bool(perplexity_api_key),
        )

        try:
            query = ResearchQuery(
                keyword=keyword,
                jina_api_key=jina_api_key,
                perplexity_api_key=perplexity_api_key,
            )
            research_data = await self._research(query)
        except Exception as e:
            logger.error(
                "Enhanced research failed, using fallback data",
                keyword=keyword,
                error=str(e),
                exc_info=True,
            )
            return research_analysis.build_fallback_research_data(keyword.strip())

        logger.info(
            "Enhanced research completed",
            keyword=query.keyword,
            duration_seconds=round(time.monotonic() - start_time, 2),
            source_status={
                name: status.value for name, status in research_data.source_status.items()
            },
            gaps=len(research_data.competitor_gaps),
            questions=len(research_data.trending_questions),
            statistics=len(research_data.statistical_data),
        )
        return research_data

    async def _research(self, query: ResearchQuery) -> EnhancedResearchData:
        owns_session = self.session is None
        session = self.session or self._create_session()

        try:
            results = await self._gather_sources(query, session)
        finally:
            if owns_session:
                await session.close()

        research_data = self._merge(query.keyword, results)

        research_data.competitor_gaps = research_analysis.analyze_content_gaps(
            query.keyword, research_data
        )
        research_data.trending_questions = research_analysis.generate_trending_questions(
            query.keyword, research_data
        )
        research_data.statistical_data = research_analysis.extract_statistical_data(
            query.keyword, research_data
        )
        return research_data

    def _create_session(self) -> aiohttp.ClientSession:
        sources = self.settings.sources
        return aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=sources.request_timeout),
            headers={"User-Agent": sources.user_agent},
        )

    async def _gather_sources(
        self, query: ResearchQuery, session: aiohttp.ClientSession
    ) -> Dict[str, SourceResult]:
        keyword = query.keyword
        serp = self.serp_fetcher or SerpFetcher(settings=self.settings, session=session)
        wikipedia = self.wikipedia_fetcher or WikipediaFetcher(
            settings=self.settings, session=session
        )
        reddit = self.reddit_fetcher or RedditFetcher(settings=self.settings, session=session)
        pubmed = self.pubmed_fetcher or PubMedFetcher(settings=self.settings, session=session)

        serp_task = asyncio.ensure_future(serp.fetch_result(keyword))

        branches = {
            SourceName.SERP.value: serp_task,
            SourceName.WIKIPEDIA.value: wikipedia.fetch_result(keyword),
            SourceName.REDDIT.value: reddit.fetch_result(keyword),
            SourceName.PUBMED.value: pubmed.fetch_result(keyword),
            SourceName.JINA.value: self._jina_branch(query, serp_task, session),
        }
        if query.perplexity_api_key:
            client = self.real_time_client_factory(query.perplexity_api_key, session)
            branches[SourceName.PERPLEXITY.value] = client.fetch_result(keyword)

        outcomes = await asyncio.gather(*branches.values(), return_exceptions=True)

        return {
            name: self._settle(name, outcome)
            for name, outcome in zip(branches.keys(), outcomes)
        }

    async def _jina_branch(
        self,
        query: ResearchQuery,
        serp_task: "asyncio.Future[SourceResult]",
        session: aiohttp.ClientSession,
    ) -> SourceResult:
        """Jina research seeded with the SERP result URLs."""
        serp_result = await serp_task
        seed_urls = serp_result.payload_or(SerpData()).result_urls

        service = self.jina_service_factory(query.jina_api_key, session)
        try:
            payload = await service.perform_comprehensive_research(query.keyword, seed_urls)
        except Exception as e:
            logger.warning("Jina research branch failed", keyword=query.keyword, error=str(e))
            return SourceResult.failed(SourceName.JINA.value, str(e) or type(e).__name__)

        return SourceResult.success(SourceName.JINA.value, payload)

    def _settle(self, name: str, outcome: Any) -> SourceResult:
        if isinstance(outcome, BaseException):
            logger.warning("Research source raised", source=name, error=repr(outcome))
            return SourceResult.failed(name, str(outcome) or type(outcome).__name__)
        return outcome

    def _merge(self, keyword: str, results: Dict[str, SourceResult]) -> EnhancedResearchData:
        """Fill each source slot from its result; failed sources keep the default."""
        real_time = None
        if SourceName.PERPLEXITY.value in results:
            real_time = results[SourceName.PERPLEXITY.value].payload_or(None)

        return EnhancedResearchData(
            keyword=keyword,
            serp_data=results[SourceName.SERP.value].payload_or(SerpData()),
            wikipedia_data=results[SourceName.WIKIPEDIA.value].payload_or([]),
            reddit_insights=results[SourceName.REDDIT.value].payload_or([]),
            recent_studies=results[SourceName.PUBMED.value].payload_or([]),
            jina_research_data=results[SourceName.JINA.value].payload_or(
                JinaResearchData()
            ),
            expert_opinions=list(real_time.expert_quotes) if real_time else [],
            real_time_data=real_time,
            source_status={name: result.status for name, result in results.items()},
        )


async def perform_enhanced_research(
    keyword: str,
    jina_api_key: Optional[str] = None,
    perplexity_api_key: Optional[str] = None,
    settings: Optional[Settings] = None,
    session: Optional[aiohttp.ClientSession] = None,
) -> EnhancedResearchData:
    """
    Convenience function to research a keyword across all sources.

    Args:
        keyword: Topic keyword
        jina_api_key: Jina AI credential
        perplexity_api_key: Perplexity credential
        settings: Application settings
        session: Shared HTTP session

    Returns:
        Merged research record; never raises
    """
    aggregator = ResearchAggregator(settings=settings, session=session)
    return await aggregator.research(
        keyword, jina_api_key=jina_api_key, perplexity_api_key=perplexity_api_key
    )
