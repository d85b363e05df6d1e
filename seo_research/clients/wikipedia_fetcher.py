"""Wikipedia research source."""

import logging
from typing import List
from urllib.parse import quote

from .base_fetcher import BaseSourceFetcher, require_success
from ..models.research import SourceName

logger = logging.getLogger(__name__)

MAX_SEARCH_DESCRIPTIONS = 3


class WikipediaFetcher(BaseSourceFetcher):
    """
    Authoritative summaries from Wikipedia.

    The REST summary endpoint is tried first. When it does not answer with a
    success status (usually 404 because no page has exactly that title) the
    OpenSearch API is queried instead and its descriptions are used.
    """

    source_name = SourceName.WIKIPEDIA.value

    def empty_payload(self) -> List[str]:
        return []

    async def _fetch(self, keyword: str) -> List[str]:
        summary_url = (
            f"{self.settings.sources.wikipedia_summary_url.rstrip('/')}/"
            f"{quote(keyword, safe='')}"
        )
        status, data = await self._request_json("GET", summary_url)

        if not 200 <= status < 300:
            logger.info(
                f"No Wikipedia page for '{keyword}' (HTTP {status}), "
                f"falling back to OpenSearch"
            )
            return await self._search_descriptions(keyword)

        if isinstance(data, dict) and data.get("extract"):
            return [data["extract"]]

        return []

    async def _search_descriptions(self, keyword: str) -> List[str]:
        params = {
            "action": "opensearch",
            "search": keyword,
            "limit": "5",
            "format": "json",
            "origin": "*",
        }
        status, data = await self._request_json(
            "GET", self.settings.sources.wikipedia_search_url, params=params
        )
        require_success("Wikipedia OpenSearch", status)

        # OpenSearch answers [query, titles, descriptions, urls]
        if not isinstance(data, list) or len(data) < 3:
            return []
        titles, descriptions = data[1], data[2]
        if not titles or not isinstance(descriptions, list):
            return []

        return [str(description) for description in descriptions[:MAX_SEARCH_DESCRIPTIONS]]
