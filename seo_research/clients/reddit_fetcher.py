"""Reddit research source."""

import logging
from typing import Any, List

from .base_fetcher import BaseSourceFetcher, require_success
from ..models.research import SourceName

logger = logging.getLogger(__name__)

MIN_SELFTEXT_LENGTH = 50
SELFTEXT_PREVIEW_LENGTH = 200
MAX_INSIGHTS = 5


class RedditFetcher(BaseSourceFetcher):
    """Real user discussions about a keyword from Reddit search."""

    source_name = SourceName.REDDIT.value

    def empty_payload(self) -> List[str]:
        return []

    async def _fetch(self, keyword: str) -> List[str]:
        params = {"q": keyword, "sort": "top", "t": "month", "limit": "10"}
        status, data = await self._request_json(
            "GET", self.settings.sources.reddit_search_url, params=params
        )
        require_success("Reddit", status)

        insights = []
        for post in self._posts(data):
            title = post.get("title") or ""
            selftext = post.get("selftext") or ""
            # Link posts and one-liners carry no usable discussion
            if len(selftext) <= MIN_SELFTEXT_LENGTH:
                continue
            insights.append(f"{title}: {selftext[:SELFTEXT_PREVIEW_LENGTH]}...")

        return insights[:MAX_INSIGHTS]

    def _posts(self, data: Any) -> List[dict]:
        if not isinstance(data, dict):
            return []
        listing = data.get("data")
        if not isinstance(listing, dict):
            return []
        children = listing.get("children")
        if not isinstance(children, list):
            return []
        return [
            child["data"]
            for child in children
            if isinstance(child, dict) and isinstance(child.get("data"), dict)
        ]
