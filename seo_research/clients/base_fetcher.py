"""Shared HTTP plumbing for research source fetchers."""

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

import aiohttp
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config.settings import Settings, get_settings
from ..models.research import SourceResult

logger = logging.getLogger(__name__)


class SourceFetchError(Exception):
    """Exception raised inside a fetcher when a source response is unusable."""

    pass


class BaseSourceFetcher:
    """
    Base class for a single research source.

    Subclasses implement ``_fetch`` (one outbound call, defensive parsing)
    and ``empty_payload``. Every failure, whether transport, HTTP status or
    response shape, is caught in ``fetch_result`` and turned into a failed
    ``SourceResult``; ``fetch`` then hands back the empty payload. Neither
    method raises.
    """

    source_name = "source"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            settings: Application settings (defaults to the global settings)
            session: Optional shared HTTP session
        """
        self.settings = settings or get_settings()
        self.session = session
        self._should_close_session = session is None
        self.user_agent = self.settings.sources.user_agent
        self.request_timeout = self.settings.sources.request_timeout

    async def __aenter__(self):
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self):
        """Ensure HTTP session is available."""
        if self.session is None or self.session.closed:
            timeout = aiohttp.ClientTimeout(total=self.request_timeout)
            self.session = aiohttp.ClientSession(
                timeout=timeout, headers={"User-Agent": self.user_agent}
            )
            self._should_close_session = True

    async def close(self):
        """Close the HTTP session if this fetcher created it."""
        if self._should_close_session and self.session and not self.session.closed:
            await self.session.close()
            self.session = None

    def empty_payload(self) -> Any:
        """Payload used when the source fails."""
        raise NotImplementedError

    async def _fetch(self, keyword: str) -> Any:
        raise NotImplementedError

    async def fetch_result(self, keyword: str) -> SourceResult:
        """
        Fetch the source for a keyword and report the outcome.

        Args:
            keyword: Topic keyword

        Returns:
            Successful result with the parsed payload, or a failed result
        """
        try:
            payload = await self._fetch(keyword)
        except Exception as e:
            logger.warning(f"{self.source_name} fetch failed for '{keyword}': {e!r}")
            return SourceResult.failed(self.source_name, str(e) or type(e).__name__)

        logger.debug(f"{self.source_name} fetch succeeded for '{keyword}'")
        return SourceResult.success(self.source_name, payload)

    async def fetch(self, keyword: str) -> Any:
        """Fetch the source payload, or the empty payload on any failure."""
        result = await self.fetch_result(keyword)
        return result.payload_or(self.empty_payload())

    async def _request_json(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Tuple[int, Any]:
        """
        Make one HTTP request and decode a JSON body.

        Transport errors are retried according to the error handling
        settings. Non-2xx responses are not decoded.

        Args:
            method: HTTP method
            url: Absolute URL
            params: Query parameters
            json_body: JSON request body
            headers: Extra request headers

        Returns:
            Tuple of HTTP status and decoded body (None for non-2xx)
        """
        await self._ensure_session()

        error_settings = self.settings.error_handling
        retrying = AsyncRetrying(
            stop=stop_after_attempt(error_settings.max_retry_attempts),
            wait=wait_exponential(multiplier=error_settings.retry_backoff_factor, max=8),
            retry=retry_if_exception_type((aiohttp.ClientError, asyncio.TimeoutError)),
            reraise=True,
        )

        async for attempt in retrying:
            with attempt:
                status, data = await self._send(
                    method, url, params=params, json_body=json_body, headers=headers
                )

        return status, data

    async def _send(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Tuple[int, Any]:
        request_headers = {"User-Agent": self.user_agent}
        request_headers.update(headers or {})

        logger.debug(f"{method} {url} params={params}")

        async with self.session.request(
            method,
            url,
            params=params,
            json=json_body,
            headers=request_headers,
            timeout=aiohttp.ClientTimeout(total=self.request_timeout),
        ) as response:
            if not 200 <= response.status < 300:
                return response.status, None
            # Several sources answer with a javascript or text content type
            data = await response.json(content_type=None)
            return response.status, data


def require_success(source: str, status: int) -> None:
    """Raise ``SourceFetchError`` for a non-2xx status."""
    if not 200 <= status < 300:
        raise SourceFetchError(f"{source} returned HTTP {status}")
