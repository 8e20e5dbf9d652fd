"""OddsEngine forwarding proxy — cache lookup, key injection, error translation.

One inbound request turns into at most one upstream GET. Successful JSON
responses are cached by their full upstream URL for the configured TTL.
Two concurrent misses for the same URL may both reach upstream; the last
one to finish wins the cache slot.
"""

import json
import logging
from dataclasses import dataclass, field
from urllib.parse import urlencode

import httpx

from config import Settings
from errors import MissingAPIKeyError, ProxyError, ProxyServiceError, UpstreamAPIError
from services.cache import ResponseCache

logger = logging.getLogger(__name__)


@dataclass
class UpstreamRequest:
    path: str
    query_params: list[tuple[str, str]] = field(default_factory=list)
    api_key: str | None = None

    def url(self, base_url: str) -> str:
        query = urlencode(self.query_params)
        return f"{base_url}{self.path}{'?' + query if query else ''}"


class ProxyService:
    def __init__(
        self,
        cache: ResponseCache,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cache = cache
        self.settings = settings
        self._transport = transport

    def resolve_api_key(self, header_api_key: str | None) -> str:
        """Per-request header wins over the process-wide key."""
        api_key = header_api_key or self.settings.api_key
        if not api_key:
            raise MissingAPIKeyError()
        return api_key

    async def handle(
        self,
        path: str,
        query_params: list[tuple[str, str]] | None = None,
        header_api_key: str | None = None,
    ) -> tuple[int, object]:
        """Serve one proxied GET. Returns (status, body) or raises ProxyServiceError."""
        try:
            return await self._handle(UpstreamRequest(path, list(query_params or []), header_api_key))
        except ProxyServiceError:
            raise
        except Exception as e:
            logger.error("Proxy error: %s", e)
            raise ProxyError(str(e) or e.__class__.__name__) from e

    async def _handle(self, upstream: UpstreamRequest) -> tuple[int, object]:
        url = upstream.url(self.settings.upstream_base_url)
        logger.info("Proxying request to: %s", url)

        cache_key = url
        entry = self.cache.get(cache_key)
        if entry is not None and entry.is_fresh(self.settings.cache_ttl_seconds, self.cache.clock()):
            logger.info("Cache HIT - returning cached data")
            return 200, entry.payload

        logger.info("Cache MISS - fetching from OddsEngine")
        try:
            api_key = self.resolve_api_key(upstream.api_key)
        except MissingAPIKeyError:
            logger.warning("No API key provided")
            raise

        async with httpx.AsyncClient(transport=self._transport, follow_redirects=True) as client:
            async with client.stream(
                "GET",
                url,
                headers={"X-API-Key": api_key, "Content-Type": "application/json"},
            ) as resp:
                if not resp.is_success:
                    try:
                        await resp.aread()
                        error_text = resp.text
                    except httpx.HTTPError as e:
                        logger.warning("Could not read upstream error body: %s", e)
                        error_text = ""
                    logger.error("OddsEngine API Error %d: %s", resp.status_code, error_text)
                    raise UpstreamAPIError(error_text, status_code=resp.status_code)

                await resp.aread()

        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Upstream returned malformed JSON for %s: %s", url, e)
            raise ProxyError(f"Invalid JSON from upstream: {e}") from e

        self.cache.set(cache_key, data)
        logger.info("Success - response cached")
        return 200, data
