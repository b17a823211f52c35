"""Shared HTTP plumbing for upstream providers."""

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from cta_tracker.adapters.api_request_logger import log_api_request
from cta_tracker.domain.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession

DEFAULT_TIMEOUT_SECONDS = 10.0


class UpstreamHttpClient:
    """GETs JSON from third-party providers with a bounded timeout.

    Every failure mode (network error, timeout, non-2xx status, undecodable
    body) surfaces as UpstreamUnavailable. Query parameters are never part of
    the error message, so credentials cannot leak through it.
    """

    def __init__(
        self,
        session: "ClientSession | None" = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize with an aiohttp session and a per-request timeout."""
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def _read_json(self, provider: str, response: "ClientResponse", url: str) -> Any:
        """Decode a response body, rejecting error statuses."""
        if not 200 <= response.status < 300:
            body = await response.text()
            logger.error(f"{provider} returned status {response.status} for {url}: {body[:200]}")
            raise UpstreamUnavailable(provider, "unexpected status", response.status)

        try:
            return await response.json(content_type=None)
        except ValueError as e:
            logger.error(f"{provider} returned an undecodable body for {url}: {e}")
            raise UpstreamUnavailable(provider, "malformed payload", response.status) from e

    async def get_json(
        self, provider: str, url: str, params: dict[str, Any] | None = None
    ) -> Any:
        """GET ``url`` and return the decoded JSON body.

        Args:
            provider: Human readable provider name used in logs and errors.
            url: Endpoint URL without query string.
            params: Query parameters, credentials included.

        Raises:
            UpstreamUnavailable: On any failure.
        """
        if self._session is None:
            raise UpstreamUnavailable(provider, "no HTTP session configured")

        log_api_request("GET", url, params)
        try:
            async with self._session.get(url, params=params, timeout=self._timeout) as response:
                return await self._read_json(provider, response, url)
        except asyncio.TimeoutError as e:
            logger.warning(f"{provider} timed out for {url}")
            raise UpstreamUnavailable(provider, "timeout") from e
        except aiohttp.ClientError as e:
            logger.warning(f"{provider} request to {url} failed: {e.__class__.__name__}")
            raise UpstreamUnavailable(provider, "network error") from e
