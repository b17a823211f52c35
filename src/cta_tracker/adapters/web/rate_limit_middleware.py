"""Per-client rate limiting for the proxy endpoints, backed by throttled-py."""

import logging
import math
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from throttled import RateLimiterType, Throttled, rate_limiter, store

logger = logging.getLogger(__name__)

FALLBACK_RETRY_AFTER_SECONDS = 60
RATE_LIMITED_MESSAGE = "Rate limit exceeded. Please try again later."
UNLIMITED_PATHS = ("/healthz",)


def extract_client_ip(request: Request) -> str:
    """Identify the caller, preferring the first hop of ``X-Forwarded-For``.

    The service usually runs behind a hosting proxy, so the socket peer is the
    proxy itself.
    """
    forwarded_for = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop
    if request.client and request.client.host:
        return request.client.host
    logger.warning("Could not determine client IP, using 'unknown'")
    return "unknown"


def retry_after_seconds(result: Any) -> int:
    """Whole seconds a limited client should wait, at least 1."""
    state = getattr(result, "state", None)
    retry_after = getattr(state, "retry_after", None)
    if retry_after is None:
        retry_after = getattr(result, "retry_after", None)
    if retry_after is None:
        return FALLBACK_RETRY_AFTER_SECONDS
    return max(math.ceil(float(retry_after)), 1)


def rate_limited_response(retry_after: int) -> JSONResponse:
    """429 answer in the same ``{error}`` shape as every other failure."""
    return JSONResponse(
        {"error": RATE_LIMITED_MESSAGE},
        status_code=429,
        headers={"Retry-After": str(retry_after)},
    )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Token bucket per client IP; ``requests_per_minute <= 0`` turns it off."""

    def __init__(
        self,
        app: Callable,
        requests_per_minute: int = 100,
        unlimited_paths: Iterable[str] = UNLIMITED_PATHS,
    ) -> None:
        """Initialize rate limiting middleware.

        Args:
            app: The ASGI application to wrap.
            requests_per_minute: Requests allowed per client IP per minute; 0 disables limiting.
            unlimited_paths: Paths served without consuming a token.
        """
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.unlimited_paths = frozenset(unlimited_paths)
        self._store = store.MemoryStore()
        self._quota = None
        if self.enabled:
            self._quota = rate_limiter.per_min(requests_per_minute, burst=requests_per_minute)
            logger.info(f"Rate limiting enabled: {requests_per_minute} requests per minute per IP")
        else:
            logger.info("Rate limiting disabled")

    @property
    def enabled(self) -> bool:
        return self.requests_per_minute > 0

    def _throttle_for(self, client_ip: str) -> Throttled:
        return Throttled(
            key=client_ip,
            using=RateLimiterType.TOKEN_BUCKET.value,
            quota=self._quota,
            store=self._store,
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Consume one token for the caller, or answer 429 when none is left."""
        if not self.enabled or request.url.path in self.unlimited_paths:
            return await call_next(request)

        client_ip = extract_client_ip(request)
        result = self._throttle_for(client_ip).limit()
        if result.limited:
            retry_after = retry_after_seconds(result)
            logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")
            return rate_limited_response(retry_after)

        return await call_next(request)
