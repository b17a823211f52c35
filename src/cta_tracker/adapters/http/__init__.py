"""HTTP client adapters."""

from cta_tracker.adapters.http.upstream_client import UpstreamHttpClient

__all__ = ["UpstreamHttpClient"]
