"""Google web service status handling."""

import logging
from typing import Any

from cta_tracker.adapters.google_api.constants import STATUS_OK, STATUS_ZERO_RESULTS
from cta_tracker.domain.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


def results_or_raise(
    provider: str,
    payload: Any,
    key: str = "results",
    empty_statuses: frozenset[str] = frozenset({STATUS_ZERO_RESULTS}),
) -> list[Any]:
    """Return ``payload[key]`` for OK responses and an empty list for ``empty_statuses``.

    Any other status (REQUEST_DENIED, OVER_QUERY_LIMIT, ...) or a malformed
    payload raises UpstreamUnavailable; the provider's error message is logged
    and not propagated.
    """
    if not isinstance(payload, dict):
        raise UpstreamUnavailable(provider, "malformed payload")

    status = payload.get("status")
    if status in empty_statuses:
        return []
    if status != STATUS_OK:
        logger.warning(f"{provider} returned status {status}: {payload.get('error_message', '')}")
        raise UpstreamUnavailable(provider, f"status {status}")

    results = payload.get(key)
    if not isinstance(results, list):
        raise UpstreamUnavailable(provider, "malformed payload")
    return results
