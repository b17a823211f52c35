"""Protocols for collaborators that are not data sources."""

from cta_tracker.domain.contracts.nearby_refresher import NearbyRefresherProtocol

__all__ = ["NearbyRefresherProtocol"]
