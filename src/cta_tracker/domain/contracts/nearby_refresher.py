"""Protocol for periodic nearby refreshes."""

from typing import Protocol


class NearbyRefresherProtocol(Protocol):
    """Protocol for re-running the nearby aggregation on a fixed interval."""

    async def start(self) -> None:
        """Start refreshing."""
        ...

    async def stop(self) -> None:
        """Stop refreshing."""
        ...
