"""Arrival repository port."""

from typing import Any, Protocol


class ArrivalRepository(Protocol):
    """Port for per-stop train arrival predictions."""

    async def get_arrivals(self, stop_id: int | str) -> dict[str, Any]:
        """Get the raw arrivals payload for a stop or parent station id."""
        ...
