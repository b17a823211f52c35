"""ETA estimate domain model."""

from dataclasses import dataclass

UNKNOWN_ETA_DISPLAY = "?"


@dataclass(frozen=True)
class EtaEstimate:
    """Coarse minutes-away estimate; ``minutes is None`` means unknown."""

    minutes: int | None

    @classmethod
    def unknown(cls) -> "EtaEstimate":
        """Estimate for targets whose position is not known."""
        return cls(minutes=None)

    @property
    def is_known(self) -> bool:
        """Whether a numeric estimate is available (0 is a valid estimate)."""
        return self.minutes is not None

    def display(self) -> str:
        """Render for display, using ``?`` for unknown."""
        return str(self.minutes) if self.minutes is not None else UNKNOWN_ETA_DISPLAY
