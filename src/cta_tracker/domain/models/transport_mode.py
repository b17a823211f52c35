"""Transport mode domain model."""

from enum import Enum


class TransportMode(str, Enum):
    """Kind of CTA service a vehicle or station belongs to."""

    BUS = "bus"
    TRAIN = "train"
