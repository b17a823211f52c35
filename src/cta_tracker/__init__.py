"""CTA Tracker - live Chicago transit positions, nearby stations and itineraries."""

__version__ = "0.1.0"
