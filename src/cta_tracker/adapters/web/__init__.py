"""Web adapters for the transit proxy endpoints."""

from cta_tracker.adapters.web.dependencies import WebDependencies
from cta_tracker.adapters.web.starlette_app import StarletteWebAdapter

__all__ = ["StarletteWebAdapter", "WebDependencies"]
