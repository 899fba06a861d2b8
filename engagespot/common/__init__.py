"""Shared configuration, logging and tracing for the Engagespot client."""

from .config import DEFAULT_BASE_URL, DEFAULT_SERVICE_NAME, EngagespotSettings, get_settings
from .logging import configure_logging
from .tracing import configure_tracing

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_SERVICE_NAME",
    "EngagespotSettings",
    "get_settings",
    "configure_logging",
    "configure_tracing",
]
