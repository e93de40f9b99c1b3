"""Core client modules."""

from xeroclient.core.config import Settings, settings
from xeroclient.core.logging import get_logger, setup_logging

__all__ = [
    "Settings",
    "settings",
    "get_logger",
    "setup_logging",
]
