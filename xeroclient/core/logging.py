"""Logging configuration for the client."""

import logging
import sys
from typing import Any, Optional

from xeroclient.core.config import settings


def setup_logging(level: Optional[str] = None) -> None:
    """Configure client logging.

    Sets up console logging with the level taken from ``level``, or from the
    settings (DEBUG when debug mode is on).

    Args:
        level: Optional level name overriding the configured one
    """
    if level is not None:
        log_level = logging.getLevelName(level.upper())
    elif settings.debug:
        log_level = logging.DEBUG
    else:
        log_level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Reduce noise from the transport libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.getLogger("xeroclient").setLevel(log_level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``xeroclient``.

    Args:
        name: The name of the module (typically __name__)

    Returns:
        A configured logger instance
    """
    if name == "xeroclient" or name.startswith("xeroclient."):
        return logging.getLogger(name)
    return logging.getLogger(f"xeroclient.{name}")


class TenantLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that appends context such as the tenant to messages.

    Usage:
        logger = TenantLoggerAdapter(get_logger(__name__), {"tenant": "abc"})
        logger.info("Request sent")  # Logs: "Request sent - tenant=abc"
    """

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        """Process the log message to include extra context."""
        extra = " - ".join(f"{k}={v}" for k, v in (self.extra or {}).items())
        return f"{msg} - {extra}" if extra else msg, kwargs
