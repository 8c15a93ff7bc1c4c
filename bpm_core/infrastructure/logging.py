"""
Logging infrastructure.

Provides logging utilities for the application.
"""
import logging
from typing import Optional

from bpm_core.settings import LoggingSettings, get_app_settings


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure the ``bpm_core`` logger tree from settings.

    Args:
        settings: Logging settings (defaults to the cached app settings)
    """
    settings = settings or get_app_settings().logging
    root = logging.getLogger("bpm_core")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.format))
        root.addHandler(handler)
    root.setLevel(settings.level.upper())


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance.

    Args:
        name: Logger name (usually module name)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
