"""Common utilities for accessgrid."""

from .config import Settings, get_settings, load_config
from .logger import configure_logging, get_logger, setup_logger

__all__ = [
    "Settings",
    "configure_logging",
    "get_logger",
    "get_settings",
    "load_config",
    "setup_logger",
]
