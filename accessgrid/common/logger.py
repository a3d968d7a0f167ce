"""Logging infrastructure for accessgrid.

Library modules only fetch loggers through ``get_logger``. Handlers are
attached by the host application, either directly through
``setup_logger`` or from Settings through ``configure_logging``.
"""

import logging
import logging.handlers
import os
from typing import Optional

from .config import Settings, get_settings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"  # ISO 8601
MAX_LOG_BYTES = 10485760  # 10MB
LOG_BACKUPS = 5


def setup_logger(
    name: str,
    level: str = "INFO",
    log_dir: Optional[str] = None,
    console_logging: bool = True,
) -> logging.Logger:
    """Set up a named logger.

    Args:
        name: Logger name (typically the package name)
        level: Logging level, one of LOG_LEVELS
        log_dir: Directory for a rotating ``<name>.log`` file; no file when None
        console_logging: Also log to stderr

    Returns:
        Configured logger instance
    """
    if level.upper() not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}. Must be one of: {', '.join(LOG_LEVELS)}")

    logger = logging.getLogger(name)
    logger.setLevel(level.upper())

    # Handlers are attached once; later calls only change the level
    if logger.handlers:
        return logger

    handlers = []
    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, f"{name}.log"),
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUPS,
        ))
    if console_logging:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Configure the ``accessgrid`` logger from Settings."""
    settings = settings or get_settings()
    return setup_logger(
        "accessgrid",
        level=settings.log_level,
        log_dir=settings.log_dir if settings.file_logging else None,
        console_logging=settings.console_logging,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger by name."""
    return logging.getLogger(name)
