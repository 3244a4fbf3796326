"""Centralized logging configuration for the reef backend and CLI."""

from __future__ import annotations

import logging
import os

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Loggers that always follow the configured level
SIMULATION_LOGGERS = ("reef", "backend")


def configure_logging(
    *,
    level: str | None = None,
    format: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    include_uvicorn: bool = True,
) -> logging.Logger:
    """Configure logging for the engine, the runner and the API.

    Args:
        level: Explicit log level. Falls back to the ``REEF_LOG_LEVEL`` env
            var, then INFO. Per-tick engine details appear at DEBUG.
        format: Log format string.
        datefmt: Date format string.
        include_uvicorn: Whether to align uvicorn loggers with the level
            (off for headless runs, which never start a server).

    Returns:
        The backend application logger (``reef.backend``).
    """

    raw_level = level if level is not None else os.getenv("REEF_LOG_LEVEL")
    resolved_level = (raw_level or "INFO").upper()
    logging.basicConfig(level=resolved_level, format=format, datefmt=datefmt)

    names = list(SIMULATION_LOGGERS)
    if include_uvicorn:
        names.extend(("uvicorn", "uvicorn.error", "uvicorn.access"))
    for logger_name in names:
        logging.getLogger(logger_name).setLevel(resolved_level)

    app_logger = logging.getLogger("reef.backend")
    app_logger.debug("Logging configured at %s", resolved_level)
    return app_logger
