"""structlog setup for the pool service."""

import logging

import structlog


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure structlog with console rendering at the given level.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric logging level
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
