"""structlog configuration for hosts embedding the analyzer."""

import logging
import sys

import structlog

from .config import get_settings


def configure_logging(
    json_mode: bool | None = None,
    debug: bool = False,
    level: str = "INFO",
) -> None:
    """Configure structlog processors and rendering.

    Auto-detects JSON mode based on TTY if not specified.

    Args:
        json_mode: Render JSON lines instead of colored console output.
        debug: Force the DEBUG level.
        level: Level name used when ``debug`` is off.
    """
    if json_mode is None:
        json_mode = not sys.stderr.isatty()

    log_level = logging.DEBUG if debug else logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_mode:
        processors = [*shared_processors, structlog.processors.JSONRenderer(default=str)]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def configure_from_settings() -> None:
    """Configure logging from ``AnalyzerSettings``."""
    settings = get_settings()
    configure_logging(json_mode=settings.json_logs, level=settings.log_level)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger bound to a component name."""
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(component=name)
    return logger
