"""structlog setup."""

import logging
import sys

import structlog

from drfo_analyzer.shared.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog level filtering and rendering.

    Args:
        settings: Application settings (log_level, log_json)
    """
    level = logging.getLevelName(settings.log_level)

    renderer: structlog.types.Processor
    if settings.log_json:
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
