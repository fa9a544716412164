"""Structured logging setup.

Modules obtain loggers with ``structlog.get_logger()``; the host application
(or the CLI) calls ``configure_logging`` once at startup.
"""

import logging

import structlog

from portal_access.config import Settings, get_settings


def configure_logging(
    settings: Settings | None = None,
    cache_loggers: bool = True,
) -> None:
    """Configure structlog processors and level filtering.

    Args:
        settings: Settings to read the environment and level from.
            Defaults to the cached settings.
        cache_loggers: Cache bound loggers on first use. Short-lived
            processes whose stdout changes between runs should pass False.
    """
    settings = settings or get_settings()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.processors.JSONRenderer()
                if settings.is_production
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=cache_loggers,
    )
