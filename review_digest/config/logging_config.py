"""
Structured logging configuration using structlog.

Called once by each entry point (HTTP startup, CLI main); library modules
only call structlog.get_logger(__name__).
"""

import logging
import sys

import structlog

from review_digest.config.settings import AppSettings


def setup_logging(settings: AppSettings | None = None) -> None:
    """
    Configure structlog for structured logging.

    Sets up processors for:
    - Context variable merging
    - Log level addition
    - Exception info rendering
    - ISO timestamps
    - JSON or console rendering based on settings
    """
    settings = settings or AppSettings()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.processors.JSONRenderer()
                if settings.log_json
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        # CLI stdout carries the JSON summary only
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
