"""
Structured logging setup.

Every module gets its logger with `get_logger(__name__)`; output is one JSON
object per line with an ISO timestamp and the log level.
"""
import logging

import structlog

from classroom_api.core.config import get_settings

settings = get_settings()

log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(log_level),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)


def get_logger(name: str = None):
    """Return a bound structlog logger, tagged with the module name."""
    logger = structlog.get_logger()
    if name:
        return logger.bind(module=name)
    return logger
