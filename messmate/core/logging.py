"""
Structured logging setup.

Every module logs through ``structlog.get_logger(__name__)`` with keyword
context; this module wires structlog onto stdlib logging once at startup.
"""

import logging
import sys

import structlog


def configure_logging(level: str = "INFO") -> None:
    """
    Configure stdlib logging and structlog with JSON output.

    Args:
        level: Stdlib level name (e.g. "INFO", "DEBUG")
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Loggers stay unbound so structlog.testing.capture_logs can intercept them
        cache_logger_on_first_use=False,
    )
