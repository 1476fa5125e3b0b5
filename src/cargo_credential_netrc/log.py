"""structlog setup for the console script.

Stdout carries protocol messages, so all log output goes to stderr.
"""

import logging
import os
import sys
from typing import IO, Optional

import structlog

LOG_LEVEL_ENV_VAR = "CARGO_CREDENTIAL_NETRC_LOG"
DEFAULT_LOG_LEVEL = "warning"


def resolve_log_level(level: Optional[str] = None) -> int:
    """Level name (or $CARGO_CREDENTIAL_NETRC_LOG) to a logging level number."""
    name = (level or os.environ.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL).upper()
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        return logging.WARNING
    return value


def configure_logging(level: Optional[str] = None, stream: Optional[IO[str]] = None) -> None:
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_log_level(level)),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )


__all__ = ["LOG_LEVEL_ENV_VAR", "configure_logging", "resolve_log_level"]
