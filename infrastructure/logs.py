"""Structured logging setup."""

import logging
from typing import Any

import structlog


def configure_logging(level: int | str = logging.INFO) -> None:
  """Configure structlog over the standard logging module."""
  structlog.configure(
    processors=[
      structlog.contextvars.merge_contextvars,
      structlog.stdlib.filter_by_level,
      structlog.processors.add_log_level,
      structlog.processors.TimeStamper(fmt="iso", utc=True),
      structlog.processors.StackInfoRenderer(),
      structlog.processors.format_exc_info,
      structlog.processors.JSONRenderer(),
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
  )

  # CDK reads synthesised output from stdout, so logs go to stderr
  logging.basicConfig(level=level, format="%(message)s")


def bind_context(**kwargs: Any) -> structlog.stdlib.BoundLogger:
  """Logger carrying contextual fields (e.g., the site being synthesised)."""
  logger: structlog.stdlib.BoundLogger = structlog.get_logger()
  return logger.bind(**kwargs)
