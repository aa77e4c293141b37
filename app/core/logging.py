"""
Logging configuration and filters.

Provides the application-wide log format and a filter that makes the
per-request correlation id available to every formatter.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class RequestIdFilter(logging.Filter):
    """Ensure every record carries a request_id attribute."""

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Default missing request ids so formatters can always reference them.

        Args:
            record: The log record to filter

        Returns:
            Always True, records are never dropped
        """
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging for the application.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG"
    """
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())
