"""Logging for the idp_client package.

The package only logs to the ``idp_client`` logger, which carries a
NullHandler so nothing is printed unless the application configures logging.
``enable_logging`` is an opt-in helper for applications (and scripts) that
want the client's request logs without wiring up handlers themselves.
"""
from __future__ import annotations

import json
import logging
import sys
from typing import IO, Any

from idp_client.core.config import settings

LOGGER_NAME = "idp_client"

# Context the client attaches to its records via ``extra=``
CONTEXT_FIELDS = ("provider", "grant", "method", "url", "status_code")

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with client context under ``context``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = {field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)}
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def enable_logging(
    level: int | str | None = None,
    log_format: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """
    Attach a stream handler to the ``idp_client`` logger.

    Calling it again replaces the previously installed handler rather than
    adding a second one. The root logger is never touched.

    Args:
        level: Logger level (defaults to settings.LOG_LEVEL)
        log_format: "plain" or "json" (defaults to settings.LOG_FORMAT)
        stream: Output stream (defaults to stdout)

    Returns:
        The installed handler
    """
    logger = logging.getLogger(LOGGER_NAME)
    for existing in [h for h in logger.handlers if getattr(h, "_idp_client_handler", False)]:
        logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler._idp_client_handler = True  # type: ignore[attr-defined]
    if (log_format or settings.LOG_FORMAT).lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))

    effective_level = level if level is not None else settings.LOG_LEVEL.upper()
    logger.setLevel(effective_level)
    logger.addHandler(handler)
    return handler
