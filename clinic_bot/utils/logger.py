"""
Structured logging utilities.
Log lines are JSON objects carrying an event name, context fields and,
when set, the id of the HTTP request being served.
"""

import logging
import json
import uuid
from typing import Any
from contextvars import ContextVar

# Request id of the turn being handled (per asyncio task)
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


class StructuredFormatter(logging.Formatter):
    """Formats records as single-line JSON for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }

        request_id = request_id_ctx.get()
        if request_id:
            log_data["request_id"] = request_id

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False)


class PlainFormatter(logging.Formatter):
    """Human-readable formatter for console runs; appends context as key=value."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = dict(getattr(record, "extra_fields", {}))
        request_id = request_id_ctx.get()
        if request_id:
            fields["request_id"] = request_id
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


class StructuredLogger:
    """
    Wrapper around standard logger taking an event name plus keyword context.

    Example:
        logger.info("intent_classified", intent="emergency", source="llm")
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _log(
        self, level: int, event: str, exc_info: bool = False, **extra_fields: Any
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(
            level, event, extra={"extra_fields": extra_fields}, exc_info=exc_info
        )

    def debug(self, event: str, **extra_fields: Any) -> None:
        self._log(logging.DEBUG, event, **extra_fields)

    def info(self, event: str, **extra_fields: Any) -> None:
        self._log(logging.INFO, event, **extra_fields)

    def warning(self, event: str, **extra_fields: Any) -> None:
        self._log(logging.WARNING, event, **extra_fields)

    def error(self, event: str, exc_info: bool = False, **extra_fields: Any) -> None:
        """
        Log error event with context.

        Args:
            event: Event name
            exc_info: If True, include the active exception traceback
            **extra_fields: Additional context fields
        """
        self._log(logging.ERROR, event, exc_info=exc_info, **extra_fields)


def get_logger(name: str) -> StructuredLogger:
    """Returns a StructuredLogger for ``name`` (typically ``__name__``)."""
    return StructuredLogger(name)


def new_request_id() -> str:
    return uuid.uuid4().hex


def set_request_id(request_id: str | None) -> None:
    """Binds ``request_id`` to the current context."""
    request_id_ctx.set(request_id)


def configure_logging(level: str = "INFO", use_structured: bool = True) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        use_structured: If True, use structured JSON logging
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)

    if use_structured:
        formatter = StructuredFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = PlainFormatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # httpx logs every model request at INFO
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))
