"""Structured logging configuration for the dietplanner engine."""

import json
import logging
import os
import sys
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any

from dietplanner.config import Settings, get_settings

# Context variables for recompute tracking
diet_type_ctx: ContextVar[str | None] = ContextVar("diet_type", default=None)
run_id_ctx: ContextVar[int | None] = ContextVar("run_id", default=None)

_CONTEXT_VARS: dict[str, ContextVar] = {
    "diet_type": diet_type_ctx,
    "run_id": run_id_ctx,
}


def _context_values() -> dict[str, Any]:
    return {name: var.get() for name, var in _CONTEXT_VARS.items() if var.get() is not None}


class StructuredJsonFormatter(logging.Formatter):
    """JSON formatter for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(_context_values())

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["location"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, ensure_ascii=False)


class ContextualFormatter(logging.Formatter):
    """Human-readable formatter with context for development."""

    def format(self, record: logging.LogRecord) -> str:
        context_parts = []
        if diet_type := diet_type_ctx.get():
            context_parts.append(f"diet={diet_type}")
        if run_id := run_id_ctx.get():
            context_parts.append(f"run={run_id}")

        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        formatted = f"{timestamp} | {level} | {record.name}{context_str} | {record.getMessage()}"

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that automatically includes context variables."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        extra = kwargs.get("extra", {})
        extra.update(_context_values())
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger for the given module name."""
    return ContextLogger(logging.getLogger(name), {})


def configure_logging(
    log_level: str | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
    settings: Settings | None = None,
) -> None:
    """
    Configure logging for the host application.

    Args:
        log_level: Minimum log level; defaults to ``settings.log_level``.
        json_format: Use JSON format for logs. If None, JSON is used outside
            development or when ``LOG_FORMAT=json``.
        log_file: Optional file path to write logs to.
        settings: Settings to read defaults from; ``get_settings()`` if omitted.
    """
    settings = settings or get_settings()

    if json_format is None:
        json_format = os.getenv("LOG_FORMAT", "").lower() == "json" or not settings.is_development

    level_str = (log_level or settings.log_level).upper()
    level = getattr(logging, level_str, logging.INFO)

    formatter: logging.Formatter = StructuredJsonFormatter() if json_format else ContextualFormatter()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        root_logger.addHandler(handler)

    # The engine logs at the configured level; SQL echo stays quiet
    logging.getLogger("dietplanner").setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    get_logger(__name__).info(
        f"Logging configured: level={level_str}, format={'json' if json_format else 'text'}, "
        f"environment={settings.environment}"
    )


def set_context(diet_type: str | None = None, run_id: int | None = None) -> None:
    """Set logging context variables; None leaves a variable unchanged."""
    values = {"diet_type": diet_type, "run_id": run_id}
    for name, value in values.items():
        if value is not None:
            _CONTEXT_VARS[name].set(value)


def clear_context() -> None:
    """Clear all logging context variables."""
    for var in _CONTEXT_VARS.values():
        var.set(None)


class LoggingContext:
    """
    Context manager tagging every log line of one recompute.

    Example:
        with LoggingContext(diet_type="keto", run_id=3):
            scaler.scale_week(...)
    """

    def __init__(self, diet_type: str | None = None, run_id: int | None = None):
        self.values = {"diet_type": diet_type, "run_id": run_id}
        self._tokens: dict[str, Token] = {}

    def __enter__(self) -> "LoggingContext":
        for name, value in self.values.items():
            if value is not None:
                self._tokens[name] = _CONTEXT_VARS[name].set(value)
        return self

    def __exit__(self, *args: Any) -> None:
        for name, token in self._tokens.items():
            _CONTEXT_VARS[name].reset(token)
