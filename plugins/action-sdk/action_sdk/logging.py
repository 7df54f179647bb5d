"""Logging configuration for host-invoked actions.

Actions log through module-level ``logging.getLogger(__name__)`` loggers with
structured ``extra=`` fields and leave handlers to the host. Standalone runs
(local scripts, ad-hoc debugging) may call ``setup_logging()``, which attaches
a console handler to the action loggers only:

- ``text`` format: readable single line, colored on a TTY in development
- ``json`` format: one JSON object per line for log shipping
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, ClassVar

from .config import get_settings_instance

logger = logging.getLogger(__name__)

DEFAULT_LOGGERS = ("action_sdk", "entra_revoke_sessions")

# Attributes every LogRecord carries; anything else arrived via ``extra=``
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "asctime",
    }
)

# Guard against double configuration when several actions share a process
_LOGGING_CONFIGURED = False


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS and v is not None}


class ColoredFormatter(logging.Formatter):
    """Human-readable formatter with optional level colors."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as ``timestamp - LEVEL - message | k=v ...``."""
        level_color = self.COLORS.get(record.levelname, "") if self.use_colors else ""
        reset_color = self.COLORS["RESET"] if self.use_colors else ""

        timestamp = datetime.fromtimestamp(record.created, UTC).strftime("%Y-%m-%d %H:%M:%S")
        log_line = f"{timestamp} - {level_color}{record.levelname}{reset_color} - {record.getMessage()}"

        extra_fields = [
            f"{key}={value}"
            for key, value in _extra_fields(record).items()
            if isinstance(value, (str, int, float, bool)) and len(str(value)) < 100
        ]
        if extra_fields:
            log_line += f" | {' '.join(extra_fields)}"

        if record.exc_info:
            log_line += f"\n{level_color}Exception:{reset_color}\n" + self.formatException(record.exc_info)

        return log_line


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging (for production/monitoring)."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            exc_type = record.exc_info[0]
            log_data["exception"] = {
                "type": exc_type.__name__ if exc_type is not None else "Unknown",
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        log_data.update(_extra_fields(record))
        return json.dumps(log_data, default=str)


def setup_logging(logger_names: tuple[str, ...] = DEFAULT_LOGGERS, force: bool = False) -> None:
    """Attach the configured formatter to the action loggers.

    Opt-in entry point for standalone runs; actions never call it. Idempotent
    unless ``force`` is set. Only the named loggers are touched: propagation,
    the root logger and third-party loggers are left as the host set them.
    """
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED and not force:
        return

    settings = get_settings_instance()

    use_colors = settings.environment == "development"
    formatter = JSONFormatter() if settings.log_format == "json" else ColoredFormatter(use_colors=use_colors)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    level = getattr(logging, settings.log_level)
    for name in logger_names:
        log = logging.getLogger(name)
        log.handlers.clear()
        log.addHandler(console_handler)
        log.setLevel(level)

    _LOGGING_CONFIGURED = True
    logger.debug("Logging configured", extra={"log_format": settings.log_format, "log_level": settings.log_level})
