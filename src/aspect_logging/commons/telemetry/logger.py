"""Formatters and logger setup for intercepted-call records."""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, ClassVar

from aspect_logging.domain.levels import LoggingLevel

if TYPE_CHECKING:
    from aspect_logging.commons.settings.models import TelemetrySettings

# Structured fields attached by the invocation wrappers, in display order
RECORD_FIELDS = (
    "owner",
    "method",
    "elapsed_ms",
    "threshold_ms",
    "threw",
    "exception_type",
)

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def call_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the wrapper-provided fields present on ``record``."""
    return {
        key: getattr(record, key) for key in RECORD_FIELDS if hasattr(record, key)
    }


def extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return ``extra`` attributes that are not call fields."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and key not in RECORD_FIELDS
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    Call fields are grouped under ``"call"``; any other ``extra`` attribute
    is written at the top level.
    """

    def __init__(self, *, include_path: bool = False) -> None:
        """Initialize the JSON formatter.

        Args:
            include_path: Include source file path and line number.
        """
        super().__init__()
        self.include_path = include_path

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            JSON-formatted log string.
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.include_path:
            log_data["path"] = f"{record.pathname}:{record.lineno}"

        call = call_fields(record)
        if call:
            log_data["call"] = call
        log_data.update(extra_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Colored single-line text; call fields are appended in parentheses."""

    COLORS: ClassVar[dict[str, str]] = {
        "FINEST": "\033[90m",  # Grey
        "FINER": "\033[90m",
        "DEBUG": "\033[36m",  # Cyan
        "CONFIG": "\033[34m",  # Blue
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET: ClassVar[str] = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, UTC)
        color = self.COLORS.get(record.levelname, "")
        line = (
            f"{timestamp:%Y-%m-%d %H:%M:%S} "
            f"{color}{record.levelname:8}{self.RESET} "
            f"[{record.name}] {record.getMessage()}"
        )

        call = call_fields(record)
        if call:
            line += " (" + " ".join(f"{k}={v}" for k, v in call.items()) + ")"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


def resolve_level(level: str | int) -> int:
    """Translate a stdlib level name, tier name or number to a level number.

    Args:
        level: E.g. "DEBUG", "FINE", "config" or 20.

    Returns:
        The stdlib ``logging`` level number.

    Raises:
        ValueError: If the name is neither a stdlib level nor a tier.
    """
    if isinstance(level, int):
        return level
    builtin = logging.getLevelName(level.upper())
    if isinstance(builtin, int):
        return builtin
    try:
        python_level = LoggingLevel(level).python_level
    except ValueError:
        raise ValueError(f"Unknown log level: {level}") from None
    if python_level is None:
        raise ValueError(f"Level {level} cannot be used as a logger threshold")
    return python_level


def configure_logging(
    level: str | int = "INFO",
    format_type: str = "json",
    logger_name: str | None = None,
) -> logging.Logger:
    """Attach a single stdout handler to a logger and set its level.

    Args:
        level: Stdlib name, tier name such as "FINE", or level number.
        format_type: 'json' or 'text'.
        logger_name: Logger to configure. Defaults to the root logger.

    Returns:
        The configured logger.
    """
    numeric_level = resolve_level(level)
    formatter = JsonFormatter() if format_type == "json" else TextFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(formatter)

    logger = logging.getLogger(logger_name)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.addHandler(handler)

    # A named logger owns its output; the root has nowhere to propagate to
    if logger_name:
        logger.propagate = False

    return logger


def configure_from_settings(settings: "TelemetrySettings") -> logging.Logger:
    """Configure logging from telemetry settings."""
    return configure_logging(
        level=settings.log_level,
        format_type=settings.log_format,
        logger_name=settings.logger_name,
    )


def get_logger(name: str) -> logging.Logger:
    """Default sink factory: the stdlib logger called ``name``."""
    return logging.getLogger(name)
