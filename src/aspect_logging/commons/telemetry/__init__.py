"""Telemetry module - log formatting and logger setup."""

from aspect_logging.commons.telemetry.logger import (
    RECORD_FIELDS,
    JsonFormatter,
    TextFormatter,
    call_fields,
    configure_from_settings,
    configure_logging,
    extra_fields,
    get_logger,
    resolve_level,
)

__all__ = [
    "RECORD_FIELDS",
    "JsonFormatter",
    "TextFormatter",
    "call_fields",
    "configure_from_settings",
    "configure_logging",
    "extra_fields",
    "get_logger",
    "resolve_level",
]
