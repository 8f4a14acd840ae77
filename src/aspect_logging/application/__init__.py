"""Application layer - directive resolution and call interception."""

from aspect_logging.application.invocation import (
    catch_and_log,
    catch_and_log_async,
    error_message,
    time_and_log,
    time_and_log_async,
    timing_message,
)
from aspect_logging.application.resolver import resolve_error, resolve_timing

__all__ = [
    # Resolution
    "resolve_timing",
    "resolve_error",
    # Interception
    "time_and_log",
    "time_and_log_async",
    "catch_and_log",
    "catch_and_log_async",
    "timing_message",
    "error_message",
]
