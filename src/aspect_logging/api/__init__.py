"""API layer - the decorators applied by library code."""

from aspect_logging.api.decorators import (
    error_directive,
    log_error,
    log_execution_time,
    timing_directives,
)

__all__ = [
    "log_execution_time",
    "log_error",
    "timing_directives",
    "error_directive",
]
