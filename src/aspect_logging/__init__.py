"""Declarative timing and error logging for functions, methods and classes."""

from aspect_logging.api import (
    error_directive,
    log_error,
    log_execution_time,
    timing_directives,
)
from aspect_logging.application import (
    catch_and_log,
    catch_and_log_async,
    resolve_error,
    resolve_timing,
    time_and_log,
    time_and_log_async,
)
from aspect_logging.domain import (
    ALWAYS_LOG,
    AspectLoggingException,
    CallSite,
    DuplicateDirectiveException,
    DuplicateThresholdException,
    LogError,
    LogExecutionTime,
    LoggingLevel,
    ResolvedErrorConfig,
    ResolvedTimingConfig,
    UnsupportedTargetException,
)
from aspect_logging.infrastructure import (
    AttributeDirectiveSource,
    DirectiveSource,
    SinkRegistry,
    bootstrap,
    get_registry,
    reset_registry,
    set_registry,
)

__version__ = "0.1.0"

__all__ = [
    # Decorators
    "log_execution_time",
    "log_error",
    "timing_directives",
    "error_directive",
    # Core
    "time_and_log",
    "time_and_log_async",
    "catch_and_log",
    "catch_and_log_async",
    "resolve_timing",
    "resolve_error",
    # Domain
    "ALWAYS_LOG",
    "LoggingLevel",
    "LogExecutionTime",
    "LogError",
    "ResolvedTimingConfig",
    "ResolvedErrorConfig",
    "CallSite",
    # Exceptions
    "AspectLoggingException",
    "DuplicateThresholdException",
    "DuplicateDirectiveException",
    "UnsupportedTargetException",
    # Wiring
    "SinkRegistry",
    "DirectiveSource",
    "AttributeDirectiveSource",
    "bootstrap",
    "get_registry",
    "set_registry",
    "reset_registry",
]
