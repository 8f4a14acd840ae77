"""Domain layer - directives, severity tiers and call-site models."""

from aspect_logging.domain.call_site import (
    CallSite,
    InvocationOutcome,
    Owner,
    qualified_name,
)
from aspect_logging.domain.directives import (
    ALWAYS_LOG,
    Directive,
    LogError,
    LogExecutionTime,
    ResolvedErrorConfig,
    ResolvedTimingConfig,
)
from aspect_logging.domain.exceptions import (
    AspectLoggingException,
    DuplicateDirectiveException,
    DuplicateThresholdException,
    UnsupportedTargetException,
)
from aspect_logging.domain.levels import LoggingLevel

__all__ = [
    # Levels
    "LoggingLevel",
    # Directives
    "ALWAYS_LOG",
    "Directive",
    "LogExecutionTime",
    "LogError",
    "ResolvedTimingConfig",
    "ResolvedErrorConfig",
    # Call site
    "CallSite",
    "InvocationOutcome",
    "Owner",
    "qualified_name",
    # Exceptions
    "AspectLoggingException",
    "DuplicateThresholdException",
    "DuplicateDirectiveException",
    "UnsupportedTargetException",
]
