"""Logging directives and the configurations resolved from them."""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aspect_logging.domain.levels import LoggingLevel

# Threshold sentinel meaning "log every call regardless of duration"
ALWAYS_LOG = -1


class _LevelField(BaseModel):
    """Accepts tier names case-insensitively, plus stdlib aliases."""

    @field_validator("level", mode="before", check_fields=False)
    @classmethod
    def _coerce_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return LoggingLevel(value)
        return value


class LogExecutionTime(_LevelField):
    """Timing directive attached to a function or a class.

    Several timing directives may be declared on the same target. Each one
    describes a tier: when a call takes longer than ``threshold_ms`` the
    directive qualifies, and the qualifying directive with the highest
    threshold decides the level the call is logged at.
    """

    model_config = ConfigDict(frozen=True)

    attribute: ClassVar[str] = "__log_execution_time__"

    level: LoggingLevel = Field(
        default=LoggingLevel.INFO,
        description="Tier the call is logged at when this directive is selected",
    )
    threshold_ms: int = Field(
        default=ALWAYS_LOG,
        ge=ALWAYS_LOG,
        description="Elapsed milliseconds that must be exceeded; -1 always logs",
    )
    prefix: str = Field(default="", description="Text prepended to the log message")

    @property
    def always(self) -> bool:
        """Whether this directive qualifies for every call."""
        return self.threshold_ms == ALWAYS_LOG

    def qualifies(self, elapsed_ms: int) -> bool:
        """Check whether a call of ``elapsed_ms`` exceeded this threshold."""
        return self.always or self.threshold_ms < elapsed_ms


class LogError(_LevelField):
    """Error directive attached to a function or a class."""

    model_config = ConfigDict(frozen=True)

    attribute: ClassVar[str] = "__log_error__"

    level: LoggingLevel = Field(
        default=LoggingLevel.INFO,
        description="Tier uncaught errors are logged at",
    )
    include_trace: bool = Field(
        default=True,
        description="Attach the exception and its traceback to the record",
    )
    prefix: str = Field(default="", description="Text prepended to the log message")


Directive = LogExecutionTime | LogError


class ResolvedTimingConfig(BaseModel):
    """Timing configuration selected for a single invocation."""

    model_config = ConfigDict(frozen=True)

    level: LoggingLevel
    prefix: str = ""
    threshold_ms: int


class ResolvedErrorConfig(BaseModel):
    """Error configuration selected for a single invocation."""

    model_config = ConfigDict(frozen=True)

    level: LoggingLevel
    include_trace: bool = True
    prefix: str = ""
