"""Pydantic settings models for aspect logging configuration."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from aspect_logging.commons.telemetry.logger import resolve_level


class TelemetrySettings(BaseModel):
    """Logging output settings."""

    log_format: Literal["json", "text"] = "json"
    log_level: str = "INFO"
    logger_name: str | None = Field(
        default=None,
        description="Logger to configure; None configures the root logger",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        resolve_level(value)
        return value.upper()


class Settings(BaseSettings):
    """Root settings container with environment loading."""

    disabled: bool = Field(
        default=False,
        description="Turn off all interception; decorated callables run untouched",
    )
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ASPECT_LOGGING__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
