"""Settings management module."""

from aspect_logging.commons.settings.loader import (
    SettingsLoader,
    deep_merge,
    env_overrides,
    get_settings,
    reset_settings,
)
from aspect_logging.commons.settings.models import Settings, TelemetrySettings

__all__ = [
    # Loader
    "SettingsLoader",
    "deep_merge",
    "env_overrides",
    "get_settings",
    "reset_settings",
    # Models
    "Settings",
    "TelemetrySettings",
]
