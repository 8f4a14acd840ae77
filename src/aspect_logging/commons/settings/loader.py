"""Layered settings: JSON config files, then environment variables."""

import json
import os
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from aspect_logging.commons.settings.models import Settings

ENV_PREFIX = "ASPECT_LOGGING__"
ENVIRONMENT_VAR = "ASPECT_LOGGING_ENV"


class SettingsLoader:
    """Builds :class:`Settings` from every configuration layer.

    Layers, lowest precedence first:
    1. ``aspect_logging.json`` in the config directory
    2. ``aspect_logging.{env}.json`` in the config directory
    3. ``ASPECT_LOGGING__*`` environment variables
    """

    CONFIG_NAME = "aspect_logging"

    def __init__(
        self,
        config_dir: Path | None = None,
        environment: str | None = None,
    ) -> None:
        """Initialize the settings loader.

        Args:
            config_dir: Directory holding the JSON files. Defaults to 'config'
                in the current working directory.
            environment: Environment name selecting the override file.
                Defaults to ASPECT_LOGGING_ENV or 'dev'.
        """
        self.config_dir = config_dir or Path("config")
        self.environment = environment or os.getenv(ENVIRONMENT_VAR, "dev")

    def load(self) -> Settings:
        """Merge all layers and validate the result."""
        merged: dict[str, Any] = {}
        for layer in self.layers():
            merged = deep_merge(merged, layer)
        return Settings(**merged)

    def layers(self) -> Iterator[dict[str, Any]]:
        """Yield each layer as a nested dict, lowest precedence first."""
        yield self._json_file(f"{self.CONFIG_NAME}.json")
        yield self._json_file(f"{self.CONFIG_NAME}.{self.environment}.json")
        yield env_overrides(os.environ)

    def _json_file(self, filename: str) -> dict[str, Any]:
        path = self.config_dir / filename
        if not path.is_file():
            return {}
        with path.open(encoding="utf-8") as f:
            return dict(json.load(f))


def env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Turn ``ASPECT_LOGGING__*`` variables into a nested dict.

    ``ASPECT_LOGGING__TELEMETRY__LOG_LEVEL=fine`` becomes
    ``{"telemetry": {"log_level": "fine"}}``.

    Args:
        environ: Environment mapping, usually ``os.environ``.

    Returns:
        Nested overrides with coerced scalar values.
    """
    result: dict[str, Any] = {}

    for key, value in environ.items():
        if not key.upper().startswith(ENV_PREFIX):
            continue

        *parents, leaf = key[len(ENV_PREFIX) :].lower().split("__")
        node = result
        for part in parents:
            node = node.setdefault(part, {})
        node[leaf] = coerce_env_value(value)

    return result


def coerce_env_value(value: str) -> bool | int | str:
    """Read 'true'/'false' as bool and digit strings as int."""
    lowered = value.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    try:
        return int(lowered)
    except ValueError:
        return value


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated recursively with ``override``; inputs are untouched."""
    result = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


class _SettingsHolder:
    """Holder for the settings singleton to avoid global statements."""

    instance: Settings | None = None


def get_settings(
    config_dir: Path | None = None,
    environment: str | None = None,
    *,
    reload: bool = False,
) -> Settings:
    """Get or create the process-wide settings.

    Args:
        config_dir: Optional config directory override.
        environment: Optional environment override.
        reload: Force reload from every layer.

    Returns:
        Settings instance.
    """
    if _SettingsHolder.instance is None or reload:
        loader = SettingsLoader(config_dir=config_dir, environment=environment)
        _SettingsHolder.instance = loader.load()
    return _SettingsHolder.instance


def reset_settings() -> None:
    """Drop the cached settings so the next call reloads them."""
    _SettingsHolder.instance = None
