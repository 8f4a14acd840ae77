"""Unit tests for the default registry and interception switch."""

import logging

import pytest
from pydantic import ValidationError

from aspect_logging.commons.settings import Settings, TelemetrySettings, reset_settings
from aspect_logging.infrastructure import factory as factory_module
from aspect_logging.infrastructure.factory import (
    bootstrap,
    get_registry,
    interception_enabled,
    reset_registry,
    set_registry,
)
from aspect_logging.infrastructure.registry import SinkRegistry


@pytest.fixture(autouse=True)
def reset_before_each():
    """Reset the default registry and settings before each test."""
    reset_registry()
    reset_settings()
    factory_module._report_invalid_settings.cache_clear()
    yield
    reset_registry()
    reset_settings()


class TestDefaultRegistry:
    """Tests for get_registry / set_registry."""

    def test_get_registry_singleton(self):
        assert get_registry() is get_registry()

    def test_reset_registry(self):
        first = get_registry()
        reset_registry()
        assert get_registry() is not first

    def test_set_registry(self):
        registry = SinkRegistry()
        assert set_registry(registry) is registry
        assert get_registry() is registry


class TestInterceptionSwitch:
    """Tests for interception_enabled."""

    def test_enabled_by_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv("ASPECT_LOGGING__DISABLED", raising=False)
        monkeypatch.chdir(tmp_path)
        assert interception_enabled() is True

    def test_disabled_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ASPECT_LOGGING__DISABLED", "true")
        assert interception_enabled() is False

    def test_invalid_settings_leave_it_on(self, monkeypatch, tmp_path, caplog):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ASPECT_LOGGING__DISABLED", "maybe")

        with caplog.at_level(logging.ERROR, logger=factory_module.__name__):
            assert interception_enabled() is True
            assert interception_enabled() is True

        reports = [
            r for r in caplog.records if r.getMessage().startswith("Invalid settings")
        ]
        assert len(reports) == 1


class TestBootstrap:
    """Tests for bootstrap."""

    def test_installs_new_registry(self):
        previous = get_registry()
        settings = Settings(
            telemetry=TelemetrySettings(log_level="FINE", logger_name="bootstrap.test")
        )

        registry = bootstrap(settings)

        assert registry is not previous
        assert get_registry() is registry
        assert logging.getLogger("bootstrap.test").level == logging.DEBUG

    def test_custom_factory(self):
        names = []

        def factory(name):
            names.append(name)
            return logging.getLogger(name)

        settings = Settings(telemetry=TelemetrySettings(logger_name="bootstrap.factory"))
        registry = bootstrap(settings, factory=factory)
        registry.get(SinkRegistry)

        assert names == ["aspect_logging.infrastructure.registry.SinkRegistry"]

    def test_invalid_settings_raise(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ASPECT_LOGGING__DISABLED", "maybe")

        with pytest.raises(ValidationError):
            bootstrap()
