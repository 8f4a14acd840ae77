"""Unit tests for directive models."""

import pytest
from pydantic import ValidationError

from aspect_logging.domain.directives import (
    ALWAYS_LOG,
    LogError,
    LogExecutionTime,
    ResolvedErrorConfig,
    ResolvedTimingConfig,
)
from aspect_logging.domain.levels import LoggingLevel


class TestLogExecutionTime:
    """Tests for the timing directive."""

    def test_default_values(self):
        directive = LogExecutionTime()
        assert directive.level == LoggingLevel.INFO
        assert directive.threshold_ms == ALWAYS_LOG
        assert directive.prefix == ""
        assert directive.always is True

    def test_custom_values(self):
        directive = LogExecutionTime(
            level=LoggingLevel.WARNING, threshold_ms=200, prefix="[slow] "
        )
        assert directive.level == LoggingLevel.WARNING
        assert directive.threshold_ms == 200
        assert directive.prefix == "[slow] "
        assert directive.always is False

    def test_level_from_name(self):
        assert LogExecutionTime(level="fine").level == LoggingLevel.FINE
        assert LogExecutionTime(level="ERROR").level == LoggingLevel.SEVERE

    def test_invalid_level(self):
        with pytest.raises(ValidationError):
            LogExecutionTime(level="TRACE")

    def test_threshold_below_sentinel_rejected(self):
        with pytest.raises(ValidationError):
            LogExecutionTime(threshold_ms=-2)

    def test_zero_threshold_allowed(self):
        assert LogExecutionTime(threshold_ms=0).threshold_ms == 0

    def test_is_immutable(self):
        directive = LogExecutionTime()
        with pytest.raises(ValidationError):
            directive.threshold_ms = 10  # type: ignore[misc]

    def test_qualifies_is_strict(self):
        directive = LogExecutionTime(threshold_ms=100)
        assert directive.qualifies(101)
        assert not directive.qualifies(100)
        assert not directive.qualifies(10)

    def test_always_qualifies(self):
        directive = LogExecutionTime()
        assert directive.qualifies(0)
        assert directive.qualifies(10_000)

    def test_equal_directives_compare_equal(self):
        assert LogExecutionTime(threshold_ms=5) == LogExecutionTime(threshold_ms=5)


class TestLogError:
    """Tests for the error directive."""

    def test_default_values(self):
        directive = LogError()
        assert directive.level == LoggingLevel.INFO
        assert directive.include_trace is True
        assert directive.prefix == ""

    def test_custom_values(self):
        directive = LogError(level="warning", include_trace=False, prefix="ERR ")
        assert directive.level == LoggingLevel.WARNING
        assert directive.include_trace is False
        assert directive.prefix == "ERR "

    def test_off_level(self):
        assert LogError(level=LoggingLevel.OFF).level.is_off

    def test_attribute_names_differ(self):
        assert LogError.attribute != LogExecutionTime.attribute


class TestResolvedConfigs:
    """Tests for resolved configuration records."""

    def test_timing_config(self):
        config = ResolvedTimingConfig(level=LoggingLevel.INFO, threshold_ms=100)
        assert config.prefix == ""
        assert config.threshold_ms == 100

    def test_error_config_defaults(self):
        config = ResolvedErrorConfig(level=LoggingLevel.SEVERE)
        assert config.include_trace is True
        assert config.prefix == ""
