"""Composition root: default sink registry and the global interception switch."""

import functools
import logging

from pydantic import ValidationError

from aspect_logging.commons.settings.loader import get_settings
from aspect_logging.commons.settings.models import Settings
from aspect_logging.commons.telemetry.logger import configure_from_settings
from aspect_logging.infrastructure.registry import SinkFactory, SinkRegistry

logger = logging.getLogger(__name__)


class _RegistryHolder:
    """Holder for the default registry to avoid global statements."""

    instance: SinkRegistry | None = None


def get_registry() -> SinkRegistry:
    """Get or create the default sink registry.

    Decorators without an explicit ``registry`` use this one. Callers that
    want isolation construct their own :class:`SinkRegistry` and pass it in.

    Returns:
        The process-wide default registry.
    """
    if _RegistryHolder.instance is None:
        _RegistryHolder.instance = SinkRegistry()
    return _RegistryHolder.instance


def set_registry(registry: SinkRegistry) -> SinkRegistry:
    """Install ``registry`` as the default and return it."""
    _RegistryHolder.instance = registry
    return registry


def reset_registry() -> None:
    """Reset the default registry (for testing)."""
    _RegistryHolder.instance = None


def interception_enabled() -> bool:
    """Whether decorated callables should be intercepted at all.

    Settings that fail validation leave interception on. Each distinct
    failure is logged once; :func:`bootstrap` raises it instead.
    """
    try:
        return not get_settings().disabled
    except ValidationError as e:
        _report_invalid_settings(str(e))
        return True


@functools.cache
def _report_invalid_settings(error: str) -> None:
    logger.error(
        "Invalid settings, interception stays enabled", extra={"error": error}
    )


def bootstrap(
    settings: Settings | None = None,
    factory: SinkFactory | None = None,
) -> SinkRegistry:
    """Configure logging output and install a fresh default registry.

    Args:
        settings: Settings to apply. Defaults to :func:`get_settings`.
        factory: Optional sink factory for the new registry.

    Returns:
        The newly installed default registry.

    Raises:
        ValidationError: If the loaded settings are invalid.
    """
    settings = settings or get_settings()
    configure_from_settings(settings.telemetry)
    registry = SinkRegistry(factory) if factory is not None else SinkRegistry()
    return set_registry(registry)
