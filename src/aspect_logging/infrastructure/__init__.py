"""Infrastructure layer - sink registry, directive discovery and wiring."""

from aspect_logging.infrastructure.directive_source import (
    AttributeDirectiveSource,
    DirectiveSlot,
    DirectiveSource,
    build_call_site,
    find_declaring_type,
    find_enclosing_type,
    resolve_owner,
)
from aspect_logging.infrastructure.factory import (
    bootstrap,
    get_registry,
    interception_enabled,
    reset_registry,
    set_registry,
)
from aspect_logging.infrastructure.registry import LogSink, SinkFactory, SinkRegistry

__all__ = [
    # Registry
    "LogSink",
    "SinkFactory",
    "SinkRegistry",
    # Directive discovery
    "AttributeDirectiveSource",
    "DirectiveSlot",
    "DirectiveSource",
    "build_call_site",
    "find_declaring_type",
    "find_enclosing_type",
    "resolve_owner",
    # Wiring
    "bootstrap",
    "get_registry",
    "set_registry",
    "reset_registry",
    "interception_enabled",
]
