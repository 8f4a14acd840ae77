"""Thread-safe cache of per-owner log sinks."""

import threading
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from aspect_logging.commons.telemetry.logger import get_logger
from aspect_logging.domain.call_site import Owner, qualified_name


@runtime_checkable
class LogSink(Protocol):
    """Anything that accepts ``log(level, message, exc_info=..., extra=...)``.

    ``logging.Logger`` satisfies this protocol and is the default sink.
    """

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        """Emit one record."""
        ...


SinkFactory = Callable[[str], LogSink]


class SinkRegistry:
    """Maps an owning class (or module) to its log sink.

    A sink is created on first use from the owner's fully qualified name and
    reused for every later call. Lookup and creation happen under one lock,
    so concurrent first calls for the same owner still create a single sink.
    """

    def __init__(self, factory: SinkFactory = get_logger) -> None:
        """Initialize the registry.

        Args:
            factory: Creates a sink from a qualified owner name.
                Defaults to ``logging.getLogger``.
        """
        self._factory = factory
        self._sinks: dict[Owner, LogSink] = {}
        self._lock = threading.Lock()

    def get(self, owner: Owner) -> LogSink:
        """Return the sink for ``owner``, creating it on first use.

        Args:
            owner: Declaring class, or module for free functions.

        Returns:
            The cached sink for this owner.
        """
        with self._lock:
            sink = self._sinks.get(owner)
            if sink is None:
                sink = self._factory(qualified_name(owner))
                self._sinks[owner] = sink
            return sink

    def clear(self) -> None:
        """Drop every cached sink."""
        with self._lock:
            self._sinks.clear()

    def __contains__(self, owner: object) -> bool:
        with self._lock:
            return owner in self._sinks

    def __len__(self) -> int:
        with self._lock:
            return len(self._sinks)
