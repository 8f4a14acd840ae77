"""Decorators that attach timing and error logging to functions and classes.

Both decorators work on plain functions, methods (including ``staticmethod``,
``classmethod`` and properties), coroutine functions and whole classes::

    @log_execution_time(level="FINE", threshold_ms=10)
    @log_execution_time(level="WARNING", threshold_ms=500)
    def fetch(): ...

    @log_error(level="SEVERE")
    class Repository:
        def load(self): ...

Decorating a class attaches the directive to the class and instruments its
public methods, which then fall back to the class-level directives when they
declare none of their own.
"""

import functools
import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar, overload

from aspect_logging.application.invocation import (
    catch_and_log,
    catch_and_log_async,
    time_and_log,
    time_and_log_async,
)
from aspect_logging.domain.call_site import CallSite
from aspect_logging.domain.directives import (
    ALWAYS_LOG,
    Directive,
    LogError,
    LogExecutionTime,
)
from aspect_logging.domain.exceptions import (
    DuplicateDirectiveException,
    DuplicateThresholdException,
    UnsupportedTargetException,
)
from aspect_logging.domain.levels import LoggingLevel
from aspect_logging.infrastructure.directive_source import (
    AttributeDirectiveSource,
    DirectiveSlot,
    build_call_site,
    resolve_owner,
    unwrap_member,
)
from aspect_logging.infrastructure.factory import get_registry, interception_enabled
from aspect_logging.infrastructure.registry import SinkRegistry

P = ParamSpec("P")
R = TypeVar("R")
T = TypeVar("T")

_SOURCE = AttributeDirectiveSource()


class _Concern(ABC):
    """One interception concern: which directive it reads and how it wraps."""

    kind: type[LogExecutionTime] | type[LogError]

    @abstractmethod
    def check(self, slot: DirectiveSlot[Any], directive: Directive, target: Any) -> None:
        """Reject a directive that conflicts with those already declared."""

    @abstractmethod
    def invoke(self, call: Callable[[], R], site: CallSite, registry: SinkRegistry) -> R:
        """Run a synchronous call through the core entry point."""

    @abstractmethod
    async def invoke_async(
        self, call: Callable[[], Awaitable[R]], site: CallSite, registry: SinkRegistry
    ) -> R:
        """Run an awaitable call through the core entry point."""

    def attach(self, slot: DirectiveSlot[Any], directive: Directive, target: Any) -> None:
        # Decorators apply bottom-up, so the newest one was declared first
        self.check(slot, directive, target)
        slot.directives = (directive, *slot.directives)


class _TimingConcern(_Concern):
    kind = LogExecutionTime

    def check(self, slot: DirectiveSlot[Any], directive: Directive, target: Any) -> None:
        threshold_ms = directive.threshold_ms  # type: ignore[union-attr]
        if any(d.threshold_ms == threshold_ms for d in slot.directives):
            raise DuplicateThresholdException(target, threshold_ms)

    def invoke(self, call: Callable[[], R], site: CallSite, registry: SinkRegistry) -> R:
        return time_and_log(call, site, registry)

    async def invoke_async(
        self, call: Callable[[], Awaitable[R]], site: CallSite, registry: SinkRegistry
    ) -> R:
        return await time_and_log_async(call, site, registry)


class _ErrorConcern(_Concern):
    kind = LogError

    def check(self, slot: DirectiveSlot[Any], directive: Directive, target: Any) -> None:
        if slot.directives:
            raise DuplicateDirectiveException(target, LogError.__name__)

    def invoke(self, call: Callable[[], R], site: CallSite, registry: SinkRegistry) -> R:
        return catch_and_log(call, site, registry)

    async def invoke_async(
        self, call: Callable[[], Awaitable[R]], site: CallSite, registry: SinkRegistry
    ) -> R:
        return await catch_and_log_async(call, site, registry)


_TIMING = _TimingConcern()
_ERROR = _ErrorConcern()
_CONCERNS: tuple[_Concern, ...] = (_TIMING, _ERROR)


@overload
def log_execution_time(target: T, /) -> T: ...


@overload
def log_execution_time(
    *,
    level: LoggingLevel | str = LoggingLevel.INFO,
    threshold_ms: int = ALWAYS_LOG,
    prefix: str = "",
    registry: SinkRegistry | None = None,
) -> Callable[[T], T]: ...


def log_execution_time(
    target: Any = None,
    /,
    *,
    level: LoggingLevel | str = LoggingLevel.INFO,
    threshold_ms: int = ALWAYS_LOG,
    prefix: str = "",
    registry: SinkRegistry | None = None,
) -> Any:
    """Log how long calls take, optionally only above a threshold.

    Can be used with or without arguments, and stacked to declare tiers:
        @log_execution_time
        def my_func(): ...

        @log_execution_time(level="FINE", threshold_ms=10)
        @log_execution_time(level="WARNING", threshold_ms=200)
        def my_func(): ...

    Args:
        target: The function or class to decorate (when used without parentheses).
        level: Tier the call is logged at when this directive is selected.
        threshold_ms: Log only calls that took longer than this; -1 logs all.
        prefix: Text prepended to the log message.
        registry: Sink registry to log through. Defaults to the shared one.

    Returns:
        Decorated function or class.

    Raises:
        DuplicateThresholdException: If the target already declares the threshold.
        UnsupportedTargetException: If the target is not callable.
    """
    directive = LogExecutionTime(level=level, threshold_ms=threshold_ms, prefix=prefix)

    def decorator(obj: T) -> T:
        return _decorate(obj, _TIMING, directive, registry)

    if target is not None:
        return decorator(target)
    return decorator


@overload
def log_error(target: T, /) -> T: ...


@overload
def log_error(
    *,
    level: LoggingLevel | str = LoggingLevel.INFO,
    include_trace: bool = True,
    prefix: str = "",
    registry: SinkRegistry | None = None,
) -> Callable[[T], T]: ...


def log_error(
    target: Any = None,
    /,
    *,
    level: LoggingLevel | str = LoggingLevel.INFO,
    include_trace: bool = True,
    prefix: str = "",
    registry: SinkRegistry | None = None,
) -> Any:
    """Log exceptions escaping the decorated callable, then re-raise them.

    Args:
        target: The function or class to decorate (when used without parentheses).
        level: Tier the exception is logged at.
        include_trace: Attach the exception and its traceback to the record.
        prefix: Text prepended to the log message.
        registry: Sink registry to log through. Defaults to the shared one.

    Returns:
        Decorated function or class.

    Raises:
        DuplicateDirectiveException: If the target already declares one.
        UnsupportedTargetException: If the target is not callable.
    """
    directive = LogError(level=level, include_trace=include_trace, prefix=prefix)

    def decorator(obj: T) -> T:
        return _decorate(obj, _ERROR, directive, registry)

    if target is not None:
        return decorator(target)
    return decorator


def timing_directives(obj: Any) -> tuple[LogExecutionTime, ...]:
    """Timing directives declared on a decorated function or class."""
    return _declared(obj, LogExecutionTime)


def error_directive(obj: Any) -> LogError | None:
    """Error directive declared on a decorated function or class, if any."""
    declared = _declared(obj, LogError)
    return declared[0] if declared else None


def _declared(obj: Any, kind: type[Any]) -> tuple[Any, ...]:
    if isinstance(obj, type):
        return _SOURCE.type_directives(obj, kind)
    for func in unwrap_member(obj):
        declared = _SOURCE.method_directives(func, kind)
        if declared:
            return declared
    return ()


def _decorate(
    target: Any,
    concern: _Concern,
    directive: Directive,
    registry: SinkRegistry | None,
) -> Any:
    if isinstance(target, type):
        concern.attach(_class_slot(target, concern), directive, target)
        _instrument_class(target, concern, registry)
        return target

    if isinstance(target, (staticmethod, classmethod)):
        return type(target)(_decorate(target.__func__, concern, directive, registry))

    if isinstance(target, property):
        if target.fget is None:
            raise UnsupportedTargetException(target)
        return target.getter(_decorate(target.fget, concern, directive, registry))

    if not callable(target):
        raise UnsupportedTargetException(target)

    wrapper = _instrument(target, concern, registry)
    concern.attach(getattr(wrapper, concern.kind.attribute), directive, target)
    return wrapper


def _class_slot(klass: type, concern: _Concern) -> DirectiveSlot[Any]:
    slot = vars(klass).get(concern.kind.attribute)
    if not isinstance(slot, DirectiveSlot):
        slot = DirectiveSlot()
        setattr(klass, concern.kind.attribute, slot)
    return slot


def _instrument_class(klass: type, concern: _Concern, registry: SinkRegistry | None) -> None:
    """Wrap every public method of ``klass`` not yet wrapped for the concern."""
    for name, attr in list(vars(klass).items()):
        if name.startswith("_"):
            continue
        replacement = _instrument_member(attr, klass, concern, registry)
        if replacement is not attr:
            setattr(klass, name, replacement)


def _instrument_member(
    attr: Any,
    klass: type,
    concern: _Concern,
    registry: SinkRegistry | None,
) -> Any:
    if isinstance(attr, (staticmethod, classmethod)):
        func = _instrument(attr.__func__, concern, registry, owner=klass)
        return attr if func is attr.__func__ else type(attr)(func)

    if isinstance(attr, property):
        accessors = [
            _instrument(f, concern, registry, owner=klass) if f is not None else None
            for f in (attr.fget, attr.fset, attr.fdel)
        ]
        if accessors == [attr.fget, attr.fset, attr.fdel]:
            return attr
        return property(*accessors, doc=attr.__doc__)

    if inspect.isfunction(attr):
        return _instrument(attr, concern, registry, owner=klass)

    return attr


def _instrument(
    func: Callable[P, R],
    concern: _Concern,
    registry: SinkRegistry | None,
    owner: type | None = None,
) -> Callable[P, R]:
    """Return ``func`` wrapped for the concern, reusing an existing wrapper."""
    slot = getattr(func, concern.kind.attribute, None)
    if isinstance(slot, DirectiveSlot):
        wrapper = func
    else:
        slot = DirectiveSlot()
        wrapper = _wrap(func, concern, slot)

    if slot.registry is None:
        slot.registry = registry
    if owner is not None:
        for other in _CONCERNS:
            other_slot = getattr(wrapper, other.kind.attribute, None)
            if isinstance(other_slot, DirectiveSlot) and other_slot.owner is None:
                other_slot.owner = owner
    return wrapper


def _wrap(func: Callable[P, R], concern: _Concern, slot: DirectiveSlot[Any]) -> Callable[P, R]:
    def call_site(wrapper: Callable[..., Any], args: tuple[Any, ...]) -> CallSite:
        owner = resolve_owner(slot, wrapper, func, args)
        return build_call_site(_SOURCE, wrapper, owner, func.__name__)

    def sink_registry() -> SinkRegistry:
        return slot.registry if slot.registry is not None else get_registry()

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            if not interception_enabled():
                return await func(*args, **kwargs)  # type: ignore[misc, no-any-return]
            return await concern.invoke_async(  # type: ignore[no-any-return]
                lambda: func(*args, **kwargs),  # type: ignore[arg-type, return-value]
                call_site(async_wrapper, args),
                sink_registry(),
            )

        wrapper: Callable[P, R] = async_wrapper  # type: ignore[assignment]
    else:

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            if not interception_enabled():
                return func(*args, **kwargs)
            return concern.invoke(
                lambda: func(*args, **kwargs),
                call_site(sync_wrapper, args),
                sink_registry(),
            )

        wrapper = sync_wrapper

    setattr(wrapper, concern.kind.attribute, slot)
    return wrapper
