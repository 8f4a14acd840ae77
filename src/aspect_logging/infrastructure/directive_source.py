"""Discovery of directives attached by the decorators."""

import functools
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from types import ModuleType
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

from aspect_logging.domain.call_site import CallSite, Owner
from aspect_logging.domain.directives import LogError, LogExecutionTime

if TYPE_CHECKING:
    from aspect_logging.infrastructure.registry import SinkRegistry

D = TypeVar("D", LogExecutionTime, LogError)


@dataclass
class DirectiveSlot(Generic[D]):
    """Directives of one kind attached to a function or a class.

    The slot is stored under ``kind.attribute``. ``functools.wraps`` copies it
    by reference onto outer wrappers, so directives added through any layer of
    wrapping reach the wrapper that owns the slot.

    Attributes:
        directives: Directives in declaration order.
        owner: Declaring class once known (functions only).
        registry: Sink registry chosen at declaration time, if any.
    """

    directives: tuple[D, ...] = ()
    owner: Owner | None = None
    registry: "SinkRegistry | None" = None


class DirectiveSource(Protocol):
    """Provides the directives declared on a function and on its owner."""

    def method_directives(self, func: Callable[..., Any], kind: type[D]) -> tuple[D, ...]:
        """Directives of ``kind`` declared on the function itself."""
        ...

    def type_directives(self, owner: Owner, kind: type[D]) -> tuple[D, ...]:
        """Directives of ``kind`` declared on the owning class."""
        ...


class AttributeDirectiveSource:
    """Reads the slots the decorators store on functions and classes.

    Class directives are read from the class's own namespace only; a subclass
    does not inherit the directives of its bases.
    """

    def method_directives(self, func: Callable[..., Any], kind: type[D]) -> tuple[D, ...]:
        slot = getattr(func, kind.attribute, None)
        return slot.directives if isinstance(slot, DirectiveSlot) else ()

    def type_directives(self, owner: Owner, kind: type[D]) -> tuple[D, ...]:
        if not isinstance(owner, type):
            return ()
        slot = vars(owner).get(kind.attribute)
        return slot.directives if isinstance(slot, DirectiveSlot) else ()


def build_call_site(
    source: DirectiveSource,
    func: Callable[..., Any],
    owner: Owner,
    method_name: str,
) -> CallSite:
    """Collect the directives that apply to one call of ``func``.

    Args:
        source: Where directives are read from.
        func: The intercepted function (the outermost wrapper is fine).
        owner: Declaring class, or module for free functions.
        method_name: Name reported in log messages.

    Returns:
        The call site with method-level and class-level directives.
    """
    method_error = source.method_directives(func, LogError)
    type_error = source.type_directives(owner, LogError)
    return CallSite(
        owner=owner,
        method_name=method_name,
        method_timing=source.method_directives(func, LogExecutionTime),
        type_timing=source.type_directives(owner, LogExecutionTime),
        method_error=method_error[0] if method_error else None,
        type_error=type_error[0] if type_error else None,
    )


def resolve_owner(
    slot: DirectiveSlot[Any],
    wrapper: Callable[..., Any],
    func: Callable[..., Any],
    args: Sequence[Any],
) -> Owner:
    """Find the class that declares ``wrapper``, or fall back to its module.

    Functions whose qualified name has no dot are module-level and always
    belong to their module. Functions reachable from their module by
    qualified name belong to the class that name leads to, whatever the
    call's arguments. Only for classes defined inside a function is the MRO
    of the first positional argument (the instance, or the class for
    classmethods) searched for a class whose namespace holds the wrapper.
    A class found by either route is cached on the slot.

    Args:
        slot: Slot of the wrapper being called.
        wrapper: The wrapper produced by the decorator.
        func: The original function.
        args: Positional arguments of the current call.

    Returns:
        The declaring class or the defining module.
    """
    if slot.owner is not None:
        return slot.owner

    qualname = func.__qualname__
    if "<locals>" in qualname:
        declaring = find_declaring_type(wrapper, args[0]) if args else None
        if declaring is None:
            return _module_of(func)
        slot.owner = declaring
        return declaring

    owner: Owner = _module_of(func)
    if "." in qualname:
        owner = find_enclosing_type(func) or owner
    slot.owner = owner
    return owner


def find_enclosing_type(func: Callable[..., Any]) -> type | None:
    """Follow ``func.__qualname__`` from its module to the enclosing class."""
    node: Any = _module_of(func)
    for part in func.__qualname__.split(".")[:-1]:
        node = getattr(node, part, None)
        if node is None:
            return None
    return node if isinstance(node, type) else None


def find_declaring_type(wrapper: Callable[..., Any], first_arg: Any) -> type | None:
    """Search the MRO of ``first_arg`` for the class that defines ``wrapper``."""
    mro = first_arg.__mro__ if isinstance(first_arg, type) else type(first_arg).__mro__
    for klass in mro:
        for attr in vars(klass).values():
            if any(_wraps(candidate, wrapper) for candidate in unwrap_member(attr)):
                return klass
    return None


def unwrap_member(attr: Any) -> list[Any]:
    """Return the functions behind a class attribute (methods, properties)."""
    if isinstance(attr, (staticmethod, classmethod)):
        return [attr.__func__]
    if isinstance(attr, property):
        return [f for f in (attr.fget, attr.fset, attr.fdel) if f is not None]
    return [attr]


def _wraps(candidate: Any, wrapper: Callable[..., Any]) -> bool:
    while candidate is not None:
        if candidate is wrapper:
            return True
        candidate = getattr(candidate, "__wrapped__", None)
    return False


def _module_of(func: Callable[..., Any]) -> ModuleType:
    name = func.__module__ or "__main__"
    return sys.modules.get(name) or _detached_module(name)


@functools.cache
def _detached_module(name: str) -> ModuleType:
    # Stands in for modules that are no longer importable (e.g. exec'd code)
    return ModuleType(name)
