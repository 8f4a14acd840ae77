"""Per-call metadata handed to the invocation wrappers."""

from dataclasses import dataclass
from types import ModuleType

from aspect_logging.domain.directives import LogError, LogExecutionTime

Owner = type | ModuleType


@dataclass(frozen=True)
class CallSite:
    """Where an intercepted call lives and which directives apply to it.

    Attributes:
        owner: Declaring class, or the module for free functions.
        method_name: Name of the intercepted function.
        method_timing: Timing directives declared on the function.
        type_timing: Timing directives declared on the owning class.
        method_error: Error directive declared on the function.
        type_error: Error directive declared on the owning class.
    """

    owner: Owner
    method_name: str
    method_timing: tuple[LogExecutionTime, ...] = ()
    type_timing: tuple[LogExecutionTime, ...] = ()
    method_error: LogError | None = None
    type_error: LogError | None = None

    @property
    def owner_name(self) -> str:
        """Simple name of the owner, as shown in log messages."""
        if isinstance(self.owner, ModuleType):
            return self.owner.__name__.rpartition(".")[2]
        return self.owner.__name__

    @property
    def owner_qualified_name(self) -> str:
        """Fully qualified owner name, used as the logger name."""
        return qualified_name(self.owner)


@dataclass(frozen=True)
class InvocationOutcome:
    """What happened during one intercepted call."""

    elapsed_ms: int
    threw: bool = False
    error: BaseException | None = None


def qualified_name(owner: Owner) -> str:
    """Return ``module.QualName`` for a class or ``__name__`` for a module."""
    if isinstance(owner, ModuleType):
        return owner.__name__
    return f"{owner.__module__}.{owner.__qualname__}"
