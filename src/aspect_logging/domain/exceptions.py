"""Declaration-time exceptions raised by the logging decorators."""

from typing import Any


class AspectLoggingException(Exception):
    """Base exception for directive declaration errors."""


class DuplicateThresholdException(AspectLoggingException):
    """Raised when two timing directives on one target share a threshold."""

    def __init__(self, target: Any, threshold_ms: int) -> None:
        self.target = target
        self.threshold_ms = threshold_ms
        super().__init__(
            f"Duplicate timing threshold {threshold_ms} ms declared on {_describe(target)}"
        )


class DuplicateDirectiveException(AspectLoggingException):
    """Raised when a single-valued directive is declared twice on one target."""

    def __init__(self, target: Any, directive: str) -> None:
        self.target = target
        self.directive = directive
        super().__init__(f"{directive} is already declared on {_describe(target)}")


class UnsupportedTargetException(AspectLoggingException):
    """Raised when a directive is applied to something that cannot be wrapped."""

    def __init__(self, target: Any) -> None:
        self.target = target
        super().__init__(
            f"Cannot attach logging directives to {type(target).__name__} object"
        )


def _describe(target: Any) -> str:
    return getattr(target, "__qualname__", None) or repr(target)
