"""Severity tiers used by logging directives."""

import logging
from enum import Enum
from functools import total_ordering
from typing import Any, Self

# Extra stdlib levels for tiers without a builtin counterpart
CONFIG = 15
FINER = 7
FINEST = 5

logging.addLevelName(CONFIG, "CONFIG")
logging.addLevelName(FINER, "FINER")
logging.addLevelName(FINEST, "FINEST")


@total_ordering
class LoggingLevel(Enum):
    """Ordered logging importance tier.

    Tiers compare by importance (``SEVERE > WARNING > ... > FINEST``).
    ``OFF`` means "never log" and sorts below every real tier.
    """

    SEVERE = "SEVERE"  # highest
    WARNING = "WARNING"
    INFO = "INFO"
    CONFIG = "CONFIG"
    FINE = "FINE"
    FINER = "FINER"
    FINEST = "FINEST"  # lowest
    OFF = "OFF"

    @classmethod
    def _missing_(cls, value: object) -> Self | None:
        """Accept lower-case names and the stdlib aliases."""
        if not isinstance(value, str):
            return None
        name = value.strip().upper()
        name = _STDLIB_ALIASES.get(name, name)
        return cls.__members__.get(name)

    @classmethod
    def from_python_level(cls, level: int) -> Self:
        """Return the most important tier not above a stdlib level number."""
        for tier in cls:
            python_level = tier.python_level
            if python_level is not None and python_level <= level:
                return tier
        return cls.FINEST

    @property
    def python_level(self) -> int | None:
        """The stdlib ``logging`` level number, or None for ``OFF``."""
        return _PYTHON_LEVELS.get(self.value)

    @property
    def is_off(self) -> bool:
        """Whether this tier disables logging."""
        return self is LoggingLevel.OFF

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, LoggingLevel):
            return NotImplemented
        return (self.python_level or 0) < (other.python_level or 0)


_PYTHON_LEVELS: dict[str, int] = {
    "SEVERE": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "CONFIG": CONFIG,
    "FINE": logging.DEBUG,
    "FINER": FINER,
    "FINEST": FINEST,
}

_STDLIB_ALIASES: dict[str, str] = {
    "CRITICAL": "SEVERE",
    "ERROR": "SEVERE",
    "WARN": "WARNING",
    "DEBUG": "FINE",
}
