"""Directive resolution: pick at most one logging configuration per call."""

from collections.abc import Sequence

from aspect_logging.domain.directives import (
    LogError,
    LogExecutionTime,
    ResolvedErrorConfig,
    ResolvedTimingConfig,
)


def resolve_timing(
    method_directives: Sequence[LogExecutionTime],
    type_directives: Sequence[LogExecutionTime],
    elapsed_ms: int,
) -> ResolvedTimingConfig | None:
    """Select the timing configuration for a call that took ``elapsed_ms``.

    Method-level directives shadow class-level ones entirely: once a method
    declares any timing directive the class directives are never consulted,
    even if none of the method's thresholds was exceeded.

    Among the applicable directives, those whose threshold is strictly below
    the elapsed time qualify, and the one with the highest threshold wins.
    Ties go to the directive declared first.

    Args:
        method_directives: Timing directives declared on the method.
        type_directives: Timing directives declared on the owning class.
        elapsed_ms: Measured duration of the call in milliseconds.

    Returns:
        The selected configuration, or None when the call must not be logged.
    """
    directives = method_directives or type_directives
    if not directives:
        return None

    qualified = [d for d in directives if d.qualifies(elapsed_ms)]
    if not qualified:
        return None

    # max() keeps the first of equal keys, i.e. declaration order
    selected = max(qualified, key=lambda d: d.threshold_ms)
    if selected.level.is_off:
        return None

    return ResolvedTimingConfig(
        level=selected.level,
        prefix=selected.prefix,
        threshold_ms=selected.threshold_ms,
    )


def resolve_error(
    method_directive: LogError | None,
    type_directive: LogError | None,
) -> ResolvedErrorConfig | None:
    """Select the error configuration, preferring the method-level directive.

    Args:
        method_directive: Error directive declared on the method.
        type_directive: Error directive declared on the owning class.

    Returns:
        The selected configuration, or None when the error must not be logged.
    """
    directive = method_directive if method_directive is not None else type_directive
    if directive is None or directive.level.is_off:
        return None

    return ResolvedErrorConfig(
        level=directive.level,
        include_trace=directive.include_trace,
        prefix=directive.prefix,
    )
