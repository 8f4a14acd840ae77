"""Interception entry points: time a call or observe its errors, then log.

Each entry point takes the wrapped call as a zero-argument callable. The
call's own result is returned and its own exception is re-raised unchanged;
logging is a side effect that happens at most once per call.
"""

import logging
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar, cast

from aspect_logging.application.resolver import resolve_error, resolve_timing
from aspect_logging.domain.call_site import CallSite, InvocationOutcome
from aspect_logging.infrastructure.registry import SinkRegistry

R = TypeVar("R")

logger = logging.getLogger(__name__)


def time_and_log(call: Callable[[], R], site: CallSite, registry: SinkRegistry) -> R:
    """Run ``call``, then log its duration if a timing directive qualifies.

    The duration is logged whether the call returned or raised; an exception
    is re-raised after logging.

    Args:
        call: The intercepted call.
        site: Directives and names for the call.
        registry: Source of the owner's log sink.

    Returns:
        Whatever ``call`` returns.
    """
    start = time.perf_counter_ns()
    error: BaseException | None = None
    try:
        return call()
    except BaseException as e:
        error = e
        raise
    finally:
        outcome = InvocationOutcome(
            elapsed_ms=_elapsed_ms(start), threw=error is not None, error=error
        )
        _log_timing(site, outcome, registry)


async def time_and_log_async(
    call: Callable[[], Awaitable[R]], site: CallSite, registry: SinkRegistry
) -> R:
    """Awaitable variant of :func:`time_and_log`; times until completion."""
    start = time.perf_counter_ns()
    error: BaseException | None = None
    try:
        return await call()
    except BaseException as e:
        error = e
        raise
    finally:
        outcome = InvocationOutcome(
            elapsed_ms=_elapsed_ms(start), threw=error is not None, error=error
        )
        _log_timing(site, outcome, registry)


def catch_and_log(call: Callable[[], R], site: CallSite, registry: SinkRegistry) -> R:
    """Run ``call`` and log the exception it raises, if an error directive applies.

    Nothing is logged on success. The exception is always re-raised as the
    same object, whether or not it was logged.

    Args:
        call: The intercepted call.
        site: Directives and names for the call.
        registry: Source of the owner's log sink.

    Returns:
        Whatever ``call`` returns.
    """
    try:
        return call()
    except Exception as e:
        _log_error(site, e, registry)
        raise


async def catch_and_log_async(
    call: Callable[[], Awaitable[R]], site: CallSite, registry: SinkRegistry
) -> R:
    """Awaitable variant of :func:`catch_and_log`."""
    try:
        return await call()
    except Exception as e:
        _log_error(site, e, registry)
        raise


def timing_message(site: CallSite, prefix: str, elapsed_ms: int, threw: bool) -> str:
    """Build ``<prefix><Owner>:<method> took <n> ms. Exception:<true|false>``."""
    return (
        f"{prefix}{site.owner_name}:{site.method_name} took {elapsed_ms} ms. "
        f"Exception:{str(threw).lower()}"
    )


def error_message(site: CallSite, prefix: str) -> str:
    """Build ``<prefix><Owner>:<method>``."""
    return f"{prefix}{site.owner_name}:{site.method_name}"


def _elapsed_ms(start: int) -> int:
    return (time.perf_counter_ns() - start) // 1_000_000


def _log_timing(site: CallSite, outcome: InvocationOutcome, registry: SinkRegistry) -> None:
    config = resolve_timing(site.method_timing, site.type_timing, outcome.elapsed_ms)
    if config is None:
        return

    _emit(
        registry,
        site,
        cast("int", config.level.python_level),
        timing_message(site, config.prefix, outcome.elapsed_ms, outcome.threw),
        extra={
            "owner": site.owner_qualified_name,
            "method": site.method_name,
            "elapsed_ms": outcome.elapsed_ms,
            "threshold_ms": config.threshold_ms,
            "threw": outcome.threw,
        },
    )


def _log_error(site: CallSite, error: Exception, registry: SinkRegistry) -> None:
    config = resolve_error(site.method_error, site.type_error)
    if config is None:
        return

    _emit(
        registry,
        site,
        cast("int", config.level.python_level),
        error_message(site, config.prefix),
        exc_info=error if config.include_trace else None,
        extra={
            "owner": site.owner_qualified_name,
            "method": site.method_name,
            "exception_type": type(error).__name__,
        },
    )


def _emit(
    registry: SinkRegistry,
    site: CallSite,
    level: int,
    message: str,
    **kwargs: object,
) -> None:
    # Sink failures must never replace the intercepted call's own outcome
    try:
        registry.get(site.owner).log(level, message, **kwargs)
    except Exception as e:
        logger.error(
            "Failed to emit log record",
            extra={"owner": site.owner_qualified_name, "error": str(e)},
        )
