"""Execution barrier: run a fallible operation and contain its failure.

Every function here funnels into one of two primitives:

- :func:`execute` for actions (no result),
- :func:`get_opt` for producers (result wrapped in an :class:`Opt`).

Both call the operation once, on the calling thread, and hand any raised
``Exception`` to a policy. ``LOG`` and ``SILENT`` absorb it; ``PROPAGATE``
re-raises it wrapped. ``BaseException`` subclasses outside ``Exception``
(``KeyboardInterrupt``, ``SystemExit``) are never caught.

For the ``get_or_*`` forms a ``None`` result and a caught failure both select
the fallback, but only the failure reaches the policy.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, TypeVar

from fallsafe.errors import InvalidArgumentError
from fallsafe.optional import Opt
from fallsafe.policy import LOG, PROPAGATE, SILENT, FailurePolicy, as_policy

if TYPE_CHECKING:
    from collections.abc import Callable

    PolicyLike = FailurePolicy | Callable[[BaseException], object]

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")

# --- Primitives ---


def execute(operation: Callable[[], object], policy: PolicyLike = LOG) -> None:
    """Run an action, handing any failure to *policy*.

    Raises:
        InvalidArgumentError: When *policy* is ``None`` (before running).
        WrappedError: Only under a propagating policy.
    """
    handler = as_policy(policy)
    try:
        operation()
    except Exception as exc:
        handler.accept(exc)


def get_opt(operation: Callable[[], T | None], policy: PolicyLike = LOG) -> Opt[T]:
    """Run a producer and return its result as an ``Opt``.

    Empty when the producer returned ``None`` or its failure was absorbed.
    """
    handler = as_policy(policy)
    try:
        result = operation()
    except Exception as exc:
        handler.accept(exc)
        return Opt.empty()
    return Opt.of(result)


def get_or_else_get(
    operation: Callable[[], T | None],
    supplier: Callable[[], T],
    policy: PolicyLike = LOG,
) -> T:
    """Like :func:`get_opt`, falling back to ``supplier()`` only when empty."""
    return get_opt(operation, policy).value_or_else(supplier)


def get_or_else(
    operation: Callable[[], T | None], default: T, policy: PolicyLike = LOG
) -> T:
    return get_opt(operation, policy).value_or(default)


def get_or_null(operation: Callable[[], T | None], policy: PolicyLike = LOG) -> T | None:
    return get_opt(operation, policy).value_or_none()


# --- Actions with a bound policy ---


def logging_execute(operation: Callable[[], object]) -> None:
    """Run an action; log a failure through the process sink and carry on."""
    execute(operation, LOG)


def silent_execute(operation: Callable[[], object]) -> None:
    """Run an action; ignore any failure."""
    execute(operation, SILENT)


def throwing_execute(operation: Callable[[], object]) -> None:
    """Run an action; re-raise any failure as ``WrappedError``."""
    execute(operation, PROPAGATE)


def logging_runnable(operation: Callable[[], object]) -> Callable[[], None]:
    """Defer :func:`logging_execute` into a zero-argument callable."""
    return functools.partial(execute, operation, LOG)


def silent_runnable(operation: Callable[[], object]) -> Callable[[], None]:
    return functools.partial(execute, operation, SILENT)


def throwing_runnable(operation: Callable[[], object]) -> Callable[[], None]:
    return functools.partial(execute, operation, PROPAGATE)


# --- Producers with the log policy ---


def logging_get_opt(operation: Callable[[], T | None]) -> Opt[T]:
    return get_opt(operation, LOG)


def logging_get_or_null(operation: Callable[[], T | None]) -> T | None:
    """Return the result, or ``None`` when missing; failures are logged."""
    return get_opt(operation, LOG).value_or_none()


def logging_get_or_else(operation: Callable[[], T | None], default: T) -> T:
    """Return the result, or *default* when missing; failures are logged."""
    return get_opt(operation, LOG).value_or(default)


def logging_get_or_else_get(
    operation: Callable[[], T | None], supplier: Callable[[], T]
) -> T:
    return get_opt(operation, LOG).value_or_else(supplier)


def logging_supplier(operation: Callable[[], T | None]) -> Callable[[], T | None]:
    """Defer :func:`logging_get_or_null` into a zero-argument callable."""
    return functools.partial(get_or_null, operation, LOG)


# --- Producers with the silent policy ---


def silent_get_opt(operation: Callable[[], T | None]) -> Opt[T]:
    return get_opt(operation, SILENT)


def silent_get_or_null(operation: Callable[[], T | None]) -> T | None:
    """Return the result, or ``None`` when missing; failures are ignored."""
    return get_opt(operation, SILENT).value_or_none()


def silent_get_or_else(operation: Callable[[], T | None], default: T) -> T:
    return get_opt(operation, SILENT).value_or(default)


def silent_get_or_else_get(
    operation: Callable[[], T | None], supplier: Callable[[], T]
) -> T:
    return get_opt(operation, SILENT).value_or_else(supplier)


def silent_supplier(operation: Callable[[], T | None]) -> Callable[[], T | None]:
    return functools.partial(get_or_null, operation, SILENT)


# --- Producers with the propagate policy ---


def throwing_get(operation: Callable[[], T | None]) -> T | None:
    """Return the result as is; a failure is re-raised as ``WrappedError``.

    Mostly useful at call sites where a failure is unexpected but the caller
    does not want to declare what the operation may raise.
    """
    return get_opt(operation, PROPAGATE).value_or_none()


def throwing_supplier(operation: Callable[[], T | None]) -> Callable[[], T | None]:
    return functools.partial(get_or_null, operation, PROPAGATE)


# --- Typed empty defaults ---


def logging_get_list(operation: Callable[[], list[T] | None]) -> list[T]:
    """See :func:`logging_get_or_else_get`; the fallback is a new ``[]``."""
    return get_opt(operation, LOG).value_or_else(list)


def silent_get_list(operation: Callable[[], list[T] | None]) -> list[T]:
    return get_opt(operation, SILENT).value_or_else(list)


def logging_get_set(operation: Callable[[], set[T] | None]) -> set[T]:
    """See :func:`logging_get_or_else_get`; the fallback is a new ``set()``.

    The fallback is a plain ``set``, so it has no defined iteration order.
    """
    return get_opt(operation, LOG).value_or_else(set)


def silent_get_set(operation: Callable[[], set[T] | None]) -> set[T]:
    """Like :func:`logging_get_set` but failures leave no trace (unordered ``set()``)."""
    return get_opt(operation, SILENT).value_or_else(set)


def logging_get_map(operation: Callable[[], dict[K, V] | None]) -> dict[K, V]:
    """See :func:`logging_get_or_else_get`; the fallback is a new ``{}``."""
    return get_opt(operation, LOG).value_or_else(dict)


def silent_get_map(operation: Callable[[], dict[K, V] | None]) -> dict[K, V]:
    return get_opt(operation, SILENT).value_or_else(dict)


def logging_get_str(operation: Callable[[], str | None]) -> str:
    return get_opt(operation, LOG).value_or("")


def silent_get_str(operation: Callable[[], str | None]) -> str:
    return get_opt(operation, SILENT).value_or("")


# --- Decorator form ---


def guarded(
    policy: PolicyLike = LOG,
    default: Any = None,
    *,
    default_factory: Callable[[], Any] | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorate a function so each call runs behind the barrier.

    The policy is checked once, at decoration time. *default* is returned
    as is, so the same object is shared by every absorbed call; pass
    *default_factory* (e.g. ``list``) to get a fresh value per call instead.

    Raises:
        InvalidArgumentError: When *policy* is ``None`` or both *default* and
            *default_factory* are given.

    Example:
        @guarded(SILENT, default=0)
        def parse_port(raw: str) -> int:
            return int(raw)
    """
    handler = as_policy(policy)
    if default_factory is not None and default is not None:
        raise InvalidArgumentError(
            "Pass either default or default_factory, not both",
            hint="Use default_factory=list for a fresh mutable default per call.",
        )
    fallback = default_factory if default_factory is not None else lambda: default

    def decorator(fn: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return get_or_else_get(lambda: fn(*args, **kwargs), fallback, handler)

        return wrapper

    return decorator
