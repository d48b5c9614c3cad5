"""Failure policies: what happens to a failure caught at the barrier.

Each policy exposes a single ``accept(exc)`` method. Policies carry no mutable
state, so the module singletons ``LOG``, ``SILENT`` and ``PROPAGATE`` can be
shared freely between threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from fallsafe.defaults import get_log_sink
from fallsafe.errors import InvalidArgumentError, WrappedError

if TYPE_CHECKING:
    from collections.abc import Callable


@runtime_checkable
class FailurePolicy(Protocol):
    """Duck-typed protocol for failure policies."""

    def accept(self, exc: BaseException) -> None: ...  # noqa: D102


@dataclass(frozen=True, slots=True)
class LogPolicy:
    """Record the failure through a log sink and carry on.

    With no bound ``sink`` the process-wide sink is looked up at accept time,
    so replacing it affects existing ``LogPolicy()`` instances too.
    """

    sink: Callable[[BaseException], None] | None = None

    def accept(self, exc: BaseException) -> None:
        sink = self.sink if self.sink is not None else get_log_sink()
        sink(exc)


@dataclass(frozen=True, slots=True)
class SilentPolicy:
    """Discard the failure without a trace."""

    def accept(self, exc: BaseException) -> None:
        pass


@dataclass(frozen=True, slots=True)
class PropagatePolicy:
    """Re-raise the failure as a :class:`~fallsafe.errors.WrappedError`.

    Types listed in ``passthrough`` are re-raised unchanged; everything else
    is wrapped once (an existing ``WrappedError`` is never wrapped again).
    """

    passthrough: tuple[type[BaseException], ...] = ()

    def accept(self, exc: BaseException) -> None:
        if self.passthrough and isinstance(exc, self.passthrough):
            raise exc
        wrapped = WrappedError.wrap(exc)
        if wrapped is exc:
            raise exc
        raise wrapped from exc


@dataclass(frozen=True, slots=True)
class _CallablePolicy:
    handler: Callable[[BaseException], object]

    def accept(self, exc: BaseException) -> None:
        self.handler(exc)


LOG = LogPolicy()
SILENT = SilentPolicy()
PROPAGATE = PropagatePolicy()


def as_policy(
    policy: FailurePolicy | Callable[[BaseException], object] | None,
) -> FailurePolicy:
    """Normalize a policy or a plain one-argument handler into a policy.

    Raises:
        InvalidArgumentError: When *policy* is ``None`` or unusable.
    """
    if policy is None:
        raise InvalidArgumentError(
            "A failure policy is required",
            hint="Pass LOG, SILENT, PROPAGATE or a callable taking the exception.",
        )
    if isinstance(policy, FailurePolicy):
        return policy
    if callable(policy):
        return _CallablePolicy(policy)
    raise InvalidArgumentError(
        f"Not a failure policy: {policy!r}",
        hint="Policies need an accept(exc) method or must be callable.",
    )
