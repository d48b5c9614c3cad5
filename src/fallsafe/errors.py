"""Exception hierarchy for Fallsafe."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class FallsafeError(Exception):
    """Base exception for all Fallsafe errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class InvalidArgumentError(FallsafeError, ValueError):
    """A caller passed a missing or unusable argument.

    Raised before any guarded operation runs, so no policy ever sees it.
    """


class ConfigurationError(FallsafeError):
    """Process defaults or environment configuration were rejected."""


class EmptyOptError(FallsafeError, LookupError):
    """``Opt.value()`` was called on an empty ``Opt``."""


class WrappedError(FallsafeError):
    """A failure re-raised by the propagate policy.

    The original failure is kept on ``cause`` and chained as ``__cause__`` so
    tracebacks show both. Callers that care about the original kind inspect
    ``cause`` (or :func:`root_cause`) instead of catching it directly.
    """

    def __init__(self, cause: BaseException, *, hint: str | None = None) -> None:
        super().__init__(f"{type(cause).__name__}: {cause}", hint=hint)
        self.cause = cause

    @classmethod
    def wrap(cls, exc: BaseException) -> WrappedError:
        """Return *exc* itself when already wrapped, else a new wrapper."""
        if isinstance(exc, WrappedError):
            return exc
        return cls(exc)


def _walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__`` chain, with cycle protection."""
    seen: set[int] = set()
    cur: BaseException | None = exc
    while cur is not None and id(cur) not in seen:
        seen.add(id(cur))
        yield cur
        cur = cur.cause if isinstance(cur, WrappedError) else cur.__cause__


def root_cause(exc: BaseException) -> BaseException:
    """Return the innermost failure behind any number of wrappers."""
    last = exc
    for last in _walk_exception_chain(exc):  # noqa: B007
        pass
    return last
