"""Opt: an explicit value-or-absent container.

An ``Opt`` is never itself ``None``; absence is a state of the container.
Every chaining method short-circuits on absence instead of raising, which is
what separates it from passing a bare ``T | None`` around.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from fallsafe.errors import EmptyOptError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

T = TypeVar("T")
R = TypeVar("R")


@dataclasses.dataclass(frozen=True, slots=True)
class Opt(Generic[T]):
    """Zero or one value of type ``T``.

    Equality and hashing consider only the contained value, so
    ``Opt.of(None) == Opt.empty()``.

    Example:
        port = Opt.of(env.get("PORT")).map(int).value_or(8080)
    """

    _value: T | None = None

    @classmethod
    def of(cls, value: T | None) -> Opt[T]:
        """Wrap *value*; ``None`` gives the empty ``Opt``."""
        if value is None:
            return cls.empty()
        return cls(value)

    @classmethod
    def empty(cls) -> Opt[Any]:
        return _EMPTY

    def is_present(self) -> bool:
        return self._value is not None

    def is_empty(self) -> bool:
        return self._value is None

    def __bool__(self) -> bool:
        return self._value is not None

    def __iter__(self) -> Iterator[T]:
        if self._value is not None:
            yield self._value

    def __repr__(self) -> str:
        if self._value is None:
            return "Opt.empty()"
        return f"Opt.of({self._value!r})"

    # --- Extraction ---

    def value(self) -> T:
        """Return the contained value.

        Raises:
            EmptyOptError: When the ``Opt`` is empty.
        """
        if self._value is None:
            raise EmptyOptError(
                "No value present",
                hint="Use value_or()/value_or_else() when absence is expected.",
            )
        return self._value

    def value_or(self, default: T) -> T:
        return self._value if self._value is not None else default

    def value_or_else(self, supplier: Callable[[], T]) -> T:
        """Return the value, or call *supplier* only when empty."""
        if self._value is not None:
            return self._value
        return supplier()

    def value_or_none(self) -> T | None:
        return self._value

    def value_or_raise(self, factory: Callable[[], BaseException]) -> T:
        if self._value is None:
            raise factory()
        return self._value

    # --- Chaining ---

    def map(self, fn: Callable[[T], R | None]) -> Opt[R]:
        if self._value is None:
            return _EMPTY
        return Opt.of(fn(self._value))

    def flat_map(self, fn: Callable[[T], Opt[R]]) -> Opt[R]:
        if self._value is None:
            return _EMPTY
        return fn(self._value)

    def filter(self, predicate: Callable[[T], bool]) -> Opt[T]:
        if self._value is None or not predicate(self._value):
            return _EMPTY
        return self

    def if_present(self, consumer: Callable[[T], object]) -> Opt[T]:
        if self._value is not None:
            consumer(self._value)
        return self

    def or_else_opt(self, supplier: Callable[[], Opt[T]]) -> Opt[T]:
        """Return self when present, else the ``Opt`` produced by *supplier*."""
        if self._value is not None:
            return self
        return supplier()


_EMPTY: Opt[Any] = Opt()
