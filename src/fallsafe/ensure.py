"""Ensure combinators: replace a missing or invalid value with a default.

Three families, from loosest to strictest:

- ``ensure*``: the value is kept when it is not ``None``.
- ``ensure_valid*``: the value is kept when a caller predicate accepts it.
- ``ensure_value_valid*``: the value is kept when it is not ``None`` and, for
  :class:`ValueValidator` implementations, when it reports itself valid.

The ``*_else`` variants take a supplier that is only called when the default
is needed; the ``*_then`` variants also hand the freshly supplied default to a
callback before returning it.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")
R = TypeVar("R")


@runtime_checkable
class ValueValidator(Protocol):
    """Values that can be present yet semantically invalid."""

    def is_value_valid(self) -> bool: ...  # noqa: D102


def is_value_valid(obj: object) -> bool:
    """``None`` is invalid; validators decide for themselves; others are valid."""
    if obj is None:
        return False
    if isinstance(obj, ValueValidator):
        return bool(obj.is_value_valid())
    return True


def _then(value: T, then: Callable[[T], object]) -> T:
    then(value)
    return value


# --- Not-None ---


def ensure(value: T | None, default: T) -> T:
    return value if value is not None else default


def ensure_else(value: T | None, supplier: Callable[[], T]) -> T:
    """Return *value*, or ``supplier()`` when it is ``None``."""
    return value if value is not None else supplier()


def ensure_then(
    value: T | None, supplier: Callable[[], T], then: Callable[[T], object]
) -> T:
    """Like :func:`ensure_else`, passing a used default to *then* first.

    Example:
        cache = ensure_then(registry.get(key), dict, lambda d: registry.put(key, d))
    """
    return value if value is not None else _then(supplier(), then)


# --- Caller predicate ---


def ensure_valid(value: T, check: Callable[[T], bool], default: T) -> T:
    return value if check(value) else default


def ensure_valid_else(
    value: T, check: Callable[[T], bool], supplier: Callable[[], T]
) -> T:
    return value if check(value) else supplier()


def ensure_valid_then(
    value: T,
    check: Callable[[T], bool],
    supplier: Callable[[], T],
    then: Callable[[T], object],
) -> T:
    return value if check(value) else _then(supplier(), then)


# --- Self-validating values ---


def ensure_value_valid(value: T | None, default: T) -> T:
    return value if is_value_valid(value) else default  # type: ignore[return-value]


def ensure_value_valid_else(value: T | None, supplier: Callable[[], T]) -> T:
    return value if is_value_valid(value) else supplier()  # type: ignore[return-value]


def ensure_value_valid_then(
    value: T | None, supplier: Callable[[], T], then: Callable[[T], object]
) -> T:
    if is_value_valid(value):
        return value  # type: ignore[return-value]
    return _then(supplier(), then)


# --- Zero values by kind ---


class Kind(Enum):
    """Value kinds with a canonical empty value."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    DECIMAL = "decimal"
    STR = "str"
    BYTES = "bytes"
    LIST = "list"
    SET = "set"
    DICT = "dict"


# Containers get a fresh instance per call.
_ZERO_VALUES: dict[Kind, Callable[[], Any]] = {
    Kind.BOOL: bool,
    Kind.INT: int,
    Kind.FLOAT: float,
    Kind.DECIMAL: Decimal,
    Kind.STR: str,
    Kind.BYTES: bytes,
    Kind.LIST: list,
    Kind.SET: set,
    Kind.DICT: dict,
}


def zero_value(kind: Kind) -> Any:
    """Return the canonical empty value for *kind* (``0``, ``""``, ``[]``...)."""
    return _ZERO_VALUES[kind]()


def ensure_kind(value: Any, kind: Kind) -> Any:
    return value if value is not None else zero_value(kind)


def ensure_kind_then(value: Any, kind: Kind, then: Callable[[Any], object]) -> Any:
    return value if value is not None else _then(zero_value(kind), then)


def ensure_bool(value: bool | None) -> bool:
    return ensure_kind(value, Kind.BOOL)


def ensure_int(value: int | None) -> int:
    return ensure_kind(value, Kind.INT)


def ensure_float(value: float | None) -> float:
    return ensure_kind(value, Kind.FLOAT)


def ensure_decimal(value: Decimal | None) -> Decimal:
    return ensure_kind(value, Kind.DECIMAL)


def ensure_str(value: str | None) -> str:
    return ensure_kind(value, Kind.STR)


def ensure_bytes(value: bytes | None) -> bytes:
    return ensure_kind(value, Kind.BYTES)


def ensure_list(value: list[T] | None) -> list[T]:
    return ensure_kind(value, Kind.LIST)


def ensure_set(value: set[T] | None) -> set[T]:
    """Return *value*, or a new unordered ``set()`` when it is ``None``."""
    return ensure_kind(value, Kind.SET)


def ensure_dict(value: dict[Any, Any] | None) -> dict[Any, Any]:
    return ensure_kind(value, Kind.DICT)


# --- Reusable rules ---


def _not_none(value: object) -> bool:
    return value is not None


@dataclass(frozen=True, slots=True)
class EnsureRule(Generic[R]):
    """A check plus a default supplier, applied by calling the rule."""

    supplier: Callable[[], R]
    check: Callable[[R | None], bool] = _not_none

    def __call__(self, value: R | None) -> R:
        return value if self.check(value) else self.supplier()  # type: ignore[return-value]

    def then(self, value: R | None, callback: Callable[[R], object]) -> R:
        """Apply the rule, passing a used default to *callback* first."""
        if self.check(value):
            return value  # type: ignore[return-value]
        return _then(self.supplier(), callback)


def default_rule(
    default: T, check: Callable[[T | None], bool] | None = None
) -> EnsureRule[T]:
    """Build an :class:`EnsureRule` returning *default* when *check* fails.

    Without *check* the rule keeps any value that is not ``None``.
    """
    return EnsureRule(lambda: default, check if check is not None else _not_none)
