"""None-safe views over possibly-missing collections.

``stream`` and ``stream_ex`` never yield ``None``: missing sources become empty
sequences, ``None`` items are skipped and, for mappings, so are entries whose
value is ``None``. Each call builds a new lazy, single-pass iterator.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
import itertools
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

from fallsafe.barrier import logging_get_or_null, silent_get_or_null
from fallsafe.optional import Opt

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Sized

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")
R = TypeVar("R")


def _items(source: Iterable[T] | None) -> Iterator[T]:
    if source is None:
        return
    for item in source:
        if item is not None:
            yield item


def _entries(source: Mapping[K, V] | None) -> Iterator[tuple[K, V]]:
    if source is None:
        return
    for key, value in source.items():
        if value is not None:
            yield key, value


@overload
def stream(source: Mapping[K, V] | None) -> Iterator[tuple[K, V]]: ...
@overload
def stream(source: Iterable[T] | None) -> Iterator[T]: ...
def stream(source: Any) -> Iterator[Any]:
    """Iterate *source* lazily, skipping ``None``; mappings yield entries."""
    if isinstance(source, Mapping):
        return _entries(source)
    return _items(source)


class Seq(Generic[T]):
    """A fluent, single-pass pipeline over an iterator.

    Intermediate operations return a new ``Seq`` and stay lazy; terminal
    operations (``to_list``, ``first``, ``count``...) consume it.
    """

    __slots__ = ("_it",)

    def __init__(self, items: Iterable[T]) -> None:
        self._it: Iterator[T] = iter(items)

    def __iter__(self) -> Iterator[T]:
        return self._it

    # Intermediate

    def map(self, fn: Callable[[T], R]) -> Seq[R]:
        return Seq(map(fn, self._it))

    def filter(self, predicate: Callable[[T], bool]) -> Seq[T]:
        return Seq(filter(predicate, self._it))

    def non_null(self) -> Seq[T]:
        return Seq(_items(self._it))

    def flat_map(self, fn: Callable[[T], Iterable[R] | None]) -> Seq[R]:
        return Seq(itertools.chain.from_iterable(_items(fn(x)) for x in self._it))

    def distinct(self) -> Seq[T]:
        """Drop repeats, keeping first occurrences. Items must be hashable."""
        return Seq(dict.fromkeys(self._it))

    def limit(self, n: int) -> Seq[T]:
        return Seq(itertools.islice(self._it, max(0, n)))

    def skip(self, n: int) -> Seq[T]:
        return Seq(itertools.islice(self._it, max(0, n), None))

    def sorted(self, key: Callable[[T], Any] | None = None, *, reverse: bool = False) -> Seq[T]:
        return Seq(sorted(self._it, key=key, reverse=reverse))  # type: ignore[type-var]

    # Terminal

    def to_list(self) -> list[T]:
        return list(self._it)

    def to_set(self) -> set[T]:
        return set(self._it)

    def to_dict(self, key: Callable[[T], K], value: Callable[[T], V]) -> dict[K, V]:
        """Build a dict; later items win on key collisions."""
        return {key(x): value(x) for x in self._it}

    def group_by(self, key: Callable[[T], Hashable]) -> dict[Hashable, list[T]]:
        groups: dict[Hashable, list[T]] = {}
        for x in self._it:
            groups.setdefault(key(x), []).append(x)
        return groups

    def first(self) -> Opt[T]:
        return Opt.of(next(self._it, None))

    def count(self) -> int:
        return sum(1 for _ in self._it)

    def any_match(self, predicate: Callable[[T], bool]) -> bool:
        return any(predicate(x) for x in self._it)

    def all_match(self, predicate: Callable[[T], bool]) -> bool:
        return all(predicate(x) for x in self._it)

    def none_match(self, predicate: Callable[[T], bool]) -> bool:
        return not any(predicate(x) for x in self._it)


class EntrySeq(Seq[tuple[K, V]]):
    """A :class:`Seq` of ``(key, value)`` pairs with key/value helpers."""

    __slots__ = ()

    def keys(self) -> Seq[K]:
        return Seq(k for k, _ in self._it)

    def values(self) -> Seq[V]:
        return Seq(v for _, v in self._it)

    def filter_keys(self, predicate: Callable[[K], bool]) -> EntrySeq[K, V]:
        return EntrySeq((k, v) for k, v in self._it if predicate(k))

    def filter_values(self, predicate: Callable[[V], bool]) -> EntrySeq[K, V]:
        return EntrySeq((k, v) for k, v in self._it if predicate(v))

    def map_keys(self, fn: Callable[[K], R]) -> EntrySeq[R, V]:
        return EntrySeq((fn(k), v) for k, v in self._it)

    def map_values(self, fn: Callable[[V], R]) -> EntrySeq[K, R]:
        return EntrySeq((k, fn(v)) for k, v in self._it)

    def to_dict(  # type: ignore[override]
        self,
        key: Callable[[tuple[K, V]], Any] | None = None,
        value: Callable[[tuple[K, V]], Any] | None = None,
    ) -> dict[Any, Any]:
        """Collect pairs into a dict, optionally re-keying or re-valuing."""
        if key is None and value is None:
            return dict(self._it)
        return super().to_dict(
            key or (lambda kv: kv[0]), value or (lambda kv: kv[1])
        )


@overload
def stream_ex(source: Mapping[K, V] | None) -> EntrySeq[K, V]: ...
@overload
def stream_ex(source: Iterable[T] | None) -> Seq[T]: ...
def stream_ex(source: Any) -> Seq[Any]:
    """Like :func:`stream`, wrapped in a fluent :class:`Seq`/:class:`EntrySeq`."""
    if isinstance(source, Mapping):
        return EntrySeq(_entries(source))
    return Seq(_items(source))


# --- Sizes ---


def size(collection: Sized | None) -> int:
    return len(collection) if collection is not None else 0


def length(value: Sized | None) -> int:
    """Length of a string or sequence; ``0`` for ``None``."""
    return len(value) if value is not None else 0


# --- Ends ---


def first(source: Iterable[T] | None) -> T | None:
    """First element, or ``None`` when *source* is ``None`` or empty."""
    if source is None:
        return None
    if isinstance(source, Sequence):
        return source[0] if len(source) else None
    return next(iter(source), None)


def last(source: Iterable[T] | None) -> T | None:
    """Last element, or ``None`` when *source* is ``None`` or empty.

    Non-sequence iterables are walked to the end.
    """
    if source is None:
        return None
    if isinstance(source, Sequence):
        return source[-1] if len(source) else None
    result = None
    for result in source:  # noqa: B007
        pass
    return result


def first_opt(source: Iterable[T] | None) -> Opt[T]:
    return Opt.of(first(source))


def last_opt(source: Iterable[T] | None) -> Opt[T]:
    return Opt.of(last(source))


# --- Projections ---


def non_null_then(value: T | None, fn: Callable[[T], R]) -> R | None:
    return fn(value) if value is not None else None


def _narrow(value: object, target: type[T]) -> T:
    if not isinstance(value, target):
        raise TypeError(
            f"Cannot narrow {type(value).__name__} to {target.__name__}"
        )
    return value


def cast_then(value: object, target: type[T], then: Callable[[T], R]) -> R | None:
    """Narrow *value* to *target* and apply *then*.

    A failed narrowing (or a failure in *then*) is logged once through the
    process sink and gives ``None``. ``None`` in gives ``None`` out, unlogged.
    """
    return logging_get_or_null(
        lambda: then(_narrow(value, target)) if value is not None else None
    )


def cast_ok_then(value: object, target: type[T], then: Callable[[T], R]) -> R | None:
    """Like :func:`cast_then` but a failed narrowing leaves no trace."""
    return silent_get_or_null(
        lambda: then(_narrow(value, target)) if value is not None else None
    )
