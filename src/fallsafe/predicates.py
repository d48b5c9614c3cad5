"""Boolean helpers: element matching, field matching, None and text tests.

Matching functions reject a ``None`` predicate or source with
:class:`~fallsafe.errors.InvalidArgumentError`; everything else is total and
side-effect free.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from fallsafe.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

T = TypeVar("T")
F = TypeVar("F")

_BLANK_WORDS = frozenset({"null", "undefined"})


def _require(test: object, source: object) -> None:
    if test is None or source is None:
        raise InvalidArgumentError(
            "Both a predicate and a source are required",
            hint="Pass an empty iterable rather than None for 'no elements'.",
        )


# --- Element matching ---


def all_match(test: Callable[[T], bool], iterable: Iterable[T]) -> bool:
    """True when every element passes *test* (vacuously true when empty).

    Example:
        all_match(lambda i: i > 0, [1, 4, 5])  # True
        all_match(not_blank, ["1", "", "3"])    # False
    """
    _require(test, iterable)
    return all(test(x) for x in iterable)


def any_match(test: Callable[[T], bool], iterable: Iterable[T]) -> bool:
    _require(test, iterable)
    return any(test(x) for x in iterable)


def none_match(test: Callable[[T], bool], iterable: Iterable[T]) -> bool:
    return not any_match(test, iterable)


def all_of(test: Callable[[T], bool], *items: T) -> bool:
    return all_match(test, items)


def any_of(test: Callable[[T], bool], *items: T) -> bool:
    return any_match(test, items)


def none_of(test: Callable[[T], bool], *items: T) -> bool:
    return none_match(test, items)


# --- Predicate builders ---


def all_match_by(test: Callable[[T], bool]) -> Callable[[Iterable[T]], bool]:
    """Lift *test* into a predicate over whole iterables."""
    return lambda iterable: all_match(test, iterable)


def any_match_by(test: Callable[[T], bool]) -> Callable[[Iterable[T]], bool]:
    return lambda iterable: any_match(test, iterable)


def none_match_by(test: Callable[[T], bool]) -> Callable[[Iterable[T]], bool]:
    return lambda iterable: none_match(test, iterable)


def all_field_match(
    test: Callable[[F], bool], *mappers: Callable[[T], F]
) -> Callable[[T], bool]:
    """Predicate over objects: every mapped field passes *test*.

    Example:
        complete = all_field_match(not_blank, attrgetter("name"), attrgetter("email"))
    """
    return lambda obj: all_match(test, (mapper(obj) for mapper in mappers))


def any_field_match(
    test: Callable[[F], bool], *mappers: Callable[[T], F]
) -> Callable[[T], bool]:
    return lambda obj: any_match(test, (mapper(obj) for mapper in mappers))


def none_field_match(
    test: Callable[[F], bool], *mappers: Callable[[T], F]
) -> Callable[[T], bool]:
    return lambda obj: none_match(test, (mapper(obj) for mapper in mappers))


# --- Membership ---


def is_any(the_one: Any, *candidates: Any) -> bool:
    """Identity membership (``is``), unlike :func:`is_in`."""
    return any(c is the_one for c in candidates)


def is_in(the_one: Any, *candidates: Any) -> bool:
    """Equality membership (``==``)."""
    return any(c == the_one for c in candidates)


# --- None ---


def is_none(obj: object) -> bool:
    return obj is None


def not_none(obj: object) -> bool:
    return obj is not None


# --- Text ---


def is_empty(s: str | None) -> bool:
    return not s


def not_empty(s: str | None) -> bool:
    return bool(s)


def has_text(s: str | None) -> bool:
    """True when *s* holds at least one non-whitespace character."""
    return bool(s) and not s.isspace()  # type: ignore[union-attr]


def is_blank(s: str | None) -> bool:
    """No text, or the literal ``"null"``/``"undefined"`` a client sent by mistake."""
    return not has_text(s) or s.lower() in _BLANK_WORDS  # type: ignore[union-attr]


def not_blank(s: str | None) -> bool:
    return not is_blank(s)
