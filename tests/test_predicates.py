from __future__ import annotations

from dataclasses import dataclass
from operator import attrgetter

import pytest

from fallsafe.errors import InvalidArgumentError
from fallsafe.predicates import (
    all_field_match,
    all_match,
    all_match_by,
    all_of,
    any_field_match,
    any_match,
    any_match_by,
    any_of,
    has_text,
    is_any,
    is_blank,
    is_empty,
    is_in,
    is_none,
    none_field_match,
    none_match,
    none_match_by,
    none_of,
    not_blank,
    not_empty,
    not_none,
)

pytestmark = pytest.mark.unit


@dataclass
class User:
    name: str | None
    email: str | None


def test_match_functions() -> None:
    assert all_match(lambda i: i > 0, [1, 4, 5])
    assert not all_match(lambda i: i > 3, [1, 4, 5])
    assert any_match(lambda i: i > 3, [1, 4, 5])
    assert none_match(lambda i: i > 9, [1, 4, 5])


def test_match_on_empty_source() -> None:
    assert all_match(bool, [])
    assert not any_match(bool, [])
    assert none_match(bool, [])


@pytest.mark.parametrize("fn", [all_match, any_match, none_match])
def test_match_rejects_missing_arguments(fn) -> None:
    with pytest.raises(InvalidArgumentError):
        fn(None, [1])
    with pytest.raises(InvalidArgumentError):
        fn(bool, None)


def test_vararg_forms() -> None:
    assert not all_of(not_blank, "1", "", "3")
    assert any_of(is_none, 1, None)
    assert none_of(is_none, 1, 2)


def test_lifted_predicates() -> None:
    all_positive = all_match_by(lambda n: n > 0)
    has_zero = any_match_by(lambda n: n == 0)
    no_negatives = none_match_by(lambda n: n < 0)

    assert all_positive([1, 2])
    assert has_zero([1, 0])
    assert no_negatives([0, 1])
    with pytest.raises(InvalidArgumentError):
        all_positive(None)  # type: ignore[arg-type]


def test_field_matching() -> None:
    fields = (attrgetter("name"), attrgetter("email"))
    complete = all_field_match(not_blank, *fields)
    partial = any_field_match(not_blank, *fields)
    empty = none_field_match(not_blank, *fields)

    full = User("ann", "ann@x")
    half = User("bob", None)
    blank = User("null", " ")

    assert complete(full) and partial(full) and not empty(full)
    assert not complete(half) and partial(half)
    assert empty(blank)


def test_identity_versus_equality_membership() -> None:
    a = [1]
    assert is_any(a, [1], a)
    assert not is_any(a, [1])
    assert is_in(a, [1])
    assert not is_in(3)


def test_none_testers() -> None:
    assert is_none(None) and not is_none(0)
    assert not_none("") and not not_none(None)


@pytest.mark.parametrize(
    ("s", "empty", "text", "blank"),
    [
        (None, True, False, True),
        ("", True, False, True),
        ("   ", False, False, True),
        ("null", False, True, True),
        ("UNDEFINED", False, True, True),
        ("value", False, True, False),
    ],
)
def test_text_testers(s: str | None, empty: bool, text: bool, blank: bool) -> None:
    assert is_empty(s) is empty
    assert not_empty(s) is not empty
    assert has_text(s) is text
    assert is_blank(s) is blank
    assert not_blank(s) is not blank
