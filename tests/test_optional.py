"""Opt boundary tests: construction, extraction, and short-circuit chaining."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st
import pytest

from fallsafe.errors import EmptyOptError
from fallsafe.optional import Opt

pytestmark = pytest.mark.unit


def test_of_none_is_empty() -> None:
    opt = Opt.of(None)

    assert opt.is_empty()
    assert not opt.is_present()
    assert not opt
    assert opt == Opt.empty()


def test_of_value_is_present() -> None:
    opt = Opt.of(0)

    assert opt.is_present()
    assert opt  # falsy contents still count as present
    assert opt.value() == 0


def test_value_on_empty_raises_with_hint() -> None:
    with pytest.raises(EmptyOptError) as exc:
        Opt.empty().value()
    assert exc.value.hint is not None


def test_value_or_else_is_lazy() -> None:
    calls: list[int] = []

    def supplier() -> int:
        calls.append(1)
        return 9

    assert Opt.of(1).value_or_else(supplier) == 1
    assert calls == []
    assert Opt.empty().value_or_else(supplier) == 9
    assert calls == [1]


def test_value_or_raise_uses_factory_only_when_empty() -> None:
    assert Opt.of("x").value_or_raise(lambda: RuntimeError("unused")) == "x"
    with pytest.raises(RuntimeError, match="nothing"):
        Opt.empty().value_or_raise(lambda: RuntimeError("nothing"))


def test_chaining_short_circuits_on_absence() -> None:
    """Chained calls on an empty Opt never invoke the callbacks."""

    def explode(_: object) -> object:
        raise AssertionError("should not be called")

    empty: Opt[int] = Opt.empty()

    assert empty.map(explode).is_empty()
    assert empty.flat_map(explode).is_empty()  # type: ignore[arg-type]
    assert empty.filter(explode).is_empty()  # type: ignore[arg-type]
    assert empty.if_present(explode) is empty


def test_map_to_none_becomes_empty() -> None:
    assert Opt.of({"a": 1}).map(lambda d: d.get("b")).is_empty()


def test_filter_and_flat_map() -> None:
    assert Opt.of(7).filter(lambda n: n > 5).value() == 7
    assert Opt.of(3).filter(lambda n: n > 5).is_empty()
    assert Opt.of(2).flat_map(lambda n: Opt.of(n * 10)).value() == 20


def test_if_present_runs_consumer_once() -> None:
    seen: list[str] = []
    Opt.of("a").if_present(seen.append)
    assert seen == ["a"]


def test_or_else_opt() -> None:
    assert Opt.empty().or_else_opt(lambda: Opt.of(1)).value() == 1
    assert Opt.of(2).or_else_opt(lambda: Opt.of(1)).value() == 2


def test_iteration_yields_zero_or_one_item() -> None:
    assert list(Opt.of("v")) == ["v"]
    assert list(Opt.empty()) == []


def test_equality_by_contained_value() -> None:
    assert Opt.of(1) == Opt.of(1)
    assert Opt.of(1) != Opt.of(2)
    assert hash(Opt.of("k")) == hash(Opt.of("k"))


def test_repr() -> None:
    assert repr(Opt.of(1)) == "Opt.of(1)"
    assert repr(Opt.empty()) == "Opt.empty()"


def test_opt_is_immutable() -> None:
    opt = Opt.of(1)
    with pytest.raises(AttributeError):
        opt._value = 2  # type: ignore[misc]


@given(x=st.one_of(st.none(), st.integers(), st.text()), d=st.integers())
@settings(max_examples=50, deadline=None, derandomize=True)
def test_value_or_round_trip(x: object, d: int) -> None:
    """Property: Opt.of(x).value_or(d) is x unless x is None."""
    expected = x if x is not None else d
    assert Opt.of(x).value_or(d) == expected
