"""Failure policy tests: dispatch, wrapping, and normalization."""

from __future__ import annotations

import pytest

from fallsafe.errors import InvalidArgumentError, WrappedError
from fallsafe.policy import (
    LOG,
    PROPAGATE,
    SILENT,
    FailurePolicy,
    LogPolicy,
    PropagatePolicy,
    SilentPolicy,
    as_policy,
)

pytestmark = pytest.mark.unit


def test_builtin_policies_satisfy_protocol() -> None:
    for policy in (LOG, SILENT, PROPAGATE, LogPolicy(), PropagatePolicy()):
        assert isinstance(policy, FailurePolicy)


def test_log_policy_uses_process_sink_at_accept_time(capture_sink) -> None:
    policy = LogPolicy()
    exc = ValueError("late bound")

    policy.accept(exc)

    assert capture_sink.failures == [exc]


def test_log_policy_with_bound_sink_bypasses_process_sink(capture_sink) -> None:
    local: list[BaseException] = []

    LogPolicy(sink=local.append).accept(KeyError("k"))

    assert len(local) == 1
    assert capture_sink.calls == 0


def test_silent_policy_discards(capture_sink) -> None:
    SilentPolicy().accept(RuntimeError("gone"))
    assert capture_sink.calls == 0


def test_propagate_wraps_and_chains() -> None:
    original = OSError("io")

    with pytest.raises(WrappedError) as exc:
        PROPAGATE.accept(original)

    assert exc.value.cause is original
    assert exc.value.__cause__ is original


def test_propagate_does_not_double_wrap() -> None:
    already = WrappedError(ValueError("v"))

    with pytest.raises(WrappedError) as exc:
        PROPAGATE.accept(already)

    assert exc.value is already


def test_propagate_passthrough_reraises_as_is() -> None:
    policy = PropagatePolicy(passthrough=(KeyError,))

    with pytest.raises(KeyError):
        policy.accept(KeyError("declared"))
    with pytest.raises(WrappedError):
        policy.accept(ValueError("undeclared"))


def test_as_policy_accepts_callables() -> None:
    seen: list[BaseException] = []
    policy = as_policy(seen.append)
    exc = TypeError("t")

    policy.accept(exc)

    assert seen == [exc]


def test_as_policy_returns_policies_unchanged() -> None:
    assert as_policy(SILENT) is SILENT


@pytest.mark.parametrize("bad", [None, 3, "log"])
def test_as_policy_rejects_missing_or_unusable(bad: object) -> None:
    with pytest.raises(InvalidArgumentError):
        as_policy(bad)  # type: ignore[arg-type]


def test_policies_are_immutable() -> None:
    with pytest.raises(AttributeError):
        LOG.sink = print  # type: ignore[misc]
