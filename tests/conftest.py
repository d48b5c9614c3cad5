"""Pytest configuration and fixtures.

Provides process-default isolation, environment isolation, a capturing log
sink, and marker registration. Fixtures here are autouse unless noted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os

import pytest

from fallsafe.defaults import process_defaults, reset_process_defaults

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class CaptureSink:
    """Log sink test double recording every failure it receives."""

    failures: list[BaseException] = field(default_factory=list)

    def __call__(self, exc: BaseException) -> None:
        self.failures.append(exc)

    @property
    def calls(self) -> int:
        return len(self.failures)


# =============================================================================
# Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_fallsafe_env(monkeypatch):
    """Clear FALLSAFE_* variables so the host environment cannot leak in."""
    for key in list(os.environ.keys()):
        if key.startswith("FALLSAFE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def fresh_process_defaults(isolate_fallsafe_env):
    """Give every test its own process defaults and drop them afterwards."""
    reset_process_defaults()
    yield
    reset_process_defaults()


# =============================================================================
# Opt-in fixtures
# =============================================================================


@pytest.fixture
def capture_sink() -> CaptureSink:
    """Install a capturing sink as the process-wide log sink."""
    sink = CaptureSink()
    process_defaults().set_log_sink(sink)
    return sink


# =============================================================================
# Pytest Hooks
# =============================================================================


def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Behavioral guarantees of the public API",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)
