"""Process-wide defaults: the log sink used by the implicit log policy.

There is exactly one :class:`ProcessDefaults` per process. It is created on
first access, holds the resolved :class:`~fallsafe.config.BarrierConfig`, and
a single replaceable log sink.

Concurrency contract: the sink slot is a plain attribute. Replacing it while
other threads are inside a log-policy call is last-writer-wins; an in-flight
call may see either the old or the new sink. Callers that need isolation pass
an explicit ``LogPolicy(sink=...)`` instead of relying on the default.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fallsafe.config import BarrierConfig, resolve_config
from fallsafe.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    LogSink = Callable[[BaseException], None]

log = logging.getLogger(__name__)

# Records from the default sink are attributed to the barrier, not to this
# module.
barrier_log = logging.getLogger("fallsafe.barrier")


class ProcessDefaults:
    """Holder of the active config and log sink."""

    __slots__ = ("_log_sink", "config")

    def __init__(self, config: BarrierConfig | None = None) -> None:
        self.config = config if config is not None else BarrierConfig()
        self._log_sink: LogSink = self.default_log_sink

    def default_log_sink(self, exc: BaseException) -> None:
        """Emit one log record for *exc* using the active config."""
        cfg = self.config
        barrier_log.log(
            cfg.level,
            "%s: %s: %s",
            cfg.log_message,
            type(exc).__name__,
            exc,
            exc_info=exc if cfg.include_traceback else None,
        )

    @property
    def log_sink(self) -> LogSink:
        return self._log_sink

    def set_log_sink(self, sink: LogSink) -> ProcessDefaults:
        """Replace the process-wide log sink for all later log-policy calls.

        Raises:
            ConfigurationError: When *sink* is ``None`` or not callable.
        """
        if sink is None or not callable(sink):
            raise ConfigurationError(
                f"Log sink must be callable, got {sink!r}",
                hint="Pass a function taking one exception, e.g. errors.append.",
            )
        self._log_sink = sink
        return self

    def configure(
        self, env_file: str | Path | None = None, **overrides: Any
    ) -> ProcessDefaults:
        """Re-resolve the config; the default sink picks it up immediately."""
        self.config = resolve_config(env_file, **overrides)
        return self


_defaults: ProcessDefaults | None = None


def process_defaults() -> ProcessDefaults:
    """Return the process-wide defaults, creating them on first use.

    Never raises: an invalid environment falls back to the built-in config
    with one warning on the ``fallsafe.defaults`` logger.
    """
    global _defaults  # noqa: PLW0603
    if _defaults is None:
        try:
            config = resolve_config()
        except ConfigurationError as exc:
            log.warning(
                "Ignoring invalid fallsafe configuration: %s (%s)", exc, exc.hint
            )
            config = BarrierConfig()
        _defaults = ProcessDefaults(config)
    return _defaults


def reset_process_defaults() -> None:
    """Forget the current defaults; the next access resolves them afresh."""
    global _defaults  # noqa: PLW0603
    _defaults = None


def get_log_sink() -> LogSink:
    return process_defaults().log_sink


def set_log_sink(sink: LogSink) -> ProcessDefaults:
    """Replace the process-wide log sink. See :meth:`ProcessDefaults.set_log_sink`."""
    return process_defaults().set_log_sink(sink)


def default_log_sink(exc: BaseException) -> None:
    """Log *exc* through the current defaults' built-in sink."""
    process_defaults().default_log_sink(exc)
