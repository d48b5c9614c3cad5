"""Fallsafe: contain failures at the call site and keep working code running.

Public API:
    - execute()/get_opt() and the logging_*/silent_*/throwing_* shorthands
    - LOG, SILENT, PROPAGATE: failure policies
    - Opt: explicit value-or-absent container
    - ensure*(): None-safe defaults
    - stream()/stream_ex()/first()/last(): None-safe collection views
    - set_log_sink(): replace the process-wide failure log sink
"""

from __future__ import annotations

import logging

from fallsafe.barrier import (
    execute,
    get_opt,
    get_or_else,
    get_or_else_get,
    get_or_null,
    guarded,
    logging_execute,
    logging_get_list,
    logging_get_map,
    logging_get_opt,
    logging_get_or_else,
    logging_get_or_else_get,
    logging_get_or_null,
    logging_get_set,
    logging_get_str,
    logging_runnable,
    logging_supplier,
    silent_execute,
    silent_get_list,
    silent_get_map,
    silent_get_opt,
    silent_get_or_else,
    silent_get_or_else_get,
    silent_get_or_null,
    silent_get_set,
    silent_get_str,
    silent_runnable,
    silent_supplier,
    throwing_execute,
    throwing_get,
    throwing_runnable,
    throwing_supplier,
)
from fallsafe.config import BarrierConfig, resolve_config
from fallsafe.defaults import (
    ProcessDefaults,
    default_log_sink,
    get_log_sink,
    process_defaults,
    reset_process_defaults,
    set_log_sink,
)
from fallsafe.ensure import (
    EnsureRule,
    Kind,
    ValueValidator,
    default_rule,
    ensure,
    ensure_else,
    ensure_kind,
    ensure_then,
    ensure_valid,
    ensure_valid_else,
    ensure_valid_then,
    ensure_value_valid,
    ensure_value_valid_else,
    ensure_value_valid_then,
    is_value_valid,
)
from fallsafe.errors import (
    ConfigurationError,
    EmptyOptError,
    FallsafeError,
    InvalidArgumentError,
    WrappedError,
    root_cause,
)
from fallsafe.optional import Opt
from fallsafe.policy import (
    LOG,
    PROPAGATE,
    SILENT,
    FailurePolicy,
    LogPolicy,
    PropagatePolicy,
    SilentPolicy,
)
from fallsafe.sequences import (
    cast_ok_then,
    cast_then,
    first,
    first_opt,
    last,
    last_opt,
    non_null_then,
    stream,
    stream_ex,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("fallsafe")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("fallsafe").addHandler(logging.NullHandler())

__all__ = [
    "LOG",
    "PROPAGATE",
    "SILENT",
    "BarrierConfig",
    "ConfigurationError",
    "EmptyOptError",
    "EnsureRule",
    "FailurePolicy",
    "FallsafeError",
    "InvalidArgumentError",
    "Kind",
    "LogPolicy",
    "Opt",
    "ProcessDefaults",
    "PropagatePolicy",
    "SilentPolicy",
    "ValueValidator",
    "WrappedError",
    "cast_ok_then",
    "cast_then",
    "default_log_sink",
    "default_rule",
    "ensure",
    "ensure_else",
    "ensure_kind",
    "ensure_then",
    "ensure_valid",
    "ensure_valid_else",
    "ensure_valid_then",
    "ensure_value_valid",
    "ensure_value_valid_else",
    "ensure_value_valid_then",
    "execute",
    "first",
    "first_opt",
    "get_log_sink",
    "get_opt",
    "get_or_else",
    "get_or_else_get",
    "get_or_null",
    "guarded",
    "is_value_valid",
    "last",
    "last_opt",
    "logging_execute",
    "logging_get_list",
    "logging_get_map",
    "logging_get_opt",
    "logging_get_or_else",
    "logging_get_or_else_get",
    "logging_get_or_null",
    "logging_get_set",
    "logging_get_str",
    "logging_runnable",
    "logging_supplier",
    "non_null_then",
    "process_defaults",
    "reset_process_defaults",
    "resolve_config",
    "root_cause",
    "set_log_sink",
    "silent_execute",
    "silent_get_list",
    "silent_get_map",
    "silent_get_opt",
    "silent_get_or_else",
    "silent_get_or_else_get",
    "silent_get_or_null",
    "silent_get_set",
    "silent_get_str",
    "silent_runnable",
    "silent_supplier",
    "stream",
    "stream_ex",
    "throwing_execute",
    "throwing_get",
    "throwing_runnable",
    "throwing_supplier",
]
