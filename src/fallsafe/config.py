"""Configuration for the default failure log sink.

Resolution precedence (lowest to highest):
defaults < ``.env`` file < ``FALLSAFE_*`` environment variables < overrides.

The ``.env`` file is read with ``dotenv_values`` so nothing is exported into
``os.environ`` as a side effect of importing or configuring the library.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any, Literal

from dotenv import dotenv_values
from pydantic import BaseModel, Field, ValidationError, field_validator

from fallsafe.errors import ConfigurationError

if TYPE_CHECKING:
    from pathlib import Path

log = logging.getLogger(__name__)

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_LOG_MESSAGE = "Failure absorbed by barrier; handle it soon"

# Field name -> environment variable name
_ENV_VARS: dict[str, str] = {
    "log_level": "FALLSAFE_LOG_LEVEL",
    "log_message": "FALLSAFE_LOG_MESSAGE",
    "include_traceback": "FALLSAFE_INCLUDE_TRACEBACK",
}


class BarrierConfig(BaseModel):
    """Validated settings for the process-wide default log sink."""

    model_config = {"frozen": True, "extra": "forbid"}

    log_level: LogLevelName = Field(default="WARNING")
    log_message: str = Field(default=DEFAULT_LOG_MESSAGE, min_length=1)
    include_traceback: bool = Field(default=True)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Accept level names in any case, plus the ``WARN`` alias."""
        if isinstance(v, str):
            v = v.strip().upper()
            return "WARNING" if v == "WARN" else v
        return v

    @field_validator("log_message", mode="before")
    @classmethod
    def strip_log_message(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def level(self) -> int:
        """Numeric ``logging`` level for ``log_level``."""
        return logging.getLevelNamesMapping()[self.log_level]


def _layer_from_mapping(values: dict[str, str | None]) -> dict[str, Any]:
    return {
        field: values[env_var]
        for field, env_var in _ENV_VARS.items()
        if values.get(env_var) is not None
    }


def resolve_config(
    env_file: str | Path | None = None, **overrides: Any
) -> BarrierConfig:
    """Resolve a :class:`BarrierConfig` from all configuration layers.

    Args:
        env_file: Optional dotenv file holding ``FALLSAFE_*`` keys.
        **overrides: Explicit field values; these win over every other layer.

    Raises:
        ConfigurationError: When any layer holds an invalid value.
    """
    merged: dict[str, Any] = {}
    if env_file is not None:
        merged.update(_layer_from_mapping(dotenv_values(env_file)))
    merged.update(_layer_from_mapping(dict(os.environ)))
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        config = BarrierConfig(**merged)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or "config"
        env_var = _ENV_VARS.get(field)
        raise ConfigurationError(
            f"Invalid fallsafe configuration for {field!r}: {first.get('msg')}",
            hint=f"Check {env_var} or the value passed for {field}."
            if env_var
            else f"Known fields: {', '.join(_ENV_VARS)}",
        ) from exc

    log.debug("Resolved fallsafe config: %s", config.model_dump())
    return config
