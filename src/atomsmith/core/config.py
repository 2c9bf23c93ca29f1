"""Settings models used to configure atom builders.

DebugConfig

`file_logging` (`bool`)
: Append a trace line to `log_file` every time a hook fires.

`page_logging` (`bool`)
: Echo trace lines to standard output. Takes precedence over `file_logging`.

`log_file` (`Path`)
: Destination of the file trace.

`source` (`str`)
: Label leading every trace line.

AtomsmithSettings

`debug` (`DebugConfig`)
: Debug trace configuration.

`defaults` (`dict[str, Any]`)
: Option overrides merged into the built-in defaults for every atom assembled
  by a builder created from these settings.
"""

from __future__ import annotations

from collections.abc import Mapping
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from .exceptions import ConfigurationError
from .options import DEFAULT_OPTIONS, merge_defaults


ENV_DEBUG_FILE = "ATOMSMITH_DEBUG_FILE"
ENV_DEBUG_PAGE = "ATOMSMITH_DEBUG_PAGE"
ENV_DEBUG_LOG = "ATOMSMITH_DEBUG_LOG"

_TRUTHY = {"1", "true", "yes", "on"}


class DebugConfig(BaseModel):
    """Static switches for the hook trace."""

    model_config = ConfigDict(extra="forbid")

    file_logging: bool = False
    page_logging: bool = False
    log_file: Path = Field(default=Path("debug.log"), description="Trace file")
    source: str = Field(default="Atom", description="Trace line prefix")

    @property
    def enabled(self) -> bool:
        return self.file_logging or self.page_logging


class AtomsmithSettings(BaseModel):
    """Top-level settings consumed by :meth:`AtomBuilder.from_settings`."""

    model_config = ConfigDict(extra="forbid")

    debug: DebugConfig = Field(default_factory=DebugConfig)
    defaults: dict[str, Any] = Field(default_factory=dict)

    @field_validator("defaults", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    def option_defaults(self) -> dict[str, Any]:
        """Return the built-in defaults with the configured overrides applied."""
        return merge_defaults(self.defaults, DEFAULT_OPTIONS)


def settings_from_mapping(data: Mapping[str, Any] | None) -> AtomsmithSettings:
    """Validate a raw mapping into :class:`AtomsmithSettings`."""
    try:
        return AtomsmithSettings.model_validate(dict(data or {}))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid atomsmith settings: {exc}") from exc


def load_settings(path: str | Path) -> AtomsmithSettings:
    """Read settings from a YAML document."""
    settings_path = Path(path)
    try:
        payload = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Unable to read settings file '{settings_path}'") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Malformed YAML in '{settings_path}'") from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        msg = f"Settings file '{settings_path}' must contain a mapping"
        raise ConfigurationError(msg)
    return settings_from_mapping(payload)


def _flag(raw: str | None) -> bool:
    return raw is not None and raw.strip().lower() in _TRUTHY


def settings_from_env(environ: Mapping[str, str] | None = None) -> AtomsmithSettings:
    """Build settings from ``ATOMSMITH_DEBUG_*`` environment variables."""
    env = os.environ if environ is None else environ
    debug: dict[str, Any] = {
        "file_logging": _flag(env.get(ENV_DEBUG_FILE)),
        "page_logging": _flag(env.get(ENV_DEBUG_PAGE)),
    }
    log_file = env.get(ENV_DEBUG_LOG)
    if log_file:
        debug["log_file"] = log_file
    return settings_from_mapping({"debug": debug})


__all__ = [
    "ENV_DEBUG_FILE",
    "ENV_DEBUG_LOG",
    "ENV_DEBUG_PAGE",
    "AtomsmithSettings",
    "DebugConfig",
    "load_settings",
    "settings_from_env",
    "settings_from_mapping",
]
