"""
Monitor configuration.

MonitorConfig is immutable. It can be built from keyword parameters, a plain
mapping, a YAML file, or the environment. YAML and environment loading share
the ``SIGMON_`` override prefix:

    SIGMON_LOG_LEVEL=debug
    SIGMON_READY_TIMEOUT=2.5

Example YAML (with section="signals"):

    signals:
      name: myapp.signals
      log_level: debug
      join_timeout: 1.0
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigError
from .log import resolve_level

ENV_PREFIX = "SIGMON_"

# Maximum config file size (1MB)
MAX_CONFIG_SIZE_BYTES = 1024 * 1024


@dataclass(frozen=True)
class MonitorConfig:
    """
    Immutable configuration for a Monitor.

    Attributes:
        name: Logger name and prefix for thread names
        log_level: Level of the logger created when none is injected
        ready_timeout: Bound in seconds on the start() readiness wait
                       (None waits forever)
        join_timeout: Bound in seconds on joining background threads
        daemon: Whether background threads are daemon threads
    """

    name: str = "sigmon"
    log_level: str | int | bool = "info"
    ready_timeout: float | None = None
    join_timeout: float | None = 5.0
    daemon: bool = True

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigError("name must not be empty")
        resolve_level(self.log_level)
        for field in ("ready_timeout", "join_timeout"):
            value = getattr(self, field)
            if value is not None and value < 0:
                raise ConfigError(f"{field} must not be negative", value=value)

    @classmethod
    def from_params(cls, **params: Any) -> MonitorConfig:
        """
        Create MonitorConfig from keyword parameters, coercing string values.

        Raises:
            ConfigError: On unknown keys or values of the wrong type
        """
        known = {f.name: f for f in dataclasses.fields(cls)}
        unknown = sorted(set(params) - set(known))
        if unknown:
            raise ConfigError("unknown config keys", keys=",".join(unknown))
        coerced = {key: _coerce(key, value) for key, value in params.items()}
        return cls(**coerced)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any] | None, section: str | None = None
    ) -> MonitorConfig:
        """
        Create MonitorConfig from a mapping.

        Args:
            data: Configuration mapping (None yields defaults)
            section: Dotted path of the sub-mapping to read (e.g. "app.signals")
        """
        data = _navigate(data or {}, section)
        return cls.from_params(**data)

    @classmethod
    def from_yaml(
        cls,
        path: str | Path,
        section: str | None = None,
        enable_env_overrides: bool = True,
    ) -> MonitorConfig:
        """
        Load MonitorConfig from a YAML file.

        Args:
            path: YAML file path
            section: Dotted path of the sub-mapping to read
            enable_env_overrides: Whether SIGMON_* variables override file values

        Raises:
            ConfigError: If the file is missing, too large, or malformed
        """
        fpath = Path(path)
        if not fpath.is_file():
            raise ConfigError("config file not found", path=str(fpath))
        size = fpath.stat().st_size
        if size > MAX_CONFIG_SIZE_BYTES:
            raise ConfigError("config file too large", path=str(fpath), size=size)

        try:
            with open(fpath) as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError("invalid YAML", path=str(fpath)) from e

        if loaded is not None and not isinstance(loaded, Mapping):
            raise ConfigError("config root must be a mapping", path=str(fpath))

        data = dict(_navigate(loaded or {}, section))
        if enable_env_overrides:
            data.update(_collect_env())
        return cls.from_params(**data)

    @classmethod
    def from_env(cls, base: MonitorConfig | None = None) -> MonitorConfig:
        """Apply SIGMON_* environment overrides on top of base (or defaults)."""
        base = base if base is not None else cls()
        overrides = {
            key: _coerce(key, value) for key, value in _collect_env().items()
        }
        return dataclasses.replace(base, **overrides)


def _navigate(data: Mapping[str, Any], section: str | None) -> Mapping[str, Any]:
    """Walk a dotted section path, yielding {} when it is absent."""
    if not section:
        return data
    current: Any = data
    for part in section.split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        else:
            return {}
    if current is None:
        return {}
    if not isinstance(current, Mapping):
        raise ConfigError("config section is not a mapping", section=section)
    return current


def _collect_env() -> dict[str, str]:
    """Collect SIGMON_* variables that name a config field."""
    names = {f.name for f in dataclasses.fields(MonitorConfig)}
    found = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field = key[len(ENV_PREFIX) :].lower()
        if field in names:
            found[field] = value
    return found


def _coerce(key: str, value: Any) -> Any:
    """Convert string values (env, YAML scalars) to the field's type."""
    if key in ("ready_timeout", "join_timeout"):
        if value is None or (isinstance(value, str) and value.lower() in ("", "none")):
            return None
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{key} must be a number", value=value) from e
    if key == "daemon":
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("1", "true", "yes", "on"):
            return True
        if isinstance(value, str) and value.lower() in ("0", "false", "no", "off"):
            return False
        raise ConfigError("daemon must be a boolean", value=value)
    if key == "name":
        return str(value)
    return value
