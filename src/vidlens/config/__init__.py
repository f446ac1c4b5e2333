"""Configuration management for vidlens."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Tuple

import yaml

from .exceptions import ConfigError
from .models import (
    LOG_LEVELS,
    FilterPresets,
    LoggingSettings,
    ProbeSettings,
    UISettings,
    VidlensConfig,
)
from .resolver import ENV_PREFIX, env_overrides, lookup, parse_setting, resolve, setting_types

DEFAULT_CONFIG_PATH = Path("~/.vidlens/config.yaml")
_CONFIG_HEADER = (
    "# vidlens configuration file\n"
    "# Edit by hand or run `vidlens config set SECTION.NAME --value VALUE`.\n"
    f"# Environment variables named {ENV_PREFIX}SECTION__NAME take precedence.\n"
)


class ConfigManager:
    """Read and update the vidlens configuration file.

    Args:
        config_path: File to use instead of ``~/.vidlens/config.yaml``.
        env: Environment consulted for overrides; defaults to ``os.environ``.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = env if env is not None else os.environ

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load(self, *, include_env: bool = True) -> VidlensConfig:
        """Return the effective configuration, creating the file on first use.

        Raises:
            ConfigError: If the file or an environment override is invalid.
        """
        self.ensure_exists()
        env = env_overrides(self._env) if include_env else None
        return resolve(self.read_overrides(), env)

    def ensure_exists(self) -> Path:
        """Write a file holding the defaults if none exists yet."""
        if not self._config_path.exists():
            self._write(VidlensConfig().model_dump(mode="python"))
        return self._config_path

    def read_overrides(self) -> dict[str, Any]:
        """Return the mapping stored in the file, or an empty one.

        Raises:
            ConfigError: If the file is not YAML or not a mapping.
        """
        if not self._config_path.exists():
            return {}
        try:
            raw = yaml.safe_load(self._config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")
        return raw

    def set_value(self, key: str, text: str) -> Tuple[Any, Any]:
        """Store the setting ``key`` parsed from ``text`` in the file.

        Environment overrides are ignored. The file is only rewritten when
        the effective value changes.

        Returns:
            Tuple[Any, Any]: The value before and after the update.

        Raises:
            ConfigError: If the key is unknown or the value is invalid.
        """
        value = parse_setting(key, text)
        self.ensure_exists()
        overrides = self.read_overrides()
        previous = lookup(resolve(overrides), key)

        section, name = key.split(".", 1)
        values = overrides.setdefault(section, {})
        if not isinstance(values, dict):
            raise ConfigError(f"Section '{section}' in the config file must be a mapping.")
        values[name] = value
        current = lookup(resolve(overrides), key)

        if current != previous:
            self._write(overrides)
        return previous, current

    def _write(self, data: Mapping[str, Any]) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        body = yaml.safe_dump(dict(data), sort_keys=False)
        self._config_path.write_text(_CONFIG_HEADER + body, encoding="utf-8")


__all__ = [
    "ConfigManager",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "LOG_LEVELS",
    "VidlensConfig",
    "ProbeSettings",
    "UISettings",
    "FilterPresets",
    "LoggingSettings",
    "parse_setting",
    "resolve",
    "setting_types",
]
