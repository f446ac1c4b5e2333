"""Turning raw overrides into a validated :class:`VidlensConfig`.

Every vidlens setting is addressed as ``section.name``. Overrides arrive as
nested mappings from the YAML file, or as single text values from the
environment and ``vidlens config set``; text values are parsed with
:func:`parse_setting` so list settings accept the shorthand a shell makes
natural.
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from typing import Any, Dict, Optional, get_origin

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import VidlensConfig

ENV_PREFIX = "VIDLENS__"

# Settings whose text form is a command line rather than a comma list.
SHELL_LIST_SETTINGS = frozenset({"probe.extra_args"})


def setting_types() -> Dict[str, Any]:
    """Map every ``section.name`` key to its annotated type."""
    types: Dict[str, Any] = {}
    for section, section_field in VidlensConfig.model_fields.items():
        for name, field in section_field.annotation.model_fields.items():
            types[f"{section}.{name}"] = field.annotation
    return types


def parse_setting(key: str, text: str) -> Any:
    """Parse the text form of ``key``.

    Text settings take the text verbatim; anything else is read as YAML.
    For list settings a bare string is split, with
    shell quoting for ``probe.extra_args`` and on commas elsewhere, and
    list items are kept as strings so ``[24, 30]`` works for frame rates.

    Raises:
        ConfigError: If ``key`` is not a vidlens setting.
    """
    types = setting_types()
    if key not in types:
        known = ", ".join(sorted(types))
        raise ConfigError(f"Unknown setting '{key}'. Known settings: {known}.")
    if types[key] is str:
        return text

    try:
        value = yaml.safe_load(text)
    except yaml.YAMLError:
        value = text

    if get_origin(types[key]) is not list:
        return value
    if value is None:
        return []
    if isinstance(value, str):
        if key in SHELL_LIST_SETTINGS:
            return shlex.split(value)
        return [part.strip() for part in value.split(",") if part.strip()]
    if not isinstance(value, list):
        value = [value]
    return [str(item) for item in value]


def env_overrides(environ: Mapping[str, str]) -> Dict[str, Dict[str, Any]]:
    """Collect ``VIDLENS__SECTION__NAME`` variables as nested overrides."""
    overrides: Dict[str, Dict[str, Any]] = {}
    for variable, text in environ.items():
        if not variable.startswith(ENV_PREFIX):
            continue
        key = variable[len(ENV_PREFIX) :].lower().replace("__", ".")
        try:
            value = parse_setting(key, text)
        except ConfigError as exc:
            raise ConfigError(f"{variable}: {exc}") from exc
        section, name = key.split(".", 1)
        overrides.setdefault(section, {})[name] = value
    return overrides


def resolve(
    file_overrides: Optional[Mapping[str, Any]] = None,
    env: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> VidlensConfig:
    """Validate defaults overlaid by the config file, then the environment.

    Raises:
        ConfigError: If a section is not a mapping or a value is invalid.
    """
    merged: Dict[str, Dict[str, Any]] = {}
    for origin, layer in (("config file", file_overrides), ("environment", env)):
        for section, values in (layer or {}).items():
            if not isinstance(values, Mapping):
                raise ConfigError(f"Section '{section}' in the {origin} must be a mapping.")
            merged.setdefault(section, {}).update(values)

    try:
        return VidlensConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {_describe(exc)}") from exc


def lookup(config: VidlensConfig, key: str) -> Any:
    """Return the value of the ``section.name`` setting ``key``."""
    section, name = key.split(".", 1)
    return getattr(getattr(config, section), name)


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


__all__ = [
    "ENV_PREFIX",
    "SHELL_LIST_SETTINGS",
    "setting_types",
    "parse_setting",
    "env_overrides",
    "resolve",
    "lookup",
]
