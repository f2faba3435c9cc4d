"""Config loading and normalization helpers for the CLI."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import cast

import msgspec

from align.planner import DEFAULT_MIN_PADDING
from cli.config_models import ProfileConfig, RootConfigSpec
from cli.config_source import ConfigSource, ConfigValue, EffectiveConfig
from core_types import JsonValue
from formatters.base import DEFAULT_PRINT_WIDTH
from formatters.registry import DEFAULT_LANGUAGES
from serde_msgspec import decode_toml, to_builtins, validation_error_payload

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "cljalign.toml"
PYPROJECT_FILENAME = "pyproject.toml"
TOOL_KEY = "cljalign"
DEFAULT_WORKERS = min(8, os.cpu_count() or 1)

_ProfileTable = dict[str, tuple[ProfileConfig, str]]


class ConfigError(ValueError):
    """Raised when a configuration file or profile selection is unusable."""


def default_config_contents() -> dict[str, JsonValue]:
    """Return the built-in flat configuration.

    Returns
    -------
    dict[str, JsonValue]
        Flat configuration used when no file sets a key.
    """
    return {
        "align_min_padding": DEFAULT_MIN_PADDING,
        "format_print_width": DEFAULT_PRINT_WIDTH,
        "format_workers": DEFAULT_WORKERS,
        "languages": {name: list(chain) for name, chain in DEFAULT_LANGUAGES.items()},
    }



def load_effective_config(
    config_file: str | None,
    *,
    profiles: Sequence[str] = (),
) -> dict[str, JsonValue]:
    """Load flat config contents from cljalign.toml / pyproject.toml or ``--config``.

    Parameters
    ----------
    config_file
        Optional explicit config file path.
    profiles
        Profile names to apply, in order.

    Returns
    -------
    dict[str, JsonValue]
        Flat configuration contents, defaults included.
    """
    return load_effective_config_with_sources(config_file, profiles=profiles).to_flat_dict()


def load_effective_config_with_sources(
    config_file: str | None,
    *,
    profiles: Sequence[str] = (),
) -> EffectiveConfig:
    """Load config contents with source tracking.

    File values win over defaults. Selected profiles are then layered on
    top in order, so a later profile overrides an earlier one.

    Parameters
    ----------
    config_file
        Optional explicit config file path.
    profiles
        Profile names to apply, in order.

    Returns
    -------
    EffectiveConfig
        Configuration with source tracking for each value.
    """
    values: dict[str, ConfigValue] = {}
    available: _ProfileTable = {}
    if config_file:
        _load_explicit_config(values, available, Path(config_file))
    else:
        _load_default_configs(values, available)
    for key, value in default_config_contents().items():
        values.setdefault(key, ConfigValue(key=key, value=value, source=ConfigSource.DEFAULT))
    for name in profiles:
        _apply_profile(values, available, name)
    return EffectiveConfig(values=dict(sorted(values.items())), profiles=tuple(profiles))


def flatten_config(config: RootConfigSpec | ProfileConfig) -> dict[str, JsonValue]:
    """Flatten sections into ``<section>_<key>`` entries.

    ``languages`` stays a nested mapping of language to formatter list and
    ``profiles`` tables are left out.

    Returns
    -------
    dict[str, JsonValue]
        Flat payload; unset values are omitted.
    """
    payload = cast("dict[str, JsonValue]", to_builtins(config))
    flat: dict[str, JsonValue] = {}
    for section, body in payload.items():
        if section == "profiles" or not isinstance(body, Mapping):
            continue
        if section == "languages":
            flat[section] = {str(name): list(chain) for name, chain in body.items()}
            continue
        for key, value in body.items():
            flat[f"{section}_{key}"] = value
    return flat


def find_in_parents(filename: str, start: Path | None = None) -> Path | None:
    """Walk parents from ``start`` (default cwd) to find a filename.

    Returns
    -------
    Path | None
        Path to the first matching file in the directory or its parents.
    """
    path = start or Path.cwd()
    while True:
        candidate = path / filename
        if candidate.exists():
            return candidate
        if path.parent == path:
            return None
        path = path.parent


def _load_explicit_config(
    values: dict[str, ConfigValue],
    available: _ProfileTable,
    path: Path,
) -> None:
    if not path.exists():
        msg = f"Config file not found: {str(path)!r}."
        raise FileNotFoundError(msg)
    raw, location = _resolve_explicit_payload(path)
    source = ConfigSource.PYPROJECT if path.name == PYPROJECT_FILENAME else ConfigSource.CONFIG_FILE
    root = decode_root_config(raw, location=location)
    _apply_config_values(values, available, root, source=source, location=location)


def _load_default_configs(values: dict[str, ConfigValue], available: _ProfileTable) -> None:
    config_path = find_in_parents(CONFIG_FILENAME)
    if config_path is not None:
        root = decode_root_config(_read_toml(config_path), location=str(config_path))
        _apply_config_values(
            values,
            available,
            root,
            source=ConfigSource.CONFIG_FILE,
            location=str(config_path),
        )

    pyproject_path = find_in_parents(PYPROJECT_FILENAME)
    if pyproject_path is None:
        return
    nested = _extract_tool_config(_read_toml(pyproject_path))
    if nested is None:
        return
    location = f"{pyproject_path}:tool.{TOOL_KEY}"
    root = decode_root_config(nested, location=location)
    _apply_config_values(values, available, root, source=ConfigSource.PYPROJECT, location=location)


def _read_toml(path: Path) -> dict[str, JsonValue]:
    try:
        payload = decode_toml(path.read_text(encoding="utf-8"))
    except msgspec.DecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(payload, dict):
        msg = f"Expected TOML mapping in {path}, got {type(payload).__name__}."
        raise ConfigError(msg)
    return cast("dict[str, JsonValue]", payload)


def _apply_config_values(
    values: dict[str, ConfigValue],
    available: _ProfileTable,
    root: RootConfigSpec,
    *,
    source: ConfigSource,
    location: str,
) -> None:
    # Earlier files win: cljalign.toml is loaded before [tool.cljalign].
    for key, value in flatten_config(root).items():
        values.setdefault(key, ConfigValue(key=key, value=value, source=source, location=location))
    for name, profile in (root.profiles or {}).items():
        available.setdefault(name, (profile, location))


def _apply_profile(values: dict[str, ConfigValue], available: _ProfileTable, name: str) -> None:
    found = available.get(name)
    if found is None:
        known = ", ".join(sorted(available)) or "<none>"
        msg = f"Profile {name!r} not found (available: {known})."
        raise ConfigError(msg)
    profile, location = found
    for key, value in flatten_config(profile).items():
        merged = value
        if key == "languages" and isinstance(value, Mapping):
            base = values[key].value
            merged = {**base, **value} if isinstance(base, Mapping) else value
        values[key] = ConfigValue(
            key=key,
            value=merged,
            source=ConfigSource.PROFILE,
            location=f"{location}:profiles.{name}",
        )
    logger.debug("Applied profile %r from %s.", name, location)


def decode_root_config(raw: Mapping[str, JsonValue], *, location: str) -> RootConfigSpec:
    """Validate a raw mapping into ``RootConfigSpec``.

    Returns
    -------
    RootConfigSpec
        Validated configuration.

    Raises
    ------
    ConfigError
        Raised when the payload does not match the schema.
    """
    try:
        return msgspec.convert(dict(raw), type=RootConfigSpec, strict=True)
    except msgspec.ValidationError as exc:
        details = validation_error_payload(exc)
        msg = f"Config validation failed for {location}: {details}"
        raise ConfigError(msg) from exc


def _resolve_explicit_payload(path: Path) -> tuple[Mapping[str, JsonValue], str]:
    if path.suffix == ".json":
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            msg = f"Config validation failed for {path}: JSON root must be an object."
            raise ConfigError(msg)
        return cast("Mapping[str, JsonValue]", raw), str(path)
    raw = _read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        nested = _extract_tool_config(raw)
        if nested is None:
            msg = f"Config validation failed for {path}: missing [tool.{TOOL_KEY}] section."
            raise ConfigError(msg)
        return nested, f"{path}:tool.{TOOL_KEY}"
    return raw, str(path)


def _extract_tool_config(raw: Mapping[str, JsonValue]) -> dict[str, JsonValue] | None:
    tool_section = raw.get("tool")
    if not isinstance(tool_section, dict):
        return None
    nested = tool_section.get(TOOL_KEY)
    if not isinstance(nested, dict):
        return None
    logger.debug("Using [tool.%s] configuration.", TOOL_KEY)
    return cast("dict[str, JsonValue]", nested)


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_WORKERS",
    "ConfigError",
    "decode_root_config",
    "default_config_contents",
    "find_in_parents",
    "flatten_config",
    "load_effective_config",
    "load_effective_config_with_sources",
]
