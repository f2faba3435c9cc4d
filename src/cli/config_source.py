"""Effective configuration with per-key provenance."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from core_types import JsonValue


class ConfigSource(StrEnum):
    """Where an effective value came from, lowest precedence first."""

    DEFAULT = "default"
    PYPROJECT = "pyproject"
    CONFIG_FILE = "config_file"
    PROFILE = "profile"


@dataclass(frozen=True)
class ConfigValue:
    """One flat configuration value and the file or profile that set it."""

    key: str
    value: JsonValue
    source: ConfigSource
    location: str | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"value": self.value, "source": str(self.source)}
        if self.location:
            payload["location"] = self.location
        return payload


@dataclass(frozen=True)
class EffectiveConfig:
    """Flat ``<section>_<key>`` values after files, defaults and profiles.

    Parameters
    ----------
    values
        Resolved values keyed by flat name.
    profiles
        Names of the profiles applied, in order.
    """

    values: Mapping[str, ConfigValue] = field(default_factory=dict)
    profiles: tuple[str, ...] = ()

    def get(self, key: str) -> JsonValue:
        entry = self.values.get(key)
        return None if entry is None else entry.value

    def source_of(self, key: str) -> ConfigSource | None:
        entry = self.values.get(key)
        return None if entry is None else entry.source

    def to_flat_dict(self) -> dict[str, JsonValue]:
        return {key: entry.value for key, entry in self.values.items()}

    def to_display_dict(self) -> dict[str, dict[str, object]]:
        """Render every value with its provenance for ``config show``.

        Returns
        -------
        dict[str, dict[str, object]]
            Mapping of flat key to value, source and optional location.
        """
        return {key: entry.to_dict() for key, entry in self.values.items()}


__all__ = ["ConfigSource", "ConfigValue", "EffectiveConfig"]
