"""Typed configuration models for cljalign."""

from __future__ import annotations

from core_types import LanguageName, PositiveInt
from serde_msgspec import StructBaseStrict


class AlignConfig(StructBaseStrict, frozen=True):
    """Comment-alignment configuration values."""

    min_padding: PositiveInt | None = None


class FormatConfig(StructBaseStrict, frozen=True):
    """Formatting run configuration values."""

    print_width: PositiveInt | None = None
    workers: PositiveInt | None = None


class ProfileConfig(StructBaseStrict, frozen=True):
    """Named overrides selected with ``--profile``.

    ``languages`` entries replace the chain of the languages they name;
    every other language keeps its chain.
    """

    align: AlignConfig | None = None
    format: FormatConfig | None = None
    languages: dict[LanguageName, list[str]] | None = None


class RootConfigSpec(StructBaseStrict, frozen=True):
    """Root configuration payload for cljalign.toml / [tool.cljalign]."""

    align: AlignConfig | None = None
    format: FormatConfig | None = None
    languages: dict[LanguageName, list[str]] | None = None
    profiles: dict[str, ProfileConfig] | None = None


__all__ = ["AlignConfig", "FormatConfig", "ProfileConfig", "RootConfigSpec"]
