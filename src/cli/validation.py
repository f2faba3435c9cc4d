"""Validation helpers for CLI configuration payloads."""

from __future__ import annotations

from collections.abc import Mapping

from core_types import JsonValue
from formatters.registry import formatter_names


def validate_config_contents(config: Mapping[str, JsonValue]) -> None:
    """Validate that every configured formatter name is registered.

    Raises
    ------
    ValueError
        Raised when a language refers to an unknown formatter.
    """
    languages = config.get("languages") or {}
    if not isinstance(languages, Mapping):
        return
    known = set(formatter_names())
    for language, chain in languages.items():
        if not isinstance(chain, list):
            continue
        for name in chain:
            if name not in known:
                msg = f"Config error: languages.{language} refers to unknown formatter {name!r}."
                raise ValueError(msg)


__all__ = ["validate_config_contents"]
