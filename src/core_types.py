"""Shared type aliases and small typing helpers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Annotated

from msgspec import Meta

type JsonPrimitive = str | int | float | bool | None
type JsonValue = JsonPrimitive | Mapping[str, JsonValue] | Sequence[JsonValue]

PositiveInt = Annotated[int, Meta(gt=0)]

LanguageName = Annotated[
    str,
    Meta(
        pattern="^[a-z][a-z0-9_+-]{0,63}$",
        title="Language",
        description="Lower-case language identifier.",
    ),
]

__all__ = [
    "JsonPrimitive",
    "JsonValue",
    "LanguageName",
    "PositiveInt",
]
