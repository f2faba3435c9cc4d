"""Shared formatter contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from align.errors import AlignError
from align.planner import DEFAULT_MIN_PADDING

DEFAULT_PRINT_WIDTH = 80


class FormatterError(AlignError):
    """Raised for unknown formatters or unsupported languages."""


@dataclass(frozen=True)
class FormatOpts:
    """Options passed to every formatter in a chain.

    Parameters
    ----------
    language
        Language name of the document.
    print_width
        Preferred maximum line width.
    min_padding
        Minimum gap before an aligned trailing comment.
    """

    language: str
    print_width: int = DEFAULT_PRINT_WIDTH
    min_padding: int = DEFAULT_MIN_PADDING


class Formatter(Protocol):
    """Callable turning document bytes into formatted bytes."""

    def __call__(self, source: bytes, opts: FormatOpts) -> bytes:
        """Format ``source``, raising ``AlignError`` on failure."""
        ...


@dataclass(frozen=True)
class FormatResult:
    """Outcome of running a formatter chain on one document.

    ``output`` equals the input whenever ``error`` is set.
    """

    output: bytes
    changed: bool
    applied: tuple[str, ...] = ()
    error: AlignError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


__all__ = [
    "DEFAULT_PRINT_WIDTH",
    "FormatOpts",
    "FormatResult",
    "Formatter",
    "FormatterError",
]
