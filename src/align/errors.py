"""Error taxonomy for the comment-alignment pass."""

from __future__ import annotations


class AlignError(Exception):
    """Base class for alignment failures."""


class ParseError(AlignError):
    """Raised when the grammar cannot build a usable syntax tree."""


class InvariantViolation(AlignError):
    """Raised when a stage observes a structurally impossible state."""


__all__ = ["AlignError", "InvariantViolation", "ParseError"]
