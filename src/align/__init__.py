"""Trailing comment alignment for Clojure source."""

from align.errors import AlignError, InvariantViolation, ParseError
from align.pipeline import FormatOutcome, align_comments, format_source
from align.planner import DEFAULT_MIN_PADDING

__all__ = [
    "DEFAULT_MIN_PADDING",
    "AlignError",
    "FormatOutcome",
    "InvariantViolation",
    "ParseError",
    "align_comments",
    "format_source",
]
