"""Run the comment-alignment stages for one document."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from align.classifier import classify_lines
from align.document import Document
from align.errors import AlignError, InvariantViolation, ParseError
from align.grouper import actionable_blocks, group_blocks
from align.planner import DEFAULT_MIN_PADDING, plan_columns
from align.rewriter import apply_edits, plan_edits
from align.tree_adapter import parse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatOutcome:
    """Formatted bytes plus the out-of-band status of the pass.

    Parameters
    ----------
    output
        Formatted document, or the untouched input when ``error`` is set.
    error
        Failure that aborted the pass, if any.
    blocks_aligned
        Number of actionable blocks that were planned.
    lines_changed
        Number of lines whose gap was rewritten.
    """

    output: bytes
    error: AlignError | None = None
    blocks_aligned: int = 0
    lines_changed: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def changed(self) -> bool:
        return self.lines_changed > 0


def format_source(source: bytes, *, min_padding: int = DEFAULT_MIN_PADDING) -> FormatOutcome:
    """Align trailing comments and report failures out of band.

    Parameters
    ----------
    source
        Clojure source bytes.
    min_padding
        Minimum spaces between the longest code line of a block and its
        comment marker.

    Returns
    -------
    FormatOutcome
        Outcome whose ``output`` equals ``source`` whenever ``error`` is set.

    Raises
    ------
    ValueError
        Raised when ``min_padding`` is below one.
    """
    if min_padding < 1:
        msg = f"min_padding must be at least 1, got {min_padding}."
        raise ValueError(msg)
    t0 = time.perf_counter()
    try:
        tree = parse(source)
        document = Document(source)
        lines = classify_lines(document, tree)
        blocks = actionable_blocks(group_blocks(lines))
        plans = plan_columns(blocks, lines, min_padding=min_padding)
        edits = plan_edits(document, lines, plans)
        output = apply_edits(source, edits)
    except ParseError as exc:
        logger.warning("Skipping alignment: %s", exc)
        return FormatOutcome(output=source, error=exc)
    except InvariantViolation as exc:
        logger.exception("Alignment invariant violated; leaving source unchanged.")
        return FormatOutcome(output=source, error=exc)
    logger.debug(
        "Aligned %d blocks (%d lines changed) in %.2fms.",
        len(plans),
        len(edits),
        (time.perf_counter() - t0) * 1000.0,
    )
    return FormatOutcome(output=output, blocks_aligned=len(plans), lines_changed=len(edits))


def align_comments(source: bytes, *, min_padding: int = DEFAULT_MIN_PADDING) -> bytes:
    """Return ``source`` with trailing comment blocks aligned.

    Failures are logged and leave the input unchanged.

    Returns
    -------
    bytes
        Formatted source.
    """
    return format_source(source, min_padding=min_padding).output


__all__ = ["FormatOutcome", "align_comments", "format_source"]
