"""Rewrite the code-to-comment gaps of planned blocks."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from align.classifier import ClassifiedLine
from align.document import Document
from align.errors import InvariantViolation
from align.planner import BlockPlan

_GAP_BYTES = frozenset(b" \t")


@dataclass(frozen=True)
class GapEdit:
    """Replacement of the whitespace gap on one line."""

    line: int
    start_byte: int
    end_byte: int
    spaces: int

    @property
    def replacement(self) -> bytes:
        return b" " * self.spaces


def plan_edits(
    document: Document,
    lines: Sequence[ClassifiedLine],
    plans: Sequence[BlockPlan],
) -> tuple[GapEdit, ...]:
    """Build one gap edit per member line, skipping lines already in place.

    Returns
    -------
    tuple[GapEdit, ...]
        Edits sorted by start byte.
    """
    by_index: Mapping[int, ClassifiedLine] = {line.index: line for line in lines}
    edits = [
        edit
        for plan in plans
        for edit in _block_edits(document, by_index, plan)
        if not _is_noop(document, edit)
    ]
    return tuple(sorted(edits, key=lambda edit: edit.start_byte))


def rewrite(
    document: Document,
    lines: Sequence[ClassifiedLine],
    plans: Sequence[BlockPlan],
) -> bytes:
    """Return the document bytes with every planned gap replaced.

    Bytes outside the edited gaps, line endings included, are copied as is.

    Returns
    -------
    bytes
        Rewritten document.
    """
    return apply_edits(document.data, plan_edits(document, lines, plans))


def apply_edits(data: bytes, edits: Sequence[GapEdit]) -> bytes:
    """Splice non-overlapping edits into ``data`` front to back.

    Returns
    -------
    bytes
        New byte sequence; ``data`` is not modified.

    Raises
    ------
    InvariantViolation
        Raised when edits overlap or are out of order.
    """
    chunks: list[bytes] = []
    cursor = 0
    for edit in edits:
        if edit.start_byte < cursor:
            msg = f"Edit on line {edit.line} overlaps a previous edit."
            raise InvariantViolation(msg)
        chunks.append(data[cursor : edit.start_byte])
        chunks.append(edit.replacement)
        cursor = edit.end_byte
    chunks.append(data[cursor:])
    return b"".join(chunks)


def _block_edits(
    document: Document,
    lines: Mapping[int, ClassifiedLine],
    plan: BlockPlan,
) -> Iterator[GapEdit]:
    for index in plan.block.lines:
        line = lines.get(index)
        if (
            line is None
            or line.comment is None
            or line.code_end_byte is None
            or line.code_end_col is None
        ):
            msg = f"Line {index} in block has no trailing comment."
            raise InvariantViolation(msg)
        start = line.code_end_byte
        end = line.comment.start_byte
        if any(byte not in _GAP_BYTES for byte in document.data[start:end]):
            msg = f"Gap on line {index} holds non-whitespace bytes."
            raise InvariantViolation(msg)
        spaces = plan.target_col - line.code_end_col
        if spaces < 1:
            msg = f"Line {index} would end up with {spaces} spaces before its comment."
            raise InvariantViolation(msg)
        yield GapEdit(line=index, start_byte=start, end_byte=end, spaces=spaces)


def _is_noop(document: Document, edit: GapEdit) -> bool:
    return document.data[edit.start_byte : edit.end_byte] == edit.replacement


__all__ = ["GapEdit", "apply_edits", "plan_edits", "rewrite"]
