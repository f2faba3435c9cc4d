"""Partition commented code lines into contiguous alignment blocks."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from align.classifier import ClassifiedLine
from align.errors import InvariantViolation

MIN_ACTIONABLE_SIZE = 2


@dataclass(frozen=True)
class AlignmentBlock:
    """Consecutive line indices that all carry a trailing comment."""

    lines: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.lines:
            msg = "Alignment block must not be empty."
            raise InvariantViolation(msg)
        for prev, cur in zip(self.lines, self.lines[1:], strict=False):
            if cur != prev + 1:
                msg = f"Alignment block has a gap between lines {prev} and {cur}."
                raise InvariantViolation(msg)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def first(self) -> int:
        return self.lines[0]

    @property
    def last(self) -> int:
        return self.lines[-1]

    @property
    def actionable(self) -> bool:
        return len(self.lines) >= MIN_ACTIONABLE_SIZE


def group_blocks(lines: Sequence[ClassifiedLine]) -> tuple[AlignmentBlock, ...]:
    """Group classified lines in a single left-to-right scan.

    A commented code line extends the open block only when it directly
    follows the block's last member; any other line closes the block.

    Returns
    -------
    tuple[AlignmentBlock, ...]
        Every block, including single-line blocks, in document order.
    """
    blocks: list[AlignmentBlock] = []
    current: list[int] = []
    for line in lines:
        if line.is_commented_code and (not current or line.index == current[-1] + 1):
            current.append(line.index)
            continue
        if current:
            blocks.append(AlignmentBlock(tuple(current)))
            current = []
        if line.is_commented_code:
            current.append(line.index)
    if current:
        blocks.append(AlignmentBlock(tuple(current)))
    return tuple(blocks)


def actionable_blocks(blocks: Iterable[AlignmentBlock]) -> tuple[AlignmentBlock, ...]:
    """Drop single-line blocks, which have no peer to align with.

    Returns
    -------
    tuple[AlignmentBlock, ...]
        Blocks with at least two members.
    """
    return tuple(block for block in blocks if block.actionable)


__all__ = ["MIN_ACTIONABLE_SIZE", "AlignmentBlock", "actionable_blocks", "group_blocks"]
