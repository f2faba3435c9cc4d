"""Compute the target comment column of each alignment block."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from align.classifier import ClassifiedLine
from align.errors import InvariantViolation
from align.grouper import AlignmentBlock

DEFAULT_MIN_PADDING = 1


@dataclass(frozen=True)
class BlockPlan:
    """Target column chosen for one actionable block."""

    block: AlignmentBlock
    target_col: int


def plan_columns(
    blocks: Sequence[AlignmentBlock],
    lines: Sequence[ClassifiedLine],
    *,
    min_padding: int = DEFAULT_MIN_PADDING,
) -> tuple[BlockPlan, ...]:
    """Plan ``max(code_end_col) + min_padding`` for every block.

    Parameters
    ----------
    blocks
        Actionable alignment blocks.
    lines
        Classified lines indexed by line number.
    min_padding
        Spaces between the longest code line and its comment marker.

    Returns
    -------
    tuple[BlockPlan, ...]
        One plan per block, in input order.

    Raises
    ------
    ValueError
        Raised when ``min_padding`` is below one.
    """
    if min_padding < 1:
        msg = f"min_padding must be at least 1, got {min_padding}."
        raise ValueError(msg)
    by_index: Mapping[int, ClassifiedLine] = {line.index: line for line in lines}
    seen: set[int] = set()
    for block in blocks:
        if seen.intersection(block.lines):
            msg = f"Alignment blocks overlap at line {block.first}."
            raise InvariantViolation(msg)
        seen.update(block.lines)
    return tuple(_plan_block(block, by_index, min_padding) for block in blocks)


def _plan_block(
    block: AlignmentBlock,
    lines: Mapping[int, ClassifiedLine],
    min_padding: int,
) -> BlockPlan:
    ends = [_code_end_col(lines, index) for index in block.lines]
    target = max(ends) + min_padding
    if any(target < end + 1 for end in ends):
        msg = f"Target column {target} leaves no gap in block starting at line {block.first}."
        raise InvariantViolation(msg)
    return BlockPlan(block=block, target_col=target)


def _code_end_col(lines: Mapping[int, ClassifiedLine], index: int) -> int:
    line = lines.get(index)
    if line is None or not line.is_commented_code or line.code_end_col is None:
        msg = f"Line {index} is not a commented code line."
        raise InvariantViolation(msg)
    return line.code_end_col


__all__ = ["DEFAULT_MIN_PADDING", "BlockPlan", "plan_columns"]
