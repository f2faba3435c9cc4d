"""Tests for alignment block grouping."""

from __future__ import annotations

import pytest

from align.classifier import ClassifiedLine, CommentSpan, LineKind
from align.errors import InvariantViolation
from align.grouper import AlignmentBlock, actionable_blocks, group_blocks

_CODE = LineKind.CODE_ONLY
_ALONE = LineKind.COMMENT_ONLY
_TRAIL = LineKind.CODE_WITH_TRAILING_COMMENT
_SKIP = LineKind.SUPPRESSED


def _lines(*kinds: LineKind) -> list[ClassifiedLine]:
    lines = []
    for index, kind in enumerate(kinds):
        if kind is _TRAIL:
            comment = CommentSpan(line=index, start_byte=index * 10 + 5, end_byte=index * 10 + 8)
            lines.append(
                ClassifiedLine(
                    index=index,
                    kind=kind,
                    code_end_byte=index * 10 + 3,
                    code_end_col=3,
                    comment=comment,
                )
            )
        else:
            lines.append(ClassifiedLine(index=index, kind=kind))
    return lines


def test_group_blocks_splits_on_non_commented_lines() -> None:
    """Ensure every non-commented line closes the open block."""
    lines = _lines(_TRAIL, _TRAIL, _ALONE, _TRAIL, _CODE, _TRAIL, _TRAIL, _TRAIL, _SKIP, _TRAIL)
    blocks = group_blocks(lines)
    assert [block.lines for block in blocks] == [(0, 1), (3,), (5, 6, 7), (9,)]
    assert [block.lines for block in actionable_blocks(blocks)] == [(0, 1), (5, 6, 7)]


def test_group_blocks_empty_and_uncommented() -> None:
    """Ensure documents without trailing comments yield no blocks."""
    assert group_blocks([]) == ()
    assert group_blocks(_lines(_CODE, _ALONE, _SKIP)) == ()


def test_block_every_commented_line_belongs_to_one_block() -> None:
    """Ensure blocks partition the commented lines without overlap."""
    lines = _lines(_TRAIL, _CODE, _TRAIL, _TRAIL, _ALONE, _TRAIL)
    members = [index for block in group_blocks(lines) for index in block.lines]
    assert members == [line.index for line in lines if line.is_commented_code]


def test_alignment_block_properties() -> None:
    """Ensure block bounds and actionability follow its members."""
    block = AlignmentBlock((4, 5, 6))
    assert (block.first, block.last, len(block)) == (4, 6, 3)
    assert block.actionable
    assert not AlignmentBlock((2,)).actionable


@pytest.mark.parametrize("members", [(), (1, 3)])
def test_alignment_block_rejects_invalid_members(members: tuple[int, ...]) -> None:
    """Ensure empty or non-contiguous blocks cannot be built."""
    with pytest.raises(InvariantViolation):
        AlignmentBlock(members)
