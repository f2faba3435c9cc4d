"""Classify physical lines by their comment role."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from align.errors import InvariantViolation

if TYPE_CHECKING:
    from align.document import Document, SourceLine
    from align.tree_adapter import NodeSpan, TreeView

_GAP_BYTES = b" \t"


class LineKind(StrEnum):
    """Exactly one kind per physical line."""

    CODE_ONLY = "code_only"
    COMMENT_ONLY = "comment_only"
    CODE_WITH_TRAILING_COMMENT = "code_with_trailing_comment"
    SUPPRESSED = "suppressed"


@dataclass(frozen=True)
class CommentSpan:
    """A trailing line comment located on one line."""

    line: int
    start_byte: int
    end_byte: int


@dataclass(frozen=True)
class ClassifiedLine:
    """Classification of one physical line.

    Parameters
    ----------
    index
        Zero-based line index.
    kind
        Line classification.
    code_end_byte
        Offset just past the last code byte before the comment marker.
    code_end_col
        Column immediately after the last code character before the marker.
    comment
        Trailing comment span, set only for commented code lines.
    """

    index: int
    kind: LineKind
    code_end_byte: int | None = None
    code_end_col: int | None = None
    comment: CommentSpan | None = None

    @property
    def is_commented_code(self) -> bool:
        return self.kind is LineKind.CODE_WITH_TRAILING_COMMENT


def classify_lines(document: Document, tree: TreeView) -> tuple[ClassifiedLine, ...]:
    """Classify every physical line of ``document``.

    Lines touched by a multi-line string or docstring are suppressed: the
    line break ending the previous line, or the one ending this line, sits
    inside a string span.

    Returns
    -------
    tuple[ClassifiedLine, ...]
        One entry per line, in line order.
    """
    first_comments = _first_comment_per_line(document, tree)
    classified: list[ClassifiedLine] = []
    previous: SourceLine | None = None
    for line in document.lines:
        if _touches_string(line, previous, tree):
            classified.append(ClassifiedLine(index=line.index, kind=LineKind.SUPPRESSED))
        else:
            comment = first_comments.get(line.index)
            classified.append(_classify(document, line, comment))
        previous = line
    return tuple(classified)


def _first_comment_per_line(document: Document, tree: TreeView) -> dict[int, NodeSpan]:
    found: dict[int, NodeSpan] = {}
    for node in tree.comment_nodes():
        line = document.line_at(node.start_byte)
        if line is None or node.start_byte >= line.content_end:
            msg = f"Comment at byte {node.start_byte} does not start on any line."
            raise InvariantViolation(msg)
        # Only the first comment node on a line is considered.
        found.setdefault(line.index, node)
    return found


def _touches_string(line: SourceLine, previous: SourceLine | None, tree: TreeView) -> bool:
    breaks = (
        previous.break_byte if previous is not None else None,
        line.break_byte,
    )
    return any(offset is not None and tree.is_inside_string(offset) for offset in breaks)


def _classify(document: Document, line: SourceLine, comment: NodeSpan | None) -> ClassifiedLine:
    if comment is None:
        return ClassifiedLine(index=line.index, kind=LineKind.CODE_ONLY)
    before = document.data[line.start_byte : comment.start_byte]
    code = before.rstrip(_GAP_BYTES)
    if not code.strip():
        return ClassifiedLine(index=line.index, kind=LineKind.COMMENT_ONLY)
    code_end_byte = line.start_byte + len(code)
    span = CommentSpan(
        line=line.index,
        start_byte=comment.start_byte,
        end_byte=min(comment.end_byte, line.content_end),
    )
    return ClassifiedLine(
        index=line.index,
        kind=LineKind.CODE_WITH_TRAILING_COMMENT,
        code_end_byte=code_end_byte,
        code_end_col=document.column(line, code_end_byte),
        comment=span,
    )


__all__ = ["ClassifiedLine", "CommentSpan", "LineKind", "classify_lines"]
