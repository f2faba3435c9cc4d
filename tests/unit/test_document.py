"""Tests for the document line table."""

from __future__ import annotations

import pytest

from align.document import Document


def test_document_splits_on_line_feed() -> None:
    """Ensure lines split on LF with CR excluded from the content."""
    document = Document(b"(a)\n(bb)\r\n(c)")
    assert len(document) == 3
    first, second, third = document.lines
    assert (first.start_byte, first.content_end, first.end_byte) == (0, 3, 4)
    assert document.content(second) == b"(bb)"
    assert (second.content_end, second.end_byte) == (8, 10)
    assert document.content(third) == b"(c)"
    assert not third.has_line_break
    assert third.break_byte is None
    assert second.break_byte == 9


def test_document_empty_has_no_lines() -> None:
    """Ensure an empty document has no lines and no offsets."""
    document = Document(b"")
    assert document.lines == ()
    assert document.line_at(0) is None


def test_line_at_maps_offsets_to_lines() -> None:
    """Ensure offsets resolve to the line holding them, line breaks included."""
    document = Document(b"ab\ncd\n")
    assert document.line_at(0).index == 0
    assert document.line_at(2).index == 0
    assert document.line_at(3).index == 1
    assert document.line_at(6) is None
    assert document.line_at(-1) is None


def test_column_counts_code_points() -> None:
    """Ensure columns count decoded characters rather than bytes."""
    data = "(é ü) ;x".encode()
    document = Document(data)
    line = document.lines[0]
    assert document.column(line, data.index(b";")) == 6
    assert document.column(line, line.start_byte) == 0


def test_column_rejects_offsets_outside_line() -> None:
    """Ensure column lookups outside the line content raise."""
    document = Document(b"ab\ncd\n")
    with pytest.raises(ValueError, match="outside line 0"):
        document.column(document.lines[0], 4)
