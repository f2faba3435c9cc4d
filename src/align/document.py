"""Immutable source document with a physical line table."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SourceLine:
    """One physical line of a document.

    Parameters
    ----------
    index
        Zero-based line index.
    start_byte
        Offset of the first byte of the line.
    content_end
        Offset just past the last content byte (before the line ending).
    end_byte
        Offset just past the line ending, if any.
    """

    index: int
    start_byte: int
    content_end: int
    end_byte: int

    @property
    def has_line_break(self) -> bool:
        return self.end_byte > self.content_end

    @property
    def break_byte(self) -> int | None:
        """Return the offset of the ``\\n`` terminating this line."""
        if not self.has_line_break:
            return None
        return self.end_byte - 1


@dataclass(frozen=True)
class Document:
    """Source bytes addressable by offset and by ``(line, column)``.

    Columns are counted in Unicode code points of the decoded line prefix.
    """

    data: bytes
    lines: tuple[SourceLine, ...] = field(init=False)
    _starts: tuple[int, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        lines = tuple(_split_lines(self.data))
        object.__setattr__(self, "lines", lines)
        object.__setattr__(self, "_starts", tuple(line.start_byte for line in lines))

    def __len__(self) -> int:
        return len(self.lines)

    def line_at(self, offset: int) -> SourceLine | None:
        """Return the line holding ``offset``, or ``None`` when out of range.

        Returns
        -------
        SourceLine | None
            Line whose byte range contains the offset.
        """
        if offset < 0 or offset >= len(self.data) or not self.lines:
            return None
        return self.lines[bisect_right(self._starts, offset) - 1]

    def content(self, line: SourceLine) -> bytes:
        return self.data[line.start_byte : line.content_end]

    def column(self, line: SourceLine, offset: int) -> int:
        """Return the code-point column of ``offset`` within ``line``.

        Returns
        -------
        int
            Zero-based column.

        Raises
        ------
        ValueError
            Raised when the offset lies outside the line content.
        """
        if not line.start_byte <= offset <= line.content_end:
            msg = f"Offset {offset} is outside line {line.index}."
            raise ValueError(msg)
        prefix = self.data[line.start_byte : offset]
        return len(prefix.decode("utf-8", errors="replace"))


def _split_lines(data: bytes) -> list[SourceLine]:
    # Only LF breaks a row, matching tree-sitter points.
    lines: list[SourceLine] = []
    offset = 0
    size = len(data)
    while offset < size:
        newline = data.find(b"\n", offset)
        end = size if newline == -1 else newline + 1
        content_end = end if newline == -1 else newline
        if content_end > offset and data[content_end - 1] == 0x0D:
            content_end -= 1
        lines.append(
            SourceLine(index=len(lines), start_byte=offset, content_end=content_end, end_byte=end)
        )
        offset = end
    return lines


__all__ = ["Document", "SourceLine"]
