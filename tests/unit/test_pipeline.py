"""End-to-end tests for the comment-alignment pass."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from align import (
    DEFAULT_MIN_PADDING,
    InvariantViolation,
    ParseError,
    align_comments,
    format_source,
)

SAMPLE = b"""(ns demo.core) ; namespace
(defn add ; adds
  [a b] ; args
  (+ a b)) ; body

;; helpers
(def x 1)
(let [a 1 ;one
      bb 2] ;two
  a)
"""

SAMPLE_ALIGNED = b"""(ns demo.core) ; namespace
(defn add      ; adds
  [a b]        ; args
  (+ a b))     ; body

;; helpers
(def x 1)
(let [a 1   ;one
      bb 2] ;two
  a)
"""


def _marker_columns(output: bytes) -> list[int]:
    columns = []
    for line in output.decode("utf-8").splitlines():
        if ";" in line and not line.lstrip().startswith(";"):
            columns.append(line.index(";"))
    return columns


def test_two_adjacent_lines_align() -> None:
    """Ensure two commented lines share the column after the longest code."""
    outcome = format_source(b"(a 1) ;c1\n(bb 2) ;c2\n")
    assert outcome.output == b"(a 1)  ;c1\n(bb 2) ;c2\n"
    assert outcome.ok
    assert outcome.changed
    assert (outcome.blocks_aligned, outcome.lines_changed) == (1, 1)


def test_single_commented_line_is_unchanged() -> None:
    """Ensure a lone trailing comment has no peer to align with."""
    source = b"(a 1)      ;c1\n(bb 2)\n"
    outcome = format_source(source)
    assert outcome.output == source
    assert not outcome.changed


def test_standalone_comment_splits_blocks() -> None:
    """Ensure a standalone comment separates two independently aligned blocks."""
    source = b"(a 1) ;c1\n(bbb 2) ;c2\n;; standalone\n(c) ;c3\n(dddd 4) ;c4\n"
    expected = b"(a 1)   ;c1\n(bbb 2) ;c2\n;; standalone\n(c)      ;c3\n(dddd 4) ;c4\n"
    assert align_comments(source) == expected


def test_semicolon_in_multiline_string_is_ignored() -> None:
    """Ensure string contents are untouched while neighbours still align."""
    source = b'(def s "x\n;not a comment\ny")    ;c0\n(a 1) ;c1\n(bb 2) ;c2\n'
    expected = b'(def s "x\n;not a comment\ny")    ;c0\n(a 1)  ;c1\n(bb 2) ;c2\n'
    assert align_comments(source) == expected


def test_unparseable_input_is_returned_unchanged() -> None:
    """Ensure malformed input comes back byte-identical with an error."""
    source = b"(defn f [x] ;c\n  (+ x 1) ;d\n"
    outcome = format_source(source)
    assert outcome.output == source
    assert isinstance(outcome.error, ParseError)
    assert not outcome.ok
    assert not outcome.changed


def test_invariant_violation_returns_input(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure an internal defect never leaks partial output."""

    def _broken(*_args: object, **_kwargs: object) -> tuple[()]:
        msg = "broken plan"
        raise InvariantViolation(msg)

    monkeypatch.setattr("align.pipeline.plan_columns", _broken)
    source = b"(a) ;x\n(bbb) ;y\n"
    outcome = format_source(source)
    assert outcome.output == source
    assert isinstance(outcome.error, InvariantViolation)


def test_nested_forms_and_standalone_comments() -> None:
    """Ensure a realistic namespace aligns per block and keeps standalone comments."""
    assert align_comments(SAMPLE) == SAMPLE_ALIGNED


def test_formatting_is_idempotent() -> None:
    """Ensure a second pass makes no further changes."""
    once = align_comments(SAMPLE)
    outcome = format_source(once)
    assert outcome.output == once
    assert outcome.lines_changed == 0


def test_default_padding_is_one() -> None:
    """Ensure the default gap after the longest code line is one space."""
    assert DEFAULT_MIN_PADDING == 1
    output = align_comments(b"(a) ;x\n(bbbbb) ;y\n")
    assert _marker_columns(output) == [8, 8]


def test_min_padding_widens_gap() -> None:
    """Ensure the marker sits at the longest code end plus the padding."""
    output = align_comments(b"(a) ;x\n(bbbbb) ;y\n", min_padding=4)
    assert output == b"(a)        ;x\n(bbbbb)    ;y\n"


def test_min_padding_below_one_is_rejected() -> None:
    """Ensure a padding below one is refused."""
    with pytest.raises(ValueError, match="min_padding"):
        format_source(b"(a)\n", min_padding=0)


def test_blank_line_breaks_block() -> None:
    """Ensure blocks only span consecutive lines."""
    source = b"(a) ;x\n\n(bbbbb) ;y\n"
    assert align_comments(source) == source


def test_crlf_line_endings_are_preserved() -> None:
    """Ensure CRLF endings survive and do not count as code."""
    source = b"(a 1) ;c1\r\n(bb 2) ;c2\r\n"
    assert align_comments(source) == b"(a 1)  ;c1\r\n(bb 2) ;c2\r\n"


def test_columns_count_characters_not_bytes() -> None:
    """Ensure multi-byte characters count as one column."""
    source = "(é) ;a\n(bb) ;b\n".encode()
    assert align_comments(source) == "(é)  ;a\n(bb) ;b\n".encode()


def test_comment_text_and_standalone_lines_are_preserved() -> None:
    """Ensure only the gaps change and standalone comments keep their indentation."""
    source = b"  ;; note\n(a) ;x  trailing  \n(bbb)   ;y\n    ; indented\n"
    output = align_comments(source)
    assert output == b"  ;; note\n(a)   ;x  trailing  \n(bbb) ;y\n    ; indented\n"
    assert output.replace(b" ", b"") == source.replace(b" ", b"")


def test_empty_and_comment_only_documents() -> None:
    """Ensure documents without trailing comments pass through."""
    assert align_comments(b"") == b""
    source = b";; a\n;; b\n"
    assert align_comments(source) == source


def test_concurrent_calls_are_independent() -> None:
    """Ensure simultaneous passes over different documents do not interfere."""
    sources = [SAMPLE, b"(a 1) ;c1\n(bb 2) ;c2\n", b"(x) ; one\n", SAMPLE_ALIGNED] * 8
    expected = [align_comments(source) for source in sources]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(align_comments, sources))
    assert results == expected
