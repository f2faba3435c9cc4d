"""Narrow read-only view over a tree-sitter Clojure syntax tree."""

from __future__ import annotations

import logging
from bisect import bisect_right
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from functools import cache, cached_property
from typing import Protocol

from tree_sitter import (
    LANGUAGE_VERSION,
    MIN_COMPATIBLE_LANGUAGE_VERSION,
    Language,
    Node,
    Parser,
    Query,
    QueryCursor,
)
from tree_sitter_language_pack import get_language

from align.errors import ParseError

logger = logging.getLogger(__name__)

GRAMMAR_NAME = "clojure"
COMMENT_QUERY = "(comment) @comment"
STRING_NODE_KINDS: frozenset[str] = frozenset({"str_lit", "regex_lit"})


@dataclass(frozen=True)
class NodeSpan:
    """Kind, byte span and points of a syntax node."""

    kind: str
    start_byte: int
    end_byte: int
    start_row: int
    start_col: int
    end_row: int
    end_col: int

    @classmethod
    def from_node(cls, node: Node) -> NodeSpan:
        return cls(
            kind=node.type,
            start_byte=int(node.start_byte),
            end_byte=int(node.end_byte),
            start_row=int(node.start_point.row),
            start_col=int(node.start_point.column),
            end_row=int(node.end_point.row),
            end_col=int(node.end_point.column),
        )


class TreeView(Protocol):
    """Capabilities the alignment stages need from a syntax tree."""

    def comment_nodes(self) -> Iterator[NodeSpan]:
        """Yield comment nodes in document order."""
        ...

    def is_inside_string(self, offset: int) -> bool:
        """Return whether ``offset`` lies inside a string or docstring."""
        ...


class SyntaxTree:
    """Tree-sitter backed ``TreeView`` for one formatting pass.

    Parameters
    ----------
    root
        Root node of a successfully parsed tree.
    query
        Compiled comment query for the tree's language.
    """

    def __init__(self, root: Node, query: Query) -> None:
        self._root = root
        self._query = query

    def comment_nodes(self) -> Iterator[NodeSpan]:
        """Yield comment nodes sorted by start byte.

        Yields
        ------
        NodeSpan
            Span of each comment node.
        """
        captures = QueryCursor(self._query).captures(self._root)
        nodes = captures.get("comment", [])
        for node in sorted(nodes, key=lambda item: (item.start_byte, item.end_byte)):
            yield NodeSpan.from_node(node)

    def string_spans(self) -> tuple[tuple[int, int], ...]:
        """Return the merged byte spans of string-like nodes.

        Returns
        -------
        tuple[tuple[int, int], ...]
            Disjoint ``(start, end)`` spans in ascending order.
        """
        starts, ends = self._string_index
        return tuple(zip(starts, ends, strict=True))

    def is_inside_string(self, offset: int) -> bool:
        starts, ends = self._string_index
        idx = bisect_right(starts, offset) - 1
        return idx >= 0 and offset < ends[idx]

    @cached_property
    def _string_index(self) -> tuple[tuple[int, ...], tuple[int, ...]]:
        # Built on first use; parallel start and end tuples for bisect.
        spans = [
            (int(node.start_byte), int(node.end_byte))
            for node in _iter_nodes(self._root)
            if node.type in STRING_NODE_KINDS
        ]
        merged = _merge_spans(spans)
        return tuple(start for start, _ in merged), tuple(end for _, end in merged)


def parse(source: bytes) -> SyntaxTree:
    """Parse Clojure source into a ``SyntaxTree``.

    Parameters
    ----------
    source
        Raw document bytes, expected to be UTF-8.

    Returns
    -------
    SyntaxTree
        Read-only tree for a single formatting pass.

    Raises
    ------
    ParseError
        Raised when the input is not UTF-8, the grammar cannot be loaded, or
        the tree contains error or missing nodes.
    """
    try:
        source.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Source is not valid UTF-8: {exc.reason} at byte {exc.start}."
        raise ParseError(msg) from exc
    language, query = _grammar()
    tree = Parser(language).parse(source)
    if tree is None:
        msg = "Parser returned no tree."
        raise ParseError(msg)
    root = tree.root_node
    if root.has_error:
        location = _first_error_location(root)
        msg = f"Source contains syntax errors near {location}."
        raise ParseError(msg)
    return SyntaxTree(root, query)


@cache
def _grammar() -> tuple[Language, Query]:
    try:
        language = get_language(GRAMMAR_NAME)
    except (LookupError, ValueError) as exc:
        msg = f"Grammar {GRAMMAR_NAME!r} is unavailable: {exc}"
        raise ParseError(msg) from exc
    _assert_language_abi(language)
    logger.debug("Loaded %s grammar (ABI %s).", GRAMMAR_NAME, language.abi_version)
    return language, Query(language, COMMENT_QUERY)


def _assert_language_abi(lang: Language) -> None:
    if not (MIN_COMPATIBLE_LANGUAGE_VERSION <= lang.abi_version <= LANGUAGE_VERSION):
        msg = f"Tree-sitter ABI mismatch: {lang.abi_version}"
        raise ParseError(msg)


def _first_error_location(root: Node) -> str:
    for node in _iter_nodes(root):
        if node.is_error or node.is_missing:
            return f"line {node.start_point.row + 1}, column {node.start_point.column + 1}"
    return "an unknown location"


def _iter_nodes(root: Node) -> Iterator[Node]:
    cursor = root.walk()
    while True:
        node = cursor.node
        if node is not None:
            yield node
        if cursor.goto_first_child():
            continue
        if cursor.goto_next_sibling():
            continue
        while True:
            if not cursor.goto_parent():
                return
            if cursor.goto_next_sibling():
                break


def _merge_spans(spans: Sequence[tuple[int, int]]) -> list[tuple[int, int]]:
    merged: list[tuple[int, int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            prev_start, prev_end = merged[-1]
            merged[-1] = (prev_start, max(prev_end, end))
            continue
        merged.append((start, end))
    return merged


__all__ = [
    "COMMENT_QUERY",
    "GRAMMAR_NAME",
    "STRING_NODE_KINDS",
    "NodeSpan",
    "SyntaxTree",
    "TreeView",
    "parse",
]
