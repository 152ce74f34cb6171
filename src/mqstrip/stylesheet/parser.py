"""CSS parsing and serialization on top of tinycss2.

Comments and whitespace are kept as nodes so that an unmodified stylesheet
serializes back to its source text.
"""

from __future__ import annotations

from typing import Any, Iterable

import tinycss2

from mqstrip.model.node import MediaBlock, Rule, Stylesheet, StylesheetNode
from mqstrip.stylesheet.errors import ParseError

__all__ = ["parse_stylesheet", "serialize_nodes", "serialize_stylesheet"]


def _to_node(raw: Any, path: str) -> StylesheetNode:
    """Wrap a raw tinycss2 node in a Rule or MediaBlock."""
    if raw.type == "error":
        raise ParseError(
            raw.message, line=raw.source_line, column=raw.source_column, path=path
        )
    if raw.type == "at-rule" and raw.lower_at_keyword == "media":
        condition = tinycss2.serialize(raw.prelude).strip()
        return MediaBlock(
            condition=condition,
            children=_to_nodes(_parse_block(raw.content), path),
            source=raw,
        )
    return Rule(source=raw)


def _parse_block(content: list | None) -> list:
    if content is None:  # e.g. "@media print;"
        return []
    return tinycss2.parse_rule_list(content, skip_comments=False, skip_whitespace=False)


def _to_nodes(raw_nodes: Iterable[Any], path: str) -> tuple[StylesheetNode, ...]:
    return tuple(_to_node(raw, path) for raw in raw_nodes)


def parse_stylesheet(source: str, path: str = "") -> Stylesheet:
    """Parse CSS *source* into a Stylesheet.

    *path* is only used to label errors and the resulting stylesheet.
    Raises :class:`ParseError` on the first malformed top-level construct.
    """
    raw_nodes = tinycss2.parse_stylesheet(
        source, skip_comments=False, skip_whitespace=False
    )
    return Stylesheet(nodes=_to_nodes(raw_nodes, path), source_path=path)


def serialize_nodes(nodes: Iterable[StylesheetNode]) -> str:
    """Serialize a node sequence back to CSS text."""
    return tinycss2.serialize(node.source for node in nodes)


def serialize_stylesheet(stylesheet: Stylesheet) -> str:
    """Serialize a stylesheet back to CSS text."""
    return serialize_nodes(stylesheet.nodes)
