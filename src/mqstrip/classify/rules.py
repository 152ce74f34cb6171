"""Rule classification: decide which output each top-level node belongs to.

A media block "matches" a width set when its raw condition text contains
``"<width>px"`` for at least one width. The test is a literal substring
check, so width ``"200"`` also matches ``"(min-width: 1200px)"`` and widths
written in ``em``/``rem`` never match.
"""

from __future__ import annotations

from typing import Iterable

from mqstrip.model.node import MediaBlock, StylesheetNode

__all__ = [
    "condition_matches",
    "is_extract_candidate",
    "is_matching_media",
    "is_not_extract_candidate",
    "is_plain_or_non_matching_media",
    "matching_media",
    "strip_and_extract",
    "strip_nodes",
    "stripped_content",
]


def condition_matches(widths: Iterable[str], condition: str) -> bool:
    """True if *condition* contains ``"<width>px"`` for any of *widths*."""
    return any(f"{width}px" in condition for width in widths)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_matching_media(widths: Iterable[str], node: StylesheetNode) -> bool:
    """Media block whose condition matches *widths*: goes to the combined file."""
    return isinstance(node, MediaBlock) and condition_matches(widths, node.condition)


def is_plain_or_non_matching_media(widths: Iterable[str], node: StylesheetNode) -> bool:
    """Anything else: stays in the stripped file."""
    return not is_matching_media(widths, node)


def is_extract_candidate(extract_widths: Iterable[str], node: StylesheetNode) -> bool:
    """Media block whose children get promoted to top level in the stripped file."""
    return is_matching_media(extract_widths, node)


def is_not_extract_candidate(extract_widths: Iterable[str], node: StylesheetNode) -> bool:
    return not is_extract_candidate(extract_widths, node)


# ---------------------------------------------------------------------------
# Partitions
# ---------------------------------------------------------------------------


def matching_media(
    widths: Iterable[str], nodes: Iterable[StylesheetNode]
) -> list[StylesheetNode]:
    """Nodes that belong in the combined media-query file, in source order."""
    widths = tuple(widths)
    return [node for node in nodes if is_matching_media(widths, node)]


def strip_nodes(
    widths: Iterable[str], nodes: Iterable[StylesheetNode]
) -> list[StylesheetNode]:
    """Nodes left over once matching media blocks are removed."""
    widths = tuple(widths)
    return [node for node in nodes if is_plain_or_non_matching_media(widths, node)]


def strip_and_extract(
    widths: Iterable[str],
    extract_widths: Iterable[str],
    nodes: Iterable[StylesheetNode],
) -> list[StylesheetNode]:
    """Strip *widths*, then unwrap media blocks matching *extract_widths*.

    The children of every extract candidate are moved, one level flattened,
    to the end of the result; the wrapping blocks themselves are dropped.
    """
    extract_widths = tuple(extract_widths)
    stripped = strip_nodes(widths, nodes)

    extracted: list[StylesheetNode] = []
    for node in stripped:
        if is_extract_candidate(extract_widths, node):
            extracted.extend(node.children)

    kept = [node for node in stripped if is_not_extract_candidate(extract_widths, node)]
    return kept + extracted


def stripped_content(
    widths: Iterable[str],
    extract_widths: Iterable[str],
    nodes: Iterable[StylesheetNode],
) -> list[StylesheetNode]:
    """Final node sequence for a stripped file."""
    extract_widths = tuple(extract_widths)
    if extract_widths:
        return strip_and_extract(widths, extract_widths, nodes)
    return strip_nodes(widths, nodes)
