"""Stylesheet model: Rule and MediaBlock node variants, and Stylesheet."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Union

# tinycss2 node types that carry no rule of their own.
_TRIVIA_TYPES = frozenset({"whitespace", "comment"})


class NodeKind(Enum):
    """Discriminant for top-level stylesheet nodes."""

    RULE = "rule"
    MEDIA = "media"


@dataclass(frozen=True)
class Rule:
    """Any top-level node that is not an ``@media`` block.

    Selector rules, other at-rules, comments and whitespace all land here.
    ``source`` is the raw tinycss2 node, kept for lossless serialization.
    """

    source: Any = None

    @property
    def kind(self) -> NodeKind:
        return NodeKind.RULE

    @property
    def is_trivia(self) -> bool:
        """True for whitespace and comments."""
        return getattr(self.source, "type", None) in _TRIVIA_TYPES


@dataclass(frozen=True)
class MediaBlock:
    """An ``@media`` block.

    Attributes:
        condition: Raw media query text, e.g. ``"(min-width: 400px)"``.
        children: Nested nodes parsed from the block body, in source order.
        source: The raw tinycss2 at-rule.
    """

    condition: str
    children: tuple[StylesheetNode, ...] = ()
    source: Any = None

    @property
    def kind(self) -> NodeKind:
        return NodeKind.MEDIA

    @property
    def is_trivia(self) -> bool:
        return False


StylesheetNode = Union[Rule, MediaBlock]


def count_rules(nodes: Iterable[StylesheetNode]) -> int:
    """Count the nodes that are real rules (whitespace and comments excluded)."""
    return sum(1 for node in nodes if not node.is_trivia)


@dataclass(frozen=True)
class Stylesheet:
    """An ordered sequence of top-level nodes parsed from one CSS source."""

    nodes: tuple[StylesheetNode, ...] = ()
    source_path: str = field(default="", compare=False)

    def with_nodes(self, nodes: Iterable[StylesheetNode]) -> Stylesheet:
        """Return a copy of this stylesheet holding *nodes* instead."""
        return Stylesheet(nodes=tuple(nodes), source_path=self.source_path)

    @property
    def media_blocks(self) -> list[MediaBlock]:
        return [n for n in self.nodes if isinstance(n, MediaBlock)]

    @property
    def rule_count(self) -> int:
        return count_rules(self.nodes)
