"""Data model for parsed stylesheets and breakpoint widths."""

from mqstrip.model.node import (
    MediaBlock,
    NodeKind,
    Rule,
    Stylesheet,
    StylesheetNode,
    count_rules,
)
from mqstrip.model.widths import EMPTY_WIDTHS, WidthSet, to_width_set

__all__ = [
    "EMPTY_WIDTHS",
    "MediaBlock",
    "NodeKind",
    "Rule",
    "Stylesheet",
    "StylesheetNode",
    "WidthSet",
    "count_rules",
    "to_width_set",
]
