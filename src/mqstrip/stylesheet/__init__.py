from mqstrip.stylesheet.errors import ParseError
from mqstrip.stylesheet.parser import (
    parse_stylesheet,
    serialize_nodes,
    serialize_stylesheet,
)

__all__ = ["ParseError", "parse_stylesheet", "serialize_nodes", "serialize_stylesheet"]
