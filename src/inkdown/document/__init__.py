"""Document core: fragment model, symbol wrapper and inline markdown resolver."""

from inkdown.document.delimiters import (
    DELIMITERS,
    STYLE_TAGS,
    InlineStyle,
    delimiter_for,
)
from inkdown.document.fragment import (
    ElementNode,
    Fragment,
    Point,
    Selection,
    TextNode,
    locate,
    parse_fragment,
    path_of,
)
from inkdown.document.normalizer import normalize
from inkdown.document.resolver import resolve
from inkdown.document.sanitize import strip_unsafe_markup
from inkdown.document.wrapper import insert_at_cursor, wrap, wrap_style

__all__ = [
    "DELIMITERS",
    "STYLE_TAGS",
    "ElementNode",
    "Fragment",
    "InlineStyle",
    "Point",
    "Selection",
    "TextNode",
    "delimiter_for",
    "insert_at_cursor",
    "locate",
    "normalize",
    "parse_fragment",
    "path_of",
    "resolve",
    "strip_unsafe_markup",
    "wrap",
    "wrap_style",
]
