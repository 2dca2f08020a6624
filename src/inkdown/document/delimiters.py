"""Inline style delimiters and the tags they resolve to."""

from __future__ import annotations

from enum import StrEnum


class InlineStyle(StrEnum):
    """Toolbar formatting actions that map onto a delimiter."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKE = "strike"


# Symmetric markers: the open marker equals the close marker
DELIMITERS: dict[InlineStyle, str] = {
    InlineStyle.BOLD: "*",
    InlineStyle.ITALIC: "_",
    InlineStyle.UNDERLINE: "__",
    InlineStyle.STRIKE: "~",
}

STYLE_TAGS: dict[InlineStyle, str] = {
    InlineStyle.BOLD: "b",
    InlineStyle.ITALIC: "i",
    InlineStyle.UNDERLINE: "u",
    InlineStyle.STRIKE: "s",
}


def delimiter_for(style: InlineStyle | str) -> str:
    """Return the delimiter for a style name.

    Raises:
        ValueError: If *style* is not a known inline style.
    """
    return DELIMITERS[InlineStyle(style)]
