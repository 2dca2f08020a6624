"""Inline markdown resolver: delimiter-marked text leaves to inline tags.

Every text leaf of the parsed markup is rewritten by a fixed sequence of
regex passes. The passes run one after another over the evolving string,
so the order matters: ``__`` must be consumed before ``_`` and ``**``
before ``*``. Matches are leftmost, non-greedy, and never leave the text
leaf they start in; a pair split across sibling leaves by an element is
left alone.

Ambiguous runs such as ``*a*b*c*`` resolve to whatever the leftmost-first
passes produce (``<b>a</b>b<b>c</b>``). There is deliberately no inline
grammar here.
"""

# Pattern: Functional Core (pure markup -> markup transformation)

from __future__ import annotations

import html as html_module
import logging
import re

from inkdown.document.fragment import (
    ElementNode,
    Fragment,
    TextNode,
    parse_fragment,
    parse_nodes,
)

logger = logging.getLogger(__name__)

# (pattern, replacement) in priority order. "." stops at newlines, so a pair
# never spans two lines of a pre-wrap text leaf.
INLINE_PASSES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"__(.+?)__"), r"<u>\1</u>"),
    (re.compile(r"\*\*(.+?)\*\*"), r"<b>\1</b>"),
    (re.compile(r"\*(.+?)\*"), r"<b>\1</b>"),
    (re.compile(r"_(.+?)_"), r"<i>\1</i>"),
    (re.compile(r"~(.+?)~"), r"<s>\1</s>"),
)

# Cheap pre-check: a leaf without any marker character cannot change
_MARKER_CHARS = frozenset("*_~")


def resolve_text(text: str) -> str:
    """Apply the inline passes to one leaf's text, returning inline HTML.

    The text is HTML-escaped first so literal ``<`` or ``&`` typed by the
    user stay text after the result is re-parsed.
    """
    result = html_module.escape(text, quote=False)
    for pattern, replacement in INLINE_PASSES:
        result = pattern.sub(replacement, result)
    return result


def _resolve_leaf(leaf: TextNode) -> int:
    """Replace *leaf* in its parent with its resolved inline nodes.

    Returns the number of nodes now occupying the leaf's position.
    """
    if not _MARKER_CHARS.intersection(leaf.text):
        return 1

    resolved = resolve_text(leaf.text)
    if resolved == html_module.escape(leaf.text, quote=False):
        return 1

    parent = leaf.parent
    if parent is None:
        return 1
    new_nodes = parse_nodes(resolved)
    parent.replace_child(leaf, new_nodes)
    return len(new_nodes)


def _resolve_children(element: ElementNode) -> None:
    """Depth-first walk; spliced-in nodes are not walked again."""
    index = 0
    while index < len(element.children):
        child = element.children[index]
        if isinstance(child, TextNode):
            index += _resolve_leaf(child)
        else:
            _resolve_children(child)
            index += 1


def resolve_fragment(fragment: Fragment) -> Fragment:
    """Resolve inline delimiters in *fragment* in place and return it."""
    _resolve_children(fragment)
    return fragment


def resolve(markup: str) -> str:
    """Rewrite inline delimiter patterns in *markup* into inline tags.

    Args:
        markup: Raw editor markup (normalised or not).

    Returns:
        The markup with ``__u__``, ``**b**``/``*b*``, ``_i_`` and ``~s~``
        rewritten to ``<u>``, ``<b>``, ``<i>`` and ``<s>``. Existing
        elements (divs, lists, line breaks) are kept as they were.
    """
    if not markup:
        return markup

    fragment = resolve_fragment(parse_fragment(markup))
    result = fragment.serialize()
    logger.debug("Resolved %d chars of markup into %d chars", len(markup), len(result))
    return result
