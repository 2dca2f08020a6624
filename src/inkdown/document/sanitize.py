"""Strip executable content from markup before it is rendered as HTML.

The sent view renders resolved markup with ``ui.html``. Paste is forced to
plain text client-side, but the markup still originates in a browser, so
script-bearing elements, inline event handlers and ``javascript:`` URLs are
removed before display.
"""

from __future__ import annotations

import logging

from inkdown.document.fragment import ElementNode, TextNode, parse_fragment

logger = logging.getLogger(__name__)

# Elements removed together with their content
_STRIP_TAGS = frozenset(("script", "style", "noscript", "template", "iframe"))

# Attributes whose value is a URL
_URL_ATTRIBUTES = frozenset(("href", "src", "action", "formaction", "xlink:href"))


def _is_unsafe_attribute(name: str, value: str | None) -> bool:
    lowered = name.lower()
    if lowered.startswith("on"):
        return True
    if lowered in _URL_ATTRIBUTES and value:
        return "".join(value.split()).lower().startswith("javascript:")
    return False


def _clean(element: ElementNode) -> int:
    """Clean *element*'s subtree in place, returning the number of removals."""
    removed = 0
    for child in list(element.children):
        if isinstance(child, TextNode):
            continue
        if child.tag in _STRIP_TAGS:
            element.remove_child(child)
            removed += 1
            continue
        kept = [
            (name, value)
            for name, value in child.attrs
            if not _is_unsafe_attribute(name, value)
        ]
        removed += len(child.attrs) - len(kept)
        child.attrs = kept
        removed += _clean(child)
    return removed


def strip_unsafe_markup(markup: str) -> str:
    """Remove script/style elements, ``on*`` handlers and ``javascript:`` URLs.

    Args:
        markup: Markup produced by the editor (usually already resolved).

    Returns:
        The markup without executable content; everything else unchanged.
    """
    if not markup or not markup.strip():
        return markup

    fragment = parse_fragment(markup)
    removed = _clean(fragment)
    if removed:
        logger.warning("Stripped %d unsafe nodes/attributes from markup", removed)
    return fragment.serialize()
