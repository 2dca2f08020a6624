"""Editor session: the live fragment, cursor and toolbar state of one editor.

The session is the seam between the pure document core and the host UI.
The host feeds it browser snapshots (markup plus a path-addressed
selection), triggers toolbar actions, and applies the markup and cursor the
session hands back. All operations run to completion synchronously.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from inkdown.document.delimiters import InlineStyle
from inkdown.document.fragment import (
    Fragment,
    Point,
    Selection,
    locate,
    merge_text_leaves,
    parse_fragment,
    path_of,
)
from inkdown.document.normalizer import normalize
from inkdown.document.resolver import resolve
from inkdown.document.wrapper import insert_at_cursor, wrap_style

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = "Type your message..."
DEFAULT_INITIAL_CONTENT = "<p>Hello</p>"


class ListKind(StrEnum):
    """List formatting applied by the host's native list command."""

    BULLET = "bullet"
    NUMBERED = "numbered"


# Toolbar action names, as sent by the host
ACTION_WRAP = "wrap"
ACTION_TOGGLE_LIST = "toggleList"
ACTION_OPEN_EMOJI_PICKER = "openEmojiPicker"
ACTION_SEND = "send"
TOOLBAR_ACTIONS = (
    ACTION_WRAP,
    ACTION_TOGGLE_LIST,
    ACTION_OPEN_EMOJI_PICKER,
    ACTION_SEND,
)


def _point_from_payload(fragment: Fragment, payload: Any) -> Point | None:
    if not isinstance(payload, dict):
        return None
    path = payload.get("path")
    offset = payload.get("offset")
    if not isinstance(path, list) or not isinstance(offset, int):
        return None
    if not all(isinstance(index, int) for index in path):
        return None
    return locate(fragment, path, offset)


def selection_from_payload(fragment: Fragment, payload: Any) -> Selection | None:
    """Translate a browser selection payload into a Selection.

    Expected payload::

        {"start": {"path": [0, 1], "offset": 3},
         "end": {"path": [0, 1], "offset": 7}}

    Paths are child indices from the editor root. Returns None for a
    missing, malformed or stale payload.
    """
    if not isinstance(payload, dict):
        return None
    start = _point_from_payload(fragment, payload.get("start"))
    end = _point_from_payload(fragment, payload.get("end"))
    if start is None or end is None:
        return None
    return Selection(start, end)


def point_to_payload(point: Point) -> dict[str, Any]:
    """Translate a Point into the browser's ``{path, offset}`` form."""
    return {"path": list(path_of(point.node)), "offset": point.offset}


class EditorSession:
    """State of one rich-text editor instance.

    Args:
        initial_content: Markup rendered into the surface on mount.
        placeholder: Text shown while the surface is empty.
        on_change: Called with the normalised, resolved markup whenever the
            content changes and when it is sent.
        list_formatter: Host capability applying native list formatting to
            the current selection; receives the ListKind.
    """

    def __init__(
        self,
        initial_content: str = DEFAULT_INITIAL_CONTENT,
        placeholder: str = DEFAULT_PLACEHOLDER,
        on_change: Callable[[str], None] | None = None,
        list_formatter: Callable[[ListKind], None] | None = None,
    ) -> None:
        self.initial_content = initial_content
        self.placeholder = placeholder
        self.on_change = on_change
        self.list_formatter = list_formatter

        self.fragment = parse_fragment(initial_content)
        self.selection: Selection | None = None

        self.bullet_active = False
        self.numbered_active = False
        self.emoji_picker_open = False
        self.last_sent_markup: str | None = None

    # -- reading ------------------------------------------------------------

    def markup(self) -> str:
        """Serialised live content, as the surface should show it."""
        return self.fragment.serialize()

    def rendered(self) -> str:
        """Live content after normalisation and inline resolution."""
        return resolve(normalize(self.markup()))

    def cursor_payload(self) -> dict[str, Any] | None:
        """Collapsed cursor in browser form, or None without a selection."""
        if self.selection is None:
            return None
        return point_to_payload(self.selection.end)

    # -- state changes -------------------------------------------------------

    def _emit(self) -> None:
        if self.on_change is not None:
            self.on_change(self.rendered())

    def load(self, markup: str, selection_payload: Any = None) -> None:
        """Replace the fragment from a browser snapshot.

        Args:
            markup: The surface's current ``innerHTML``.
            selection_payload: Optional ``{start, end}`` path payload; a
                malformed or stale payload leaves the session without a
                selection.
        """
        self.fragment = parse_fragment(markup or "")
        self.selection = selection_from_payload(self.fragment, selection_payload)
        self._emit()

    def select(self, selection: Selection | None) -> None:
        self.selection = selection

    def _apply_cursor(self, cursor: Point | None) -> bool:
        if cursor is None:
            return False
        # The browser merges adjacent text on innerHTML assignment
        merged = merge_text_leaves(self.fragment, cursor)
        if merged is None:
            return False
        self.selection = Selection.caret(merged)
        self._emit()
        return True

    def wrap(self, style: InlineStyle | str) -> bool:
        """Wrap the current selection with *style*'s delimiter.

        Returns:
            True if the fragment changed, False for a no-op.
        """
        _fragment, cursor = wrap_style(self.fragment, self.selection, style)
        return self._apply_cursor(cursor)

    def insert_emoji(self, glyph: str) -> bool:
        """Insert *glyph* at the cursor and close the picker."""
        self.emoji_picker_open = False
        _fragment, cursor = insert_at_cursor(self.fragment, self.selection, glyph)
        return self._apply_cursor(cursor)

    def toggle_emoji_picker(self) -> bool:
        self.emoji_picker_open = not self.emoji_picker_open
        return self.emoji_picker_open

    def toggle_list(self, kind: ListKind | str) -> None:
        """Apply native list formatting and flip the list flags.

        Activating one kind of list clears the other flag.
        """
        kind = ListKind(kind)
        if self.list_formatter is not None:
            self.list_formatter(kind)

        if kind is ListKind.BULLET:
            self.bullet_active = not self.bullet_active
            if self.bullet_active:
                self.numbered_active = False
        else:
            self.numbered_active = not self.numbered_active
            if self.numbered_active:
                self.bullet_active = False

    def send(self) -> str:
        """Normalise and resolve the content, emit it, and start afresh.

        Returns:
            The sent markup (also kept in ``last_sent_markup``).
        """
        sent = self.rendered()
        self.last_sent_markup = sent
        logger.info("[SEND] %d chars of markup sent", len(sent))
        if self.on_change is not None:
            self.on_change(sent)

        self.fragment = Fragment()
        self.selection = None
        self.bullet_active = False
        self.numbered_active = False
        return sent

    # -- toolbar dispatch ----------------------------------------------------

    def dispatch(self, action: str, argument: str | None = None) -> Any:
        """Route a named toolbar action to its operation.

        Unknown actions or arguments are logged and ignored (returns None).
        """
        if action == ACTION_WRAP:
            if argument not in set(InlineStyle):
                logger.warning("Ignoring wrap with unknown style %r", argument)
                return None
            return self.wrap(InlineStyle(argument))
        if action == ACTION_TOGGLE_LIST:
            if argument not in set(ListKind):
                logger.warning("Ignoring toggleList with unknown kind %r", argument)
                return None
            self.toggle_list(ListKind(argument))
            return None
        if action == ACTION_OPEN_EMOJI_PICKER:
            return self.toggle_emoji_picker()
        if action == ACTION_SEND:
            return self.send()

        logger.warning("Ignoring unknown toolbar action %r", action)
        return None
