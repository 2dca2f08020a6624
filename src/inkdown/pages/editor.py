"""Rich-text editor page.

A contenteditable surface with a formatting toolbar. The browser keeps the
live DOM; every toolbar action snapshots it (markup plus a path-addressed
selection, via static/editor.js), runs the Python EditorSession, and writes
the resulting markup and cursor back.

Route: /
"""

from __future__ import annotations

import json
import logging
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, Any

from nicegui import ui

from inkdown.config import get_settings
from inkdown.document import InlineStyle, strip_unsafe_markup
from inkdown.emoji_catalog import get_catalog
from inkdown.session import (
    ACTION_OPEN_EMOJI_PICKER,
    ACTION_SEND,
    ACTION_TOGGLE_LIST,
    ACTION_WRAP,
    EditorSession,
    ListKind,
)

if TYPE_CHECKING:
    from nicegui.events import GenericEventArguments

logger = logging.getLogger(__name__)

_CSS_FILE = Path(__file__).parent.parent / "static" / "editor.css"

INPUT_DEBOUNCE_MS = 150  # Debounce between keystrokes and the input event

# Native list commands run by the browser for each list kind
LIST_COMMANDS: dict[ListKind, str] = {
    ListKind.BULLET: "insertUnorderedList",
    ListKind.NUMBERED: "insertOrderedList",
}

# (style, icon, tooltip) for the formatting buttons
_FORMAT_BUTTONS: tuple[tuple[InlineStyle, str, str], ...] = (
    (InlineStyle.BOLD, "format_bold", "Bold (*text*)"),
    (InlineStyle.ITALIC, "format_italic", "Italic (_text_)"),
    (InlineStyle.UNDERLINE, "format_underlined", "Underline (__text__)"),
    (InlineStyle.STRIKE, "format_strikethrough", "Strike (~text~)"),
)


def _list_color(active: bool) -> str:
    return "color=primary" if active else "color=grey-8"


@ui.page("/")
async def editor_page() -> None:
    """Editor page: toolbar, editable surface, sent output."""
    settings = get_settings()
    catalog = get_catalog(settings.emoji.language)

    ui.add_css(_CSS_FILE)
    ui.add_body_html('<script src="/static/editor.js"></script>')

    ui.label(settings.app.title).classes("text-2xl font-bold mb-4")

    output: ui.code | None = None

    def on_change(markup: str) -> None:
        if output is not None:
            output.content = markup

    def format_list(kind: ListKind) -> None:
        ui.run_javascript(
            f"window.inkdown.execList(getHtmlElement({surface.id}), "
            f"{json.dumps(LIST_COMMANDS[kind])})"
        )

    session = EditorSession(
        initial_content=settings.editor.initial_content,
        placeholder=settings.editor.placeholder,
        on_change=on_change,
        list_formatter=format_list,
    )

    async def snapshot() -> bool:
        """Pull the surface's markup and selection into the session."""
        result = await ui.run_javascript(
            f"return window.inkdown.snapshot(getHtmlElement({surface.id}))"
        )
        if not isinstance(result, dict) or not isinstance(result.get("html"), str):
            logger.debug("Ignoring malformed editor snapshot: %r", result)
            return False
        session.load(result["html"], result.get("selection"))
        return True

    def push() -> None:
        """Write the session's markup and cursor back to the surface."""
        ui.run_javascript(
            f"window.inkdown.apply(getHtmlElement({surface.id}), "
            f"{json.dumps(session.markup())}, "
            f"{json.dumps(session.cursor_payload())})"
        )

    async def handle_wrap(style: InlineStyle) -> None:
        if not await snapshot():
            return
        if session.dispatch(ACTION_WRAP, style):
            push()

    async def handle_list(kind: ListKind) -> None:
        session.dispatch(ACTION_TOGGLE_LIST, kind)
        bullet_button.props(_list_color(session.bullet_active))
        numbered_button.props(_list_color(session.numbered_active))

    async def handle_emoji(glyph: str) -> None:
        emoji_menu.close()
        if not await snapshot():
            return
        if session.insert_emoji(glyph):
            push()

    def toggle_picker() -> None:
        emoji_menu.value = session.dispatch(ACTION_OPEN_EMOJI_PICKER)

    def sync_picker(e: Any) -> None:
        session.emoji_picker_open = bool(e.value)

    def render_emoji_grid() -> None:
        emoji_grid.clear()
        entries = catalog.search(
            emoji_search.value or "", limit=settings.emoji.picker_limit
        )
        with emoji_grid:
            for entry in entries:
                ui.button(
                    entry.glyph, on_click=partial(handle_emoji, entry.glyph)
                ).props("flat dense").tooltip(entry.shortcode)

    async def handle_send() -> None:
        if not await snapshot():
            return
        sent = session.dispatch(ACTION_SEND)
        sent_view.clear()
        with sent_view:
            ui.html(sent, sanitize=strip_unsafe_markup).classes("inkdown-sent")
        push()
        bullet_button.props(_list_color(False))
        numbered_button.props(_list_color(False))

    def handle_input(e: GenericEventArguments) -> None:
        """Keep the session in step with typing.

        Expected e.args:
            html (str): The surface's innerHTML
        """
        html = e.args.get("html") if isinstance(e.args, dict) else None
        if not isinstance(html, str):
            return
        session.load(html)

    with ui.column().classes("inkdown-editor w-full max-w-2xl gap-0"):
        with ui.row().classes("inkdown-toolbar w-full p-2 gap-1 items-center"):
            for style, icon, tooltip in _FORMAT_BUTTONS:
                ui.button(icon=icon, on_click=partial(handle_wrap, style)).props(
                    f'flat dense data-testid="wrap-{style}"'
                ).tooltip(tooltip)

            bullet_button = (
                ui.button(
                    icon="format_list_bulleted",
                    on_click=partial(handle_list, ListKind.BULLET),
                )
                .props(f"flat dense {_list_color(False)}")
                .tooltip("Bullet list")
            )
            numbered_button = (
                ui.button(
                    icon="format_list_numbered",
                    on_click=partial(handle_list, ListKind.NUMBERED),
                )
                .props(f"flat dense {_list_color(False)}")
                .tooltip("Numbered list")
            )

            with ui.button(icon="mood", on_click=toggle_picker).props("flat dense"):
                with ui.menu().props("no-parent-event") as emoji_menu:
                    emoji_search = ui.input(
                        placeholder="Search emoji",
                        on_change=lambda _: render_emoji_grid(),
                    ).props("dense clearable")
                    emoji_grid = ui.grid(columns=8).classes("gap-0")
            emoji_menu.on_value_change(sync_picker)

            ui.space()
            ui.button("Send", icon="send", on_click=handle_send).props(
                'dense data-testid="send-btn"'
            )

        surface = ui.element("div").classes("inkdown-surface w-full")
        surface.props('contenteditable="true" data-testid="editor-surface"')

    render_emoji_grid()

    if settings.editor.show_output:
        ui.label("Output HTML").classes("font-semibold mt-6")
        output = ui.code(session.rendered(), language="html").classes("w-full")

    ui.label("Sent").classes("font-semibold mt-6")
    sent_view = ui.card().classes("w-full max-w-2xl")

    ui.on("inkdown_input", handle_input)

    # Wait for WebSocket connection before running JavaScript
    await ui.context.client.connected()

    await ui.run_javascript(
        f"window.inkdown.mount(getHtmlElement({surface.id}), "
        f"{json.dumps(session.markup())}, "
        f"{json.dumps(session.placeholder)}, {INPUT_DEBOUNCE_MS})"
    )
