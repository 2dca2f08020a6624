"""Unit tests for the editor page module and its browser bridge.

The page itself needs a running NiceGUI client; these tests cover the
module-level wiring and check that static/editor.js exposes what the page
calls.
"""

from __future__ import annotations

from pathlib import Path

import inkdown.pages
from inkdown.document import InlineStyle
from inkdown.pages import editor
from inkdown.session import ListKind

_STATIC = Path(editor.__file__).parent.parent / "static"


class TestEditorPageWiring:
    """Module-level constants and registration."""

    def test_pages_package_registers_editor(self) -> None:
        """Importing inkdown.pages registers the editor module."""
        assert editor in inkdown.pages._PAGES

    def test_every_list_kind_has_command(self) -> None:
        """Both list kinds map to a native command."""
        assert set(editor.LIST_COMMANDS) == set(ListKind)

    def test_every_style_has_button(self) -> None:
        """The toolbar offers a button per inline style."""
        styles = {style for style, _icon, _tooltip in editor._FORMAT_BUTTONS}
        assert styles == set(InlineStyle)

    def test_list_button_colour(self) -> None:
        """Active list buttons are highlighted."""
        assert editor._list_color(True) == "color=primary"
        assert editor._list_color(False) == "color=grey-8"

    def test_css_file_exists(self) -> None:
        """The stylesheet added by the page ships with the package."""
        assert editor._CSS_FILE.is_file()


class TestEditorBridgeScript:
    """static/editor.js provides the functions the page invokes."""

    def test_script_exposes_bridge(self) -> None:
        """window.inkdown carries snapshot, apply, execList and mount."""
        script = (_STATIC / "editor.js").read_text(encoding="utf-8")
        assert "window.inkdown = { snapshot, apply, execList, mount }" in script
        for name in ("snapshot", "apply", "execList", "mount"):
            assert f"function {name}(" in script, name

    def test_script_emits_input_event(self) -> None:
        """The debounced input event name matches the page's listener."""
        script = (_STATIC / "editor.js").read_text(encoding="utf-8")
        assert 'emitEvent("inkdown_input"' in script

    def test_list_commands_used_by_script(self) -> None:
        """execList passes the command through to execCommand."""
        script = (_STATIC / "editor.js").read_text(encoding="utf-8")
        assert "execCommand" in script
