"""Tests for the public API of inkdown.document."""

from __future__ import annotations

import inkdown.document as document


class TestDocumentPublicApi:
    """Everything the editor and CLI use is importable from the package."""

    def test_all_names_resolve(self) -> None:
        """Every name in __all__ is an attribute of the package."""
        for name in document.__all__:
            assert hasattr(document, name), name

    def test_core_operations_exported(self) -> None:
        """The four core operations are exported."""
        for name in ("wrap", "resolve", "normalize", "insert_at_cursor"):
            assert name in document.__all__

    def test_every_style_has_delimiter_and_tag(self) -> None:
        """Delimiter and tag tables cover the same styles."""
        styles = set(document.InlineStyle)
        assert set(document.DELIMITERS) == styles
        assert set(document.STYLE_TAGS) == styles
