"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from inkdown.document import Fragment, parse_fragment


@pytest.fixture
def two_line_fragment() -> Fragment:
    """Chrome-style contenteditable content: one <div> per line."""
    return parse_fragment("<div>foo</div><div>bar</div>")


@pytest.fixture
def inline_fragment() -> Fragment:
    """A single line mixing plain text with an inline element."""
    return parse_fragment("say <i>hello</i> world")
