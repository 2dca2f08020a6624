"""Tests for character normalisation."""

from __future__ import annotations

import pytest

from inkdown.document import normalize


class TestNormalize:
    """Typographic characters fold to plain ASCII forms."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("\u2018quoted\u2019", "'quoted'"),
            ("\u201cquoted\u201d", '"quoted"'),
            ("a\xa0b", "a b"),
            ("a&nbsp;b", "a b"),
            ("zero\u200bwidth", "zerowidth"),
            ("5 \u2212 3", "5 - 3"),
            ("1\u20132", "1-2"),
            ("wait\u2014what", "wait-what"),
        ],
    )
    def test_substitution(self, raw: str, expected: str) -> None:
        """Each special character maps to its plain form."""
        assert normalize(raw) == expected

    def test_tags_untouched(self) -> None:
        """Markup around the text is not altered."""
        raw = "<div class=\"x\">\u201chi\u201d</div>"
        assert normalize(raw) == '<div class="x">"hi"</div>'

    def test_plain_text_unchanged(self) -> None:
        """ASCII input comes back as is."""
        assert normalize("plain *text*") == "plain *text*"

    def test_empty(self) -> None:
        """Empty input stays empty."""
        assert normalize("") == ""

    @pytest.mark.parametrize(
        "raw",
        [
            "\u2018a\u2019 \u201cb\u201d",
            "x&nbsp;&nbsp;y\xa0z",
            "\u200b\u200b",
            "&\u200bnbsp;",
            "<p>\u2014 dash \u2013 and \u2212</p>",
        ],
    )
    def test_idempotent(self, raw: str) -> None:
        """Normalising twice equals normalising once."""
        once = normalize(raw)
        assert normalize(once) == once
