"""Tests for the inline markdown resolver."""

from __future__ import annotations

import pytest

from inkdown.document import DELIMITERS, STYLE_TAGS, InlineStyle, resolve
from inkdown.document.resolver import resolve_text


class TestSingleDelimiters:
    """Each delimiter pair resolves to its inline tag."""

    @pytest.mark.parametrize("style", list(InlineStyle))
    def test_pair_resolves_to_tag(self, style: InlineStyle) -> None:
        """D + text + D becomes the mapped tag wrapping the text."""
        delimiter = DELIMITERS[style]
        tag = STYLE_TAGS[style]
        assert resolve(f"{delimiter}word{delimiter}") == f"<{tag}>word</{tag}>"

    def test_double_star_is_bold(self) -> None:
        """``**x**`` is bold, not nested single-star bold."""
        assert resolve("**x**") == "<b>x</b>"

    def test_underline_before_italic(self) -> None:
        """``__x__`` is consumed whole by the underline pass."""
        assert resolve("__x__") == "<u>x</u>"

    def test_spaces_inside_pair(self) -> None:
        """Content between markers may contain spaces."""
        assert resolve("~two words~") == "<s>two words</s>"

    @pytest.mark.parametrize("markup", ["**", "*", "__", "~", "_x", "a*b"])
    def test_unpaired_markers_left_alone(self, markup: str) -> None:
        """Markers without content or a partner stay literal."""
        assert resolve(markup) == markup


class TestEndToEnd:
    """Whole messages as they arrive at send time."""

    def test_mixed_sentence(self) -> None:
        """Several styles in one leaf resolve independently."""
        raw = "I *really* think __this__ works ~maybe~"
        expected = "I <b>really</b> think <u>this</u> works <s>maybe</s>"
        assert resolve(raw) == expected

    def test_block_structure_unchanged(self) -> None:
        """Divs stay divs; only their text leaves are rewritten."""
        assert (
            resolve("<div>*a*</div><div>_b_</div>")
            == "<div><b>a</b></div><div><i>b</i></div>"
        )

    def test_lists_unchanged(self) -> None:
        """List markup keeps its shape around resolved items."""
        markup = "<ul><li>_one_</li><li>two</li></ul>"
        assert resolve(markup) == "<ul><li><i>one</i></li><li>two</li></ul>"

    def test_existing_inline_tags_kept(self) -> None:
        """Tags already present are preserved next to new ones."""
        assert resolve("<b>old</b> *new*") == "<b>old</b> <b>new</b>"

    def test_markup_without_markers_is_untouched(self) -> None:
        """Markup with nothing to resolve serialises back unchanged."""
        markup = "<p>Hello</p><div>second<br>line</div>"
        assert resolve(markup) == markup

    def test_empty_markup(self) -> None:
        """Empty input resolves to empty output."""
        assert resolve("") == ""


class TestAmbiguity:
    """Leftmost, non-greedy, sequential passes."""

    def test_repeated_single_markers(self) -> None:
        """``*a*b*c*`` pairs up leftmost first."""
        assert resolve("*a*b*c*") == "<b>a</b>b<b>c</b>"

    def test_odd_marker_left_over(self) -> None:
        """A trailing unpaired marker stays literal."""
        assert resolve("*a*b*") == "<b>a</b>b*"

    def test_pair_split_by_element_not_joined(self) -> None:
        """Markers in different text leaves never pair up."""
        assert resolve("*a<br>b*") == "*a<br>b*"

    def test_pair_does_not_cross_newline(self) -> None:
        """A pair never spans two lines of the same leaf."""
        assert resolve("*a\nb*") == "*a\nb*"


class TestEscaping:
    """Literal special characters typed by the user stay text."""

    def test_angle_brackets_stay_text(self) -> None:
        """Text that looks like a tag is not turned into one."""
        assert resolve("a &lt;b&gt; *c*") == "a &lt;b&gt; <b>c</b>"

    def test_ampersand_stays_escaped(self) -> None:
        """An ampersand next to a resolved pair is still escaped."""
        assert resolve("R&amp;D _now_") == "R&amp;D <i>now</i>"

    def test_resolve_text_escapes_before_rewriting(self) -> None:
        """resolve_text() works on leaf text, not markup."""
        assert resolve_text("<x> *y*") == "&lt;x&gt; <b>y</b>"
