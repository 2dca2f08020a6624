"""Tests for the emoji catalog."""

from __future__ import annotations

import emoji as emoji_lib

from inkdown.emoji_catalog import EmojiCatalog, EmojiEntry, get_catalog

THUMBS_UP = "\U0001f44d"


class TestEmojiCatalog:
    """Catalog contents, lookup and search."""

    def test_catalog_is_populated(self) -> None:
        """The English catalog holds many entries."""
        assert len(get_catalog("en")) > 1000

    def test_only_fully_qualified(self) -> None:
        """Every glyph is a fully-qualified emoji."""
        fully_qualified = emoji_lib.STATUS["fully_qualified"]
        for entry in get_catalog("en"):
            assert emoji_lib.EMOJI_DATA[entry.glyph]["status"] == fully_qualified

    def test_pairs_are_shortcode_glyph(self) -> None:
        """pairs() yields (shortcode, glyph) tuples."""
        pairs = get_catalog("en").pairs()
        assert (":thumbs_up:", THUMBS_UP) in pairs

    def test_lookup_with_and_without_colons(self) -> None:
        """Colons around the shortcode are optional."""
        catalog = get_catalog("en")
        assert catalog.lookup(":thumbs_up:") == THUMBS_UP
        assert catalog.lookup("thumbs_up") == THUMBS_UP

    def test_lookup_unknown(self) -> None:
        """Unknown shortcodes give None."""
        assert get_catalog("en").lookup("not_an_emoji_at_all") is None

    def test_search_matches_all_words(self) -> None:
        """Every query word must appear in the name."""
        results = get_catalog("en").search("thumbs up")
        assert THUMBS_UP in [entry.glyph for entry in results]
        assert all("thumbs" in e.name and "up" in e.name for e in results)

    def test_search_is_case_insensitive(self) -> None:
        """Upper-case queries still match."""
        results = get_catalog("en").search("THUMBS_UP")
        assert THUMBS_UP in [entry.glyph for entry in results]

    def test_search_limit(self) -> None:
        """An empty query returns the head of the catalog, limited."""
        catalog = get_catalog("en")
        assert len(catalog.search("", limit=5)) == 5

    def test_alias_catalog(self) -> None:
        """Alias catalogs still produce colon-wrapped shortcodes."""
        catalog = EmojiCatalog("alias")
        assert len(catalog) > 0
        assert all(entry.shortcode.startswith(":") for entry in catalog)

    def test_get_catalog_is_cached(self) -> None:
        """Repeated calls share one catalog."""
        assert get_catalog("en") is get_catalog("en")


class TestEmojiEntry:
    """EmojiEntry helpers."""

    def test_name_strips_colons_and_underscores(self) -> None:
        """The display name is human-readable."""
        entry = EmojiEntry(":red_heart:", "\u2764\ufe0f")
        assert entry.name == "red heart"
