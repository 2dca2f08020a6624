"""Emoji catalog backed by the ``emoji`` library.

Supplies ``(shortcode, glyph)`` pairs to the picker. The editor core only
ever consumes the glyph string, through ``insert_at_cursor``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

import emoji as emoji_lib

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmojiEntry:
    """One pickable emoji."""

    shortcode: str
    glyph: str

    @property
    def name(self) -> str:
        """Shortcode without colons, underscores as spaces."""
        return self.shortcode.strip(":").replace("_", " ")


def _shortcode(data: dict, language: str) -> str | None:
    if language == "alias":
        aliases = data.get("alias") or []
        return aliases[0] if aliases else data.get("en")
    return data.get(language)


class EmojiCatalog:
    """Searchable list of fully-qualified emoji for one shortcode language."""

    def __init__(self, language: str = "en") -> None:
        self.language = language
        fully_qualified = emoji_lib.STATUS["fully_qualified"]
        entries: list[EmojiEntry] = []
        for glyph, data in emoji_lib.EMOJI_DATA.items():
            if data.get("status") != fully_qualified:
                continue
            shortcode = _shortcode(data, language)
            if shortcode:
                entries.append(EmojiEntry(shortcode, glyph))
        self._entries = tuple(entries)
        self._by_shortcode = {entry.shortcode: entry for entry in entries}
        logger.debug("Emoji catalog (%s): %d entries", language, len(entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def pairs(self) -> list[tuple[str, str]]:
        """All ``(shortcode, glyph)`` pairs in catalog order."""
        return [(entry.shortcode, entry.glyph) for entry in self._entries]

    def lookup(self, shortcode: str) -> str | None:
        """Glyph for *shortcode* (colons optional), or None if unknown."""
        key = shortcode if shortcode.startswith(":") else f":{shortcode}:"
        entry = self._by_shortcode.get(key)
        return entry.glyph if entry else None

    def search(self, query: str = "", limit: int | None = None) -> list[EmojiEntry]:
        """Entries whose shortcode contains every word of *query*.

        An empty query returns the catalog head. Matching is case-insensitive
        and treats spaces and underscores alike.
        """
        words = query.lower().replace("_", " ").split()
        matches = [
            entry
            for entry in self._entries
            if all(word in entry.name.lower() for word in words)
        ]
        return matches if limit is None else matches[:limit]


@lru_cache(maxsize=4)
def get_catalog(language: str = "en") -> EmojiCatalog:
    """Return a cached catalog for *language*."""
    return EmojiCatalog(language)
