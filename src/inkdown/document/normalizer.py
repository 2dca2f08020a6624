"""Character normalisation applied to raw editor markup before resolution.

Browsers and operating systems substitute typographic characters while the
user types (smart quotes, dashes, non-breaking spaces from double spaces).
These are folded back to their plain ASCII forms so that sent content is
predictable. Every substitution maps onto characters that are not
themselves substituted, so the operation is idempotent.
"""

from __future__ import annotations

# Literal single-character substitutions
_TRANSLATION = str.maketrans(
    {
        "\u2018": "'",  # left single quotation mark
        "\u2019": "'",  # right single quotation mark
        "\u201c": '"',  # left double quotation mark
        "\u201d": '"',  # right double quotation mark
        "\u00a0": " ",  # non-breaking space
        "\u200b": None,  # zero-width space
        "\u2212": "-",  # minus sign
        "\u2013": "-",  # en dash
        "\u2014": "-",  # em dash
    }
)

# innerHTML serialises non-breaking spaces as an entity
_NBSP_ENTITY = "&nbsp;"


def normalize(raw_markup: str) -> str:
    """Fold typographic quotes, dashes and special spaces to plain forms.

    Args:
        raw_markup: Serialised editor content, possibly containing tags.

    Returns:
        The markup with quotes, dashes and spaces unified.
    """
    if not raw_markup:
        return raw_markup
    # Entity pass last: removing a zero-width space can join "&nbsp;"
    return raw_markup.translate(_TRANSLATION).replace(_NBSP_ENTITY, " ")
