"""Conversion of raw category and attribute keys into column identifiers."""

import re

_SPACED = re.compile(r"[(\-/]")
_REMOVED = re.compile(r"[)',]")


def normalize_identifier(key: str) -> str:
    """
    Turn a raw key into a column identifier.

    Lowercases and trims the key, turns ``(``, ``-`` and ``/`` into word
    breaks, drops ``)``, ``'`` and ``,``, spells ``&`` as ``and`` and joins
    the remaining words with single underscores. Applying it twice gives the
    same result as applying it once.

    Example:
        >>> normalize_identifier("Arts & Entertainment")
        'arts_and_entertainment'
        >>> normalize_identifier("Hotels & Travel (Bed/Breakfast)")
        'hotels_and_travel_bed_breakfast'
    """
    text = key.strip().lower()
    text = _SPACED.sub(" ", text)
    text = _REMOVED.sub("", text)
    text = text.replace("&", "and")
    return "_".join(text.split())
