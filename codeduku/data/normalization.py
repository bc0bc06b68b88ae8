"""Shared helpers for word normalization."""

from __future__ import annotations

import re
import unicodedata

from ..core.codec import ALPHABET

# Letters that do not decompose into an ASCII base under NFKD.
EXTRA_FOLDS = {
    "ß": "ss",
    "Æ": "AE",
    "æ": "ae",
    "Ø": "O",
    "ø": "o",
    "Œ": "OE",
    "œ": "oe",
    "Ł": "L",
    "ł": "l",
    "Đ": "D",
    "đ": "d",
}

NON_SYMBOL_RE = re.compile(f"[^{re.escape(ALPHABET)}]")


def clean_word(text: str) -> str:
    """Return ``text`` folded to the Base62 alphabet, keeping its case."""

    if not text:
        return ""
    transformed = []
    for char in unicodedata.normalize("NFKD", text):
        if unicodedata.combining(char):
            continue
        transformed.append(EXTRA_FOLDS.get(char, char))
    return NON_SYMBOL_RE.sub("", "".join(transformed))


__all__ = ["clean_word", "EXTRA_FOLDS"]
