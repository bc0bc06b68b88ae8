"""Base62 symbol codec used by hint checksums.

Symbols are ordered ``0-9``, then ``a-z``, then ``A-Z`` so that ``'0'`` maps
to ``0``, ``'a'`` to ``10`` and ``'A'`` to ``36``.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Dict

from .constants import BASE62_MODULUS
from .exceptions import InvalidSymbolError

ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase


@dataclass(frozen=True)
class Base62Codec:
    """Holds both directions of the symbol mapping."""

    alphabet: str = ALPHABET
    char_to_int: Dict[str, int] = field(init=False, repr=False, compare=False)
    int_to_char: Dict[int, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.alphabet) != BASE62_MODULUS or len(set(self.alphabet)) != BASE62_MODULUS:
            raise InvalidSymbolError("Alphabet must hold 62 distinct symbols")
        object.__setattr__(self, "char_to_int", {ch: i for i, ch in enumerate(self.alphabet)})
        object.__setattr__(self, "int_to_char", dict(enumerate(self.alphabet)))

    def encode(self, value: int) -> str:
        try:
            return self.int_to_char[value]
        except (KeyError, TypeError):
            raise InvalidSymbolError(f"Value {value!r} outside 0..61") from None

    def decode(self, symbol: str) -> int:
        try:
            return self.char_to_int[symbol]
        except (KeyError, TypeError):
            raise InvalidSymbolError(f"Symbol {symbol!r} is not Base62") from None

    def is_symbol(self, symbol: str) -> bool:
        return symbol in self.char_to_int


DEFAULT_CODEC = Base62Codec()


def encode(value: int) -> str:
    return DEFAULT_CODEC.encode(value)


def decode(symbol: str) -> int:
    return DEFAULT_CODEC.decode(symbol)


def letter_code(letter: str) -> int:
    """Code of the first character of a cell letter."""

    return DEFAULT_CODEC.decode(letter[0])


def folded_code(letter: str) -> int:
    """Case-insensitive code used when comparing letters."""

    return DEFAULT_CODEC.decode(letter[0].lower())


__all__ = [
    "ALPHABET",
    "Base62Codec",
    "DEFAULT_CODEC",
    "decode",
    "encode",
    "folded_code",
    "letter_code",
]
