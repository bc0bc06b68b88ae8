"""Hand-built grids shared across the engine tests."""

from __future__ import annotations

from typing import Sequence

from codeduku.core.constants import Orientation
from codeduku.core.models import PlacedWord
from codeduku.data.dictionary import WordDictionary
from codeduku.engine.grid import GridConfig, PuzzleGrid


def cat_car_puzzle(words: Sequence[str] = ("cat", "car")):
    """4x4 grid with "cat" across and "car" down, both starting at (0,0)."""

    dictionary = WordDictionary(words)
    grid = PuzzleGrid(GridConfig(rows=4, cols=4))
    placed = [
        PlacedWord("cat", 0, 0, Orientation.HORIZONTAL, dictionary.index_of("cat")),
        PlacedWord("car", 0, 0, Orientation.VERTICAL, dictionary.index_of("car")),
    ]
    for word in placed:
        grid.write_word(word)
    return grid, dictionary, placed


def capitalized_crossing_puzzle(words: Sequence[str] = ("Cats", "car", "cur")):
    """"Cats" across over lowercase "car" down; the shared cell shows ``C``."""

    dictionary = WordDictionary(words)
    grid = PuzzleGrid(GridConfig(rows=4, cols=4))
    placed = [
        PlacedWord("Cats", 0, 0, Orientation.HORIZONTAL, dictionary.index_of("Cats")),
        PlacedWord("car", 0, 0, Orientation.VERTICAL, dictionary.index_of("car")),
    ]
    for word in placed:
        grid.write_word(word)
    return grid, dictionary, placed
