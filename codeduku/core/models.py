"""Data models supporting the puzzle generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import HINT_PREFIX, AdjacencyClass, Background, Difficulty, Orientation

Position = Tuple[int, int]


def span_cells(row: int, col: int, orientation: Orientation, length: int) -> List[Position]:
    dr, dc = orientation.step
    return [(row + dr * i, col + dc * i) for i in range(length)]


@dataclass
class Cell:
    """Represents a grid cell with its word metadata."""

    row: int
    col: int
    letter: Optional[str] = None
    background: Background = Background.BLANK
    phrase_index: Optional[int] = None
    orientation: Optional[Orientation] = None
    origin: Optional[Position] = None
    is_overlap: bool = False

    @property
    def position(self) -> Position:
        return (self.row, self.col)

    def is_empty(self) -> bool:
        return not self.letter

    def is_hint(self) -> bool:
        return bool(self.letter) and self.letter.startswith(HINT_PREFIX)

    def has_letter(self) -> bool:
        return bool(self.letter) and not self.letter.startswith(HINT_PREFIX)


@dataclass(frozen=True)
class PlacedWord:
    """A dictionary word written into the grid."""

    word: str
    row: int
    col: int
    orientation: Orientation
    phrase_index: int

    @property
    def length(self) -> int:
        return len(self.word)

    @property
    def cells(self) -> List[Position]:
        return span_cells(self.row, self.col, self.orientation, self.length)


@dataclass
class WordSlot:
    """A word-length run of cells, one assignment variable of the solver."""

    row: int
    col: int
    orientation: Orientation
    length: int
    phrase_index: int
    _cells: Optional[List[Position]] = field(default=None, repr=False, compare=False)

    @property
    def cells(self) -> List[Position]:
        if self._cells is None:
            self._cells = span_cells(self.row, self.col, self.orientation, self.length)
        return self._cells


@dataclass
class Hint:
    """A checksum cell placed on the grid."""

    row: int
    col: int
    adjacency: AdjacencyClass
    neighbors: List[Position]
    token: str
    difficulty: Difficulty
    phrase_index: Optional[int] = None

    @property
    def position(self) -> Position:
        return (self.row, self.col)

    @property
    def symbol(self) -> str:
        return self.token[len(HINT_PREFIX):]


@dataclass(frozen=True)
class Suggestion:
    """Where to add a hint so the next solve can tell two fillings apart."""

    row: int
    col: int
    adjacency: AdjacencyClass
    cross_score: int = 0
    diagonal_score: int = 0

    @property
    def position(self) -> Position:
        return (self.row, self.col)
