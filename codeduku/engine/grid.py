"""Grid representation and helper utilities."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from ..core.constants import (
    CROSS_STEPS,
    DIAGONAL_STEPS,
    AdjacencyClass,
    Background,
    Bounds,
    Orientation,
)
from ..core.exceptions import ConfigurationError, PlacementError
from ..core.models import Cell, PlacedWord, Position, span_cells
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

LetterGrid = List[List[Optional[str]]]


@dataclass
class GridConfig:
    """Configuration values driving the grid layout."""

    rows: int
    cols: int

    def bounds(self) -> Bounds:
        if self.rows <= 0 or self.cols <= 0:
            raise ConfigurationError(f"Grid dimensions must be positive: {self.rows}x{self.cols}")
        return Bounds(rows=self.rows, cols=self.cols)


class PuzzleGrid:
    """Encapsulates the puzzle grid with placement helpers."""

    def __init__(self, config: GridConfig) -> None:
        self.config = config
        self.bounds = config.bounds()
        self.cells: List[List[Cell]] = [
            [Cell(row=r, col=c) for c in range(self.bounds.cols)] for r in range(self.bounds.rows)
        ]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def get(self, row: int, col: int) -> Optional[Cell]:
        """Return the cell at ``(row, col)`` or ``None`` when out of bounds."""

        if not self.bounds.contains(row, col):
            return None
        return self.cells[row][col]

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def neighbors(self, row: int, col: int) -> Tuple[List[Cell], List[Cell]]:
        """Return ``(cross, diagonal)`` neighbors of a cell.

        Out-of-bounds neighbors and hint cells are replaced by synthetic empty
        cells, so both lists always hold four entries and a hint never counts
        as a letter neighbor.
        """

        return self._collect(row, col, CROSS_STEPS), self._collect(row, col, DIAGONAL_STEPS)

    def _collect(self, row: int, col: int, steps) -> List[Cell]:
        collected: List[Cell] = []
        for dr, dc in steps:
            nr, nc = row + dr, col + dc
            neighbor = self.get(nr, nc)
            if neighbor is None or neighbor.is_hint():
                collected.append(Cell(row=nr, col=nc))
            else:
                collected.append(neighbor)
        return collected

    def class_neighbors(self, row: int, col: int, adjacency: AdjacencyClass) -> List[Cell]:
        """Neighbors summarized by a hint of the given class (diagonals first for green)."""

        cross, diagonal = self.neighbors(row, col)
        if adjacency is AdjacencyClass.RED:
            return cross
        if adjacency is AdjacencyClass.BLUE:
            return diagonal
        return diagonal + cross

    def letter_neighbors(self, row: int, col: int, adjacency: AdjacencyClass) -> List[Position]:
        return [n.position for n in self.class_neighbors(row, col, adjacency) if n.has_letter()]

    def read_word(self, row: int, col: int, orientation: Orientation, length: int) -> str:
        letters = []
        for r, c in span_cells(row, col, orientation, length):
            cell = self.get(r, c)
            letters.append(cell.letter if cell is not None and cell.has_letter() else "")
        return "".join(letters)

    def letters(self) -> LetterGrid:
        """Snapshot of every cell's letter or token."""

        return [[cell.letter for cell in row] for row in self.cells]

    # ------------------------------------------------------------------
    # Word placement
    # ------------------------------------------------------------------
    def fits(self, word: str, row: int, col: int, orientation: Orientation) -> bool:
        """True if ``word`` is inside the grid and agrees with every letter it covers."""

        for index, (r, c) in enumerate(span_cells(row, col, orientation, len(word))):
            cell = self.get(r, c)
            if cell is None or cell.is_hint():
                return False
            if cell.letter and cell.letter.lower() != word[index].lower():
                return False
        return True

    def write_word(self, placed: PlacedWord) -> None:
        if not self.fits(placed.word, placed.row, placed.col, placed.orientation):
            raise PlacementError(
                f"'{placed.word}' conflicts with the grid at {(placed.row, placed.col)}"
            )

        for index, (r, c) in enumerate(placed.cells):
            cell = self.cells[r][c]
            new_char = placed.word[index]
            existing = cell.letter
            upper = new_char.isupper() or bool(existing and existing[0].isupper())
            cell.letter = new_char.upper() if upper else new_char.lower()
            cell.background = Background.FILLED
            cell.phrase_index = placed.phrase_index
            cell.orientation = placed.orientation
            cell.origin = (placed.row, placed.col)
            cell.is_overlap = bool(existing)

    # ------------------------------------------------------------------
    # Hints
    # ------------------------------------------------------------------
    def write_hint(self, row: int, col: int, token: str, background: Background) -> Cell:
        cell = self.cells[row][col]
        if cell.letter:
            raise PlacementError(f"Cell {(row, col)} already holds '{cell.letter}'")
        cell.letter = token
        cell.background = background
        return cell

    # ------------------------------------------------------------------
    # Copies & serialization
    # ------------------------------------------------------------------
    def copy(self) -> "PuzzleGrid":
        return copy.deepcopy(self)

    def blank_copy(self) -> "PuzzleGrid":
        """Copy with every non-hint letter cleared, as handed to a solver."""

        blank = self.copy()
        for cell in blank.iter_cells():
            if cell.has_letter():
                cell.letter = None
        return blank

    def to_jsonable(self) -> List[List[dict]]:
        serialized: List[List[dict]] = []
        for row in self.cells:
            serialized_row: List[dict] = []
            for cell in row:
                serialized_row.append(
                    {
                        "letter": cell.letter,
                        "background": cell.background.value,
                        "is_hint": cell.is_hint(),
                        "phrase_index": cell.phrase_index,
                        "orientation": cell.orientation.value if cell.orientation else None,
                        "origin": list(cell.origin) if cell.origin else None,
                        "is_overlap": cell.is_overlap,
                    }
                )
            serialized.append(serialized_row)
        return serialized
