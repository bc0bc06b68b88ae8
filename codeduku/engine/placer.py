"""Word placement: seed word plus overlapping follow-up words."""

from __future__ import annotations

import random
from typing import List, Optional, Set, Tuple

from ..core.constants import Orientation
from ..core.exceptions import PlacementError
from ..core.models import PlacedWord, span_cells
from ..data.dictionary import WordDictionary
from ..utils.logger import get_logger
from .grid import PuzzleGrid


LOGGER = get_logger(__name__)

ORIENTATIONS: Tuple[Orientation, ...] = (Orientation.HORIZONTAL, Orientation.VERTICAL)


class WordPlacer:
    """Fills a grid with dictionary words under the overlap and spacing rules."""

    def __init__(
        self,
        grid: PuzzleGrid,
        dictionary: WordDictionary,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.grid = grid
        self.dictionary = dictionary
        self.rng = rng or random.Random()
        self.placed: List[PlacedWord] = []
        self._placed_words: Set[str] = set()

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def populate(self, count: int) -> List[PlacedWord]:
        """Place a seed word, then up to ``count - 1`` overlapping words."""

        if self.place_seed() is None:
            LOGGER.warning("No dictionary word fits a %sx%s grid", self.grid.bounds.rows, self.grid.bounds.cols)
            return list(self.placed)
        for _ in range(count - 1):
            if self.place_next() is None:
                LOGGER.warning("Skipping word: no legal placement left")
        LOGGER.info("Placed %d/%d words", len(self.placed), count)
        return list(self.placed)

    def place_seed(self) -> Optional[PlacedWord]:
        orientation = self.rng.choice(ORIENTATIONS)
        axis = self.grid.bounds.cols if orientation is Orientation.HORIZONTAL else self.grid.bounds.rows
        fitting = [word for word in self.dictionary if len(word) <= axis]
        if not fitting:
            return None

        word = self.rng.choice(fitting)
        row_span, col_span = self._origin_span(word, orientation)
        row = self.rng.randrange(row_span)
        col = self.rng.randrange(col_span)
        if not self.grid.fits(word, row, col, orientation):
            return None
        return self._commit(word, row, col, orientation)

    def place_next(self) -> Optional[PlacedWord]:
        """Place one more word crossing the existing ones; ``None`` if none fits."""

        candidates = [word for word in self.dictionary if word not in self._placed_words]
        self.rng.shuffle(candidates)
        orientations = list(ORIENTATIONS)

        for word in candidates:
            self.rng.shuffle(orientations)
            for orientation in orientations:
                row_span, col_span = self._origin_span(word, orientation)
                for row in range(row_span):
                    for col in range(col_span):
                        if self.can_place(word, row, col, orientation):
                            return self._commit(word, row, col, orientation)
        return None

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------
    def can_place(self, word: str, row: int, col: int, orientation: Orientation) -> bool:
        """Check every rule a non-seed placement must satisfy."""

        if not self.grid.fits(word, row, col, orientation):
            return False

        cells = span_cells(row, col, orientation, len(word))
        overlaps = [bool(self.grid.cell(r, c).letter) for r, c in cells]

        # Must cross something, but never share two consecutive letters.
        if not any(overlaps):
            return False
        if any(a and b for a, b in zip(overlaps, overlaps[1:])):
            return False

        for (r, c), is_overlap in zip(cells, overlaps):
            if is_overlap:
                continue
            for dr, dc in orientation.perpendicular_steps:
                neighbor = self.grid.get(r + dr, c + dc)
                if neighbor is not None and neighbor.letter:
                    return False

        dr, dc = orientation.step
        before = self.grid.get(row - dr, col - dc)
        after = self.grid.get(row + dr * len(word), col + dc * len(word))
        for boundary in (before, after):
            if boundary is not None and boundary.letter:
                return False
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _origin_span(self, word: str, orientation: Orientation) -> Tuple[int, int]:
        """Number of legal origin rows and columns for ``word``."""

        rows, cols = self.grid.bounds.rows, self.grid.bounds.cols
        if orientation is Orientation.HORIZONTAL:
            return rows, max(0, cols - len(word) + 1)
        return max(0, rows - len(word) + 1), cols

    def _commit(self, word: str, row: int, col: int, orientation: Orientation) -> Optional[PlacedWord]:
        placed = PlacedWord(
            word=word,
            row=row,
            col=col,
            orientation=orientation,
            phrase_index=self.dictionary.index_of(word),
        )
        try:
            self.grid.write_word(placed)
        except PlacementError as exc:
            LOGGER.debug("Placement rejected: %s", exc)
            return None
        self.placed.append(placed)
        self._placed_words.add(word)
        LOGGER.debug("Placed '%s' at (%s,%s) %s", word, row, col, orientation.value)
        return placed
