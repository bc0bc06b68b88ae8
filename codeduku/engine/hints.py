"""Checksum hints: encoding, eligibility, spreading and coloring."""

from __future__ import annotations

import math
import random
from typing import Iterable, List, Optional, Sequence

from ..core.codec import encode, letter_code
from ..core.constants import (
    BASE62_MODULUS,
    HINT_PREFIX,
    AdjacencyClass,
    Background,
    Difficulty,
)
from ..core.exceptions import PlacementError
from ..core.models import Hint, Position
from ..utils.logger import get_logger
from .grid import PuzzleGrid


LOGGER = get_logger(__name__)

DISTANCE_TOLERANCE = 1e-3
MAX_SYMBOL_VALUE = BASE62_MODULUS - 1


# ----------------------------------------------------------------------
# Encoder
# ----------------------------------------------------------------------
def checksum(letters: Iterable[Optional[str]]) -> int:
    """Sum of letter codes modulo 62; empty and hint cells contribute 0."""

    total = 0
    for letter in letters:
        if letter and not letter.startswith(HINT_PREFIX):
            total += letter_code(letter)
    return total % BASE62_MODULUS


def hint_value(positions: Sequence[Position], grid: PuzzleGrid) -> str:
    """Token a hint over ``positions`` would display for the current grid."""

    return HINT_PREFIX + encode(checksum(grid.cell(r, c).letter for r, c in positions))


def hint_reachable(partial_sum: int, empty_count: int, target: int) -> bool:
    """Whether ``target`` can still be hit once ``empty_count`` cells are filled."""

    needed = (target - partial_sum % BASE62_MODULUS) % BASE62_MODULUS
    if empty_count == 0:
        return needed == 0
    return needed <= empty_count * MAX_SYMBOL_VALUE


def blend_background(current: Background, target: AdjacencyClass) -> Background:
    """Cumulative color of a cell after a hint of class ``target`` covers it."""

    if current in (Background.BLANK, Background.FILLED):
        return Background(target.value)
    return Background.from_components(current.components | {target})


# ----------------------------------------------------------------------
# Placer
# ----------------------------------------------------------------------
class HintPlacer:
    """Chooses hint cells and writes their tokens into the grid."""

    def __init__(
        self,
        grid: PuzzleGrid,
        rng: Optional[random.Random] = None,
        hints: Optional[Sequence[Hint]] = None,
    ) -> None:
        self.grid = grid
        self.rng = rng or random.Random()
        self.hints: List[Hint] = list(hints or [])

    def candidates(self, adjacency: AdjacencyClass, difficulty: Difficulty) -> List[Position]:
        """Empty cells whose letter neighbors match ``difficulty`` and reveal something new."""

        required = difficulty.required_neighbors
        found: List[Position] = []
        for cell in self.grid.iter_cells():
            if not cell.is_empty():
                continue
            neighbors = self.grid.letter_neighbors(cell.row, cell.col, adjacency)
            if len(neighbors) != required:
                continue
            if not any(self.grid.cell(r, c).background is Background.FILLED for r, c in neighbors):
                continue
            found.append(cell.position)
        return found

    def choose(self, candidates: Sequence[Position]) -> Position:
        """Pick the candidate farthest from every placed hint; ties are random."""

        best: List[Position] = []
        best_distance = -1.0
        for position in candidates:
            distance = self._distance_to_hints(position)
            if best and math.isclose(distance, best_distance, abs_tol=DISTANCE_TOLERANCE):
                best.append(position)
            elif distance > best_distance:
                best = [position]
                best_distance = distance
        return self.rng.choice(best)

    def _distance_to_hints(self, position: Position) -> float:
        if not self.hints:
            return math.inf
        return min(math.dist(position, hint.position) for hint in self.hints)

    def place(self, adjacency: AdjacencyClass, difficulty: Difficulty) -> Optional[Hint]:
        candidates = self.candidates(adjacency, difficulty)
        if not candidates:
            LOGGER.debug("No %s candidates at %s", adjacency.value, difficulty.value)
            return None
        row, col = self.choose(candidates)
        return self.color_hint(row, col, adjacency, difficulty)

    def place_with_fallback(self, difficulty: Difficulty) -> Optional[Hint]:
        """Place one hint, stepping difficulty down until a candidate exists."""

        current = difficulty
        while True:
            adjacency = self.rng.choice(list(AdjacencyClass))
            hint = self.place(adjacency, current)
            if hint is not None:
                return hint
            lower = current.step_down()
            if lower is current:
                LOGGER.warning("No hint position even at '%s'; skipping this hint", current.value)
                return None
            LOGGER.info("No hint at '%s', retrying at '%s'", current.value, lower.value)
            current = lower

    def color_hint(
        self,
        row: int,
        col: int,
        adjacency: AdjacencyClass,
        difficulty: Difficulty,
    ) -> Hint:
        """Write a hint at ``(row, col)`` and blend its class into the covered cells."""

        if self.grid.cell(row, col).letter:
            raise PlacementError(f"Cannot place a hint on occupied cell {(row, col)}")

        neighbors = self.grid.letter_neighbors(row, col, adjacency)
        token = hint_value(neighbors, self.grid)
        phrase_index = self.grid.cell(*neighbors[0]).phrase_index if neighbors else None
        self.grid.write_hint(row, col, token, Background(adjacency.value))

        for r, c in neighbors:
            cell = self.grid.cell(r, c)
            cell.background = blend_background(cell.background, adjacency)

        hint = Hint(
            row=row,
            col=col,
            adjacency=adjacency,
            neighbors=neighbors,
            token=token,
            difficulty=difficulty,
            phrase_index=phrase_index,
        )
        self.hints.append(hint)
        LOGGER.info(
            "Placed %s hint %s at (%s,%s) over %d cells (%s)",
            adjacency.value,
            token,
            row,
            col,
            len(neighbors),
            difficulty.value,
        )
        return hint
