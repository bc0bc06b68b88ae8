"""Pick where a new hint best separates two competing fillings."""

from __future__ import annotations

import random
from typing import Iterable, Optional, Set

from ..core.constants import AdjacencyClass, Background
from ..core.models import Position, Suggestion
from ..utils.logger import get_logger
from .grid import PuzzleGrid


LOGGER = get_logger(__name__)

GREEN_UPGRADE_PROBABILITY = 0.15


def select_disambiguation(
    grid: PuzzleGrid,
    differing_cells: Iterable[Position],
    rng: Optional[random.Random] = None,
    green_probability: float = GREEN_UPGRADE_PROBABILITY,
) -> Optional[Suggestion]:
    """Return the uncolored cell whose neighbors cover most differing cells.

    Cross and diagonal scores are tracked independently; the higher one wins,
    ties are broken at random. A cross or diagonal pick is upgraded to green
    with ``green_probability`` when the other neighbor class still holds an
    unrevealed letter. Returns ``None`` when no blank cell touches a
    differing cell.
    """

    rng = rng or random.Random()
    differing: Set[Position] = set(differing_cells)

    best_cross: Optional[Position] = None
    best_diagonal: Optional[Position] = None
    max_cross = 0
    max_diagonal = 0

    for cell in grid.iter_cells():
        if cell.letter or cell.background is not Background.BLANK:
            continue
        cross, diagonal = grid.neighbors(cell.row, cell.col)
        cross_score = sum(1 for n in cross if n.has_letter() and n.position in differing)
        diagonal_score = sum(1 for n in diagonal if n.has_letter() and n.position in differing)
        if cross_score > max_cross:
            max_cross = cross_score
            best_cross = cell.position
        if diagonal_score > max_diagonal:
            max_diagonal = diagonal_score
            best_diagonal = cell.position

    if best_cross is None and best_diagonal is None:
        LOGGER.warning("No blank cell touches the %d differing cells", len(differing))
        return None

    if max_cross > max_diagonal:
        position, adjacency = best_cross, AdjacencyClass.RED
    elif max_diagonal > max_cross:
        position, adjacency = best_diagonal, AdjacencyClass.BLUE
    elif rng.random() < 0.5:
        position, adjacency = best_cross, AdjacencyClass.RED
    else:
        position, adjacency = best_diagonal, AdjacencyClass.BLUE

    other = adjacency.other()
    if other is not None:
        unrevealed = any(
            n.has_letter() and n.background is Background.FILLED
            for n in grid.class_neighbors(position[0], position[1], other)
        )
        if unrevealed and rng.random() < green_probability:
            adjacency = AdjacencyClass.GREEN

    LOGGER.info(
        "Suggesting %s hint at (%s,%s) [cross=%d, diagonal=%d]",
        adjacency.value,
        position[0],
        position[1],
        max_cross,
        max_diagonal,
    )
    return Suggestion(
        row=position[0],
        col=position[1],
        adjacency=adjacency,
        cross_score=max_cross,
        diagonal_score=max_diagonal,
    )
