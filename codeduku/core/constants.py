"""Shared constants and enumerations for the puzzle generator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple


HINT_PREFIX = "="
BASE62_MODULUS = 62


class Orientation(str, Enum):
    """Word orientations supported by the grid."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Orientation.HORIZONTAL else (1, 0)

    @property
    def perpendicular_steps(self) -> Tuple[Tuple[int, int], ...]:
        if self is Orientation.HORIZONTAL:
            return ((-1, 0), (1, 0))
        return ((0, -1), (0, 1))


class AdjacencyClass(str, Enum):
    """Which neighbor set a hint summarizes."""

    RED = "red"  # cross
    BLUE = "blue"  # diagonal
    GREEN = "green"  # cross + diagonal

    def other(self) -> Optional["AdjacencyClass"]:
        if self is AdjacencyClass.RED:
            return AdjacencyClass.BLUE
        if self is AdjacencyClass.BLUE:
            return AdjacencyClass.RED
        return None


class Background(str, Enum):
    """Background class of a cell."""

    BLANK = "white"
    FILLED = "lightgray"
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    RED_BLUE = "red_blue"
    RED_GREEN = "red_green"
    BLUE_GREEN = "blue_green"
    RED_BLUE_GREEN = "red_blue_green"

    @property
    def components(self) -> FrozenSet[AdjacencyClass]:
        return _BACKGROUND_COMPONENTS[self]

    @classmethod
    def from_components(cls, components: FrozenSet[AdjacencyClass]) -> "Background":
        if len(components) >= 3:
            return cls.RED_BLUE_GREEN
        return _COMPONENT_BACKGROUNDS[components]


_BACKGROUND_COMPONENTS: Dict[Background, FrozenSet[AdjacencyClass]] = {
    Background.BLANK: frozenset(),
    Background.FILLED: frozenset(),
    Background.RED: frozenset({AdjacencyClass.RED}),
    Background.BLUE: frozenset({AdjacencyClass.BLUE}),
    Background.GREEN: frozenset({AdjacencyClass.GREEN}),
    Background.RED_BLUE: frozenset({AdjacencyClass.RED, AdjacencyClass.BLUE}),
    Background.RED_GREEN: frozenset({AdjacencyClass.RED, AdjacencyClass.GREEN}),
    Background.BLUE_GREEN: frozenset({AdjacencyClass.BLUE, AdjacencyClass.GREEN}),
    Background.RED_BLUE_GREEN: frozenset(
        {AdjacencyClass.RED, AdjacencyClass.BLUE, AdjacencyClass.GREEN}
    ),
}

_COMPONENT_BACKGROUNDS: Dict[FrozenSet[AdjacencyClass], Background] = {
    components: background
    for background, components in _BACKGROUND_COMPONENTS.items()
    if background is not Background.BLANK
}


class Difficulty(str, Enum):
    """Hint difficulty levels, from easiest to hardest."""

    BEGINNER = "beginner"
    NOVICE = "novice"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"
    MASTER = "master"
    LEGENDARY = "legendary"

    @property
    def required_neighbors(self) -> int:
        return _REQUIRED_NEIGHBORS[self]

    def step_down(self) -> "Difficulty":
        """Return the next easier level; the floor maps to itself."""

        order = list(Difficulty)
        index = order.index(self)
        return order[max(0, index - 1)]


_REQUIRED_NEIGHBORS: Dict[Difficulty, int] = {
    Difficulty.BEGINNER: 1,
    Difficulty.NOVICE: 2,
    Difficulty.INTERMEDIATE: 3,
    Difficulty.EXPERT: 4,
    Difficulty.MASTER: 5,
    Difficulty.LEGENDARY: 6,
}

DEFAULT_DIFFICULTY_WEIGHTS: Dict[str, float] = {
    Difficulty.BEGINNER.value: 0.1,
    Difficulty.NOVICE.value: 0.3,
    Difficulty.INTERMEDIATE.value: 0.2,
    Difficulty.EXPERT.value: 0.15,
    Difficulty.MASTER.value: 0.15,
    Difficulty.LEGENDARY.value: 0.1,
}


class PipelineState(str, Enum):
    """States of a single puzzle build."""

    PLACING_WORDS = "PLACING_WORDS"
    PLACING_HINTS = "PLACING_HINTS"
    SOLVING = "SOLVING"
    SOLVING_ADD_HINT = "SOLVING_ADD_HINT"
    UNIQUE = "UNIQUE"
    UNRESOLVED = "UNRESOLVED"


CROSS_STEPS: Tuple[Tuple[int, int], ...] = ((-1, 0), (0, -1), (0, 1), (1, 0))
DIAGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
