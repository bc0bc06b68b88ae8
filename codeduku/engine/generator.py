"""Main puzzle generator orchestration.

Pipeline for one puzzle:
  1. Place words: a random seed word, then overlapping words.
  2. Place hints: weighted difficulty draw, stepping down when no cell fits.
  3. Solve: backtracking search for a second filling; while one exists, add
     a disambiguating hint and solve again, within a round budget.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..core.constants import DEFAULT_DIFFICULTY_WEIGHTS, Difficulty, PipelineState
from ..core.exceptions import ConfigurationError, PlacementError, SolverBudgetExceeded
from ..core.models import Hint, PlacedWord, WordSlot
from ..data.dictionary import WordDictionary
from ..utils.logger import get_logger
from .disambiguation import GREEN_UPGRADE_PROBABILITY
from .grid import GridConfig, PuzzleGrid
from .hints import HintPlacer
from .placer import WordPlacer
from .solver import UniquenessSolver, build_slots
from .validator import PuzzleValidator
from .verifier import find_alternate_solution


LOGGER = get_logger(__name__)

WEIGHT_TOLERANCE = 1e-6


@dataclass
class GeneratorConfig:
    rows: int
    cols: int
    num_words: int
    num_hints: int
    difficulty_weights: Dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_DIFFICULTY_WEIGHTS)
    )
    seed: Optional[int] = None
    max_disambiguation_rounds: int = 50
    solver_max_iterations: Optional[int] = 5_000_000
    solver_time_limit: Optional[float] = 120.0
    green_upgrade_probability: float = GREEN_UPGRADE_PROBABILITY
    cross_check: bool = False
    cross_check_timeout: float = 30.0

    def validate(self) -> None:
        """Raise :class:`ConfigurationError` before any generation work starts."""

        if self.rows <= 0 or self.cols <= 0:
            raise ConfigurationError(f"Grid dimensions must be positive: {self.rows}x{self.cols}")
        if self.num_words <= 0:
            raise ConfigurationError("num_words must be greater than 0")
        if self.num_hints <= 0:
            raise ConfigurationError("num_hints must be greater than 0")
        if self.max_disambiguation_rounds < 0:
            raise ConfigurationError("max_disambiguation_rounds cannot be negative")
        if not 0.0 <= self.green_upgrade_probability <= 1.0:
            raise ConfigurationError("green_upgrade_probability must be within [0, 1]")
        table = self.weight_table()
        if any(weight < 0 for weight in table.values()):
            raise ConfigurationError("Difficulty weights cannot be negative")
        if not math.isclose(sum(table.values()), 1.0, abs_tol=WEIGHT_TOLERANCE):
            raise ConfigurationError("Difficulty weights must sum to 1.0")

    def weight_table(self) -> Dict[Difficulty, float]:
        table: Dict[Difficulty, float] = {}
        for label, weight in self.difficulty_weights.items():
            try:
                difficulty = Difficulty(str(label).strip().lower())
            except ValueError:
                raise ConfigurationError(f"Unknown difficulty level: {label}") from None
            table[difficulty] = float(weight)
        return table

    def to_grid_config(self) -> GridConfig:
        return GridConfig(rows=self.rows, cols=self.cols)


@dataclass
class PuzzleResult:
    grid: PuzzleGrid
    words: List[PlacedWord]
    hints: List[Hint]
    unique: bool
    state: PipelineState
    rounds: int = 0
    warnings: List[str] = field(default_factory=list)
    validation_messages: List[str] = field(default_factory=list)
    seed: Optional[int] = None

    def blank_grid(self) -> PuzzleGrid:
        return self.grid.blank_copy()


class PuzzleGenerator:
    """High-level orchestrator: words, hints, then uniqueness repair."""

    def __init__(
        self,
        config: GeneratorConfig,
        dictionary: WordDictionary,
        rng: Optional[random.Random] = None,
    ) -> None:
        config.validate()
        if not len(dictionary):
            raise ConfigurationError("Dictionary is empty")
        self.config = config
        self.dictionary = dictionary
        self.rng = rng or random.Random(config.seed)
        self.validator = PuzzleValidator()
        self.state = PipelineState.PLACING_WORDS
        self.history: List[PipelineState] = []

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self) -> PuzzleResult:
        grid = PuzzleGrid(self.config.to_grid_config())

        self._transition(PipelineState.PLACING_WORDS)
        words = WordPlacer(grid, self.dictionary, self.rng).populate(self.config.num_words)

        self._transition(PipelineState.PLACING_HINTS)
        hint_placer = HintPlacer(grid, self.rng)
        self._place_hints(hint_placer)

        slots = build_slots(grid, self.dictionary)
        unique, rounds, warnings = self._ensure_unique(grid, hint_placer, slots)

        validation = self.validator.validate(grid, words, hint_placer.hints)
        messages = list(validation.messages)
        if unique and self.config.cross_check:
            messages.extend(self._cross_check(grid, slots, hint_placer.hints))

        LOGGER.info(
            "Puzzle finished: %d words, %d hints, %s after %d extra hints",
            len(words),
            len(hint_placer.hints),
            "unique" if unique else "non-unique",
            rounds,
        )
        return PuzzleResult(
            grid=grid,
            words=words,
            hints=list(hint_placer.hints),
            unique=unique,
            state=self.state,
            rounds=rounds,
            warnings=warnings,
            validation_messages=messages,
            seed=self.config.seed,
        )

    def pick_difficulty(self) -> Difficulty:
        table = self.config.weight_table()
        labels = list(table)
        return self.rng.choices(labels, weights=[table[label] for label in labels], k=1)[0]

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------
    def _place_hints(self, placer: HintPlacer) -> None:
        for index in range(self.config.num_hints):
            difficulty = self.pick_difficulty()
            LOGGER.debug("Hint %d/%d: drew '%s'", index + 1, self.config.num_hints, difficulty.value)
            placer.place_with_fallback(difficulty)
        LOGGER.info("Placed %d/%d hints", len(placer.hints), self.config.num_hints)

    def _ensure_unique(
        self,
        grid: PuzzleGrid,
        placer: HintPlacer,
        slots: List[WordSlot],
    ) -> Tuple[bool, int, List[str]]:
        solver = UniquenessSolver(
            self.dictionary,
            rng=self.rng,
            max_iterations=self.config.solver_max_iterations,
            time_limit=self.config.solver_time_limit,
            green_probability=self.config.green_upgrade_probability,
        )
        warnings: List[str] = []
        rounds = 0

        while True:
            self._transition(PipelineState.SOLVING)
            try:
                outcome = solver.solve(grid, placer.hints, slots)
            except SolverBudgetExceeded as exc:
                warnings.append(f"Uniqueness unresolved: {exc}")
                break

            if outcome.unique:
                self._transition(PipelineState.UNIQUE)
                return True, rounds, warnings

            if rounds >= self.config.max_disambiguation_rounds:
                warnings.append(
                    f"Uniqueness unresolved after {rounds} disambiguation rounds"
                )
                break
            suggestion = outcome.suggestion
            if suggestion is None:
                warnings.append("Uniqueness unresolved: no cell can separate the alternate filling")
                break

            self._transition(PipelineState.SOLVING_ADD_HINT)
            try:
                placer.color_hint(
                    suggestion.row, suggestion.col, suggestion.adjacency, Difficulty.BEGINNER
                )
            except PlacementError as exc:
                warnings.append(f"Uniqueness unresolved: {exc}")
                break
            rounds += 1

        for message in warnings:
            LOGGER.warning(message)
        self._transition(PipelineState.UNRESOLVED)
        return False, rounds, warnings

    def _cross_check(self, grid: PuzzleGrid, slots: List[WordSlot], hints: List[Hint]) -> List[str]:
        try:
            alternate = find_alternate_solution(
                grid, slots, hints, self.dictionary, timeout=self.config.cross_check_timeout
            )
        except SolverBudgetExceeded as exc:
            LOGGER.warning("CP-SAT cross-check inconclusive: %s", exc)
            return [f"CP-SAT cross-check inconclusive: {exc}"]
        if alternate is None:
            return []
        message = "CP-SAT cross-check found an alternate filling for a puzzle reported unique"
        LOGGER.error(message)
        return [message]

    def _transition(self, state: PipelineState) -> None:
        LOGGER.debug("State %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)
