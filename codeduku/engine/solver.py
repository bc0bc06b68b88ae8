"""Backtracking uniqueness solver.

The search re-fills a blanked copy of the grid slot by slot with dictionary
words of the right length, pruning on hint checksums, and stops at the first
complete filling whose letters differ from the original puzzle. As on the grid,
an uppercase letter replaces a lowercase one in a shared cell. Frames live on
an explicit stack so deep grids never hit the recursion limit.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence, Set

from ..core.codec import decode, letter_code
from ..core.constants import HINT_PREFIX
from ..core.exceptions import SolverBudgetExceeded
from ..core.models import Hint, Position, Suggestion, WordSlot
from ..data.dictionary import WordDictionary
from ..utils.logger import get_logger
from .disambiguation import GREEN_UPGRADE_PROBABILITY, select_disambiguation
from .grid import LetterGrid, PuzzleGrid
from .hints import hint_reachable


LOGGER = get_logger(__name__)

TIME_CHECK_INTERVAL = 1024


@dataclass
class SolveResult:
    unique: bool
    differing_cells: List[Position] = field(default_factory=list)
    alternate: Dict[Position, str] = field(default_factory=dict)
    suggestion: Optional[Suggestion] = None
    iterations: int = 0


class _Write(NamedTuple):
    position: Position
    previous: Optional[str]


class _Frame(NamedTuple):
    slot_index: int
    word_index: int
    placements: List[_Write]


class _HintCheck(NamedTuple):
    target: int
    neighbors: List[Position]
    # Slots that must be placed before each neighbor's letter is final.
    settled_after: List[int]


def build_slots(grid: PuzzleGrid, dictionary: WordDictionary) -> List[WordSlot]:
    """One slot per distinct phrase index, in row-major order of first sight."""

    slots: List[WordSlot] = []
    seen: Set[int] = set()
    for cell in grid.iter_cells():
        if not cell.has_letter() or cell.phrase_index is None:
            continue
        if cell.phrase_index in seen:
            continue
        if cell.origin is None or cell.orientation is None:
            continue
        seen.add(cell.phrase_index)
        slots.append(
            WordSlot(
                row=cell.origin[0],
                col=cell.origin[1],
                orientation=cell.orientation,
                length=len(dictionary[cell.phrase_index]),
                phrase_index=cell.phrase_index,
            )
        )
    LOGGER.debug("Built %d solver slots", len(slots))
    return slots


class UniquenessSolver:
    """Searches for a second filling consistent with the placed hints."""

    def __init__(
        self,
        dictionary: WordDictionary,
        rng: Optional[random.Random] = None,
        max_iterations: Optional[int] = None,
        time_limit: Optional[float] = None,
        green_probability: float = GREEN_UPGRADE_PROBABILITY,
    ) -> None:
        self.dictionary = dictionary
        self.rng = rng or random.Random()
        self.max_iterations = max_iterations
        self.time_limit = time_limit
        self.green_probability = green_probability

    def solve(
        self,
        grid: PuzzleGrid,
        hints: Sequence[Hint],
        slots: Optional[Sequence[WordSlot]] = None,
    ) -> SolveResult:
        """Report whether ``grid`` is the only filling that satisfies ``hints``.

        ``grid`` is never modified; the search runs on a private letter copy.
        Raises :class:`SolverBudgetExceeded` when an iteration or time budget
        is configured and runs out first.
        """

        if slots is None:
            slots = build_slots(grid, self.dictionary)
        original = grid.letters()
        working = grid.blank_copy().letters()
        positions = [slot.cells for slot in slots]
        last_cover: Dict[Position, int] = {}
        for slot_index, cells in enumerate(positions):
            for pos in cells:
                last_cover[pos] = slot_index + 1
        checks = [self._hint_check(grid, hint, last_cover) for hint in hints]

        LOGGER.info("Solving %d slots against %d hints", len(slots), len(checks))
        started = time.monotonic()
        iterations = 0
        stack: List[_Frame] = [_Frame(0, -1, [])]

        while stack:
            frame = stack.pop()
            iterations += 1
            self._check_budget(iterations, started)

            self._undo(frame.placements, working)

            if frame.slot_index == len(slots):
                differing = self._differences(original, working)
                if differing:
                    alternate = {pos: working[pos[0]][pos[1]] or "" for pos in differing}
                    LOGGER.info(
                        "Alternate solution after %d iterations differs in %d cells",
                        iterations,
                        len(differing),
                    )
                    suggestion = select_disambiguation(
                        grid, differing, self.rng, self.green_probability
                    )
                    return SolveResult(
                        unique=False,
                        differing_cells=differing,
                        alternate=alternate,
                        suggestion=suggestion,
                        iterations=iterations,
                    )
                LOGGER.debug("Reached the original filling again; continuing")
                continue

            cells = positions[frame.slot_index]
            for word_index in self.dictionary.indices_of_length(len(cells)):
                if word_index <= frame.word_index:
                    continue
                word = self.dictionary[word_index]
                if not self._fits(word, cells, working):
                    continue

                placed = self._write(word, cells, working)

                if self._hints_consistent(checks, working, frame.slot_index + 1):
                    stack.append(_Frame(frame.slot_index, word_index, placed))
                    stack.append(_Frame(frame.slot_index + 1, -1, []))
                    break

                self._undo(placed, working)

        LOGGER.info("No alternate solution after %d iterations; puzzle is unique", iterations)
        return SolveResult(unique=True, iterations=iterations)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _hint_check(grid: PuzzleGrid, hint: Hint, last_cover: Dict[Position, int]) -> _HintCheck:
        token = grid.cell(hint.row, hint.col).letter or hint.token
        return _HintCheck(
            target=decode(token[len(HINT_PREFIX)]),
            neighbors=list(hint.neighbors),
            settled_after=[last_cover.get(pos, 0) for pos in hint.neighbors],
        )

    @staticmethod
    def _fits(word: str, cells: Sequence[Position], working: LetterGrid) -> bool:
        for (r, c), char in zip(cells, word):
            existing = working[r][c]
            if existing and existing[0].lower() != char.lower():
                return False
        return True

    @staticmethod
    def _write(word: str, cells: Sequence[Position], working: LetterGrid) -> List[_Write]:
        """Fill ``cells`` with ``word``; an uppercase letter replaces a lowercase one."""

        writes: List[_Write] = []
        for (r, c), char in zip(cells, word):
            existing = working[r][c]
            if existing and (existing.isupper() or not char.isupper()):
                continue
            writes.append(_Write((r, c), existing))
            working[r][c] = char
        return writes

    @staticmethod
    def _undo(writes: Sequence[_Write], working: LetterGrid) -> None:
        for (r, c), previous in reversed(writes):
            working[r][c] = previous

    @staticmethod
    def _hints_consistent(
        checks: Sequence[_HintCheck], working: LetterGrid, placed_slots: int
    ) -> bool:
        for check in checks:
            total = 0
            empty = 0
            for (r, c), settled_after in zip(check.neighbors, check.settled_after):
                letter = working[r][c]
                # A later crossing slot may still uppercase this letter.
                if letter and settled_after <= placed_slots:
                    total += letter_code(letter)
                else:
                    empty += 1
            if not hint_reachable(total, empty, check.target):
                return False
        return True

    @staticmethod
    def _differences(original: LetterGrid, working: LetterGrid) -> List[Position]:
        differing: List[Position] = []
        for r, row in enumerate(original):
            for c, letter in enumerate(row):
                if not letter or letter.startswith(HINT_PREFIX):
                    continue
                candidate = working[r][c]
                if candidate is None or candidate.lower() != letter.lower():
                    differing.append((r, c))
        return differing

    def _check_budget(self, iterations: int, started: float) -> None:
        if self.max_iterations is not None and iterations > self.max_iterations:
            raise SolverBudgetExceeded(f"Search exceeded {self.max_iterations} iterations")
        if self.time_limit is not None and iterations % TIME_CHECK_INTERVAL == 0:
            elapsed = time.monotonic() - started
            if elapsed > self.time_limit:
                raise SolverBudgetExceeded(
                    f"Search exceeded {self.time_limit:.1f}s after {iterations} iterations"
                )
