"""Deterministic rule validation for generated puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..core.exceptions import ValidationError
from ..core.models import Hint, PlacedWord
from ..utils.logger import get_logger
from .grid import PuzzleGrid
from .hints import hint_value


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class PuzzleValidator:
    """Runs deterministic validation over the final grid."""

    def validate(
        self,
        grid: PuzzleGrid,
        words: Sequence[PlacedWord],
        hints: Sequence[Hint],
    ) -> ValidationResult:
        messages: List[str] = []
        for check in (self._check_words, self._check_hints):
            try:
                check(grid, words, hints)
            except ValidationError as exc:
                messages.append(str(exc))
                LOGGER.error("Validation failed: %s", exc)
        return ValidationResult(ok=not messages, messages=messages)

    def _check_words(self, grid: PuzzleGrid, words: Sequence[PlacedWord], hints: Sequence[Hint]) -> None:
        for placed in words:
            text = grid.read_word(placed.row, placed.col, placed.orientation, placed.length)
            if text.lower() != placed.word.lower():
                raise ValidationError(
                    f"Word '{placed.word}' at {(placed.row, placed.col)} reads back as '{text}'"
                )

    def _check_hints(self, grid: PuzzleGrid, words: Sequence[PlacedWord], hints: Sequence[Hint]) -> None:
        for hint in hints:
            cell = grid.cell(hint.row, hint.col)
            if not cell.is_hint():
                raise ValidationError(f"Hint cell {hint.position} holds '{cell.letter}'")
            if cell.letter != hint.token:
                raise ValidationError(
                    f"Hint cell {hint.position} shows '{cell.letter}', expected '{hint.token}'"
                )
            expected = hint_value(hint.neighbors, grid)
            if expected != hint.token:
                raise ValidationError(
                    f"Hint {hint.position} token '{hint.token}' does not match checksum '{expected}'"
                )
