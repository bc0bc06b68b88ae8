"""Text rendering of puzzle grids and end-of-run statistics."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, Callable

from ..core.constants import Background
from ..core.models import Cell

if TYPE_CHECKING:
    from ..engine.generator import PuzzleResult
    from ..engine.grid import PuzzleGrid


BACKGROUND_CODES = {
    Background.BLANK: ".",
    Background.FILLED: "-",
    Background.RED: "r",
    Background.BLUE: "b",
    Background.GREEN: "g",
    Background.RED_BLUE: "rb",
    Background.RED_GREEN: "rg",
    Background.BLUE_GREEN: "bg",
    Background.RED_BLUE_GREEN: "*",
}


def cell_symbol(cell: Cell) -> str:
    return "." if cell.is_empty() else cell.letter


def background_symbol(cell: Cell) -> str:
    return BACKGROUND_CODES[cell.background]


def format_grid(grid: PuzzleGrid, symbol: Callable[[Cell], str] = cell_symbol) -> str:
    """Render ``grid`` with row/column rulers; columns widen to the longest symbol."""

    rows = [[symbol(cell) for cell in row] for row in grid.cells]
    width = max([2] + [len(text) for row in rows for text in row])
    header = " ".join(f"{c:>{width}}" for c in range(grid.bounds.cols))
    lines = ["    " + header, "    " + "-" * len(header)]
    for r, row in enumerate(rows):
        lines.append(f"{r:>2} | " + " ".join(f"{text:>{width}}" for text in row))
    return "\n".join(lines)


def pretty_print_grid(grid: PuzzleGrid, *, label: str | None = None, stream=None) -> None:
    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_puzzle_stats(result: PuzzleResult, *, stream=None) -> None:
    """Print grid, blank grid and summary stats for a finished puzzle."""

    stream = stream or sys.stdout
    grid = result.grid
    pretty_print_grid(grid, label="Solution", stream=stream)
    print(file=stream)
    pretty_print_grid(result.blank_grid(), label="Puzzle", stream=stream)
    print(file=stream)
    print("Colors", file=stream)
    print(format_grid(grid, background_symbol), file=stream)

    total_cells = grid.bounds.rows * grid.bounds.cols
    letter_cells = sum(1 for cell in grid.iter_cells() if cell.has_letter())
    overlap_cells = sum(1 for cell in grid.iter_cells() if cell.is_overlap)

    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {grid.bounds.rows} x {grid.bounds.cols} ({total_cells} cells)", file=stream)
    print(f"  Letters:       {letter_cells} ({letter_cells / total_cells * 100:.0f}%)", file=stream)
    print(f"  Crossings:     {overlap_cells}", file=stream)

    print(file=stream)
    print("--- Words ---", file=stream)
    print(f"  Placed:        {len(result.words)}", file=stream)
    lengths = [placed.length for placed in result.words]
    if lengths:
        dist_parts = [f"{l}:{c}" for l, c in sorted(Counter(lengths).items())]
        print(f"  Length range:  {min(lengths)}-{max(lengths)}", file=stream)
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)

    print(file=stream)
    print("--- Hints ---", file=stream)
    print(f"  Placed:        {len(result.hints)} ({result.rounds} added by the solver)", file=stream)
    by_class = Counter(hint.adjacency.value for hint in result.hints)
    by_level = Counter(hint.difficulty.value for hint in result.hints)
    print(f"  Classes:       {' '.join(f'{k}:{v}' for k, v in sorted(by_class.items()))}", file=stream)
    print(f"  Difficulty:    {' '.join(f'{k}:{v}' for k, v in sorted(by_level.items()))}", file=stream)

    print(file=stream)
    print(f"Unique: {'yes' if result.unique else 'no'}", file=stream)
    for message in result.warnings:
        print(f"  warning: {message}", file=stream)
    for message in result.validation_messages:
        print(f"  validation: {message}", file=stream)
    if result.seed is not None:
        print(f"Seed: {result.seed}", file=stream)
