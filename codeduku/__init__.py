"""Checksum-hint crossword puzzle generator.

This package exposes the public API surface via:

- ``codeduku.engine.generator.PuzzleGenerator``: builds a puzzle and repairs
  it until the uniqueness solver accepts it.
- ``codeduku.data.dictionary.WordDictionary``: ordered, distinct word list.
- ``codeduku.engine.solver.UniquenessSolver``: standalone uniqueness check.
"""

from .data.dictionary import DictionaryConfig, WordDictionary
from .engine.generator import GeneratorConfig, PuzzleGenerator, PuzzleResult
from .engine.solver import SolveResult, UniquenessSolver

__all__ = [
    "DictionaryConfig",
    "GeneratorConfig",
    "PuzzleGenerator",
    "PuzzleResult",
    "SolveResult",
    "UniquenessSolver",
    "WordDictionary",
]

__version__ = "0.1.0"
