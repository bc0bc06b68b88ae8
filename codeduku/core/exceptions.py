"""Custom exception hierarchy for puzzle generation."""


class PuzzleError(Exception):
    """Base exception for generator failures."""


class ConfigurationError(PuzzleError):
    """Raised when generator settings are invalid; aborts the run."""


class DictionaryLoadError(PuzzleError):
    """Raised when the word list cannot be read."""


class InvalidSymbolError(PuzzleError, ValueError):
    """Raised when a character or value is outside the Base62 alphabet."""


class PlacementError(PuzzleError):
    """Raised when a word or hint would overwrite an incompatible cell."""


class SolverBudgetExceeded(PuzzleError):
    """Raised when the uniqueness search runs out of iterations or time."""


class ValidationError(PuzzleError):
    """Raised when the puzzle integrity checks fail."""
