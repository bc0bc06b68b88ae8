"""Word list loading and length-indexed lookup."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from ..core.exceptions import DictionaryLoadError
from ..utils.logger import get_logger
from .normalization import clean_word


LOGGER = get_logger(__name__)


@dataclass
class DictionaryConfig:
    """Configuration for dictionary loading and filtering."""

    path: Path | str
    min_length: int = 2
    max_length: int = 24
    encoding: str = "utf-8"


class WordDictionary:
    """Ordered list of distinct words.

    Order matters: a word's position is its phrase index, and the solver tries
    candidates in ascending index order.
    """

    def __init__(
        self,
        words: Iterable[str],
        min_length: int = 1,
        max_length: Optional[int] = None,
    ) -> None:
        self._words: List[str] = []
        self._index_by_word: Dict[str, int] = {}
        self._indices_by_length: Dict[int, List[int]] = defaultdict(list)
        self._hydrate(words, min_length, max_length)

    @classmethod
    def load(cls, config: DictionaryConfig) -> "WordDictionary":
        source = Path(config.path)
        if not source.exists():
            raise DictionaryLoadError(f"Missing word list: {source}")
        try:
            lines = source.read_text(encoding=config.encoding).splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            raise DictionaryLoadError(f"Unable to read {source}: {exc}") from exc

        entries = [
            line.strip() for line in lines if line.strip() and not line.lstrip().startswith("#")
        ]
        dictionary = cls(entries, min_length=config.min_length, max_length=config.max_length)
        LOGGER.info("Loaded %d words from %s", len(dictionary), source)
        return dictionary

    def _hydrate(self, words: Iterable[str], min_length: int, max_length: Optional[int]) -> None:
        skipped = 0
        for raw in words:
            word = clean_word(raw)
            if len(word) < max(1, min_length):
                skipped += 1
                continue
            if max_length is not None and len(word) > max_length:
                skipped += 1
                continue
            if word in self._index_by_word:
                LOGGER.debug("Dropping duplicate word '%s'", word)
                skipped += 1
                continue
            index = len(self._words)
            self._words.append(word)
            self._index_by_word[word] = index
            self._indices_by_length[len(word)].append(index)
        if skipped:
            LOGGER.debug("Skipped %d dictionary entries", skipped)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def sanitize(self, text: str) -> str:
        return clean_word(text)

    @property
    def words(self) -> List[str]:
        return list(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __getitem__(self, index: int) -> str:
        return self._words[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._index_by_word

    def index_of(self, word: str) -> int:
        try:
            return self._index_by_word[word]
        except KeyError:
            raise KeyError(f"'{word}' is not in the dictionary") from None

    def indices_of_length(self, length: int) -> List[int]:
        return self._indices_by_length.get(length, [])

    def words_of_length(self, length: int) -> List[str]:
        return [self._words[i] for i in self.indices_of_length(length)]

    def max_word_length(self) -> int:
        return max(self._indices_by_length, default=0)
