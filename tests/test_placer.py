import random
import unittest

from codeduku.core.constants import Orientation
from codeduku.core.models import PlacedWord
from codeduku.data.dictionary import WordDictionary
from codeduku.engine.grid import GridConfig, PuzzleGrid
from codeduku.engine.placer import WordPlacer


class CanPlaceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dictionary = WordDictionary(["cat", "tab", "ab", "xa", "dog", "at"])
        self.grid = PuzzleGrid(GridConfig(rows=5, cols=5))
        self.placer = WordPlacer(self.grid, self.dictionary, random.Random(0))

    def _write(self, word: str, row: int, col: int, orientation: Orientation) -> None:
        self.grid.write_word(
            PlacedWord(word, row, col, orientation, self.dictionary.index_of(word))
        )

    def test_crossing_word_is_accepted(self) -> None:
        self._write("cat", 1, 0, Orientation.HORIZONTAL)
        self.assertTrue(self.placer.can_place("tab", 1, 2, Orientation.VERTICAL))
        self.assertTrue(self.placer.can_place("at", 0, 2, Orientation.VERTICAL))

    def test_word_without_overlap_is_rejected(self) -> None:
        self._write("cat", 1, 0, Orientation.HORIZONTAL)
        self.assertFalse(self.placer.can_place("dog", 0, 4, Orientation.VERTICAL))

    def test_conflicting_letter_is_rejected(self) -> None:
        self._write("cat", 1, 0, Orientation.HORIZONTAL)
        self.assertFalse(self.placer.can_place("tab", 1, 1, Orientation.VERTICAL))

    def test_consecutive_overlaps_are_rejected(self) -> None:
        self._write("cat", 1, 0, Orientation.HORIZONTAL)
        self.assertFalse(self.placer.can_place("cat", 1, 0, Orientation.HORIZONTAL))

    def test_parallel_neighbor_is_rejected(self) -> None:
        self._write("cat", 1, 0, Orientation.HORIZONTAL)
        self._write("tab", 1, 2, Orientation.VERTICAL)
        # (2,1) would sit right beside the 'a' of "tab".
        self.assertFalse(self.placer.can_place("ab", 1, 1, Orientation.VERTICAL))

    def test_occupied_boundary_is_rejected(self) -> None:
        self._write("cat", 2, 0, Orientation.HORIZONTAL)
        self.assertTrue(self.placer.can_place("xa", 1, 1, Orientation.VERTICAL))
        self.grid.cell(0, 1).letter = "q"
        self.assertFalse(self.placer.can_place("xa", 1, 1, Orientation.VERTICAL))


class PopulateTests(unittest.TestCase):
    WORDS = ["cat", "car", "cap", "tar", "tap", "arc", "art", "rat", "pat", "apt", "act", "tea"]

    def test_seed_word_is_placed(self) -> None:
        grid = PuzzleGrid(GridConfig(rows=4, cols=4))
        placer = WordPlacer(grid, WordDictionary(["cat"]), random.Random(3))
        placed = placer.place_seed()
        self.assertIsNotNone(placed)
        self.assertEqual(grid.read_word(placed.row, placed.col, placed.orientation, 3), "cat")

    def test_seed_fails_when_nothing_fits(self) -> None:
        grid = PuzzleGrid(GridConfig(rows=2, cols=2))
        placer = WordPlacer(grid, WordDictionary(["sheep"]), random.Random(3))
        self.assertEqual(placer.populate(3), [])
        self.assertTrue(all(cell.is_empty() for cell in grid.iter_cells()))

    def test_place_next_returns_none_when_exhausted(self) -> None:
        grid = PuzzleGrid(GridConfig(rows=4, cols=4))
        placer = WordPlacer(grid, WordDictionary(["cat"]), random.Random(1))
        placer.place_seed()
        self.assertIsNone(placer.place_next())

    def test_populate_places_distinct_readable_words(self) -> None:
        dictionary = WordDictionary(self.WORDS)
        grid = PuzzleGrid(GridConfig(rows=8, cols=8))
        placed = WordPlacer(grid, dictionary, random.Random(11)).populate(6)
        self.assertGreaterEqual(len(placed), 2)
        self.assertEqual(len({p.word for p in placed}), len(placed))
        for word in placed:
            self.assertEqual(grid.read_word(word.row, word.col, word.orientation, word.length), word.word)
            self.assertEqual(word.phrase_index, dictionary.index_of(word.word))

    def test_populate_is_reproducible(self) -> None:
        dictionary = WordDictionary(self.WORDS)
        layouts = []
        for _ in range(2):
            grid = PuzzleGrid(GridConfig(rows=8, cols=8))
            WordPlacer(grid, dictionary, random.Random(5)).populate(5)
            layouts.append(grid.letters())
        self.assertEqual(layouts[0], layouts[1])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
