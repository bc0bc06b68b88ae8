import random
import unittest

from codeduku.core.constants import AdjacencyClass, Difficulty, Orientation
from codeduku.core.models import PlacedWord
from codeduku.engine.disambiguation import select_disambiguation
from codeduku.engine.grid import GridConfig, PuzzleGrid
from codeduku.engine.hints import HintPlacer

from helpers import cat_car_puzzle


class SelectDisambiguationTests(unittest.TestCase):
    def test_higher_score_wins(self) -> None:
        grid, _, _ = cat_car_puzzle()
        suggestion = select_disambiguation(grid, [(0, 1), (1, 0)], random.Random(0), 0.0)
        self.assertEqual(suggestion.position, (1, 1))
        self.assertIs(suggestion.adjacency, AdjacencyClass.RED)
        self.assertEqual(suggestion.cross_score, 2)
        self.assertEqual(suggestion.diagonal_score, 1)

    def test_diagonal_only_difference(self) -> None:
        grid, _, _ = cat_car_puzzle()
        suggestion = select_disambiguation(grid, [(0, 0)], random.Random(0), 0.0)
        self.assertEqual(suggestion.position, (1, 1))
        self.assertIs(suggestion.adjacency, AdjacencyClass.BLUE)
        self.assertEqual((suggestion.cross_score, suggestion.diagonal_score), (0, 1))

    def test_upgrade_to_green_when_other_class_is_unrevealed(self) -> None:
        grid, _, _ = cat_car_puzzle()
        suggestion = select_disambiguation(grid, [(0, 1), (1, 0)], random.Random(0), 1.0)
        self.assertIs(suggestion.adjacency, AdjacencyClass.GREEN)

    def test_tie_picks_either_class(self) -> None:
        grid, _, _ = cat_car_puzzle(("cat", "car", "cap"))
        HintPlacer(grid, random.Random(0)).color_hint(0, 3, AdjacencyClass.RED, Difficulty.BEGINNER)
        seen = set()
        for seed in range(30):
            suggestion = select_disambiguation(grid, [(2, 0)], random.Random(seed), 0.0)
            seen.add((suggestion.position, suggestion.adjacency))
        self.assertEqual(
            seen, {((2, 1), AdjacencyClass.RED), ((1, 1), AdjacencyClass.BLUE)}
        )

    def test_colored_cells_are_never_suggested(self) -> None:
        grid, _, _ = cat_car_puzzle()
        HintPlacer(grid, random.Random(0)).color_hint(2, 1, AdjacencyClass.RED, Difficulty.BEGINNER)
        suggestion = select_disambiguation(grid, [(2, 0)], random.Random(0), 0.0)
        self.assertNotEqual(suggestion.position, (2, 1))

    def test_nothing_to_separate(self) -> None:
        grid, _, _ = cat_car_puzzle()
        self.assertIsNone(select_disambiguation(grid, [], random.Random(0)))

    def test_no_blank_cell_touches_difference(self) -> None:
        grid = PuzzleGrid(GridConfig(rows=1, cols=3))
        grid.write_word(PlacedWord("cat", 0, 0, Orientation.HORIZONTAL, 0))
        self.assertIsNone(select_disambiguation(grid, [(0, 1)], random.Random(0)))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
