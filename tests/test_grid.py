import unittest

from codeduku.core.constants import AdjacencyClass, Background, Orientation
from codeduku.core.exceptions import ConfigurationError, PlacementError
from codeduku.core.models import PlacedWord
from codeduku.engine.grid import GridConfig, PuzzleGrid


def cat_car_grid() -> PuzzleGrid:
    grid = PuzzleGrid(GridConfig(rows=4, cols=4))
    grid.write_word(PlacedWord("cat", 0, 0, Orientation.HORIZONTAL, 0))
    grid.write_word(PlacedWord("car", 0, 0, Orientation.VERTICAL, 1))
    return grid


class GridQueryTests(unittest.TestCase):
    def test_get_out_of_bounds_returns_none(self) -> None:
        grid = PuzzleGrid(GridConfig(rows=3, cols=2))
        self.assertIsNone(grid.get(-1, 0))
        self.assertIsNone(grid.get(3, 0))
        self.assertIsNone(grid.get(0, 2))
        self.assertEqual(grid.get(2, 1).position, (2, 1))

    def test_non_positive_dimensions_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            PuzzleGrid(GridConfig(rows=0, cols=3))

    def test_corner_neighbors_are_padded(self) -> None:
        grid = cat_car_grid()
        cross, diagonal = grid.neighbors(0, 0)
        self.assertEqual(len(cross), 4)
        self.assertEqual(len(diagonal), 4)
        self.assertEqual(
            sorted(n.position for n in cross if n.has_letter()), [(0, 1), (1, 0)]
        )
        self.assertEqual([n.position for n in diagonal if n.has_letter()], [])
        self.assertTrue(all(n.is_empty() for n in cross if n.position in {(-1, 0), (0, -1)}))

    def test_hint_cells_are_masked_as_neighbors(self) -> None:
        grid = cat_car_grid()
        grid.write_hint(1, 1, "=a", Background.RED)
        cross, _ = grid.neighbors(1, 2)
        masked = [n for n in cross if n.position == (1, 1)][0]
        self.assertTrue(masked.is_empty())
        self.assertIsNot(masked, grid.cell(1, 1))

    def test_green_neighbors_are_diagonal_then_cross(self) -> None:
        grid = cat_car_grid()
        green = grid.class_neighbors(1, 1, AdjacencyClass.GREEN)
        self.assertEqual(len(green), 8)
        self.assertEqual(green[0].position, (0, 0))
        self.assertEqual(
            grid.letter_neighbors(1, 1, AdjacencyClass.GREEN),
            [(0, 0), (0, 2), (2, 0), (0, 1), (1, 0)],
        )


class GridPlacementTests(unittest.TestCase):
    def test_write_word_records_metadata(self) -> None:
        grid = cat_car_grid()
        shared = grid.cell(0, 0)
        self.assertTrue(shared.is_overlap)
        self.assertEqual(shared.phrase_index, 1)
        self.assertEqual(shared.orientation, Orientation.VERTICAL)
        self.assertEqual(shared.origin, (0, 0))
        self.assertFalse(grid.cell(0, 1).is_overlap)
        self.assertEqual(grid.cell(0, 1).background, Background.FILLED)
        self.assertEqual(grid.read_word(0, 0, Orientation.HORIZONTAL, 3), "cat")
        self.assertEqual(grid.read_word(0, 0, Orientation.VERTICAL, 3), "car")

    def test_conflicting_letter_is_rejected(self) -> None:
        grid = cat_car_grid()
        before = grid.letters()
        with self.assertRaises(PlacementError):
            grid.write_word(PlacedWord("dog", 0, 0, Orientation.HORIZONTAL, 2))
        self.assertEqual(grid.letters(), before)

    def test_word_outside_grid_is_rejected(self) -> None:
        grid = PuzzleGrid(GridConfig(rows=2, cols=2))
        self.assertFalse(grid.fits("cat", 0, 0, Orientation.HORIZONTAL))
        with self.assertRaises(PlacementError):
            grid.write_word(PlacedWord("cat", 0, 0, Orientation.HORIZONTAL, 0))

    def test_uppercase_wins_on_overlap(self) -> None:
        grid = PuzzleGrid(GridConfig(rows=4, cols=4))
        grid.write_word(PlacedWord("Cat", 0, 0, Orientation.HORIZONTAL, 0))
        grid.write_word(PlacedWord("car", 0, 0, Orientation.VERTICAL, 1))
        self.assertEqual(grid.cell(0, 0).letter, "C")

        grid = PuzzleGrid(GridConfig(rows=4, cols=4))
        grid.write_word(PlacedWord("cat", 0, 0, Orientation.HORIZONTAL, 0))
        grid.write_word(PlacedWord("Car", 0, 0, Orientation.VERTICAL, 1))
        self.assertEqual(grid.cell(0, 0).letter, "C")
        self.assertEqual(grid.cell(1, 0).letter, "a")

    def test_hint_cannot_overwrite_letter(self) -> None:
        grid = cat_car_grid()
        with self.assertRaises(PlacementError):
            grid.write_hint(0, 1, "=a", Background.RED)


class GridCopyTests(unittest.TestCase):
    def test_blank_copy_keeps_hints_only(self) -> None:
        grid = cat_car_grid()
        grid.write_hint(0, 3, "=t", Background.RED)
        blank = grid.blank_copy()
        self.assertIsNone(blank.cell(0, 0).letter)
        self.assertEqual(blank.cell(0, 3).letter, "=t")
        self.assertEqual(grid.cell(0, 0).letter, "c")

    def test_to_jsonable(self) -> None:
        grid = cat_car_grid()
        grid.write_hint(0, 3, "=t", Background.RED)
        payload = grid.to_jsonable()
        self.assertEqual(len(payload), 4)
        self.assertEqual(payload[0][0]["letter"], "c")
        self.assertEqual(payload[0][0]["orientation"], "VERTICAL")
        self.assertTrue(payload[0][0]["is_overlap"])
        self.assertTrue(payload[0][3]["is_hint"])
        self.assertEqual(payload[0][3]["background"], "red")
        self.assertEqual(payload[3][3]["background"], "white")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
