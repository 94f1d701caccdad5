from __future__ import annotations

import unittest

from chartgrid import Grid


class GridTests(unittest.TestCase):
    def test_spacing_gridlines(self) -> None:
        grid = Grid(start_x=0, start_y=0, width=100, height=50, spacing=20)
        self.assertEqual(grid.gridline_offsets(), (20, 40))
        self.assertEqual(grid.gridlines()[0], ((0, 20), (100, 20)))

    def test_spacing_gridlines_downwards(self) -> None:
        grid = Grid(start_x=0, start_y=0, width=100, height=50, spacing=20, downwards=True)
        self.assertEqual(grid.gridline_offsets(), (30, 10))
        self.assertEqual(grid.x_axis_y, 50)

    def test_marker_gridlines(self) -> None:
        grid = Grid(start_x=5, start_y=5, width=100, height=50, marker_points=(0.0, 0.5, 1.0))
        self.assertEqual(grid.gridline_offsets(), (0.0, 25.0, 50.0))
        flipped = Grid(start_x=5, start_y=5, width=100, height=50, marker_points=(0.0, 0.5, 1.0), downwards=True)
        self.assertEqual(flipped.gridline_offsets(), (50.0, 25.0, 0.0))

    def test_geometry(self) -> None:
        grid = Grid(start_x=10, start_y=20, width=100, height=50)
        self.assertEqual(grid.point, (10, 20))
        self.assertEqual((grid.end_x, grid.end_y), (110, 70))
        self.assertEqual(grid.x_axis_y, 20)
        self.assertTrue(grid.contains(50, 30))
        self.assertFalse(grid.contains(5, 30))

    def test_rejects_empty_rectangle(self) -> None:
        with self.assertRaises(ValueError):
            Grid(start_x=0, start_y=0, width=0, height=10)
        with self.assertRaises(ValueError):
            Grid(start_x=0, start_y=0, width=10, height=10, spacing=0)


if __name__ == "__main__":
    unittest.main()
