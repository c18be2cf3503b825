import unittest
import sys
import os
from array import array

# Add project root to path so we can import cellmaze
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cellmaze.core.cell import Cell
from cellmaze.core.grid import Grid


class TestGrid(unittest.TestCase):
    def test_initialization(self):
        w, h = 10, 6
        grid = Grid(w, h)
        self.assertEqual(grid.size, w * h)
        self.assertEqual(len(grid.cells), h)
        self.assertEqual(len(grid.cells[0]), w)
        # All cells should have all walls (value 15)
        for cell in grid:
            self.assertEqual(cell.walls, Grid.ALL_WALLS)
            self.assertIsNone(cell.predecessor)
        # Indexed [y][x]
        self.assertEqual(grid.cells[2][7].position, (7, 2))
        self.assertIsNone(grid.start_cell)
        self.assertIsNone(grid.end_cell)

    def test_invalid_dimensions(self):
        with self.assertRaises(ValueError):
            Grid(-1, 5)
        with self.assertRaises(ValueError):
            Grid(5, -3)
        with self.assertRaises(ValueError):
            Grid(2.5, 3)
        with self.assertRaises(ValueError):
            Grid(True, True)
        with self.assertRaises(ValueError):
            Grid(4, False)

    def test_zero_area_allowed(self):
        grid = Grid(0, 4)
        self.assertEqual(grid.size, 0)
        self.assertEqual(list(grid), [])

    def test_coordinates(self):
        grid = Grid(5, 5)
        idx = grid.get_index(2, 2)
        self.assertEqual(idx, 12) # 2 * 5 + 2
        self.assertIs(grid.cell_at(idx), grid.cell(2, 2))

        with self.assertRaises(IndexError):
            grid.get_index(-1, 0)
        with self.assertRaises(IndexError):
            grid.get_index(0, 5)
        with self.assertRaises(IndexError):
            grid.cell(5, 0)

    def test_carve_path(self):
        grid = Grid(2, 2)
        # 0,0  1,0
        # 0,1  1,1

        # Carve from (0,0) RIGHT to (1,0)
        a, b = grid.cell(0, 0), grid.cell(1, 0)
        self.assertIs(grid.carve_path(a, Grid.RIGHT), b)

        self.assertFalse(a.right)
        self.assertFalse(b.left)

        # Others remain
        self.assertTrue(a.top)
        self.assertTrue(a.bottom)
        self.assertTrue(b.right) # (1,0) still has its own right wall

    def test_carve_into_void(self):
        grid = Grid(2, 2)
        corner = grid.cell(0, 0)
        self.assertIsNone(grid.carve_path(corner, Grid.TOP))
        self.assertEqual(corner.walls, Grid.ALL_WALLS)

    def test_remove_and_add_wall(self):
        grid = Grid(3, 3)
        a, b = grid.cell(1, 1), grid.cell(1, 2)
        grid.remove_wall_between(a, b)
        self.assertFalse(a.wall_towards(b))
        self.assertFalse(b.wall_towards(a))

        grid.add_wall(a, Grid.BOTTOM)
        self.assertTrue(a.wall_towards(b))
        self.assertTrue(b.wall_towards(a))

    def test_non_adjacent_cells(self):
        grid = Grid(3, 3)
        with self.assertRaises(ValueError):
            grid.cell(0, 0).wall_towards(grid.cell(1, 1))
        with self.assertRaises(ValueError):
            grid.remove_wall_between(grid.cell(0, 0), grid.cell(2, 0))

    def test_neighbors(self):
        grid = Grid(3, 3)
        # Center cell (1,1) should have 4 neighbors
        neighbors = list(grid.get_neighbors(grid.cell(1, 1)))
        self.assertEqual(len(neighbors), 4)
        self.assertEqual([d for _, d in neighbors], [Grid.TOP, Grid.RIGHT, Grid.BOTTOM, Grid.LEFT])

        # Corner cell (0,0) should have 2 neighbors (right, bottom)
        corner_neighbors = list(grid.get_neighbors(grid.cell(0, 0)))
        self.assertEqual(len(corner_neighbors), 2)
        self.assertIn((grid.cell(1, 0), Grid.RIGHT), corner_neighbors)
        self.assertIn((grid.cell(0, 1), Grid.BOTTOM), corner_neighbors)

        # Edge cell of a single row
        strip = Grid(4, 1)
        self.assertEqual(len(list(strip.get_neighbors(strip.cell(2, 0)))), 2)

    def test_unvisited_neighbors(self):
        grid = Grid(3, 3)
        visited = array('B', [0] * grid.size)
        visited[grid.get_index(1, 0)] = 1
        found = grid.get_unvisited_neighbors(grid.cell(0, 0), visited)
        self.assertEqual(found, [(grid.cell(0, 1), Grid.BOTTOM)])

    def test_open_neighbors(self):
        grid = Grid(3, 3)
        center = grid.cell(1, 1)
        self.assertEqual(grid.get_open_neighbors(center), [])

        grid.carve_path(center, Grid.LEFT)
        grid.carve_path(center, Grid.TOP)
        self.assertEqual(grid.get_open_neighbors(center), [grid.cell(1, 0), grid.cell(0, 1)])

    def test_open_neighbors_ignore_border_flags(self):
        grid = Grid(2, 2)
        corner = grid.cell(0, 0)
        corner.walls &= ~Grid.TOP
        self.assertEqual(grid.get_open_neighbors(corner), [])

    def test_reset_helpers(self):
        grid = Grid(2, 2)
        grid.carve_path(grid.cell(0, 0), Grid.RIGHT)
        grid.cell(1, 1).predecessor = grid.cell(0, 1)

        grid.reset_walls()
        grid.clear_predecessors()
        for cell in grid:
            self.assertEqual(cell.walls, Grid.ALL_WALLS)
            self.assertIsNone(cell.predecessor)

    def test_cell_has_no_scratch_slots(self):
        cell = Cell(0, 0)
        with self.assertRaises(AttributeError):
            cell.visited = True


if __name__ == '__main__':
    unittest.main()
