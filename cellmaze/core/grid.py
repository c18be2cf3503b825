import asyncio
from array import array
from typing import Iterator, List, Optional, Tuple

from cellmaze.core.cell import (
    ALL_WALLS, BOTTOM, Cell, DIRECTION_ORDER, DX, DY, LEFT, OPPOSITE, RIGHT, TOP,
)


class Grid:
    # Re-exported so callers can write Grid.TOP like the cell module does
    TOP = TOP
    RIGHT = RIGHT
    BOTTOM = BOTTOM
    LEFT = LEFT
    ALL_WALLS = ALL_WALLS

    DX = DX
    DY = DY
    OPPOSITE = OPPOSITE

    __slots__ = ('width', 'height', 'cells', 'start_cell', 'end_cell', 'lock')

    def __init__(self, width: int, height: int):
        if not all(isinstance(d, int) and not isinstance(d, bool) for d in (width, height)):
            raise ValueError(f"Grid dimensions must be integers, got {width!r}x{height!r}")
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")

        self.width = width
        self.height = height
        # Indexed [row][col] i.e. [y][x]
        self.cells: List[List[Cell]] = [
            [Cell(x, y) for x in range(width)] for y in range(height)
        ]
        self.start_cell: Optional[Cell] = None
        self.end_cell: Optional[Cell] = None
        # Serializes async solves against this grid; generation does not take it
        self.lock = asyncio.Lock()

    @property
    def size(self) -> int:
        return self.width * self.height

    def __iter__(self) -> Iterator[Cell]:
        """Row-major iteration over every cell."""
        for row in self.cells:
            yield from row

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_index(self, x: int, y: int) -> int:
        if self.in_bounds(x, y):
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def index_of(self, cell: Cell) -> int:
        return cell.y * self.width + cell.x

    def cell(self, x: int, y: int) -> Cell:
        if not self.in_bounds(x, y):
            raise IndexError(f"Coordinate ({x}, {y}) out of bounds")
        return self.cells[y][x]

    def cell_at(self, index: int) -> Cell:
        return self.cells[index // self.width][index % self.width]

    def neighbor(self, cell: Cell, direction: int) -> Optional[Cell]:
        """The cell one step in 'direction', or None at the border."""
        nx, ny = cell.x + DX[direction], cell.y + DY[direction]
        if 0 <= nx < self.width and 0 <= ny < self.height:
            return self.cells[ny][nx]
        return None

    def get_neighbors(self, cell: Cell) -> Iterator[Tuple[Cell, int]]:
        """
        Yields (neighbor, direction_to_neighbor) for all valid grid neighbors.
        Does NOT check walls (that's for pathfinding).
        """
        x, y = cell.x, cell.y
        if y > 0:
            yield (self.cells[y - 1][x], TOP)
        if x < self.width - 1:
            yield (self.cells[y][x + 1], RIGHT)
        if y < self.height - 1:
            yield (self.cells[y + 1][x], BOTTOM)
        if x > 0:
            yield (self.cells[y][x - 1], LEFT)

    def get_unvisited_neighbors(self, cell: Cell, visited: array) -> List[Tuple[Cell, int]]:
        """
        Neighbors whose slot in the caller's 'visited' side table is still 0.
        The table is indexed by Grid.index_of.
        """
        return [
            (n, d) for n, d in self.get_neighbors(cell)
            if not visited[n.y * self.width + n.x]
        ]

    def get_open_neighbors(self, cell: Cell) -> List[Cell]:
        """
        Neighbors that are NOT blocked by a wall.
        """
        return [self.neighbor(cell, d) for d in self.open_directions(cell)]

    def open_directions(self, cell: Cell) -> List[int]:
        """Directions out of 'cell' that are wall-free and stay on the grid."""
        return [
            d for d in DIRECTION_ORDER
            if not (cell.walls & d) and self.in_bounds(cell.x + DX[d], cell.y + DY[d])
        ]

    def carve_path(self, cell: Cell, dir_bit: int) -> Optional[Cell]:
        """
        Removes the wall between 'cell' and the neighbor in 'dir_bit'.
        Also removes the OPPOSITE wall from the neighbor.
        Returns the neighbor, or None if the carve would leave the grid.
        """
        other = self.neighbor(cell, dir_bit)
        if other is None:
            return None  # Cannot carve into void

        cell.walls &= ~dir_bit
        other.walls &= ~OPPOSITE[dir_bit]
        return other

    def remove_wall_between(self, a: Cell, b: Cell):
        self.carve_path(a, a.direction_to(b))

    def add_wall(self, cell: Cell, dir_bit: int):
        cell.walls |= dir_bit

        # Handle neighbor (strict consistency)
        other = self.neighbor(cell, dir_bit)
        if other is not None:
            other.walls |= OPPOSITE[dir_bit]

    def reset_walls(self):
        for cell in self:
            cell.walls = ALL_WALLS

    def clear_predecessors(self):
        for cell in self:
            cell.predecessor = None
