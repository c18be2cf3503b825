from typing import Optional

from cellmaze.core.cell import Cell, MOVES
from cellmaze.core.grid import Grid


class PlayerNavigator:
    """
    Validates single-cell moves against the wall state. A blocked or unknown
    move is a normal outcome and comes back as None.
    """

    def __init__(self, grid: Grid):
        self.grid = grid

    def move(self, cell: Cell, direction: str) -> Optional[Cell]:
        dir_bit = MOVES.get(direction)
        if dir_bit is None or cell.has_wall(dir_bit):
            return None
        # Same lookup get_open_neighbors relies on
        return self.grid.neighbor(cell, dir_bit)


class Player:
    def __init__(self, grid: Grid):
        self.grid = grid
        self.navigator = PlayerNavigator(grid)
        self.current: Optional[Cell] = None
        self.active = False

    def enable(self):
        self.active = True
        self.current = self.grid.start_cell

    def disable(self):
        self.active = False
        self.current = None

    def reset(self):
        self.current = self.grid.start_cell

    def move(self, direction: str) -> bool:
        if not self.active or self.current is None:
            return False
        destination = self.navigator.move(self.current, direction)
        if destination is None:
            return False
        self.current = destination
        return True

    @property
    def at_goal(self) -> bool:
        return self.current is not None and self.current is self.grid.end_cell
