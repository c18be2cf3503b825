import logging
from collections import deque
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from cellmaze.core.cell import Cell
from cellmaze.core.grid import Grid

logger = logging.getLogger(__name__)


class DistanceField:
    """
    Step distance from one source cell to every cell reachable through open
    passages. Unreachable cells have no entry.
    """

    def __init__(self, grid: Grid, source: Cell, distances: Dict[Tuple[int, int], int]):
        self.grid = grid
        self.source = source
        self.distances = distances

    @classmethod
    def compute(cls, grid: Grid, start: Optional[Cell] = None) -> 'DistanceField':
        if start is None:
            start = grid.start_cell
        if start is None:
            raise ValueError("No start cell: generate the maze first or pass one explicitly")

        distances = {start.position: 0}
        queue = deque([start])

        while queue:
            cell = queue.popleft()
            base = distances[cell.position]
            for neighbor in grid.get_open_neighbors(cell):
                if neighbor.position not in distances:
                    distances[neighbor.position] = base + 1
                    queue.append(neighbor)

        logger.debug("Distance field from %s: %d reachable cells", start.position, len(distances))
        return cls(grid, start, distances)

    def __getitem__(self, cell: Cell) -> int:
        return self.distances[cell.position]

    def __contains__(self, cell: Cell) -> bool:
        return cell.position in self.distances

    def __len__(self) -> int:
        return len(self.distances)

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return iter(self.distances)

    def get(self, cell: Cell, default: Optional[int] = None) -> Optional[int]:
        return self.distances.get(cell.position, default)

    @property
    def max_distance(self) -> int:
        return max(self.distances.values())

    @property
    def farthest(self) -> Cell:
        """The reachable cell furthest from the source (first in row-major order on ties)."""
        best = self.source
        best_d = 0
        for cell in self.grid:
            d = self.distances.get(cell.position)
            if d is not None and d > best_d:
                best, best_d = cell, d
        return best

    def ratio(self, cell: Cell) -> Optional[float]:
        """Distance scaled to 0..1 by the maximum, or None if unreachable."""
        d = self.distances.get(cell.position)
        if d is None:
            return None
        top = self.max_distance
        return d / top if top else 0.0

    def to_array(self) -> np.ndarray:
        """(height, width) int32 array of distances, -1 where unreachable."""
        out = np.full((self.grid.height, self.grid.width), -1, dtype=np.int32)
        for (x, y), d in self.distances.items():
            out[y, x] = d
        return out
