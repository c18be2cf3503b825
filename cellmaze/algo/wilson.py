import logging
from array import array
from typing import Dict, List, Set

from cellmaze.algo.base import Generator
from cellmaze.core.cell import Cell

logger = logging.getLogger(__name__)


class WilsonsAlgorithm(Generator):
    """
    Wilson's algorithm: loop-erased random walks.

    Unlike the backtracker, every spanning tree of the grid is equally likely.
    Each walk starts on a random cell outside the maze and wanders (walls are
    ignored, none are open yet) until it touches the maze. Only the direction
    last taken out of each cell is remembered, so replaying the walk from its
    start follows the loop-erased path; closed loops are also dropped from the
    in-path set as soon as they form.
    """

    name = "wilson"

    def carve(self):
        grid = self.grid
        rng = self.rng
        total = grid.size

        in_maze = array('B', [0] * total)

        # Cells still outside the maze, swap-removed as they join
        remaining: List[int] = list(range(total))
        slot = list(range(total))

        def join(idx: int):
            in_maze[idx] = 1
            pos = slot[idx]
            last = remaining[-1]
            remaining[pos] = last
            slot[last] = pos
            remaining.pop()

        # Seed the maze with one random cell
        join(rng.randrange(total))
        cells_in_maze = 1
        walks = 0

        while cells_in_maze < total:
            walk_start = grid.cell_at(remaining[rng.randrange(len(remaining))])

            # Per-walk side tables, keyed by cell index
            path_direction: Dict[int, int] = {}
            in_path: Set[int] = set()

            cell = walk_start
            while not in_maze[grid.index_of(cell)]:
                idx = grid.index_of(cell)
                in_path.add(idx)

                neighbor, direction = rng.choice(list(grid.get_neighbors(cell)))
                path_direction[idx] = direction

                if grid.index_of(neighbor) in in_path:
                    self._erase_loop(neighbor, path_direction, in_path)

                cell = neighbor
                self.step_count += 1

            # Replay the loop-erased path, carving as we go
            cell = walk_start
            while not in_maze[grid.index_of(cell)]:
                idx = grid.index_of(cell)
                join(idx)
                cells_in_maze += 1
                cell = grid.carve_path(cell, path_direction[idx])

            walks += 1

        logger.debug("wilson: %d walks, %d random steps", walks, self.step_count)

    def _erase_loop(self, loop_start: Cell, path_direction: Dict[int, int], in_path: Set[int]):
        """
        Unmarks every cell of the loop that closed on 'loop_start'. The stored
        directions lead from 'loop_start' around the loop and back to it.
        """
        grid = self.grid
        cell = grid.neighbor(loop_start, path_direction[grid.index_of(loop_start)])
        while cell is not loop_start:
            idx = grid.index_of(cell)
            in_path.discard(idx)
            cell = grid.neighbor(cell, path_direction[idx])
