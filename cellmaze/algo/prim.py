from array import array
from typing import List

from cellmaze.algo.base import Generator


class PrimsAlgorithm(Generator):
    """
    Randomized Prim's over frontier cells: repeatedly pick a random cell
    bordering the maze and join it to one random in-maze neighbor.
    """

    name = "prim"

    def carve(self):
        grid = self.grid
        rng = self.rng

        # 0 = outside, 1 = frontier, 2 = in maze
        state = array('B', [0] * grid.size)

        start = grid.cells[0][0]
        state[grid.index_of(start)] = 2

        frontier: List[int] = []

        def add_frontier(cell):
            for neighbor, _ in grid.get_neighbors(cell):
                idx = grid.index_of(neighbor)
                if state[idx] == 0:
                    state[idx] = 1
                    frontier.append(idx)

        add_frontier(start)

        while frontier:
            # Swap remove for O(1)
            pick = rng.randrange(len(frontier))
            idx = frontier[pick]
            frontier[pick] = frontier[-1]
            frontier.pop()

            cell = grid.cell_at(idx)

            # Carve to one random in-maze neighbor
            in_maze = [d for n, d in grid.get_neighbors(cell) if state[grid.index_of(n)] == 2]
            grid.carve_path(cell, rng.choice(in_maze))
            state[idx] = 2
            self.step_count += 1

            add_frontier(cell)
