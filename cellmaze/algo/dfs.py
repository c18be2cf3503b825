from array import array
from typing import List

from cellmaze.algo.base import Generator
from cellmaze.core.cell import Cell


class RecursiveBacktracker(Generator):
    name = "dfs"

    def carve(self):
        grid = self.grid
        rng = self.rng

        # Dense visited side table, one byte per cell
        visited = array('B', [0] * grid.size)

        # Start at (0,0)
        start = grid.cells[0][0]
        visited[grid.index_of(start)] = 1
        stack: List[Cell] = [start]

        while stack:
            current = stack[-1]
            neighbors = grid.get_unvisited_neighbors(current, visited)

            if neighbors:
                # Choose random neighbor
                neighbor, dir_bit = rng.choice(neighbors)
                grid.carve_path(current, dir_bit)
                visited[grid.index_of(neighbor)] = 1
                stack.append(neighbor)
                self.step_count += 1
            else:
                # Backtrack
                stack.pop()
