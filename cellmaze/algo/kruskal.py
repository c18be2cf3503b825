from array import array
from typing import List, Tuple

from cellmaze.algo.base import Generator
from cellmaze.core.cell import BOTTOM, RIGHT


def find(parent: array, i: int) -> int:
    while parent[i] != i:
        # Path halving
        parent[i] = parent[parent[i]]
        i = parent[i]
    return i


def union(parent: array, a: int, b: int) -> bool:
    ra, rb = find(parent, a), find(parent, b)
    if ra == rb:
        return False
    parent[rb] = ra
    return True


class KruskalsAlgorithm(Generator):
    """
    Randomized Kruskal's: shuffle every interior wall, then knock a wall
    down whenever the two cells it separates are still in different sets.
    """

    name = "kruskal"

    def carve(self):
        grid = self.grid
        w, h = grid.width, grid.height

        # Dense union-find parent table, local to this run
        parent = array('i', range(w * h))

        # Each interior edge listed once: (cell index, RIGHT or BOTTOM)
        edges: List[Tuple[int, int]] = []
        for y in range(h):
            for x in range(w):
                idx = y * w + x
                if x < w - 1:
                    edges.append((idx, RIGHT))
                if y < h - 1:
                    edges.append((idx, BOTTOM))
        self.rng.shuffle(edges)

        target = w * h - 1
        for idx, dir_bit in edges:
            if self.step_count == target:
                break
            other = idx + 1 if dir_bit == RIGHT else idx + w
            if union(parent, idx, other):
                grid.carve_path(grid.cell_at(idx), dir_bit)
                self.step_count += 1
