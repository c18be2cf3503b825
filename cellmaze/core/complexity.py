from collections import deque

from cellmaze.core.cell import BOTTOM, RIGHT
from cellmaze.core.grid import Grid


class MazeStats:
    @staticmethod
    def open_edge_count(grid: Grid) -> int:
        """Open passages between cells, each counted once (from its left/top side)."""
        count = 0
        for cell in grid:
            if not cell.has_wall(RIGHT) and cell.x < grid.width - 1:
                count += 1
            if not cell.has_wall(BOTTOM) and cell.y < grid.height - 1:
                count += 1
        return count

    @staticmethod
    def reachable_count(grid: Grid) -> int:
        if grid.size == 0:
            return 0
        origin = grid.cells[0][0]
        seen = {origin.position}
        queue = deque([origin])
        while queue:
            for neighbor in grid.get_open_neighbors(queue.popleft()):
                if neighbor.position not in seen:
                    seen.add(neighbor.position)
                    queue.append(neighbor)
        return len(seen)

    @staticmethod
    def walls_consistent(grid: Grid) -> bool:
        """Every shared wall agrees on both sides."""
        for cell in grid:
            for neighbor, direction in grid.get_neighbors(cell):
                if cell.has_wall(direction) != neighbor.has_wall(Grid.OPPOSITE[direction]):
                    return False
        return True

    @staticmethod
    def is_perfect(grid: Grid) -> bool:
        """Spanning tree check: w*h - 1 open edges and everything connected."""
        if grid.size == 0:
            return True
        return (MazeStats.walls_consistent(grid)
                and MazeStats.open_edge_count(grid) == grid.size - 1
                and MazeStats.reachable_count(grid) == grid.size)

    @staticmethod
    def calculate_stats(grid: Grid):
        dead_ends = 0
        corridors = 0 # 2 exits
        intersections = 0 # 3 or 4 exits

        for cell in grid:
            exits = len(grid.open_directions(cell))
            if exits == 1: dead_ends += 1
            elif exits == 2: corridors += 1
            elif exits >= 3: intersections += 1

        total = grid.size
        return {
            "dead_ends": dead_ends,
            "corridors": corridors,
            "intersections": intersections,
            "open_edges": MazeStats.open_edge_count(grid),
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }
