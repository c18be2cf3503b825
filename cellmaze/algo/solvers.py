import asyncio
import heapq
import logging
from abc import ABC, abstractmethod
from array import array
from typing import Awaitable, Callable, Dict, Iterator, List, Optional, Type

from cellmaze.core.cell import Cell
from cellmaze.core.grid import Grid

logger = logging.getLogger(__name__)

DEFAULT_DELAY_MS = 50

VisitedCallback = Callable[[List[Cell]], None]
Sleep = Callable[[float], Awaitable[None]]


class CancellationToken:
    """Flag shared between a caller and an in-flight async solve."""

    __slots__ = ('_cancelled',)

    def __init__(self):
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class Solver(ABC):
    """
    Shortest-path search over the open passages of a carved grid.

    Subclasses implement steps(), a generator that performs the whole search
    and yields the cell processed at each step. solve() drains it in one go;
    solve_async() drains it with a callback, optional pacing and
    cancellation. Both run the exact same search, so they always agree.
    """

    name = "base"

    def __init__(self, grid: Grid):
        self.grid = grid
        self.path: List[Cell] = []
        # Every cell seen so far, in discovery order
        self.visited: List[Cell] = []
        self.cancelled = False

    @property
    def visited_count(self) -> int:
        return len(self.visited)

    @abstractmethod
    def steps(self, start: Cell, end: Cell) -> Iterator[Cell]:
        pass

    def _reset(self):
        self.grid.clear_predecessors()
        self.path = []
        self.visited = []
        self.cancelled = False

    def reconstruct_path(self, end: Cell) -> List[Cell]:
        path = [end]
        current = end
        while current.predecessor is not None:
            current = current.predecessor
            path.append(current)
        path.reverse()
        return path

    def snapshot(self, current: Cell) -> List[Cell]:
        """Visited cells so far with 'current' moved to the end."""
        cells = [c for c in self.visited if c is not current]
        cells.append(current)
        return cells

    def solve(self, start: Cell, end: Cell) -> List[Cell]:
        if self.grid.lock.locked():
            raise RuntimeError("An async solve is already running on this grid")
        for _ in self.steps(start, end):
            pass
        logger.debug("%s: visited %d cells, path length %d", self.name, self.visited_count, len(self.path))
        return self.path

    async def solve_async(self, start: Cell, end: Cell,
                          visited_callback: Optional[VisitedCallback] = None,
                          delay_ms: float = 0,
                          cancel_token: Optional[CancellationToken] = None,
                          sleep: Optional[Sleep] = None) -> List[Cell]:
        """
        Runs the search one step at a time. After each step the callback
        receives the cumulative visited cells, the step's cell last. With
        delay_ms > 0 the coroutine sleeps between steps; with 0 it never
        suspends. A cancelled token stops the search and yields [].
        """
        if sleep is None:
            sleep = asyncio.sleep

        async with self.grid.lock:
            steps = self.steps(start, end)
            try:
                for step, current in enumerate(steps):
                    if cancel_token is not None and cancel_token.cancelled:
                        return self._abandon(step)

                    if visited_callback is not None:
                        visited_callback(self.snapshot(current))

                    if delay_ms > 0:
                        await sleep(delay_ms / 1000.0)
                        if cancel_token is not None and cancel_token.cancelled:
                            return self._abandon(step + 1)
            finally:
                steps.close()

        logger.debug("%s: visited %d cells, path length %d", self.name, self.visited_count, len(self.path))
        return self.path

    def _abandon(self, step: int) -> List[Cell]:
        logger.debug("%s: cancelled after %d steps", self.name, step)
        self.cancelled = True
        self.path = []
        return self.path


class BFS(Solver):
    """
    Level-order search. Steps: the initial state, every processed cell,
    the end of every frontier level, and finally the end cell.
    """

    name = "bfs"

    def steps(self, start: Cell, end: Cell) -> Iterator[Cell]:
        self._reset()
        grid = self.grid

        seen = array('B', [0] * grid.size)
        seen[grid.index_of(start)] = 1
        self.visited.append(start)
        yield start

        frontier = [start]
        while frontier:
            next_level: List[Cell] = []

            for cell in frontier:
                if cell is end:
                    self.path = self.reconstruct_path(cell)
                    yield cell
                    return

                for neighbor in grid.get_open_neighbors(cell):
                    idx = grid.index_of(neighbor)
                    if not seen[idx]:
                        seen[idx] = 1
                        neighbor.predecessor = cell
                        next_level.append(neighbor)
                        self.visited.append(neighbor)

                yield cell

            frontier = next_level
            if next_level:
                yield next_level[-1]


class AStar(Solver):
    """
    A* with the Manhattan heuristic. The open set is a heap of
    (f_score, first_insertion_order, index) so equal f-scores come out in
    the order cells were first discovered. Entries whose f-score was later
    improved are skipped when popped.
    """

    name = "astar"

    def steps(self, start: Cell, end: Cell) -> Iterator[Cell]:
        self._reset()
        grid = self.grid
        n = grid.size

        # Dense arrays, -1 = unset
        g_score = array('i', [-1] * n)
        f_score = array('i', [-1] * n)
        order = array('i', [-1] * n)
        closed = array('B', [0] * n)
        shown = array('B', [0] * n)

        start_idx = grid.index_of(start)
        g_score[start_idx] = 0
        f_score[start_idx] = self.heuristic(start, end)
        order[start_idx] = 0
        inserted = 1

        open_set = [(f_score[start_idx], 0, start_idx)]
        shown[start_idx] = 1
        self.visited.append(start)

        while open_set:
            f, _, idx = heapq.heappop(open_set)
            if closed[idx] or f != f_score[idx]:
                continue

            current = grid.cell_at(idx)
            yield current

            if current is end:
                self.path = self.reconstruct_path(current)
                return

            closed[idx] = 1
            tentative = g_score[idx] + 1

            for neighbor in grid.get_open_neighbors(current):
                n_idx = grid.index_of(neighbor)
                if closed[n_idx]:
                    continue

                if not shown[n_idx]:
                    shown[n_idx] = 1
                    self.visited.append(neighbor)

                old_g = g_score[n_idx]
                if old_g != -1 and tentative >= old_g:
                    continue

                # Best path to this neighbor so far
                neighbor.predecessor = current
                g_score[n_idx] = tentative
                f_score[n_idx] = tentative + self.heuristic(neighbor, end)
                if order[n_idx] == -1:
                    order[n_idx] = inserted
                    inserted += 1
                heapq.heappush(open_set, (f_score[n_idx], order[n_idx], n_idx))

    def heuristic(self, a: Cell, b: Cell) -> int:
        return abs(a.x - b.x) + abs(a.y - b.y)


SOLVERS: Dict[str, Type[Solver]] = {
    BFS.name: BFS,
    AStar.name: AStar,
}


def create_solver(grid: Grid, name: str) -> Solver:
    try:
        return SOLVERS[name](grid)
    except KeyError:
        choices = ", ".join(SOLVERS)
        raise ValueError(f"Unknown solver {name!r} (expected one of: {choices})") from None


class MazeSolver:
    """Controller-facing entry points over the BFS and A* solvers."""

    def __init__(self, grid: Grid):
        self.grid = grid

    def find_path(self, start: Cell, end: Cell) -> List[Cell]:
        return self.find_path_astar_sync(start, end)

    def find_path_bfs_sync(self, start: Cell, end: Cell) -> List[Cell]:
        return BFS(self.grid).solve(start, end)

    def find_path_astar_sync(self, start: Cell, end: Cell) -> List[Cell]:
        return AStar(self.grid).solve(start, end)

    async def find_path_bfs(self, start: Cell, end: Cell,
                            visited_callback: Optional[VisitedCallback] = None,
                            delay_ms: float = DEFAULT_DELAY_MS,
                            cancel_token: Optional[CancellationToken] = None,
                            sleep: Optional[Sleep] = None) -> List[Cell]:
        return await BFS(self.grid).solve_async(
            start, end, visited_callback, delay_ms, cancel_token, sleep)

    async def find_path_astar(self, start: Cell, end: Cell,
                              visited_callback: Optional[VisitedCallback] = None,
                              delay_ms: float = DEFAULT_DELAY_MS,
                              cancel_token: Optional[CancellationToken] = None,
                              sleep: Optional[Sleep] = None) -> List[Cell]:
        return await AStar(self.grid).solve_async(
            start, end, visited_callback, delay_ms, cancel_token, sleep)
