import logging
import random
from abc import ABC, abstractmethod
from typing import Optional

from cellmaze.core.grid import Grid

logger = logging.getLogger(__name__)


class Generator(ABC):
    """
    Carves a perfect maze (spanning tree) into a Grid in place.

    Randomness comes from 'rng' when given, otherwise from a private
    random.Random built from 'seed'. Scratch state (visited markers, walk
    directions) lives in side tables local to carve(), never on the cells.
    """

    name = "base"

    def __init__(self, grid: Grid, seed: int = None, rng: Optional[random.Random] = None):
        if grid is None:
            raise TypeError("Generator requires a Grid, got None")
        self.grid = grid
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.step_count = 0

    @abstractmethod
    def carve(self):
        """Removes walls until every cell belongs to a single spanning tree."""

    def generate(self):
        """Reset walls, carve, then pick the corner start/end cells."""
        grid = self.grid
        if grid.size == 0:
            logger.warning("Zero-area grid %dx%d, nothing to generate", grid.width, grid.height)
            grid.start_cell = None
            grid.end_cell = None
            return

        grid.reset_walls()
        self.step_count = 0
        self.carve()

        grid.start_cell = grid.cells[0][0]
        grid.end_cell = grid.cells[grid.height - 1][grid.width - 1]
        logger.debug("%s carved %dx%d maze in %d steps",
                     self.name, grid.width, grid.height, self.step_count)
