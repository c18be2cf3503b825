import random
from enum import Enum
from typing import Dict, Optional, Type, Union

from cellmaze.algo.base import Generator
from cellmaze.algo.dfs import RecursiveBacktracker
from cellmaze.algo.kruskal import KruskalsAlgorithm
from cellmaze.algo.prim import PrimsAlgorithm
from cellmaze.algo.wilson import WilsonsAlgorithm
from cellmaze.core.grid import Grid


class Algorithm(str, Enum):
    DFS = "dfs"
    KRUSKAL = "kruskal"
    PRIM = "prim"
    WILSON = "wilson"


GENERATORS: Dict[Algorithm, Type[Generator]] = {
    Algorithm.DFS: RecursiveBacktracker,
    Algorithm.KRUSKAL: KruskalsAlgorithm,
    Algorithm.PRIM: PrimsAlgorithm,
    Algorithm.WILSON: WilsonsAlgorithm,
}


def resolve_algorithm(algorithm: Union[str, Algorithm]) -> Algorithm:
    try:
        return Algorithm(algorithm)
    except ValueError:
        choices = ", ".join(a.value for a in Algorithm)
        raise ValueError(f"Unknown generation algorithm {algorithm!r} (expected one of: {choices})") from None


def create_generator(grid: Grid, algorithm: Union[str, Algorithm] = Algorithm.DFS,
                     seed: int = None, rng: Optional[random.Random] = None) -> Generator:
    return GENERATORS[resolve_algorithm(algorithm)](grid, seed=seed, rng=rng)


def generate(grid: Grid, algorithm: Union[str, Algorithm] = Algorithm.DFS,
             seed: int = None, rng: Optional[random.Random] = None) -> Generator:
    """
    Carves a fresh perfect maze into 'grid' with the named algorithm and sets
    grid.start_cell / grid.end_cell to the top-left and bottom-right corners.
    Returns the generator that did the work.
    """
    generator = create_generator(grid, algorithm, seed=seed, rng=rng)
    generator.generate()
    return generator
