import sys
import os
import time
import argparse

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cellmaze.core.grid import Grid
from cellmaze.core.complexity import MazeStats
from cellmaze.algo.generation import generate
from cellmaze.algo.solvers import create_solver

# ==========================================
# GLOBAL CONFIGURATION
# Add or remove names here to include/exclude them from the race.
# ==========================================
ENABLED_GENERATORS = [
    "dfs",
    "kruskal",
    "prim",
    "wilson",
]

ENABLED_SOLVERS = [
    "bfs",
    "astar",
]


def run_benchmark():
    parser = argparse.ArgumentParser(description="Generator and Solver Benchmark")
    parser.add_argument("--width", type=int, default=100, help="Maze Width")
    parser.add_argument("--height", type=int, default=100, help="Maze Height")
    parser.add_argument("--seed", type=int, default=42, help="Random Seed")
    args = parser.parse_args()

    print(f"=== MAZE BENCHMARK ===")
    print(f"Size: {args.width}x{args.height} | Seed: {args.seed}")
    print("-" * 78)
    print(f"{'GENERATOR':<10} | {'GEN (s)':<8} | {'DEAD ENDS':<9} | {'SOLVER':<6} | {'TIME (s)':<8} | {'PATH':<6} | {'VISITED':<8}")
    print("-" * 78)

    for algo in ENABLED_GENERATORS:
        grid = Grid(args.width, args.height)

        t0 = time.time()
        generate(grid, algo, seed=args.seed)
        gen_time = time.time() - t0

        stats = MazeStats.calculate_stats(grid)

        for name in ENABLED_SOLVERS:
            solver = create_solver(grid, name)

            t_start = time.time()
            path = solver.solve(grid.start_cell, grid.end_cell)
            duration = time.time() - t_start

            print(f"{algo:<10} | {gen_time:<8.4f} | {stats['dead_end_percent']:<8.1f}% | "
                  f"{name:<6} | {duration:<8.4f} | {len(path):<6} | {solver.visited_count:<8}")

    print("=" * 78)


if __name__ == "__main__":
    run_benchmark()
