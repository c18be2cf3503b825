import argparse
import asyncio
import logging
import os
import random
import sys

# Ensure project root is in path so we can import 'cellmaze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cellmaze.algo.distance import DistanceField
from cellmaze.algo.generation import Algorithm, generate
from cellmaze.algo.solvers import DEFAULT_DELAY_MS, SOLVERS, create_solver
from cellmaze.core.complexity import MazeStats
from cellmaze.core.grid import Grid
from cellmaze.io.serializer import MazeSerializer

DEFAULT_WIDTH = 20
DEFAULT_HEIGHT = 20

logger = logging.getLogger("cellmaze")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="cellmaze: perfect maze generator and solver")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Maze Width")
    gen_parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Maze Height")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--algo", type=str, default="dfs", choices=[a.value for a in Algorithm], help="Generation Algorithm")
    gen_parser.add_argument("--out", type=str, help="Output file path (optional)")
    gen_parser.add_argument("--compress", action="store_true", help="zlib-compress the wall data")
    gen_parser.add_argument("--seed-only", action="store_true", help="Store only algorithm and seed")

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Solve a maze from file, or a fresh DFS maze")
    solve_parser.add_argument("input_file", nargs="?", help="Path to maze file")
    solve_parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Maze Width (no input file)")
    solve_parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Maze Height (no input file)")
    solve_parser.add_argument("--seed", type=int, default=None, help="Random Seed (no input file)")
    solve_parser.add_argument("--algo", type=str, default="bfs", choices=list(SOLVERS), help="Solver algorithm")
    solve_parser.add_argument("--animate", action="store_true", help="Run the stepwise solver and log every step")
    solve_parser.add_argument("--delay", type=float, default=DEFAULT_DELAY_MS, help="Milliseconds between animated steps")

    # Distance Command
    dist_parser = subparsers.add_parser("distance", help="Distance field from the start cell")
    dist_parser.add_argument("input_file", help="Path to maze file")

    return parser


def load_or_generate(args) -> Grid:
    if getattr(args, "input_file", None):
        logger.info(f"Loading {args.input_file}...")
        grid, meta = MazeSerializer.load(args.input_file)
        logger.info(f"Loaded {grid.width}x{grid.height} maze. Meta: {meta}")
        return grid

    grid = Grid(args.width, args.height)
    generate(grid, Algorithm.DFS, seed=args.seed)
    return grid


def cmd_generate(args) -> int:
    if args.seed_only and args.seed is None:
        # Seed-only files are rebuilt from the seed on load
        args.seed = random.randrange(2**32)
        logger.info(f"No --seed given, using {args.seed}")

    logger.info(f"Generating {args.width}x{args.height} maze with {args.algo.upper()}...")
    grid = Grid(args.width, args.height)
    generate(grid, args.algo, seed=args.seed)

    stats = MazeStats.calculate_stats(grid)
    logger.info(f"Stats: {stats}")
    print(f"Generated {grid.width}x{grid.height} maze ({args.algo}): "
          f"{stats['open_edges']} passages, {stats['dead_ends']} dead ends")

    if args.out:
        logger.info(f"Saving maze to {args.out}...")
        meta = {"algo": args.algo, "seed": args.seed}
        MazeSerializer.save(grid, args.out, meta=meta, seed_only=args.seed_only, compress=args.compress)
        logger.info("Save complete.")
    return 0


def cmd_solve(args) -> int:
    grid = load_or_generate(args)
    if grid.size == 0:
        print("Empty maze, nothing to solve.")
        return 1

    start, end = grid.start_cell, grid.end_cell
    solver = create_solver(grid, args.algo)
    logger.info(f"Solving with {args.algo.upper()} from {start.position} to {end.position}...")

    if args.animate:
        def on_step(cells):
            logger.info(f"Visited: {len(cells)} (current {cells[-1].position})")

        path = asyncio.run(solver.solve_async(start, end, visited_callback=on_step, delay_ms=args.delay))
    else:
        path = solver.solve(start, end)

    if not path:
        print("No path found.")
        return 1

    print(f"Done. Path Length: {len(path)} cells, visited {solver.visited_count}")
    return 0


def cmd_distance(args) -> int:
    grid = load_or_generate(args)
    if grid.size == 0:
        print("Empty maze, nothing to measure.")
        return 1

    field = DistanceField.compute(grid)
    far = field.farthest
    print(f"Reachable: {len(field)}/{grid.size} cells, max distance {field.max_distance} at {far.position}")
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    try:
        if args.command == "generate":
            return cmd_generate(args)
        elif args.command == "solve":
            return cmd_solve(args)
        elif args.command == "distance":
            return cmd_distance(args)
    except ValueError as e:
        logger.error(f"{args.command} failed: {e}")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
