"""
Benchmark script for the Snake solvers
Plays full games headless and reports how many steps each solver needs to fill
the board, or how long each planning call takes
"""

from typing import Callable, Dict, List, Optional, Sequence
import argparse
import logging
import random
import sys

import matplotlib.pyplot as plt
import numpy as np

from algorithms.base import SnakeSolver
from algorithms.hamilton_cycle import RandomSpanningTreeSolver
from algorithms.snake_spanning_tree import JitterKind, SnakeSpanningTreeSolver
from algorithms.zigzag import ZigZagSolver
from game.auto_player import AutoPlayerState, AutoSnakePlayer
from game.environment import SnakeWorld

SolverFactory = Callable[[random.Random], SnakeSolver]


def default_solvers() -> Dict[str, SolverFactory]:
    """The solver line-up, from the dumbest to the most adaptive"""
    return {
        'Zig-zag': lambda rng: ZigZagSolver(),
        'Random spanning tree': lambda rng: RandomSpanningTreeSolver(rng=rng),
        'Spanning tree': lambda rng: SnakeSpanningTreeSolver(JitterKind.no_jitter(), rng=rng),
        'Spanning tree (10 step jitter)': lambda rng: SnakeSpanningTreeSolver(
            JitterKind.jitter_when_indirect(10), rng=rng),
        'Spanning tree (1 step jitter)': lambda rng: SnakeSpanningTreeSolver(
            JitterKind.jitter_when_indirect(1), rng=rng),
    }


def play_game(size: int, make_solver: SolverFactory, rng: random.Random) -> AutoSnakePlayer:
    """
    Play one full game until the board is filled

    Raises:
        RuntimeError: if the snake dies, which none of the solvers should allow
    """
    player = AutoSnakePlayer(SnakeWorld(size, rng=rng), make_solver(rng))

    while player.state == AutoPlayerState.PLAYING:
        player.step()

    if player.state == AutoPlayerState.KILLED:
        raise RuntimeError(f"Snake was killed on a {size}x{size} world after {player.steps} steps "
                           f"with score {player.world.score()}")
    return player


def run_benches(sizes: Sequence[int], make_solver: SolverFactory, seed: Optional[int] = None) -> List[int]:
    """Play one game per world size and return the number of steps each one took"""
    rng = random.Random(seed)
    return [play_game(size, make_solver, rng).steps for size in sizes]


def run_all_benches(name: str, make_solver: SolverFactory, sizes: Sequence[int], runs: int,
                    seed: Optional[int] = None) -> List[List[int]]:
    """
    Run `runs` rounds of run_benches and print min / avg / max steps per size

    Returns:
        one list of step counts per run, indexed like `sizes`
    """
    print(name)

    all_results = []
    for run in range(runs):
        run_seed = None if seed is None else seed + run
        all_results.append(run_benches(sizes, make_solver, run_seed))

    for i, size in enumerate(sizes):
        results = sorted(run[i] for run in all_results)
        avg = sum(results) / len(results)
        print(f"Size: {size}, Min: {results[0]}, Avg: {avg:.1f}, Max: {results[-1]}")
    print()

    return all_results


def time_planning(size: int, make_solver: SolverFactory, seed: Optional[int] = None) -> float:
    """Mean seconds spent per planning call over one full game"""
    return play_game(size, make_solver, random.Random(seed)).average_planning_time()


def plot_results(results: Dict[str, List[List[int]]], sizes: Sequence[int],
                 path: str = 'benchmark_results.png') -> str:
    """Plot average steps to finish per world size for every solver"""
    plt.figure(figsize=(8, 5))

    for name, runs in results.items():
        averages = np.mean(np.array(runs), axis=0)
        plt.plot(sizes, averages, marker='o', label=name)

    plt.xlabel('World Size')
    plt.ylabel('Steps to Finish')
    plt.yscale('log')
    plt.title('Solver Efficiency')
    plt.legend()
    plt.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close()
    print(f"Benchmark plot saved to: {path}")
    return path


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description='Benchmark the Snake solvers',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m benchmarks.benchmark                         # Steps to finish, default sizes
  python -m benchmarks.benchmark --sizes 10 20 --runs 5  # Custom sizes and run count
  python -m benchmarks.benchmark --mode timing           # Planning time CSV
  python -m benchmarks.benchmark --plot results.png      # Save a plot of the results
        """
    )

    parser.add_argument('--mode', choices=['steps', 'timing'], default='steps',
                        help='What to measure (default: steps)')
    parser.add_argument('--sizes', type=int, nargs='+', default=[10, 20, 30],
                        help='Even world sizes to play on (default: 10 20 30)')
    parser.add_argument('--runs', type=int, default=10,
                        help='Games per solver and size (default: 10)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Base random seed for reproducible runs')
    parser.add_argument('--plot', type=str, default=None,
                        help='Save a plot of the steps results to this path')
    parser.add_argument('--log-level', default='WARNING',
                        help='Logging level for the solvers (default: WARNING)')

    args = parser.parse_args(argv)
    odd = [size for size in args.sizes if size % 2 or size < 2]
    if odd:
        parser.error(f"world sizes must be even and at least 2, got {odd}")
    if args.runs < 1:
        parser.error("--runs must be at least 1")
    return args


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format='%(levelname)s %(name)s: %(message)s')

    solvers = default_solvers()

    if args.mode == 'timing':
        # Nanoseconds per cell per planning call, averaged over the runs
        print("World Size," + ",".join(solvers))
        for size in args.sizes:
            row = [str(size)]
            for make_solver in solvers.values():
                total = 0.0
                for run in range(args.runs):
                    run_seed = None if args.seed is None else args.seed + run
                    total += time_planning(size, make_solver, run_seed)
                row.append(f"{total / args.runs / (size * size) * 1e9:.1f}")
            print(",".join(row))
        return

    results = {}
    for name, make_solver in solvers.items():
        results[name] = run_all_benches(f"{name}:", make_solver, args.sizes, args.runs, args.seed)

    if args.plot:
        plot_results(results, args.sizes, args.plot)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.\n")
        sys.exit(130)
