"""Command-line interface for the exact-cover Sudoku solver."""

import argparse
import logging
import sys

from .benchmark import Benchmark
from .core.board import SudokuBoard
from .core.matrix import CELLS, MatrixError, build_matrix
from .reader import read_puzzles, write_solutions
from .solvers import ExactCoverSolver, SearchInterrupted, get_strategy
from .solvers.strategy import STRATEGIES

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        matrix = build_matrix()
    except MatrixError as e:
        logger.error("Cannot start: %s", e)
        sys.exit(2)

    if args.command == "solve":
        cmd_solve(args, matrix)
    elif args.command == "benchmark":
        cmd_benchmark(args, matrix)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kudoku",
        description="Exact-cover Sudoku solver that enumerates every solution",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve every puzzle in a file, one 81-character puzzle per line
  kudoku solve < puzzles.txt

  # Show at most two solutions of a single puzzle as a grid
  kudoku solve --puzzle "53..7....6..195..." --max-solutions 2 --pretty

  # Compare constraint selection strategies
  kudoku benchmark --input puzzles.txt --output results/
        """
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve Sudoku puzzles")
    source = solve_parser.add_mutually_exclusive_group()
    source.add_argument(
        "--puzzle", "-p", type=str, default=None,
        help=f"Puzzle string ({CELLS} chars, 1-9 for hints, anything else blank)"
    )
    source.add_argument(
        "--input", "-i", type=str, default=None,
        help="File with one puzzle per line (default: standard input)"
    )
    solve_parser.add_argument(
        "--max-solutions", "-n", type=int, default=None,
        help="Stop after this many solutions per puzzle (default: all)"
    )
    solve_parser.add_argument(
        "--timeout", "-t", type=float, default=None,
        help="Time limit per puzzle in seconds (default: none)"
    )
    solve_parser.add_argument(
        "--strategy", "-s", choices=sorted(STRATEGIES), default="early-exit",
        help="Constraint selection strategy (default: early-exit)"
    )
    solve_parser.add_argument(
        "--pretty", action="store_true",
        help="Print solutions as grids instead of 81-character lines"
    )
    solve_parser.add_argument(
        "--stats", action="store_true",
        help="Log search statistics for each puzzle"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging on stderr"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Benchmark constraint selection strategies")
    bench_parser.add_argument(
        "--input", "-i", type=str, required=True,
        help="File with one puzzle per line"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--strategy", "-s", choices=sorted(STRATEGIES) + ["all"], default="all",
        help="Strategy to benchmark (default: all)"
    )
    bench_parser.add_argument(
        "--timeout", "-t", type=float, default=60.0,
        help="Time limit per puzzle per strategy in seconds (default: 60)"
    )
    bench_parser.add_argument(
        "--max-solutions", "-n", type=int, default=None,
        help="Stop each search after this many solutions (default: all)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )
    bench_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging on stderr"
    )

    return parser


def cmd_solve(args, matrix):
    """Handle the solve command."""
    try:
        solver = ExactCoverSolver(
            matrix,
            strategy=get_strategy(args.strategy),
            max_solutions=args.max_solutions,
            timeout_seconds=args.timeout,
        )
    except ValueError as e:
        logger.error("%s", e)
        sys.exit(1)

    if args.puzzle is not None:
        puzzles = read_puzzles([args.puzzle])
        if len(args.puzzle) < CELLS:
            logger.warning("Puzzle has %d characters, expected %d", len(args.puzzle), CELLS)
        _solve_stream(solver, puzzles, args)
    elif args.input is not None:
        with open(args.input, "r") as f:
            _solve_stream(solver, read_puzzles(f), args)
    else:
        _solve_stream(solver, read_puzzles(sys.stdin), args)


def _solve_stream(solver, puzzles, args):
    out = sys.stdout
    for index, puzzle in enumerate(puzzles, 1):
        solver.reset_stats()
        solutions = solver.iter_solutions(puzzle)
        if args.pretty:
            solutions = (str(SudokuBoard.from_string(s)) for s in solutions)
        try:
            count = write_solutions(out, solutions)
        except SearchInterrupted as e:
            logger.warning("Puzzle %d: %s", index, e)
            continue

        if count == 0:
            logger.info("Puzzle %d has no solution", index)
        if args.stats:
            stats = solver.stats
            logger.info(
                "Puzzle %d: %d solutions, %d nodes, %d backtracks",
                index, stats.solutions, stats.nodes_explored, stats.backtracks
            )


def cmd_benchmark(args, matrix):
    """Handle the benchmark command."""
    if args.strategy == "all":
        strategies = [STRATEGIES[name] for name in sorted(STRATEGIES)]
    else:
        strategies = [get_strategy(args.strategy)]

    benchmark = Benchmark.from_file(
        args.input,
        strategies=strategies,
        matrix=matrix,
        timeout_seconds=args.timeout,
        max_solutions=args.max_solutions,
    )

    print("=" * 60)
    print("EXACT COVER STRATEGY BENCHMARK")
    print("=" * 60)
    print(f"Puzzles: {len(benchmark.puzzles)}")
    print(f"Strategies: {', '.join(benchmark.solvers.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for name, stats in summary["results_by_strategy"].items():
        print(f"\n{name}:")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Memory: {stats['avg_memory_mb']:.2f} MB")
        print(f"  Avg Nodes: {stats['avg_nodes_explored']:,.0f}")
        print(f"  Solutions: {stats['total_solutions']:,}")
        print(f"  Unsolvable: {stats['unsolvable']}  Interrupted: {stats['interrupted']}")

    benchmark.save_results(args.output)

    if not args.no_charts:
        from .benchmark.visualizer import Visualizer

        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
