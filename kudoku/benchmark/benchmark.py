"""Benchmarking framework for comparing constraint selection strategies."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
import json
import logging
import os

from tqdm import tqdm

from ..core.matrix import CELLS, IncidenceMatrix, build_matrix
from ..core.state import HINT_DIGITS
from ..reader import read_puzzles
from ..solvers import ExactCoverSolver, ScanStrategy, EARLY_EXIT, FULL_SCAN

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    puzzle_id: int
    hints: int
    strategy: str
    solutions: int
    time_seconds: float
    iterations: int
    backtracks: int
    nodes_explored: int
    memory_bytes: int = 0
    interrupted: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "hints": self.hints,
            "strategy": self.strategy,
            "solutions": self.solutions,
            "time_seconds": self.time_seconds,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "interrupted": self.interrupted,
            **self.extra
        }


class Benchmark:
    """
    Runs every strategy over a list of puzzles and collects search metrics.

    All solvers share one incidence matrix.
    """

    def __init__(
        self,
        puzzles: List[str],
        strategies: Optional[List[ScanStrategy]] = None,
        matrix: Optional[IncidenceMatrix] = None,
        timeout_seconds: Optional[float] = 60.0,
        max_solutions: Optional[int] = None,
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles: 81-character puzzle strings.
            strategies: Strategies to compare (default: all presets).
            matrix: Shared incidence matrix. Built here if None.
            timeout_seconds: Maximum time per puzzle per strategy.
            max_solutions: Stop each search after this many solutions.
        """
        invalid = [i for i, p in enumerate(puzzles) if len(p) < CELLS]
        if invalid:
            raise ValueError(f"Puzzles must have {CELLS} characters, bad indices: {invalid}")

        self.puzzles = [p[:CELLS] for p in puzzles]
        self.strategies = strategies or [EARLY_EXIT, FULL_SCAN]
        self.timeout_seconds = timeout_seconds
        self.max_solutions = max_solutions

        matrix = matrix if matrix is not None else build_matrix()
        self.solvers = {
            strategy.name: ExactCoverSolver(
                matrix,
                strategy=strategy,
                max_solutions=max_solutions,
                timeout_seconds=timeout_seconds,
            )
            for strategy in self.strategies
        }
        self.results: List[BenchmarkResult] = []

    @classmethod
    def from_file(cls, path: str, **kwargs) -> Benchmark:
        """Load puzzles (one per line) from a text file."""
        with open(path, "r") as f:
            puzzles = list(read_puzzles(f))
        logger.info("Loaded %d puzzles from %s", len(puzzles), path)
        return cls(puzzles, **kwargs)

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []
        total_tests = len(self.puzzles) * len(self.solvers)

        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for puzzle_id, puzzle in enumerate(self.puzzles):
            for strategy_name, solver in self.solvers.items():
                self.results.append(self._run_single(puzzle, puzzle_id, strategy_name, solver))
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        puzzle: str,
        puzzle_id: int,
        strategy_name: str,
        solver: ExactCoverSolver,
    ) -> BenchmarkResult:
        """Run a single strategy on a single puzzle."""
        solutions, stats = solver.solve_all(puzzle)
        interrupted = bool(stats.extra.get("interrupted"))
        if interrupted:
            logger.warning("Puzzle %d timed out with strategy %s", puzzle_id, strategy_name)

        return BenchmarkResult(
            puzzle_id=puzzle_id,
            hints=sum(1 for c in puzzle if c in HINT_DIGITS),
            strategy=strategy_name,
            solutions=len(solutions),
            time_seconds=stats.time_seconds,
            iterations=stats.iterations,
            backtracks=stats.backtracks,
            nodes_explored=stats.nodes_explored,
            memory_bytes=stats.memory_bytes,
            interrupted=interrupted,
            extra={"cutoff": solver.strategy.cutoff, **stats.extra},
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": len(self.puzzles),
            "strategies_tested": list(self.solvers.keys()),
            "results_by_strategy": {},
        }

        for strategy_name in self.solvers:
            strategy_results = [r for r in self.results if r.strategy == strategy_name]
            if not strategy_results:
                continue
            times = [r.time_seconds for r in strategy_results]
            nodes = [r.nodes_explored for r in strategy_results]
            memory = [r.memory_bytes for r in strategy_results]

            summary["results_by_strategy"][strategy_name] = {
                "avg_time_seconds": sum(times) / len(times),
                "max_time_seconds": max(times),
                "min_time_seconds": min(times),
                "avg_nodes_explored": sum(nodes) / len(nodes),
                "avg_memory_mb": sum(memory) / len(memory) / (1024 * 1024),
                "total_solutions": sum(r.solutions for r in strategy_results),
                "unsolvable": sum(1 for r in strategy_results if r.solutions == 0 and not r.interrupted),
                "interrupted": sum(1 for r in strategy_results if r.interrupted),
                "total_tested": len(strategy_results),
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and summary as JSON."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        logger.info("Results saved to %s", output_dir)
