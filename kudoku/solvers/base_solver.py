"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Iterator, Tuple
import logging
import time
import tracemalloc

from ..core.board import SudokuBoard

logger = logging.getLogger(__name__)


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Algorithm-specific metrics
    backtracks: int = 0
    nodes_explored: int = 0
    solutions: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "solutions": self.solutions,
            "algorithm": self.algorithm,
            **self.extra
        }

class BaseSolver(ABC):
    """Abstract base class for Sudoku solvers."""

    name: str = "BaseSolver"

    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)

    @contextmanager
    def measure(self) -> Iterator[SolverStats]:
        """
        Reset the stats, then record wall time and peak traced memory of the block.

        If tracemalloc is already running (e.g. started by the caller), it is
        left running and only the peak is read.
        """
        self.reset_stats()

        owns_tracing = not tracemalloc.is_tracing()
        if owns_tracing:
            tracemalloc.start()
        else:
            tracemalloc.reset_peak()
        start_time = time.perf_counter()

        try:
            yield self.stats
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            current, peak = tracemalloc.get_traced_memory()
            if owns_tracing:
                tracemalloc.stop()
            self.stats.memory_bytes = peak

    def solve(self, board: SudokuBoard) -> Tuple[Optional[SudokuBoard], SolverStats]:
        """
        Solve a Sudoku puzzle with timing and memory tracking.

        Args:
            board: The puzzle to solve.

        Returns:
            Tuple of (solution or None, stats).
        """
        with self.measure() as stats:
            try:
                solution = self._solve(board.copy())
                stats.solved = solution is not None and solution.is_solved()
            except Exception as e:
                logger.warning("%s failed: %s", self.name, e)
                stats.extra["error"] = str(e)
                solution = None

        return solution, self.stats

    @abstractmethod
    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            board: A copy of the puzzle to solve (can be modified).

        Returns:
            The solved board, or None if no solution found.
        """

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
