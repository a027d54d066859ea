"""Exact-cover backtracking search over the precomputed incidence matrix.

The search keeps one trail entry per free cell: the constraint branched on at
that depth and the index of the choice last tried within it. Moving forward
commits a choice through the propagation counters; backtracking reverts it and
resumes with the next viable choice of the same constraint. Reaching the last
depth means every cell is assigned, and the grid is emitted before the search
backtracks to look for further solutions.
"""

from __future__ import annotations
from typing import Callable, Iterator, List, Optional, Tuple
import logging
import time

from .base_solver import BaseSolver, SolverStats
from .strategy import EARLY_EXIT, ScanStrategy, select_constraint
from ..core.board import SudokuBoard
from ..core.matrix import CELLS, CONSTRAINTS, DIGITS, IncidenceMatrix, build_matrix
from ..core.state import HINT_DIGITS, SearchState, update

logger = logging.getLogger(__name__)


class SearchInterrupted(RuntimeError):
    """Raised when a search is stopped before its enumeration completed."""


def iter_solutions(
    matrix: IncidenceMatrix,
    puzzle: str,
    strategy: ScanStrategy = EARLY_EXIT,
    should_stop: Optional[Callable[[], bool]] = None,
    stats: Optional[SolverStats] = None,
    limit: Optional[int] = None,
) -> Iterator[str]:
    """
    Enumerate every completion of ``puzzle``.

    Args:
        matrix: Shared incidence matrix, never modified.
        puzzle: At least 81 characters; '1'-'9' are hints, anything else is
                blank. Characters after the 81st are ignored.
        strategy: Constraint selection strategy.
        should_stop: Polled before every depth step; returning True raises
                     SearchInterrupted.
        stats: If given, iteration/node/backtrack/solution counts are added.
        limit: Stop after this many solutions.

    Yields:
        81-character solution strings, in a deterministic order.

    Raises:
        ValueError: If the puzzle is shorter than 81 characters.
        SearchInterrupted: If ``should_stop`` returned True.
    """
    state = SearchState.from_puzzle(matrix, puzzle)
    if state.has_conflict():
        logger.debug("Hints conflict with each other, no solutions")
        return
    if limit is not None and limit <= 0:
        return

    sr, sc = state.sr, state.sc
    constraint_choices = matrix.constraint_choices
    free = CELLS - state.hints
    branch: List[Optional[int]] = [None] * free
    tried: List[Optional[int]] = [None] * free
    grid = list(puzzle[:CELLS])

    depth = 0
    forward = True
    start = 0
    iterations = nodes = backtracks = found = 0

    try:
        while depth >= 0:
            iterations += 1
            if should_stop is not None and should_stop():
                raise SearchInterrupted(
                    f"search stopped after {iterations - 1} steps and {found} solutions"
                )

            if depth == free:
                for level in range(free):
                    choice = constraint_choices[branch[level]][tried[level]]
                    grid[choice // DIGITS] = HINT_DIGITS[choice % DIGITS]
                found += 1
                yield "".join(grid)
                if limit is not None and found >= limit:
                    return
                depth -= 1
                forward = False
                continue

            if forward:
                picked = select_constraint(matrix, sr, sc, start, strategy)
                if picked is None:
                    # Cells remain but every constraint is used
                    depth -= 1
                    forward = False
                    continue
                constraint, viable = picked
                start = (constraint + 1) % CONSTRAINTS
                if viable == 0:
                    depth -= 1
                    forward = False
                    continue
                branch[depth] = constraint

            choices = constraint_choices[branch[depth]]
            last = tried[depth]
            if last is None:
                index = 0
            else:
                update(matrix, sr, sc, choices[last], -1)
                backtracks += 1
                index = last + 1

            while index < DIGITS and sr[choices[index]]:
                index += 1

            if index < DIGITS:
                update(matrix, sr, sc, choices[index], 1)
                nodes += 1
                tried[depth] = index
                depth += 1
                forward = True
            else:
                tried[depth] = None
                depth -= 1
                forward = False
    finally:
        if stats is not None:
            stats.iterations += iterations
            stats.nodes_explored += nodes
            stats.backtracks += backtracks
            stats.solutions += found


class ExactCoverSolver(BaseSolver):
    """
    Exact-cover solver with a minimum-remaining-values branching heuristic.

    Sudoku is reduced to covering 324 constraints with 81 of 729 choices:
    - each cell holds exactly one digit (81 constraints)
    - each box holds each digit exactly once (81 constraints)
    - each row holds each digit exactly once (81 constraints)
    - each column holds each digit exactly once (81 constraints)

    The incidence matrix is read-only and can be shared between solvers on
    different threads; the solver instance itself keeps per-run stats and
    should not be shared.
    """

    name = "Exact Cover (MRV)"

    def __init__(
        self,
        matrix: Optional[IncidenceMatrix] = None,
        strategy: ScanStrategy = EARLY_EXIT,
        max_solutions: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
    ):
        """
        Initialize the solver.

        Args:
            matrix: Incidence matrix to search over. Built here if None.
            strategy: Constraint selection strategy.
            max_solutions: Stop after this many solutions (None = all).
            timeout_seconds: Per-puzzle time limit (None = unbounded).
        """
        super().__init__()
        if max_solutions is not None and max_solutions < 1:
            raise ValueError(f"max_solutions must be at least 1, got {max_solutions}")
        if timeout_seconds is not None and timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {timeout_seconds}")

        self.matrix = matrix if matrix is not None else build_matrix()
        self.strategy = strategy
        self.max_solutions = max_solutions
        self.timeout_seconds = timeout_seconds

    def _stop_check(self) -> Optional[Callable[[], bool]]:
        if self.timeout_seconds is None:
            return None
        deadline = time.perf_counter() + self.timeout_seconds
        return lambda: time.perf_counter() > deadline

    def iter_solutions(self, puzzle: str, limit: Optional[int] = None) -> Iterator[str]:
        """
        Stream the solutions of ``puzzle`` as they are found.

        Counts are accumulated into ``self.stats``. The time limit starts
        when the first solution is requested.
        """
        if limit is None:
            limit = self.max_solutions
        yield from iter_solutions(
            self.matrix,
            puzzle,
            strategy=self.strategy,
            should_stop=self._stop_check(),
            stats=self.stats,
            limit=limit,
        )

    def solve_all(self, puzzle: str) -> Tuple[List[str], SolverStats]:
        """
        Collect every solution (up to ``max_solutions``), with time and peak
        memory recorded in the stats.

        An interrupted search returns the solutions found so far, with
        ``stats.extra["interrupted"]`` set.
        """
        solutions: List[str] = []

        with self.measure() as stats:
            try:
                for solution in self.iter_solutions(puzzle):
                    solutions.append(solution)
            except SearchInterrupted as e:
                logger.warning("Search interrupted: %s", e)
                stats.extra["interrupted"] = True
            stats.solved = bool(solutions)

        return solutions, self.stats

    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        """Return the first solution found, or None."""
        solutions = list(self.iter_solutions(board.to_string(), limit=1))
        if not solutions:
            return None
        return SudokuBoard.from_string(solutions[0])
