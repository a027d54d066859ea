"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats
from .exact_cover import ExactCoverSolver, SearchInterrupted, iter_solutions
from .strategy import ScanStrategy, EARLY_EXIT, FULL_SCAN, get_strategy, select_constraint

__all__ = [
    "BaseSolver",
    "SolverStats",
    "ExactCoverSolver",
    "SearchInterrupted",
    "iter_solutions",
    "ScanStrategy",
    "EARLY_EXIT",
    "FULL_SCAN",
    "get_strategy",
    "select_constraint",
]
