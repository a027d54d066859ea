"""Core module: incidence matrix, propagation state and board representation."""

from .board import SudokuBoard
from .matrix import IncidenceMatrix, MatrixError, build_matrix
from .state import SearchState, update
from .validator import validate_solution, count_solutions, has_unique_solution

__all__ = [
    "SudokuBoard",
    "IncidenceMatrix",
    "MatrixError",
    "build_matrix",
    "SearchState",
    "update",
    "validate_solution",
    "count_solutions",
    "has_unique_solution",
]
