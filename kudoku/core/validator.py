"""Validation utilities and a reference solution counter."""

from __future__ import annotations
from typing import Union

from .board import SudokuBoard
from .matrix import CELLS

BoardLike = Union[SudokuBoard, str]


def _as_board(value: BoardLike) -> SudokuBoard:
    if isinstance(value, SudokuBoard):
        return value
    return SudokuBoard.from_string(value[:CELLS])


def validate_solution(puzzle: BoardLike, solution: BoardLike) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle (board or 81-character string).
        solution: The proposed solution.

    Returns:
        True if the solution is complete, satisfies every row, column, box
        and cell constraint, and keeps all of the puzzle's hints.
    """
    puzzle = _as_board(puzzle)
    solution = _as_board(solution)

    for row, col, value in puzzle.hints():
        if solution.get(row, col) != value:
            return False

    return solution.is_solved()


def count_solutions(board: BoardLike, limit: int = 2) -> int:
    """
    Count the number of solutions for a puzzle (up to limit).

    Plain cell-based backtracking, independent of the exact-cover engine.
    Stops early once limit is reached.

    Returns:
        Number of solutions found (up to limit).
    """
    work_board = _as_board(board).copy()
    if not work_board.is_valid():
        return 0
    count = [0]

    def backtrack() -> bool:
        """Returns True if limit reached."""
        empty_cells = work_board.get_empty_cells()
        if not empty_cells:
            count[0] += 1
            return count[0] >= limit

        # MRV: pick the cell with the fewest candidates
        best_cell = None
        best_candidates = None
        for cell in empty_cells:
            candidates = work_board.get_candidates(*cell)
            if best_candidates is None or len(candidates) < len(best_candidates):
                best_cell, best_candidates = cell, candidates
                if not candidates:
                    return False

        row, col = best_cell
        for val in sorted(best_candidates):
            work_board.set(row, col, val)
            if backtrack():
                return True
            work_board.clear(row, col)

        return False

    backtrack()
    return count[0]


def has_unique_solution(board: BoardLike) -> bool:
    """Check if a puzzle has exactly one solution."""
    return count_solutions(board, limit=2) == 1
