"""Sudoku board representation for the standard 9x9 grid."""

from __future__ import annotations
import numpy as np
from typing import List, Tuple, Optional, Set, Iterator

from .matrix import DIGITS, BOX, CELLS


class SudokuBoard:
    """
    A 9x9 Sudoku grid backed by a numpy array.

    Cells hold 1-9, or 0 when empty.
    """

    size = DIGITS
    box_size = BOX

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a Sudoku board.

        Args:
            grid: Optional initial 9x9 grid. If None, creates empty board.
        """
        if grid is not None:
            if grid.shape != (self.size, self.size):
                raise ValueError(f"Grid shape must be ({self.size}, {self.size}), got {grid.shape}")
            if grid.min() < 0 or grid.max() > self.size:
                raise ValueError(f"Grid values must be 0-{self.size}")
            self.grid = grid.copy().astype(np.int32)
        else:
            self.grid = np.zeros((self.size, self.size), dtype=np.int32)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        return SudokuBoard(self.grid)

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        if value < 0 or value > self.size:
            raise ValueError(f"Value must be 0-{self.size}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        self.grid[row, col] = 0

    def is_empty(self, row: int, col: int) -> bool:
        return self.grid[row, col] == 0

    def get_row(self, row: int) -> np.ndarray:
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        return self.grid[:, col]

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row = (row // self.box_size) * self.box_size
        box_col = (col // self.box_size) * self.box_size
        return self.grid[box_row:box_row + self.box_size,
                         box_col:box_col + self.box_size].flatten()

    def get_candidates(self, row: int, col: int) -> Set[int]:
        """
        Get all valid candidate values for an empty cell.

        Returns:
            Set of values 1-9 that can be placed at (row, col).
            Returns empty set if cell is not empty.
        """
        if not self.is_empty(row, col):
            return set()

        used = set(self.get_row(row).tolist())
        used |= set(self.get_col(col).tolist())
        used |= set(self.get_box(row, col).tolist())

        return set(range(1, self.size + 1)) - used

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions, row-major."""
        rows, cols = np.nonzero(self.grid == 0)
        return list(zip(rows.tolist(), cols.tolist()))

    def hints(self) -> Iterator[Tuple[int, int, int]]:
        """Yield (row, col, value) for every filled cell, row-major."""
        rows, cols = np.nonzero(self.grid)
        for row, col in zip(rows.tolist(), cols.tolist()):
            yield row, col, int(self.grid[row, col])

    def count_empty(self) -> int:
        return int(np.sum(self.grid == 0))

    def count_filled(self) -> int:
        return int(np.sum(self.grid != 0))

    def is_complete(self) -> bool:
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """
        Check if the current board state is valid.
        Does not check if solution is complete, only if no conflicts exist.
        """
        units = [self.get_row(i) for i in range(self.size)]
        units += [self.get_col(j) for j in range(self.size)]
        units += [
            self.get_box(box_row, box_col)
            for box_row in range(0, self.size, self.box_size)
            for box_col in range(0, self.size, self.box_size)
        ]
        for unit in units:
            non_zero = unit[unit != 0]
            if len(non_zero) != len(set(non_zero.tolist())):
                return False
        return True

    def is_solved(self) -> bool:
        """Check if the puzzle is completely and correctly solved."""
        return self.is_complete() and self.is_valid()

    def to_string(self, blank: str = ".") -> str:
        """Convert board to an 81-character row-major string."""
        return "".join(
            str(value) if value else blank for value in self.grid.ravel().tolist()
        )

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a board from an 81-character string.

        Characters '1'-'9' are hints; any other character is an empty cell.
        """
        if len(s) != CELLS:
            raise ValueError(f"String length must be {CELLS}, got {len(s)}")

        values = [int(c) if "1" <= c <= "9" else 0 for c in s]
        return cls(np.array(values, dtype=np.int32).reshape(DIGITS, DIGITS))

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (self.box_size * 2 + 1)) + '+') * self.box_size

        for i in range(self.size):
            if i % self.box_size == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(self.size):
                val = self.grid[i, j]
                row_str += f' {val}' if val else ' .'
                if (j + 1) % self.box_size == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())
