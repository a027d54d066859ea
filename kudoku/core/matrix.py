"""Sparse choice/constraint incidence matrix for 9x9 Sudoku.

There are 9x9x9 = 729 choices ("cell (row, col) holds digit d") and
4x81 = 324 constraints, each a set of 9 mutually exclusive choices:

- CELL:   constraints 0-80, one digit per cell
- BOX:    constraints 81-161, each digit once per 3x3 box
- ROW:    constraints 162-242, each digit once per row
- COLUMN: constraints 243-323, each digit once per column

The binary 729x324 matrix is sparse (4 entries per choice, 9 per constraint),
so only the coordinates of the non-zero entries are stored, in both directions.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple
import logging

import numpy as np

logger = logging.getLogger(__name__)

DIGITS = 9
BOX = 3
CELLS = DIGITS * DIGITS
CHOICES = CELLS * DIGITS
CATEGORIES = 4
CONSTRAINTS = CATEGORIES * CELLS


class MatrixError(RuntimeError):
    """Raised when the incidence matrix cannot be built or is inconsistent."""


class ConstraintKind(Enum):
    """The four constraint categories, in id order."""
    CELL = 0
    BOX = 1
    ROW = 2
    COLUMN = 3

    @property
    def offset(self) -> int:
        """First constraint id of this category."""
        return self.value * CELLS


def constraint_kind(constraint: int) -> ConstraintKind:
    """Return the category a constraint id belongs to."""
    if not 0 <= constraint < CONSTRAINTS:
        raise ValueError(f"Constraint must be 0-{CONSTRAINTS - 1}, got {constraint}")
    return ConstraintKind(constraint // CELLS)


def choice_index(row: int, col: int, digit_index: int) -> int:
    """Encode "cell (row, col) holds digit_index + 1" as a choice id."""
    for name, value in (("row", row), ("col", col), ("digit_index", digit_index)):
        if not 0 <= value < DIGITS:
            raise ValueError(f"{name} must be 0-{DIGITS - 1}, got {value}")
    return (row * DIGITS + col) * DIGITS + digit_index


def decode_choice(choice: int) -> Tuple[int, int, int]:
    """Decode a choice id into (row, col, digit) with digit in 1-9."""
    if not 0 <= choice < CHOICES:
        raise ValueError(f"Choice must be 0-{CHOICES - 1}, got {choice}")
    cell, digit_index = divmod(choice, DIGITS)
    row, col = divmod(cell, DIGITS)
    return row, col, digit_index + 1


@dataclass(frozen=True, eq=False)
class IncidenceMatrix:
    """
    Immutable sparse incidence structure shared by every search.

    Attributes:
        choices: (324, 9) array; row c lists the choices covering constraint c,
                 in ascending order.
        constraints: (729, 4) array; row x lists the constraints choice x
                     satisfies, in category order.
        constraint_choices: Tuple view of ``choices`` for the search loops.
        choice_constraints: Tuple view of ``constraints``.
    """
    choices: np.ndarray
    constraints: np.ndarray
    constraint_choices: Tuple[Tuple[int, ...], ...]
    choice_constraints: Tuple[Tuple[int, ...], ...]

    @classmethod
    def from_arrays(cls, choices: np.ndarray, constraints: np.ndarray) -> IncidenceMatrix:
        """Freeze the arrays and derive the tuple views."""
        choices = np.array(choices, dtype=np.uint16)
        constraints = np.array(constraints, dtype=np.uint16)
        choices.setflags(write=False)
        constraints.setflags(write=False)
        return cls(
            choices=choices,
            constraints=constraints,
            constraint_choices=tuple(tuple(row) for row in choices.tolist()),
            choice_constraints=tuple(tuple(row) for row in constraints.tolist()),
        )

    def verify(self) -> None:
        """
        Check the structural invariants of the matrix.

        Raises:
            MatrixError: If any shape, count, ordering or inverse check fails.
        """
        if self.choices.shape != (CONSTRAINTS, DIGITS):
            raise MatrixError(f"choices must have shape {(CONSTRAINTS, DIGITS)}, got {self.choices.shape}")
        if self.constraints.shape != (CHOICES, CATEGORIES):
            raise MatrixError(f"constraints must have shape {(CHOICES, CATEGORIES)}, got {self.constraints.shape}")

        if not np.all(np.diff(self.choices.astype(np.int32), axis=1) > 0):
            raise MatrixError("choices of a constraint must be distinct and ascending")

        per_constraint = np.bincount(self.constraints.ravel(), minlength=CONSTRAINTS)
        if per_constraint.shape[0] != CONSTRAINTS or not np.all(per_constraint == DIGITS):
            raise MatrixError("every constraint must be covered by exactly 9 choices")

        # Each choice satisfies exactly one constraint of each category
        kinds = self.constraints // CELLS
        if not np.array_equal(kinds, np.tile(np.arange(CATEGORIES), (CHOICES, 1))):
            raise MatrixError("every choice must satisfy one constraint per category")

        for constraint, covering in enumerate(self.constraint_choices):
            for choice in covering:
                if constraint not in self.choice_constraints[choice]:
                    raise MatrixError(
                        f"choice {choice} listed under constraint {constraint} "
                        f"but does not satisfy it"
                    )

    def covers(self, constraint: int, choice: int) -> bool:
        """Return True if ``choice`` is one of the 9 choices of ``constraint``."""
        return choice in self.constraint_choices[constraint]


def _constraint_table() -> np.ndarray:
    """Compute the 4 constraint ids of every choice, shape (729, 4)."""
    choice = np.arange(CHOICES)
    cell, digit = np.divmod(choice, DIGITS)
    row, col = np.divmod(cell, DIGITS)
    box = (row // BOX) * BOX + col // BOX
    return np.stack([
        cell + ConstraintKind.CELL.offset,
        box * DIGITS + digit + ConstraintKind.BOX.offset,
        row * DIGITS + digit + ConstraintKind.ROW.offset,
        col * DIGITS + digit + ConstraintKind.COLUMN.offset,
    ], axis=1)


def build_matrix() -> IncidenceMatrix:
    """
    Build the incidence matrix.

    Deterministic and pure; call it once at startup and pass the result to
    every search.

    Raises:
        MatrixError: If the matrix cannot be allocated or fails verification.
    """
    try:
        constraints = _constraint_table()
        # A stable sort of the flattened table groups the (choice, slot) pairs
        # by constraint while keeping choices ascending within each group.
        order = np.argsort(constraints.ravel(), kind="stable")
        choices = (order // CATEGORIES).reshape(CONSTRAINTS, DIGITS)
        matrix = IncidenceMatrix.from_arrays(choices, constraints)
    except MemoryError as e:
        raise MatrixError("not enough memory to build the incidence matrix") from e
    except ValueError as e:
        raise MatrixError(f"could not build the incidence matrix: {e}") from e

    matrix.verify()
    logger.debug("Built incidence matrix: %d choices x %d constraints", CHOICES, CONSTRAINTS)
    return matrix
