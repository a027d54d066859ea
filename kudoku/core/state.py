"""Live propagation counters for a single search."""

from __future__ import annotations
from typing import List, Tuple

from .matrix import CHOICES, CONSTRAINTS, DIGITS, CELLS, IncidenceMatrix

HINT_DIGITS = "123456789"


def update(matrix: IncidenceMatrix, sr: List[int], sc: List[int], choice: int, delta: int) -> None:
    """
    Commit (delta=1) or revert (delta=-1) a choice on the counter vectors.

    For each of the choice's 4 constraints the usage counter ``sc`` moves by
    ``delta``, and so does the conflict counter ``sr`` of each of the 9 choices
    covering that constraint. Calling with +1 then -1 restores both vectors
    exactly.
    """
    constraint_choices = matrix.constraint_choices
    for constraint in matrix.choice_constraints[choice]:
        sc[constraint] += delta
        for other in constraint_choices[constraint]:
            sr[other] += delta


class SearchState:
    """
    Counter vectors owned by one search.

    ``sc[c]`` counts committed choices using constraint c (0 = open).
    ``sr[x]`` counts used constraints covering choice x (0 = still viable).
    """

    __slots__ = ("matrix", "sr", "sc", "hints")

    def __init__(self, matrix: IncidenceMatrix):
        self.matrix = matrix
        self.sr: List[int] = [0] * CHOICES
        self.sc: List[int] = [0] * CONSTRAINTS
        self.hints = 0

    @classmethod
    def from_puzzle(cls, matrix: IncidenceMatrix, puzzle: str) -> SearchState:
        """
        Create a state with every hint of ``puzzle`` committed.

        Characters '1'-'9' are hints; anything else is a blank cell.
        Only the first 81 characters are read.
        """
        if len(puzzle) < CELLS:
            raise ValueError(f"Puzzle must have at least {CELLS} characters, got {len(puzzle)}")
        state = cls(matrix)
        for cell, char in enumerate(puzzle[:CELLS]):
            digit_index = HINT_DIGITS.find(char)
            if digit_index >= 0:
                state.commit(cell * DIGITS + digit_index)
                state.hints += 1
        return state

    def commit(self, choice: int) -> None:
        update(self.matrix, self.sr, self.sc, choice, 1)

    def revert(self, choice: int) -> None:
        update(self.matrix, self.sr, self.sc, choice, -1)

    def is_viable(self, choice: int) -> bool:
        return self.sr[choice] == 0

    def is_open(self, constraint: int) -> bool:
        return self.sc[constraint] == 0

    def viable_count(self, constraint: int) -> int:
        """Number of choices of ``constraint`` that are still viable."""
        sr = self.sr
        return [sr[x] for x in self.matrix.constraint_choices[constraint]].count(0)

    def has_conflict(self) -> bool:
        """True if some constraint is used by more than one committed choice."""
        return any(count > 1 for count in self.sc)

    def snapshot(self) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
        """Immutable copy of (sr, sc)."""
        return tuple(self.sr), tuple(self.sc)

    def __repr__(self) -> str:
        used = CONSTRAINTS - self.sc.count(0)
        return f"SearchState(hints={self.hints}, used_constraints={used})"
