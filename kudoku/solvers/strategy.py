"""Constraint selection for the exact-cover search.

The search branches on the open constraint with the fewest viable choices
(minimum remaining values). Scanning all 324 constraints at every node is
expensive, so a strategy may stop the scan as soon as it sees a constraint at
or below its cutoff. The cutoff changes the order in which solutions are
found, never the set of solutions.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..core.matrix import CONSTRAINTS, IncidenceMatrix


@dataclass(frozen=True)
class ScanStrategy:
    """
    How far to scan for the branching constraint.

    Attributes:
        name: Identifier used by the CLI and benchmark reports.
        cutoff: Stop at the first open constraint with at most this many
                viable choices. None scans every open constraint.
    """
    name: str
    cutoff: Optional[int] = None

    def __post_init__(self):
        if self.cutoff is not None and self.cutoff < 0:
            raise ValueError(f"cutoff must be non-negative, got {self.cutoff}")


EARLY_EXIT = ScanStrategy("early-exit", cutoff=1)
FULL_SCAN = ScanStrategy("full-scan", cutoff=None)

STRATEGIES = {s.name: s for s in (EARLY_EXIT, FULL_SCAN)}


def get_strategy(name: str) -> ScanStrategy:
    """Look up a named strategy."""
    try:
        return STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown strategy {name!r}, expected one of {sorted(STRATEGIES)}"
        ) from None


def select_constraint(
    matrix: IncidenceMatrix,
    sr: Sequence[int],
    sc: Sequence[int],
    start: int,
    strategy: ScanStrategy = EARLY_EXIT,
) -> Optional[Tuple[int, int]]:
    """
    Pick the open constraint with the fewest viable choices.

    Constraints are scanned from ``start`` and wrap around, so successive
    calls do not favour low-numbered constraints. Ties keep the first
    constraint seen.

    Returns:
        (constraint, viable_count), or None if every constraint is used.
    """
    constraint_choices = matrix.constraint_choices
    cutoff = strategy.cutoff
    best: Optional[int] = None
    best_count = 0

    for offset in range(CONSTRAINTS):
        constraint = start + offset
        if constraint >= CONSTRAINTS:
            constraint -= CONSTRAINTS
        if sc[constraint]:
            continue
        count = [sr[x] for x in constraint_choices[constraint]].count(0)
        if best is None or count < best_count:
            best, best_count = constraint, count
        if cutoff is not None and count <= cutoff:
            break

    if best is None:
        return None
    return best, best_count
