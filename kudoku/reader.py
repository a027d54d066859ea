"""Line-oriented puzzle input and solution output."""

from __future__ import annotations
from typing import Iterable, Iterator, TextIO
import logging

from .core.matrix import CELLS

logger = logging.getLogger(__name__)


def read_puzzles(stream: Iterable[str]) -> Iterator[str]:
    """
    Yield one 81-character puzzle per usable input line.

    The line terminator is stripped and anything after the 81st character is
    dropped. Shorter lines are skipped.
    """
    for line_number, line in enumerate(stream, 1):
        line = line.rstrip("\r\n")
        if len(line) < CELLS:
            logger.debug("Skipping line %d: %d characters", line_number, len(line))
            continue
        yield line[:CELLS]


def write_solutions(stream: TextIO, solutions: Iterable[str]) -> int:
    """
    Write each solution on its own line, then a blank separator line.

    Solutions are written as they arrive, so a lazy iterable streams output.

    Returns:
        The number of solutions written.
    """
    count = 0
    try:
        for solution in solutions:
            stream.write(solution + "\n")
            count += 1
    finally:
        stream.write("\n")
        stream.flush()
    return count
