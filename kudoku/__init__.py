"""Exact-cover Sudoku solver enumerating every completion of a 9x9 grid."""

__version__ = "1.0.0"
