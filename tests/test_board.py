"""Unit tests for Sudoku board and validation."""

import numpy as np
import pytest

from kudoku.core.board import SudokuBoard
from kudoku.core.validator import count_solutions, has_unique_solution, validate_solution

TEST_PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
TEST_SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


class TestSudokuBoard:
    """Tests for SudokuBoard class."""

    def test_create_empty_board(self):
        board = SudokuBoard()
        assert board.size == 9
        assert board.box_size == 3
        assert board.count_empty() == 81
        assert board.count_filled() == 0

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            SudokuBoard(np.zeros((16, 16), dtype=np.int32))

    def test_set_and_get(self):
        board = SudokuBoard()
        board.set(0, 0, 5)
        assert board.get(0, 0) == 5
        assert not board.is_empty(0, 0)

        board.clear(0, 0)
        assert board.is_empty(0, 0)

        with pytest.raises(ValueError):
            board.set(0, 0, 10)

    def test_get_candidates(self):
        board = SudokuBoard()
        board.set(0, 0, 5)
        board.set(0, 1, 3)

        candidates = board.get_candidates(0, 2)
        assert 5 not in candidates
        assert 3 not in candidates
        assert len(candidates) == 7

    def test_is_valid(self):
        board = SudokuBoard()
        assert board.is_valid()

        board.set(0, 0, 5)
        board.set(0, 1, 5)  # Duplicate in row
        assert not board.is_valid()

    def test_box_duplicate_is_invalid(self):
        board = SudokuBoard()
        board.set(0, 0, 5)
        board.set(1, 1, 5)
        assert not board.is_valid()

    def test_from_string_blank_markers(self):
        """Any character other than 1-9 is an empty cell."""
        board = SudokuBoard.from_string("0" * 40 + ".x " + "-" * 37 + "9")
        assert board.count_filled() == 1
        assert board.get(8, 8) == 9

    def test_from_string_length(self):
        with pytest.raises(ValueError):
            SudokuBoard.from_string("1" * 80)

    def test_to_string(self):
        board = SudokuBoard.from_string(TEST_PUZZLE)
        assert board.to_string() == TEST_PUZZLE.replace("0", ".")
        assert board.to_string(blank="0") == TEST_PUZZLE

    def test_hints(self):
        board = SudokuBoard()
        board.set(2, 3, 4)
        board.set(0, 8, 1)
        assert list(board.hints()) == [(0, 8, 1), (2, 3, 4)]

    def test_copy(self):
        board = SudokuBoard()
        board.set(4, 4, 7)
        copy = board.copy()

        assert copy.get(4, 4) == 7
        copy.set(4, 4, 8)
        assert board.get(4, 4) == 7

    def test_pretty_print(self):
        text = str(SudokuBoard.from_string(TEST_PUZZLE))
        lines = text.splitlines()
        assert len(lines) == 13
        assert lines[0] == "+-------+-------+-------+"
        assert lines[1] == "| 5 3 . | . 7 . | . . . |"


class TestValidator:
    """Tests for validation utilities."""

    def test_validate_solution(self):
        assert validate_solution(TEST_PUZZLE, TEST_SOLUTION)

    def test_validate_rejects_changed_hint(self):
        # A valid grid that does not keep the puzzle's hints
        relabelled = TEST_SOLUTION.translate(str.maketrans("12", "21"))
        assert SudokuBoard.from_string(relabelled).is_solved()
        assert not validate_solution(TEST_PUZZLE, relabelled)

    def test_validate_rejects_incomplete(self):
        assert not validate_solution(TEST_PUZZLE, TEST_PUZZLE)

    def test_count_solutions(self):
        assert count_solutions(TEST_PUZZLE) == 1
        assert has_unique_solution(SudokuBoard.from_string(TEST_PUZZLE))
        assert count_solutions("." * 81, limit=3) == 3

    def test_count_solutions_contradiction(self):
        assert count_solutions("55" + TEST_PUZZLE[2:]) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
