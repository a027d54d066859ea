"""Unit tests for the propagation counters."""

import pytest

from kudoku.core.matrix import choice_index
from kudoku.core.state import SearchState, update

CLASSIC_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)


class TestUpdate:
    """Tests for the update primitive."""

    def test_commit_counts(self, matrix):
        sr = [0] * 729
        sc = [0] * 324
        choice = choice_index(4, 4, 4)
        update(matrix, sr, sc, choice, 1)

        for constraint in matrix.choice_constraints[choice]:
            assert sc[constraint] == 1
        assert sum(sc) == 4
        assert sum(sr) == 36
        # The committed choice sits in all four of its constraints
        assert sr[choice] == 4
        # Another digit in the same cell only shares the cell constraint
        assert sr[choice_index(4, 4, 0)] == 1
        # Same digit elsewhere in the row shares only the row constraint
        assert sr[choice_index(4, 0, 4)] == 1
        # Unrelated choice is untouched
        assert sr[choice_index(0, 0, 0)] == 0

    def test_commit_then_revert_restores_every_choice(self, matrix):
        state = SearchState.from_puzzle(matrix, CLASSIC_PUZZLE)
        before = state.snapshot()
        for choice in range(729):
            update(matrix, state.sr, state.sc, choice, 1)
            update(matrix, state.sr, state.sc, choice, -1)
            assert state.snapshot() == before

    def test_reverts_in_any_order(self, matrix):
        state = SearchState(matrix)
        before = state.snapshot()
        choices = [choice_index(0, 0, 0), choice_index(0, 0, 0), choice_index(8, 8, 8), 300]
        for choice in choices:
            state.commit(choice)
        for choice in choices:
            state.revert(choice)
        assert state.snapshot() == before


class TestSearchState:
    """Tests for SearchState."""

    def test_empty_state(self, matrix):
        state = SearchState(matrix)
        assert state.hints == 0
        assert all(state.is_open(c) for c in range(324))
        assert all(state.is_viable(x) for x in range(729))
        assert state.viable_count(0) == 9
        assert not state.has_conflict()

    def test_from_puzzle_commits_hints(self, matrix):
        state = SearchState.from_puzzle(matrix, CLASSIC_PUZZLE)
        assert state.hints == 30
        # Cell (0, 0) holds 5
        assert not state.is_open(0)
        assert not state.is_viable(choice_index(0, 0, 4))
        # 5 is no longer viable anywhere in row 0
        assert not state.is_viable(choice_index(0, 8, 4))
        assert not state.has_conflict()

    def test_blank_markers(self, matrix):
        """Anything other than 1-9 is blank."""
        state = SearchState.from_puzzle(matrix, "." * 40 + "x0 " + "-" * 38)
        assert state.hints == 0

    def test_trailing_characters_ignored(self, matrix):
        state = SearchState.from_puzzle(matrix, "." * 81 + "123456789")
        assert state.hints == 0

    def test_short_puzzle_rejected(self, matrix):
        with pytest.raises(ValueError):
            SearchState.from_puzzle(matrix, "1" * 80)

    def test_conflicting_hints(self, matrix):
        state = SearchState.from_puzzle(matrix, "55" + "." * 79)
        assert state.has_conflict()

    def test_viable_count_after_commit(self, matrix):
        state = SearchState(matrix)
        state.commit(choice_index(0, 0, 0))
        # Row 0 / digit 2 loses the (0, 0) cell
        assert state.viable_count(163) == 8
