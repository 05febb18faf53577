"""
Unit tests for RevealState and MineRegistry.

Tests flood reveal, flagging against the registry, loss handling
and view queries.
"""
import pytest
import numpy as np
from game import (
    Board,
    CellState,
    InternalInconsistencyError,
    MineRegistry,
    OutOfBoundsError,
    RevealState,
    Visibility,
)


# ============================================================================
# Initialization Tests
# ============================================================================

class TestInitialization:
    """Test a fresh view."""

    def test_new_state_all_closed(self, corner_board: Board) -> None:
        """All cells should be closed on a new view."""
        state = RevealState(corner_board)
        assert np.all(state.get_observation() == -1)
        assert state.closed_count == 9

    def test_observation_dtype_is_int8(self, corner_board: Board) -> None:
        obs = RevealState(corner_board).get_observation()
        assert obs.dtype == np.int8
        assert obs.shape == (3, 3)

    def test_observation_is_a_copy(self, corner_board: Board) -> None:
        """Writing to an observation does not touch the view."""
        state = RevealState(corner_board)
        obs = state.get_observation()
        obs[1, 1] = 0
        assert state.is_closed(1, 1)


# ============================================================================
# Flood Reveal Tests
# ============================================================================

class TestReveal:
    """Test cell revealing behavior."""

    def test_numbered_cell_opens_alone(self, corner_board: Board) -> None:
        """A nonzero count does not cascade."""
        state = RevealState(corner_board)
        result = state.reveal(1, 1)
        assert result.opened == [(1, 1)]
        assert state.visibility_of(1, 1) == Visibility.revealed(1)
        assert state.closed_count == 8

    def test_zero_cell_floods(self, corner_board: Board) -> None:
        """Opening a zero opens everything reachable through zeros."""
        state = RevealState(corner_board)
        result = state.reveal(2, 2)
        assert len(result) == 8
        assert state.closed_cells() == [(0, 0)]

    def test_empty_board_fully_revealed(self, empty_board: Board) -> None:
        """In a board with no mines one click reveals every cell."""
        state = RevealState(empty_board)
        state.reveal(2, 2)
        assert state.is_solved is True

    def test_reveal_is_idempotent(self, corner_board: Board) -> None:
        """Revealing the same zero twice leaves the same view."""
        once = RevealState(corner_board)
        once.reveal(2, 0)

        twice = RevealState(corner_board)
        twice.reveal(2, 0)
        second = twice.reveal(2, 0)

        assert second.opened == []
        assert np.array_equal(once.get_observation(), twice.get_observation())

    def test_reveal_flagged_cell_is_noop(self, corner_board: Board) -> None:
        """Cannot reveal a flagged cell."""
        state = RevealState(corner_board)
        state.flag(0, 0)
        result = state.reveal(0, 0)
        assert result.opened == []
        assert result.hit_mine is False
        assert state.is_flagged(0, 0)

    def test_flood_stops_at_flags(self, line_board: Board) -> None:
        """Flagged cells are never opened by a cascade."""
        state = RevealState(line_board)
        state.flag(0, 6)
        state.reveal(0, 3)
        assert state.visibility_of(0, 6).is_flagged
        assert state.closed_cells() == [(0, 0)]

    def test_reveal_out_of_bounds_raises_error(self, corner_board: Board) -> None:
        state = RevealState(corner_board)
        with pytest.raises(OutOfBoundsError):
            state.reveal(3, 0)

    def test_open_zero_cells(self, corner_board: Board) -> None:
        """Opening every zero leaves only the mine closed."""
        state = RevealState(corner_board)
        opened = state.open_zero_cells()
        assert opened == 8
        assert state.border_cells() == [(0, 0)]


# ============================================================================
# Loss Tests
# ============================================================================

class TestLoss:
    """Test opening a mine."""

    def test_reveal_mine_records_loss(self, corner_board: Board) -> None:
        state = RevealState(corner_board)
        result = state.reveal(0, 0)
        assert result.hit_mine is True
        assert result.mine == (0, 0)
        assert state.is_lost is True
        assert state.lost_at == (0, 0)

    def test_mine_is_not_revealed(self, corner_board: Board) -> None:
        """Hitting a mine mutates nothing in the view."""
        state = RevealState(corner_board)
        state.reveal(0, 0)
        assert np.all(state.get_observation() == -1)

    def test_no_mutation_after_loss(self, corner_board: Board) -> None:
        """Reveal and flag are no-ops once the game is lost."""
        state = RevealState(corner_board)
        state.reveal(0, 0)
        before = state.get_observation()

        assert state.reveal(2, 2).opened == []
        assert state.flag(0, 0) is False
        assert np.array_equal(state.get_observation(), before)


# ============================================================================
# Flag Tests
# ============================================================================

class TestFlag:
    """Test flagging behavior."""

    def test_flag_mine_succeeds(self, corner_board: Board) -> None:
        state = RevealState(corner_board)
        assert state.flag(0, 0) is True
        assert state.visibility_of(0, 0).state == CellState.FLAGGED
        assert state.registry.remaining == 0

    def test_flag_does_not_count_as_closed(self, corner_board: Board) -> None:
        state = RevealState(corner_board)
        state.flag(0, 0)
        assert state.closed_count == 8

    def test_flag_twice_returns_false(self, corner_board: Board) -> None:
        state = RevealState(corner_board)
        state.flag(0, 0)
        assert state.flag(0, 0) is False

    def test_flag_revealed_cell_returns_false(self, corner_board: Board) -> None:
        state = RevealState(corner_board)
        state.reveal(1, 1)
        assert state.flag(1, 1) is False

    def test_flag_safe_cell_raises_error(self, corner_board: Board) -> None:
        """A wrong flag is an internal inconsistency, not a game move."""
        state = RevealState(corner_board)
        with pytest.raises(InternalInconsistencyError) as excinfo:
            state.flag(1, 1)
        assert excinfo.value.cell == (1, 1)
        assert state.is_closed(1, 1)


# ============================================================================
# Border Tests
# ============================================================================

class TestBorder:
    """Test border cell discovery."""

    def test_no_border_without_revealed_cells(self, corner_board: Board) -> None:
        assert RevealState(corner_board).border_cells() == []

    def test_border_around_numbers(self, line_state: RevealState) -> None:
        assert line_state.border_cells() == [(0, 0), (0, 2), (0, 4), (0, 6)]

    def test_flags_are_not_border(self, line_state: RevealState) -> None:
        line_state.flag(0, 0)
        assert line_state.border_cells() == [(0, 2), (0, 4), (0, 6)]


# ============================================================================
# Registry Tests
# ============================================================================

class TestMineRegistry:
    """Test the mine registry."""

    def test_registry_from_board(self, line_board: Board) -> None:
        registry = MineRegistry.from_board(line_board)
        assert registry.total == 2
        assert registry.pending() == [(0, 0), (0, 6)]

    def test_confirm_shrinks_pending(self, line_board: Board) -> None:
        registry = MineRegistry.from_board(line_board)
        assert registry.confirm((0, 6)) is True
        assert registry.remaining == 1
        assert registry.total == 2
        assert (0, 6) not in registry

    def test_confirm_unknown_position_fails(self, line_board: Board) -> None:
        registry = MineRegistry.from_board(line_board)
        assert registry.confirm((0, 3)) is False
        assert registry.remaining == 2

    def test_confirm_twice_fails(self, line_board: Board) -> None:
        """The pending set never regrows, so a mine confirms once."""
        registry = MineRegistry.from_board(line_board)
        registry.confirm((0, 0))
        assert registry.confirm((0, 0)) is False
        assert registry.all_flagged is False
