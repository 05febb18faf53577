"""
Unit tests for the saved board text format and rendering.
"""
from pathlib import Path

import pytest
from game import (
    Board,
    BoardConfig,
    InvalidBoardError,
    InvalidDimensionsError,
    RevealState,
    dumps_board,
    format_board,
    format_view,
    load_board,
    loads_board,
    save_board,
)


# ============================================================================
# Text Format Tests
# ============================================================================

class TestDumps:
    """Test writing boards."""

    def test_header_and_tab_separated_rows(self, corner_board: Board) -> None:
        assert dumps_board(corner_board) == "3 3\n9\t1\t0\n1\t1\t0\n0\t0\t0\n"


class TestLoads:
    """Test reading boards."""

    def test_loads_saved_text(self, corner_board: Board) -> None:
        board = loads_board("3 3\n9 1 0\n1 1 0\n0 0 0\n")
        assert board.to_grid() == corner_board.to_grid()

    def test_blank_lines_are_ignored(self) -> None:
        board = loads_board("\n1 3\n\n9 1 0\n\n")
        assert board.mine_positions() == [(0, 0)]

    def test_missing_header_raises_error(self) -> None:
        with pytest.raises(InvalidDimensionsError, match="header"):
            loads_board("   \n")

    def test_bad_header_raises_error(self) -> None:
        with pytest.raises(InvalidDimensionsError, match="rows cols"):
            loads_board("3\n0 0 0\n")

    def test_row_count_mismatch_raises_error(self) -> None:
        with pytest.raises(InvalidDimensionsError, match="declares 2 rows"):
            loads_board("2 2\n0 0\n")

    def test_row_width_mismatch_raises_error(self) -> None:
        with pytest.raises(InvalidDimensionsError, match="Line 3"):
            loads_board("2 2\n0 0\n0 0 0\n")

    def test_non_integer_raises_error(self) -> None:
        with pytest.raises(InvalidBoardError, match="non-integer"):
            loads_board("1 2\n0 x\n")

    def test_inconsistent_counts_raise_error(self) -> None:
        with pytest.raises(InvalidBoardError):
            loads_board("1 3\n9 0 0\n")


class TestFiles:
    """Test saving to and loading from disk."""

    def test_save_then_load(self, tmp_path: Path) -> None:
        board = Board.generate(BoardConfig(7, 5, 0.25, seed=3))
        path = tmp_path / "board.txt"

        save_board(board, path)

        assert load_board(path).to_grid() == board.to_grid()

    def test_missing_file_raises_os_error(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            load_board(tmp_path / "missing.txt")


# ============================================================================
# Rendering Tests
# ============================================================================

class TestRender:
    """Test plain-text output."""

    def test_format_board(self, corner_board: Board) -> None:
        assert format_board(corner_board) == "* 1 0\n1 1 0\n0 0 0"

    def test_format_fresh_view(self, make_board) -> None:
        state = RevealState(make_board(["*.."]))
        assert format_view(state) == ". . . "

    def test_format_view_after_reveal(self, make_board) -> None:
        """Zeros render blank, counts as digits."""
        state = RevealState(make_board(["*.."]))
        state.reveal(0, 2)
        assert format_view(state) == ". 1   "

    def test_format_view_shows_flags(self, make_board) -> None:
        state = RevealState(make_board(["*.."]))
        state.flag(0, 0)
        assert format_view(state) == "F . . "

    def test_format_view_multiple_rows(self, corner_board: Board) -> None:
        """Rows keep equal width, blanks included."""
        state = RevealState(corner_board)
        state.reveal(2, 2)
        assert format_view(state).split("\n") == [". 1   ", "1 1   ", " " * 6]
