"""
Text format for saved boards.

First line holds "rows cols"; each following line holds one row of
codes, 9 for a mine and 0-8 for a neighbor count.
"""
from pathlib import Path
from typing import List, Union

from .board import Board
from .errors import InvalidBoardError, InvalidDimensionsError


def dumps_board(board: Board) -> str:
    """Serialize a board to text (tab-separated rows)."""
    lines = [f"{board.height} {board.width}"]
    for row in board.to_grid():
        lines.append("\t".join(str(code) for code in row))
    return "\n".join(lines) + "\n"


def loads_board(text: str) -> Board:
    """
    Parse a board from text.

    Args:
        text: Saved board contents.

    Returns:
        The parsed board.

    Raises:
        InvalidDimensionsError: If the header is missing or disagrees
            with the rows that follow.
        InvalidBoardError: If a token is not an integer or the grid
            is inconsistent.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise InvalidDimensionsError("Missing 'rows cols' header")

    header = _parse_ints(lines[0], 1)
    if len(header) != 2:
        raise InvalidDimensionsError("Header must be 'rows cols'")
    height, width = header
    if height < 1 or width < 1:
        raise InvalidDimensionsError("Board dimensions must be positive")

    rows = [_parse_ints(line, number) for number, line in enumerate(lines[1:], 2)]
    if len(rows) != height:
        raise InvalidDimensionsError(
            f"Header declares {height} rows but found {len(rows)}"
        )
    for number, row in enumerate(rows, 2):
        if len(row) != width:
            raise InvalidDimensionsError(
                f"Line {number} has {len(row)} cells, expected {width}"
            )
    return Board.from_grid(rows)


def save_board(board: Board, path: Union[str, Path]) -> None:
    """Write a board to a file."""
    Path(path).write_text(dumps_board(board))


def load_board(path: Union[str, Path]) -> Board:
    """Read a board from a file."""
    return loads_board(Path(path).read_text())


def _parse_ints(line: str, number: int) -> List[int]:
    try:
        return [int(token) for token in line.split()]
    except ValueError:
        raise InvalidBoardError(f"Line {number} contains a non-integer") from None
