"""
Plain-text rendering of boards and game views.
"""
from .board import Board
from .cell import CLOSED, FLAGGED, MINE
from .reveal_state import RevealState


# Glyphs for view codes; revealed counts 1-8 print as digits
VIEW_GLYPHS = {CLOSED: ".", FLAGGED: "F", 0: " "}


def format_board(board: Board) -> str:
    """
    Render the ground truth.

    Mines show as "*", every other cell as its count.
    """
    lines = []
    for row in board.to_grid():
        lines.append(" ".join("*" if val == MINE else str(val) for val in row))
    return "\n".join(lines)


def format_view(state: RevealState) -> str:
    """
    Render what the player sees.

    Closed cells show as ".", flags as "F", zeros as a blank and
    other counts as digits. Every cell is followed by a space.
    """
    lines = []
    for row in state.get_observation().tolist():
        glyphs = [VIEW_GLYPHS.get(code, str(code)) for code in row]
        lines.append(" ".join(glyphs) + " ")
    return "\n".join(lines)
