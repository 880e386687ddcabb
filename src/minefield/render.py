"""
Plain-text rendering of a Minesweeper board observation.
"""
from typing import Optional

import numpy as np

from .tile import FLAGGED, HIDDEN, UNSURE, TileState

SYMBOLS = {
    HIDDEN: ".",
    FLAGGED: "F",
    UNSURE: "?",
    int(TileState.ZERO): " ",
    int(TileState.MINE): "X",
}

HELP_LINE = "Commands = x,y: sweep, fx,y: flag, q: quit"


def symbol(value: int) -> str:
    """Map a single observation value to its display character."""
    return SYMBOLS.get(int(value), str(int(value)))


def render_board(obs: np.ndarray) -> str:
    """
    Render a board observation as text.

    Columns are labelled 1..width across the top and rows 1..height down
    the left, matching the 1-based coordinates the player types.

    Args:
        obs: Array of shape (height, width) from Board.get_observation.

    Returns:
        Multi-line string, one line per row plus header and footer.
    """
    height, width = obs.shape
    label_width = len(str(height))
    cell_width = len(str(width))

    header = " " * label_width + " |" + " ".join(
        str(x + 1).rjust(cell_width) for x in range(width)
    ) + "|"
    bar = "-" * label_width + "-+" + "-" * (width * (cell_width + 1) - 1) + "+"

    lines = [header, bar]
    for y in range(height):
        cells = " ".join(symbol(obs[y, x]).rjust(cell_width) for x in range(width))
        lines.append(f"{str(y + 1).rjust(label_width)} |{cells}|")
    lines.append(bar)
    return "\n".join(lines)


def format_time(elapsed: Optional[float]) -> str:
    """Format elapsed seconds as MM:SS, or an empty string before play."""
    if elapsed is None:
        return ""
    seconds = int(elapsed)
    return f"Time Elapsed = {seconds // 60:02d}:{seconds % 60:02d}"


def render_status(elapsed: Optional[float]) -> str:
    """Render the line shown under the board."""
    timer = format_time(elapsed)
    if timer:
        return f"{timer} | {HELP_LINE}"
    return HELP_LINE
