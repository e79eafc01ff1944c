"""
utils.py - Constants, enumerations and helpers shared by the Connect Four game

Everything a presentation layer needs to draw the game (grid size, colors,
animation pacing) lives here alongside the player and direction enums used by
the engine.
"""

from enum import Enum, auto
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

# Board geometry
ROWS = 6
COLS = 7
CONNECT_N = 4  # fixed, not configurable

# Display colors
EMPTY_COLOR = "#ffffff"
PLAYER_ONE_COLOR = "#3fe81a"
PLAYER_TWO_COLOR = "#f23ad0"

# Presentation pacing in milliseconds
DROP_ANIMATION_RATE_MS = 50
FLASH_ANIMATION_RATE_MS = 600

Coord = Tuple[int, int]  # (row, column)


class Player(Enum):
    """Players, doubling as cell contents."""
    EMPTY = 0
    ONE = 1    # moves first
    TWO = 2

    def other(self) -> 'Player':
        """Get the opposing player (EMPTY has none)."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    @property
    def color(self) -> str:
        return PLAYER_COLORS[self]

    @property
    def label(self) -> str:
        if self == Player.EMPTY:
            return "Empty"
        return f"Player {self.value}"

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


PLAYER_COLORS = {
    Player.EMPTY: EMPTY_COLOR,
    Player.ONE: PLAYER_ONE_COLOR,
    Player.TWO: PLAYER_TWO_COLOR,
}


class GameResult(Enum):
    """Outcome of a game as seen from the outside."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameResult.IN_PROGRESS

    @classmethod
    def win_for(cls, player: Player) -> 'GameResult':
        if player == Player.ONE:
            return cls.PLAYER_ONE_WIN
        if player == Player.TWO:
            return cls.PLAYER_TWO_WIN
        raise ValueError(f"{player!r} cannot win")


class Direction(Enum):
    """Line directions the win scan walks, as (row, col) steps."""
    DIAGONAL_DOWN_RIGHT = (1, 1)
    DIAGONAL_DOWN_LEFT = (1, -1)
    HORIZONTAL = (0, 1)
    VERTICAL = (-1, 0)  # stacked from the bottom cell upward

    @property
    def step(self) -> Coord:
        return self.value


# Order in which directions are checked; the first hit wins.
WIN_SCAN_ORDER = (
    Direction.DIAGONAL_DOWN_RIGHT,
    Direction.DIAGONAL_DOWN_LEFT,
    Direction.HORIZONTAL,
    Direction.VERTICAL,
)


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """
    Convert a "#rrggbb" color into an (r, g, b) tuple.

    Args:
        color: Hex color string, with or without the leading '#'

    Returns:
        Tuple of three ints in 0..255
    """
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Not a #rrggbb color: {color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def parse_position(text: str, rows: int = ROWS, cols: int = COLS) -> np.ndarray:
    """
    Parse a comma separated list of cell values (0, 1, 2) in raster order.

    Args:
        text: e.g. "0,0,1,..." with rows * cols entries
        rows: Number of rows of the board
        cols: Number of columns of the board

    Returns:
        Flat numpy array of cell values
    """
    values = [int(v) for v in text.replace(" ", "").split(",") if v != ""]
    if len(values) != rows * cols:
        raise ValueError(f"Position must have {rows * cols} values, got {len(values)}")

    allowed = {p.value for p in Player}
    bad = sorted(set(values) - allowed)
    if bad:
        raise ValueError(f"Invalid cell values: {bad}")

    return np.array(values, dtype=np.int8)


def render_board_ascii(cells: Sequence[int], rows: int, cols: int,
                       highlight: Optional[Iterable[Coord]] = None,
                       overlay: Optional[Tuple[int, int, Player]] = None) -> str:
    """
    Render a flat board as ASCII art.

    Args:
        cells: Flat cell values in raster order
        rows: Number of rows
        cols: Number of columns
        highlight: Coordinates to draw as '*' (e.g. a winning line)
        overlay: (row, col, player) drawn on top of the board, used for a
            token that is still falling

    Returns:
        Multi-line string
    """
    marked = set(highlight or ())
    width = cols * 2 - 1
    lines: List[str] = ["|" + "-" * width + "|"]

    for row in range(rows):
        symbols = []
        for col in range(cols):
            if (row, col) in marked:
                symbols.append("*")
                continue
            if overlay is not None and overlay[:2] == (row, col):
                symbols.append(str(overlay[2]))
                continue
            symbols.append(str(Player(int(cells[row * cols + col]))))
        lines.append("|" + " ".join(symbols) + "|")

    lines.append("|" + "-" * width + "|")
    lines.append("|" + " ".join(str(c % 10) for c in range(cols)) + "|")
    return "\n".join(lines)
