"""
board.py - Flat board representation and win scan for Connect Four

The Board stores its cells in a 1-D numpy array in raster order
(index = row * cols + col, row 0 at the top). It knows where a token lands and
how to find a four-in-a-row, but nothing about turns or game phases.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from connect4game.debug import debug
from connect4game.game.errors import InvalidPositionError
from connect4game.utils import (ROWS, COLS, CONNECT_N, WIN_SCAN_ORDER, Coord,
                                Direction, Player, render_board_ascii)


@dataclass(frozen=True)
class WinResult:
    """A completed line: the winner and its four cells in scan order."""
    player: Player
    cells: Tuple[Coord, ...]
    direction: Direction


class Board:
    """
    A rows x cols Connect Four grid.

    Coordinates are always bounds-checked; an out-of-range row, column or
    index raises InvalidPositionError instead of being clamped.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        if rows < 1 or cols < 1:
            raise ValueError(f"Board dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.cells = np.zeros(rows * cols, dtype=np.int8)

    @classmethod
    def from_cells(cls, cells, rows: int = ROWS, cols: int = COLS) -> 'Board':
        """Build a board from flat cell values (e.g. parse_position output)."""
        board = cls(rows, cols)
        values = np.asarray(cells, dtype=np.int8).reshape(-1)
        if values.size != rows * cols:
            raise ValueError(f"Expected {rows * cols} cells, got {values.size}")
        board.cells = values.copy()
        return board

    def reset(self) -> None:
        """Empty every cell."""
        self.cells.fill(Player.EMPTY.value)

    def copy(self) -> 'Board':
        clone = Board(self.rows, self.cols)
        clone.cells = self.cells.copy()
        return clone

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def index(self, row: int, col: int) -> int:
        """Flat index of (row, col)."""
        if not self.in_bounds(row, col):
            raise InvalidPositionError(
                f"Position ({row}, {col}) outside {self.rows}x{self.cols} board")
        return row * self.cols + col

    def position(self, index: int) -> Coord:
        """(row, col) of a flat index."""
        if not 0 <= index < self.rows * self.cols:
            raise InvalidPositionError(f"Index {index} outside {self.rows}x{self.cols} board")
        return divmod(index, self.cols)

    def get(self, row: int, col: int) -> Player:
        return Player(int(self.cells[self.index(row, col)]))

    def set(self, row: int, col: int, player: Player) -> None:
        self.cells[self.index(row, col)] = player.value

    def landing_row(self, col: int) -> Optional[int]:
        """
        Row a token dropped into `col` would land in.

        Scans from the top row down to the first occupied cell and returns the
        row above it, or the bottom row when the column is empty.

        Returns:
            Row index, or None if the column is full
        """
        if not 0 <= col < self.cols:
            raise InvalidPositionError(f"Column {col} outside {self.rows}x{self.cols} board")

        for row in range(self.rows):
            if self.cells[row * self.cols + col] != Player.EMPTY.value:
                return row - 1 if row > 0 else None
        return self.rows - 1

    def is_column_full(self, col: int) -> bool:
        return self.landing_row(col) is None

    def valid_columns(self) -> List[int]:
        return [col for col in range(self.cols) if not self.is_column_full(col)]

    def is_full(self) -> bool:
        return not np.any(self.cells == Player.EMPTY.value)

    def count(self, player: Player) -> int:
        return int(np.count_nonzero(self.cells == player.value))

    def find_win(self) -> Optional[WinResult]:
        """
        Find a four-in-a-row anywhere on the board.

        Directions are tried in WIN_SCAN_ORDER. Within a direction every start
        cell is visited in raster order and empty starts are skipped, so when
        one move completes several lines the same one is always reported.

        Returns:
            WinResult for the first line found, or None
        """
        for direction in WIN_SCAN_ORDER:
            result = self._scan_direction(direction)
            if result is not None:
                debug.trace(f"Line found {direction.name} at {result.cells}", "board")
                return result
        return None

    def _scan_direction(self, direction: Direction) -> Optional[WinResult]:
        dr, dc = direction.step
        reach = CONNECT_N - 1

        for row in range(self.rows):
            for col in range(self.cols):
                start = self.cells[row * self.cols + col]
                if start == Player.EMPTY.value:
                    continue
                if not self.in_bounds(row + dr * reach, col + dc * reach):
                    continue

                line = [(row + dr * k, col + dc * k) for k in range(CONNECT_N)]
                if all(self.cells[r * self.cols + c] == start for r, c in line[1:]):
                    return WinResult(Player(int(start)), tuple(line), direction)
        return None

    def as_grid(self) -> np.ndarray:
        """2-D (rows, cols) copy of the cells."""
        return self.cells.reshape(self.rows, self.cols).copy()

    def render(self, highlight=None, overlay=None) -> str:
        return render_board_ascii(self.cells, self.rows, self.cols,
                                  highlight=highlight, overlay=overlay)

    def __str__(self) -> str:
        return self.render()
