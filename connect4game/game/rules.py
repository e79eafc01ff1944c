"""
rules.py - Game engine for Connect Four

GameEngine owns the board, whose turn it is and whether somebody has won.
Collaborators (the CLI, the Gymnasium environment, any GUI) drive it through
drop_token()/restart() and read `engine.state` after every call.

A drop can also be split in two with begin_drop()/complete_drop() so that a
collaborator can animate the falling token in between. While a drop is
pending the engine is in the DROPPING phase and rejects further drops; the
board itself only changes in complete_drop().
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import numpy as np

from connect4game.debug import debug
from connect4game.game.board import Board, WinResult
from connect4game.game.errors import (ColumnFullError, DropInProgressError,
                                      GameAlreadyWonError, InvalidColumnError)
from connect4game.utils import ROWS, COLS, GameResult, Player


class Phase(Enum):
    IDLE = "idle"          # waiting for a drop
    DROPPING = "dropping"  # a drop is resolving, new drops are rejected
    WON = "won"            # terminal until restart


@dataclass(frozen=True)
class PendingDrop:
    """Ticket for a drop started with begin_drop()."""
    row: int
    column: int
    player: Player
    generation: int


@dataclass(frozen=True)
class DropResult:
    """Where a committed token landed and whether it won the game."""
    row: int
    column: int
    player: Player
    win: Optional[WinResult] = None


@dataclass(frozen=True, eq=False)
class GameState:
    """
    Read-only snapshot of the engine.

    `board` is a flat, non-writeable copy of the cells in raster order.
    """
    board: np.ndarray = field(repr=False)
    rows: int
    columns: int
    turn: Player
    win: Optional[WinResult]
    phase: Phase

    @property
    def drop_in_progress(self) -> bool:
        return self.phase == Phase.DROPPING

    def cell(self, row: int, column: int) -> Player:
        if not (0 <= row < self.rows and 0 <= column < self.columns):
            raise IndexError(f"Position ({row}, {column}) outside board")
        return Player(int(self.board[row * self.columns + column]))

    def grid(self) -> np.ndarray:
        return self.board.reshape(self.rows, self.columns)


class GameEngine:
    """
    Connect Four rules and turn keeping.

    Phases: IDLE -> DROPPING -> IDLE or WON. WON only leaves via restart().
    """

    def __init__(self, rows: int = ROWS, columns: int = COLS):
        self._board = Board(rows, columns)
        self._turn = Player.ONE
        self._win: Optional[WinResult] = None
        self._phase = Phase.IDLE
        self._pending: Optional[PendingDrop] = None
        self._generation = 0
        debug.debug(f"Initializing GameEngine {rows}x{columns}", "engine")

    # -- queries -----------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._board.rows

    @property
    def columns(self) -> int:
        return self._board.cols

    @property
    def turn(self) -> Player:
        return self._turn

    @property
    def win(self) -> Optional[WinResult]:
        return self._win

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def drop_in_progress(self) -> bool:
        return self._phase == Phase.DROPPING

    @property
    def board(self) -> Board:
        """A copy of the board; changing it does not affect the game."""
        return self._board.copy()

    @property
    def state(self) -> GameState:
        cells = self._board.cells.copy()
        cells.flags.writeable = False
        return GameState(board=cells, rows=self.rows, columns=self.columns,
                         turn=self._turn, win=self._win, phase=self._phase)

    @property
    def result(self) -> GameResult:
        if self._win is not None:
            return GameResult.win_for(self._win.player)
        if self._board.is_full():
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    def cell(self, row: int, column: int) -> Player:
        return self._board.get(row, column)

    def landing_row(self, column: int) -> Optional[int]:
        self._check_column(column)
        return self._board.landing_row(column)

    def valid_columns(self) -> List[int]:
        """Columns a drop would currently be accepted in."""
        if self._phase != Phase.IDLE:
            return []
        return self._board.valid_columns()

    def is_board_full(self) -> bool:
        return self._board.is_full()

    # -- operations --------------------------------------------------------

    def drop_token(self, column: int) -> DropResult:
        """
        Drop the current player's token into `column`.

        Args:
            column: Column index, 0 is the leftmost

        Returns:
            DropResult with the landing cell and the win, if any

        Raises:
            GameAlreadyWonError, DropInProgressError, InvalidColumnError,
            ColumnFullError. The state is unchanged when any is raised.
        """
        pending = self.begin_drop(column)
        return self.complete_drop(pending)

    def begin_drop(self, column: int) -> PendingDrop:
        """
        Validate a drop, resolve its landing row and enter DROPPING.

        The board is not modified until complete_drop() is called with the
        returned ticket.
        """
        if self._phase == Phase.WON:
            debug.debug(f"Rejected drop in column {column}: game already won", "engine")
            raise GameAlreadyWonError(f"{self._win.player.label} has already won; restart to play again")
        if self._phase == Phase.DROPPING:
            debug.debug(f"Rejected drop in column {column}: drop in progress", "engine")
            raise DropInProgressError("Another drop is still resolving")
        self._check_column(column)

        row = self._board.landing_row(column)
        if row is None:
            debug.debug(f"Rejected drop in column {column}: column full", "engine")
            raise ColumnFullError(column)

        self._pending = PendingDrop(row=row, column=column, player=self._turn,
                                    generation=self._generation)
        self._phase = Phase.DROPPING
        debug.debug(f"{self._turn.label} dropping into column {column}, lands on row {row}", "engine")
        return self._pending

    def complete_drop(self, pending: PendingDrop) -> Optional[DropResult]:
        """
        Commit a drop started by begin_drop() and check for a win.

        A ticket issued before the last restart() is stale and is ignored.

        Returns:
            DropResult, or None for a stale ticket
        """
        if pending.generation != self._generation or pending != self._pending:
            debug.debug(f"Ignoring stale drop into column {pending.column}", "engine")
            return None

        self._board.set(pending.row, pending.column, pending.player)
        self._pending = None

        debug.start_timer("win_check")
        win = self._board.find_win()
        debug.end_timer("win_check", "engine")

        if win is not None:
            self._win = win
            self._phase = Phase.WON
            debug.info(f"{win.player.label} wins with {win.direction.name} line {list(win.cells)}", "engine")
        else:
            self._turn = self._turn.other()
            self._phase = Phase.IDLE
            debug.debug(f"Switching to {self._turn.label}", "engine")
            if self._board.is_full():
                debug.info("Board is full, game ends in a draw", "engine")

        return DropResult(row=pending.row, column=pending.column,
                          player=pending.player, win=win)

    def restart(self) -> None:
        """Start over: empty board, Player 1 to move. Legal in any phase."""
        if self._pending is not None:
            debug.debug(f"Abandoning drop into column {self._pending.column}", "engine")
        self._board.reset()
        self._turn = Player.ONE
        self._win = None
        self._phase = Phase.IDLE
        self._pending = None
        self._generation += 1
        debug.debug("Game restarted", "engine")

    def _check_column(self, column: int) -> None:
        if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
            raise InvalidColumnError(column, self.columns)
        if not 0 <= column < self.columns:
            debug.debug(f"Rejected drop: column {column} out of range", "engine")
            raise InvalidColumnError(column, self.columns)

    def render(self) -> str:
        highlight = self._win.cells if self._win else None
        return self._board.render(highlight=highlight)

    def __str__(self) -> str:
        return self.render()
