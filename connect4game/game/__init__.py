"""
connect4game.game - Core game mechanics for Connect Four

Board representation, win detection and the GameEngine state machine.
"""

from connect4game.game.board import Board, WinResult
from connect4game.game.errors import (ColumnFullError, Connect4Error, DropInProgressError,
                                      GameAlreadyWonError, InvalidColumnError,
                                      InvalidMoveError, InvalidPositionError)
from connect4game.game.rules import DropResult, GameEngine, GameState, PendingDrop, Phase

__all__ = [
    'Board', 'WinResult',
    'GameEngine', 'GameState', 'Phase', 'PendingDrop', 'DropResult',
    'Connect4Error', 'InvalidPositionError', 'InvalidMoveError', 'InvalidColumnError',
    'ColumnFullError', 'GameAlreadyWonError', 'DropInProgressError',
]
