"""
errors.py - Exceptions raised by the Connect Four engine

Every error here is a local validation failure: the call that raised it had no
effect and the game can continue.
"""


class Connect4Error(Exception):
    """Base class for all game errors."""


class InvalidPositionError(Connect4Error, IndexError):
    """Raised for a (row, column) or flat index outside the board."""


class InvalidMoveError(Connect4Error, ValueError):
    """Raised when a drop is rejected. The engine state is unchanged."""


class InvalidColumnError(InvalidMoveError):
    """Column index is negative or not smaller than the column count."""

    def __init__(self, column: int, columns: int):
        super().__init__(f"Column {column} outside valid range 0-{columns - 1}")
        self.column = column


class ColumnFullError(InvalidMoveError):
    """The column has no empty cell left."""

    def __init__(self, column: int):
        super().__init__(f"Column {column} is full")
        self.column = column


class GameAlreadyWonError(InvalidMoveError):
    """A drop was attempted after a win; only restart is accepted."""


class DropInProgressError(InvalidMoveError):
    """A drop was attempted while another one is still resolving."""
