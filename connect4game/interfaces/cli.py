"""
cli.py - Command-line interface for Connect Four

Two players share the terminal. The CLI is only a presentation layer: it
forwards input to the GameEngine, animates the falling token between
begin_drop() and complete_drop(), and flashes the winning line.
"""

import argparse
import sys
import time
from typing import Callable, List, Optional, Sequence

from connect4game.debug import debug, DebugLevel
from connect4game.game.board import Board
from connect4game.game.errors import InvalidMoveError
from connect4game.game.rules import DropResult, GameEngine, PendingDrop
from connect4game.utils import (ROWS, COLS, DROP_ANIMATION_RATE_MS, FLASH_ANIMATION_RATE_MS,
                                GameResult, Player, parse_position)

QUIT = "q"
RESTART = "r"


def parse_moves(text: str) -> List[int]:
    """Parse "3,3,4" into [3, 3, 4]."""
    return [int(v) for v in text.replace(" ", "").split(",") if v != ""]


class SimpleCLI:
    """Terminal front end for a two-player game."""

    def __init__(self, input_fn: Callable[[str], str] = input,
                 output: Callable[[str], None] = print,
                 sleep: Callable[[float], None] = time.sleep):
        self.input = input_fn
        self.output = output
        self.sleep = sleep
        self.engine: Optional[GameEngine] = None
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect Four for two players')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level (ignored with --debug)')
        parser.add_argument('--log-file', help='Also write log messages to this file')
        parser.add_argument('--rows', type=int, default=ROWS, help='Board rows')
        parser.add_argument('--columns', type=int, default=COLS, help='Board columns')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game in the terminal')
        play_parser.add_argument('--no-animate', action='store_true',
                                 help='Show each drop immediately')
        play_parser.add_argument('--drop-rate', type=int, default=DROP_ANIMATION_RATE_MS,
                                 help='Milliseconds per row of a falling token')
        play_parser.add_argument('--flash-rate', type=int, default=FLASH_ANIMATION_RATE_MS,
                                 help='Milliseconds per flash of the winning line')
        play_parser.add_argument('--flashes', type=int, default=3,
                                 help='How often the winning line flashes')

        replay_parser = subparsers.add_parser('replay', help='Apply a list of moves')
        replay_parser.add_argument('--moves', required=True,
                                   help='Comma separated column indices, e.g. 3,3,4')

        check_parser = subparsers.add_parser('check', help='Look for a win in a position')
        check_parser.add_argument('--position', required=True,
                                  help='rows*columns comma separated cell values (0, 1, 2)')
        return parser

    def parse_args(self, argv: Optional[Sequence[str]] = None) -> None:
        self.args = self.build_parser().parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Run the command selected on the command line. Returns an exit code."""
        if self.args is None:
            self.parse_args(argv)

        if self.args.command is None:
            self.output("Please specify a command. Use --help for options.")
            return 1

        try:
            self.engine = GameEngine(self.args.rows, self.args.columns)
        except ValueError as e:
            self.output(f"Error: {e}")
            return 1

        if self.args.command == 'play':
            return self.play_game()
        if self.args.command == 'replay':
            return self.replay_moves()
        return self.check_position()

    # -- play --------------------------------------------------------------

    def play_game(self) -> int:
        """Interactive game until a player quits."""
        columns = self.engine.columns
        self.output("Starting a new Connect Four game!")
        self.output(f"Enter a column (0-{columns - 1}), '{RESTART}' to restart or '{QUIT}' to quit.")
        self.output(self.engine.render())

        while True:
            if self.engine.result.is_game_over():
                self.announce_result()
                if not self.ask_play_again():
                    return 0
                self.engine.restart()
                self.output(self.engine.render())
                continue

            command = self.read_command()
            if command is None:
                continue
            if command == QUIT:
                self.output("Quitting game.")
                return 0
            if command == RESTART:
                self.engine.restart()
                self.output("Game restarted.")
                self.output(self.engine.render())
                continue

            try:
                pending = self.engine.begin_drop(command)
            except InvalidMoveError as e:
                self.output(str(e))
                continue

            result = self.animate_drop(pending)
            if result is not None and result.win is not None:
                self.flash_win(result)
            else:
                self.output(self.engine.render())

    def read_command(self):
        """
        Read one line of input.

        Returns:
            A column index, QUIT, RESTART, or None for unusable input
        """
        player = self.engine.turn
        try:
            raw = self.input(f"{player.label} ({player}) move: ")
        except EOFError:
            return QUIT

        text = raw.strip().lower()
        if text in (QUIT, RESTART):
            return text
        try:
            return int(text)
        except ValueError:
            self.output("Invalid input. Enter a column number, 'r' or 'q'.")
            return None

    def ask_play_again(self) -> bool:
        try:
            answer = self.input("Play again? [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in ("y", "yes")

    def animate_drop(self, pending: PendingDrop) -> Optional[DropResult]:
        """Show the token falling row by row, then commit it."""
        if not self.args.no_animate:
            board = self.engine.board
            delay = self.args.drop_rate / 1000.0
            for row in range(pending.row + 1):
                self.output(board.render(overlay=(row, pending.column, pending.player)))
                self.sleep(delay)
        return self.engine.complete_drop(pending)

    def flash_win(self, result: DropResult) -> None:
        """Alternate the winning line between '*' and the player's token."""
        board = self.engine.board
        if not self.args.no_animate:
            delay = self.args.flash_rate / 1000.0
            for _ in range(self.args.flashes):
                self.output(board.render(highlight=result.win.cells))
                self.sleep(delay)
                self.output(board.render())
                self.sleep(delay)
        self.output(board.render(highlight=result.win.cells))

    def announce_result(self) -> None:
        result = self.engine.result
        if result == GameResult.DRAW:
            self.output("The board is full. It's a draw!")
        else:
            win = self.engine.win
            cells = ", ".join(f"({r},{c})" for r, c in win.cells)
            self.output(f"{win.player.label} WON! Line: {cells}")

    # -- replay / check ----------------------------------------------------

    def replay_moves(self) -> int:
        """Apply the scripted moves in order, stopping at the first rejected one."""
        try:
            moves = parse_moves(self.args.moves)
        except ValueError as e:
            self.output(f"Error parsing moves: {e}")
            return 1

        for number, column in enumerate(moves, start=1):
            player = self.engine.turn
            try:
                self.engine.drop_token(column)
            except InvalidMoveError as e:
                self.output(f"Move {number} ({player.label}, column {column}) rejected: {e}")
                self.output(self.engine.render())
                return 1

        self.output(self.engine.render())
        if self.engine.result.is_game_over():
            self.announce_result()
        else:
            self.output(f"{self.engine.turn.label} to move.")
        return 0

    def check_position(self) -> int:
        """Report the first line the win scan finds in a given position."""
        rows, cols = self.engine.rows, self.engine.columns
        try:
            board = Board.from_cells(parse_position(self.args.position, rows, cols), rows, cols)
        except ValueError as e:
            self.output(f"Error parsing position: {e}")
            return 1

        win = board.find_win()
        self.output(board.render(highlight=win.cells if win else None))
        if win is None:
            self.output("No win detected for any player")
        else:
            cells = ", ".join(f"({r},{c})" for r, c in win.cells)
            self.output(f"Win for {win.player.label} ({win.direction.name}): {cells}")

        if board.is_full():
            self.output("Board is full")
        else:
            self.output(f"Empty spaces: {board.count(Player.EMPTY)}")
        self.output(f"Valid moves: {board.valid_columns()}")
        return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
