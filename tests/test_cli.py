import pytest

from connect4game.debug import debug, DebugLevel
from connect4game.interfaces.cli import SimpleCLI, parse_moves
from connect4game.utils import Player

from tests.helpers import DRAW_MOVES


class FakeTerminal:
    """Scripted input plus captured output and sleeps."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []
        self.printed = []
        self.sleeps = []

    def input(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)

    def output(self, text=""):
        self.printed.append(text)

    def sleep(self, seconds):
        self.sleeps.append(seconds)

    @property
    def text(self):
        return "\n".join(self.printed)


def make_cli(lines=()):
    terminal = FakeTerminal(lines)
    cli = SimpleCLI(input_fn=terminal.input, output=terminal.output, sleep=terminal.sleep)
    return cli, terminal


def test_parse_moves():
    assert parse_moves("3, 3,4") == [3, 3, 4]
    with pytest.raises(ValueError):
        parse_moves("3,x")


def test_no_command_is_an_error():
    cli, terminal = make_cli()
    assert cli.run([]) == 1
    assert "specify a command" in terminal.text


def test_replay_reports_vertical_win():
    cli, terminal = make_cli()
    assert cli.run(["replay", "--moves", "0,1,0,1,0,1,0"]) == 0
    assert "Player 1 WON! Line: (5,0), (4,0), (3,0), (2,0)" in terminal.text


def test_replay_stops_at_rejected_move():
    cli, terminal = make_cli()
    assert cli.run(["replay", "--moves", "0,9,1"]) == 1
    assert "Move 2 (Player 2, column 9) rejected" in terminal.text
    assert cli.engine.turn == Player.TWO


def test_replay_reports_next_player_and_draw():
    cli, terminal = make_cli()
    assert cli.run(["replay", "--moves", "3"]) == 0
    assert "Player 2 to move." in terminal.text

    cli, terminal = make_cli()
    assert cli.run(["replay", "--moves", ",".join(map(str, DRAW_MOVES))]) == 0
    assert "draw" in terminal.text


def test_replay_rejects_bad_move_list():
    cli, terminal = make_cli()
    assert cli.run(["replay", "--moves", "a,b"]) == 1
    assert "Error parsing moves" in terminal.text


def test_check_position_finds_line():
    cells = ["0"] * 42
    for col in range(1, 5):
        cells[5 * 7 + col] = "2"
    cli, terminal = make_cli()
    assert cli.run(["check", "--position", ",".join(cells)]) == 0
    assert "Win for Player 2 (HORIZONTAL): (5,1), (5,2), (5,3), (5,4)" in terminal.text
    assert "Empty spaces: 38" in terminal.text
    assert "Valid moves: [0, 1, 2, 3, 4, 5, 6]" in terminal.text


def test_check_position_without_line():
    cli, terminal = make_cli()
    assert cli.run(["check", "--position", ",".join(["0"] * 42)]) == 0
    assert "No win detected for any player" in terminal.text


def test_check_position_rejects_bad_input():
    cli, terminal = make_cli()
    assert cli.run(["check", "--position", "0,1,2"]) == 1
    assert "Error parsing position" in terminal.text


def test_invalid_dimensions_are_reported():
    cli, terminal = make_cli()
    assert cli.run(["--rows", "0", "replay", "--moves", "0"]) == 1
    assert "Error" in terminal.text


def test_play_to_a_win_without_animation():
    cli, terminal = make_cli(["0", "1", "0", "1", "0", "1", "0", "n"])
    assert cli.run(["play", "--no-animate"]) == 0
    assert "Player 1 WON!" in terminal.text
    assert terminal.sleeps == []
    assert terminal.prompts[-1] == "Play again? [y/N] "


def test_play_again_restarts_the_game():
    cli, terminal = make_cli(["0", "1", "0", "1", "0", "1", "0", "y", "q"])
    assert cli.run(["play", "--no-animate"]) == 0
    assert cli.engine.win is None
    assert terminal.prompts[-1] == "Player 1 (X) move: "


def test_play_reports_invalid_input_and_moves():
    cli, terminal = make_cli(["abc", "9", "-1", "q"])
    assert cli.run(["play", "--no-animate"]) == 0
    assert "Invalid input" in terminal.text
    assert "Column 9 outside valid range 0-6" in terminal.text
    assert "Column -1 outside valid range 0-6" in terminal.text
    assert "Quitting game." in terminal.text


def test_play_restart_command():
    cli, terminal = make_cli(["2", "r", "q"])
    assert cli.run(["play", "--no-animate"]) == 0
    assert "Game restarted." in terminal.text
    assert not cli.engine.state.board.any()


def test_play_end_of_input_quits():
    cli, terminal = make_cli(["3"])
    assert cli.run(["play", "--no-animate"]) == 0
    assert cli.engine.cell(5, 3) == Player.ONE


def test_drop_is_animated_row_by_row():
    cli, terminal = make_cli(["3", "3", "q"])
    assert cli.run(["play", "--drop-rate", "10"]) == 0
    # 6 frames for the first token, 5 for the one landing on top of it
    assert terminal.sleeps == [0.01] * 11
    assert cli.engine.cell(4, 3) == Player.TWO


def test_win_is_flashed():
    moves = ["0", "1", "0", "1", "0", "1", "0", "n"]
    cli, terminal = make_cli(moves)
    assert cli.run(["play", "--drop-rate", "0", "--flash-rate", "100", "--flashes", "2"]) == 0
    assert terminal.sleeps.count(0.1) == 4


def test_debug_flag_sets_level():
    cli, _ = make_cli()
    cli.run(["--debug", "replay", "--moves", "0"])
    assert debug.level == DebugLevel.DEBUG

    cli, _ = make_cli()
    cli.run(["--debug-level", "error", "replay", "--moves", "0"])
    assert debug.level == DebugLevel.ERROR
