import numpy as np
import pytest

from connect4game.interfaces.env import CELL_PIXELS, ConnectFourEnv
from connect4game.utils import EMPTY_COLOR, PLAYER_ONE_COLOR, Player, hex_to_rgb

from tests.helpers import VERTICAL_WIN_MOVES


def test_reset_returns_empty_board():
    env = ConnectFourEnv()
    observation, info = env.reset(seed=0)
    assert observation.shape == (6, 7)
    assert observation.dtype == np.int8
    assert not observation.any()
    assert env.observation_space.contains(observation)
    assert info['valid_moves'] == list(range(7))
    assert info['current_player'] == Player.ONE.value
    assert info['game_result'] == "IN_PROGRESS"


def test_step_drops_for_current_player():
    env = ConnectFourEnv()
    env.reset()
    observation, reward, terminated, truncated, info = env.step(3)
    assert observation[5, 3] == Player.ONE.value
    assert reward == env.reward_step
    assert not terminated and not truncated
    assert info['current_player'] == Player.TWO.value


def test_winning_step_terminates():
    env = ConnectFourEnv()
    env.reset()
    for action in VERTICAL_WIN_MOVES[:-1]:
        env.step(action)
    _, reward, terminated, _, info = env.step(VERTICAL_WIN_MOVES[-1])
    assert terminated
    assert reward == env.reward_win
    assert info['winner'] == Player.ONE.value
    assert info['winning_line'] == [(5, 0), (4, 0), (3, 0), (2, 0)]
    assert info['valid_moves'] == []


def test_invalid_step_leaves_game_untouched():
    env = ConnectFourEnv()
    env.reset()
    observation, reward, terminated, truncated, info = env.step(7)
    assert reward == env.reward_invalid_move
    assert info['invalid_move']
    assert "outside valid range" in info['error']
    assert not observation.any()
    assert info['current_player'] == Player.ONE.value


def test_reset_after_win_starts_over():
    env = ConnectFourEnv()
    env.reset()
    for action in VERTICAL_WIN_MOVES:
        env.step(action)
    observation, info = env.reset()
    assert not observation.any()
    assert info['winning_line'] == []


def test_rgb_render_uses_player_colors():
    env = ConnectFourEnv(render_mode="rgb_array")
    env.reset()
    env.step(0)
    frame = env.render()
    assert frame.shape == (6 * CELL_PIXELS, 7 * CELL_PIXELS, 3)

    center = CELL_PIXELS // 2
    bottom_left = frame[5 * CELL_PIXELS + center, center]
    top_left = frame[center, center]
    assert tuple(bottom_left) == hex_to_rgb(PLAYER_ONE_COLOR)
    assert tuple(top_left) == hex_to_rgb(EMPTY_COLOR)


def test_ascii_render():
    env = ConnectFourEnv(render_mode="ascii")
    env.reset()
    env.step(6)
    assert env.render().splitlines()[6] == "|. . . . . . X|"


def test_unknown_render_mode():
    with pytest.raises(ValueError):
        ConnectFourEnv(render_mode="video")
