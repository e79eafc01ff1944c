"""
env.py - Gymnasium environment wrapping the Connect Four engine

The environment is a collaborator like any other: it drops tokens through the
GameEngine for whoever's turn it is and reports the resulting state. Rewards
are from the point of view of the player who just moved.
"""

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from connect4game.debug import debug
from connect4game.game.errors import InvalidMoveError
from connect4game.game.rules import GameEngine
from connect4game.utils import ROWS, COLS, GameResult, Player, hex_to_rgb

CELL_PIXELS = 50
BACKGROUND_RGB = (0, 0, 128)


class ConnectFourEnv(gym.Env):
    """
    Two-player Connect Four following the Gymnasium interface.

    Both players act through the same env; `info['current_player']` says
    whose turn the next action is for.
    """

    metadata = {'render_modes': ['ascii', 'human', 'rgb_array'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, rows: int = ROWS, columns: int = COLS):
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        debug.debug("Initializing ConnectFourEnv", "env")
        self.engine = GameEngine(rows, columns)
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(columns)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(rows, columns), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_draw = 0.0
        self.reward_invalid_move = -0.5
        self.reward_step = 0.0

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.engine.restart()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop a token for the current player.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")

        try:
            self.engine.drop_token(int(action))
        except InvalidMoveError as e:
            debug.warning(f"Invalid action {action}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            info['error'] = str(e)
            return self._get_observation(), self.reward_invalid_move, False, False, info

        result = self.engine.result
        reward = self.reward_step
        terminated = result.is_game_over()
        if result == GameResult.DRAW:
            reward = self.reward_draw
        elif terminated:
            reward = self.reward_win

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode is None:
            return None

        if self.render_mode == "ascii":
            return self.engine.render()

        if self.render_mode == "human":
            print(self.engine.render())
            return None

        return self._render_rgb()

    def _render_rgb(self) -> np.ndarray:
        state = self.engine.state
        height, width = state.rows * CELL_PIXELS, state.columns * CELL_PIXELS
        frame = np.empty((height, width, 3), dtype=np.uint8)
        frame[:, :] = BACKGROUND_RGB

        # Disc mask for one cell, reused for every cell
        radius = CELL_PIXELS * 2 // 5
        ys, xs = np.ogrid[:CELL_PIXELS, :CELL_PIXELS]
        center = CELL_PIXELS // 2
        disc = (ys - center) ** 2 + (xs - center) ** 2 <= radius ** 2

        for row in range(state.rows):
            for col in range(state.columns):
                color = hex_to_rgb(state.cell(row, col).color)
                tile = frame[row * CELL_PIXELS:(row + 1) * CELL_PIXELS,
                             col * CELL_PIXELS:(col + 1) * CELL_PIXELS]
                tile[disc] = color
        return frame

    def _get_observation(self) -> np.ndarray:
        return self.engine.state.grid().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        state = self.engine.state
        valid_moves = self.engine.valid_columns()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': state.turn.value,
            'game_result': self.engine.result.name,
            'winner': state.win.player.value if state.win else Player.EMPTY.value,
            'winning_line': list(state.win.cells) if state.win else [],
        }

    def close(self):
        pass
