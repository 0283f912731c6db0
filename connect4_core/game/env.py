"""
env.py - Gymnasium environment playing against the minimax opponent

The agent controls the human side of a VS_AI session; after each agent move
the built-in MinimaxPlayer answers before the observation is returned.
"""

import random
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect4_core.config import GameConfig
from connect4_core.debug import debug
from connect4_core.game.modes import GameController, GameMode
from connect4_core.game.session import GameSession
from connect4_core.utils import GameStatus, Player


class ConnectFourEnv(gym.Env):
    """
    Connect Four against the search AI, following the Gymnasium interface.

    Observations are the grid cells as an int8 array of shape
    (columns, max_rows) indexed [col, row], row 0 at the bottom.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None):
        debug.debug("Initializing ConnectFourEnv", "env")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        # Steps complete synchronously; there is no presentation layer to wait for.
        self.config = replace(config or GameConfig(), await_presentation=False)
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(self.config.columns)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(self.config.columns, self.config.max_rows), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

        self._new_game()

    @property
    def agent_player(self) -> Player:
        return self.config.human_player

    def _new_game(self) -> None:
        self.session = GameSession(self.config)
        self.controller = GameController(self.session, GameMode.VS_AI, sleep=lambda _: None)

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        self._new_game()
        if seed is not None:
            self.controller.ai.rng = random.Random(seed)
        self.controller.start()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop the agent's piece into column ``action`` and let the AI reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")
        result = self.controller.request_drop(int(action))

        if not result.accepted:
            debug.warning(f"Invalid action {action}: {result.reason.name}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = self.session.is_game_over()
        if terminated:
            status = self.session.status
            if status == GameStatus.DRAW:
                reward = self.reward_draw
            elif status.winner == self.agent_player:
                reward = self.reward_win
            else:
                reward = self.reward_lose
            debug.info(f"Game over: {status.name}", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.session.render()
        if self.render_mode == "human":
            print(self.session.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.session.grid.snapshot()

    def _get_info(self) -> Dict[str, Any]:
        last = self.session.moves[-1] if self.session.moves else None
        return {
            'valid_moves': self.session.get_valid_moves(),
            'current_player': self.session.current_player().value,
            'game_result': self.session.status.name,
            'moves_made': len(self.session.moves),
            'last_move': (last.column, last.row) if last else None,
        }
