"""
Gymnasium environment wrapper for the Minesweeper engine.

Lets automated players drive a :class:`GamePlay` through the standard
reset/step interface.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig, Difficulty, DIFFICULTY_PRESETS
from .cell import FLAGGED_VALUE, MINE_VALUE
from .gameplay import GamePlay
from .timer import Clock


# ============================================================================
# Rewards
# ============================================================================

SAFE_REWARD = 1.0
WIN_REWARD = 10.0
LOSS_REWARD = -10.0
INVALID_REWARD = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size width * height.
        Action i reveals the cell at (x, y) = (i % width, i // width).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.EASY,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            difficulty: Preset used when no explicit config is given.
            config: Custom board configuration.
            render_mode: How to render the environment.
            clock: Millisecond clock passed to the engine.
        """
        super().__init__()

        self.config = config or DIFFICULTY_PRESETS[difficulty]
        self.render_mode = render_mode
        self.game = GamePlay(
            config=self.config, clock=clock, rng=self.np_random
        )

        self.observation_space = spaces.Box(
            low=FLAGGED_VALUE,
            high=MINE_VALUE,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(
            self.config.height * self.config.width
        )

        self._steps = 0
        self._total_safe_cells = self.config.cell_count - self.config.num_mines

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        # Seeding replaces np_random, so hand the new generator to the engine
        self.game.rng = self.np_random
        self.game.reset()
        self._steps = 0

        return self.game.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        reward = self._calculate_reward(int(action))

        observation = self.game.get_observation()
        terminated = not self.game.is_playing
        truncated = False

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, self._get_info()

    def _calculate_reward(self, action: int) -> float:
        """Reveal the cell behind ``action`` and score the outcome."""
        cell = self.game.board.cell_at_index(action)
        if not self.game.on_click(cell):
            return INVALID_REWARD

        if self.game.is_won:
            return WIN_REWARD
        if self.game.is_lost:
            return LOSS_REWARD
        return SAFE_REWARD

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.game.board.count_revealed(),
            "total_safe": self._total_safe_cells,
            "game_state": self.game.phase.name,
            "remaining_mines": self.game.remaining_mines(),
            "elapsed_seconds": self.game.elapsed_seconds(),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            int8 array where 1 marks a hidden, unflagged cell.
        """
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        if not self.game.is_playing:
            return mask
        for cell in self.game.board:
            if cell.is_hidden:
                mask[self.game.board.index_of(cell)] = 1
        return mask
