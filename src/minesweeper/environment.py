"""
Gymnasium environment wrapper for Minesweeper.

Exposes the game controller through the standard Env interface so
scripts and agents can play it programmatically.
"""
import random
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .config import BoardConfig, Difficulty, DifficultyLike
from .controller import GameController, GameState
from .timer import NullScheduler


# ============================================================================
# Rewards
# ============================================================================

REWARD_PROGRESS = 1.0
REWARD_WIN = 10.0
REWARD_LOSE = -10.0
REWARD_NOOP = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array (height, width) where:
        - -1 = hidden tile
        - -2 = flagged tile
        - 0-8 = revealed tile with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size width * height.
        Action i reveals the tile at x = i % width, y = i // width;
        on an already revealed number it chords.

    Rewards:
        - +1 for a reveal that uncovers safe tiles
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        difficulty: DifficultyLike = Difficulty.EASY,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration; overrides the difficulty preset.
            difficulty: Preset to use when no config is given.
            render_mode: How to render the environment.
        """
        super().__init__()

        overrides = {difficulty: config} if config is not None else None

        self.controller = GameController(
            difficulty,
            overrides=overrides,
            scheduler=NullScheduler(),
        )
        self.config = self.controller.config
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )

        # One action per tile
        self.action_space = spaces.Discrete(
            self.config.height * self.config.width
        )

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.controller.rng = random.Random(seed)
        self.controller.reset_game()
        self._steps = 0

        return self.controller.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Tile index to reveal (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y = self.action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(x, y)

        observation = self.controller.board.get_observation()
        terminated = self.controller.is_over
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        return int(action) % self.config.width, int(action) // self.config.width

    def position_to_action(self, x: int, y: int) -> int:
        """Convert (x, y) position to flat action index."""
        return y * self.config.width + x

    def _calculate_reward(self, x: int, y: int) -> float:
        """Reveal (x, y) and score the outcome."""
        result = self.controller.reveal_tile(x, y)

        if not result:
            return REWARD_NOOP
        if self.controller.state == GameState.WIN:
            return REWARD_WIN
        if self.controller.state == GameState.LOSE:
            return REWARD_LOSE
        return REWARD_PROGRESS

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.controller.revealed_count,
            "total_safe": self.config.safe_tiles,
            "game_state": self.controller.state.name,
            "flags_remaining": self.controller.flags_remaining,
            "valid_actions": len(self.controller.board.get_hidden_positions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return format_board(self.controller.board.get_observation())
        if self.render_mode == "human":
            print(format_board(self.controller.board.get_observation()))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = hidden tile.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for x, y in self.controller.board.get_hidden_positions():
            mask[self.position_to_action(x, y)] = True
        return mask

    def close(self) -> None:
        self.controller.destroy()
        super().close()


# ============================================================================
# Text Rendering
# ============================================================================

def format_board(observation: np.ndarray) -> str:
    """Render an observation array as rows of single characters."""
    lines = []
    for row in observation:
        row_str = ""
        for val in row:
            if val == -1:
                row_str += "."
            elif val == -2:
                row_str += "F"
            elif val == 9:
                row_str += "*"
            elif val == 0:
                row_str += " "
            else:
                row_str += str(val)
            row_str += " "
        lines.append(row_str)
    return "\n".join(lines)
