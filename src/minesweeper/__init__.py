"""
Minesweeper game module.

Provides the rules engine: board and tile model, mine placement,
reveal propagation, the game state machine and its clock.
"""
from .tile import Tile, TileState, TileView
from .config import (
    BoardConfig,
    ConfigurationError,
    Difficulty,
    DIFFICULTY_SETUP,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    resolve_config,
)
from .board import Board
from .reveal import RevealResult
from .timer import GameTimer, NullScheduler, ThreadingScheduler
from .audio import AudioManager, AudioService, SilentAudio, EXPLOSION_CUE
from .controller import GameController, GameState
from .environment import MinesweeperEnv, format_board

__all__ = [
    "Tile",
    "TileState",
    "TileView",
    "BoardConfig",
    "ConfigurationError",
    "Difficulty",
    "DIFFICULTY_SETUP",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "resolve_config",
    "Board",
    "RevealResult",
    "GameTimer",
    "NullScheduler",
    "ThreadingScheduler",
    "AudioManager",
    "AudioService",
    "SilentAudio",
    "EXPLOSION_CUE",
    "GameController",
    "GameState",
    "MinesweeperEnv",
    "format_board",
]
