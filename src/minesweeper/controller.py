"""
Game controller for Minesweeper.

Owns the board, the game state machine, the flag counter and the clock.
Front-ends call reveal_tile/flag_tile and read state back through the
getters or by subscribing to board and elapsed-time updates.
"""
import logging
import random
import time
from enum import Enum
from functools import partial
from typing import Callable, List, Mapping, Optional

from .audio import EXPLOSION_BURST_DELAYS, EXPLOSION_CUE, AudioService, SilentAudio
from .board import Board, RandomSource
from .config import (
    BoardConfig,
    Difficulty,
    DifficultyLike,
    OverrideValue,
    parse_difficulty,
    resolve_config,
)
from .reveal import RevealResult, chord_seeds, commit, expose_mines, flood_fill
from .tile import Tile, TileView
from .timer import Cancellable, GameTimer, Scheduler, ThreadingScheduler

logger = logging.getLogger(__name__)

BoardListener = Callable[[List[List[TileView]]], None]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    START = "start"
    PLAYING = "playing"
    WIN = "win"
    LOSE = "lose"


# ============================================================================
# Game Controller
# ============================================================================

class GameController:
    """
    Minesweeper rules engine.

    A game starts in START with no mines on the board. The first reveal
    places the mines around the clicked tile and moves to PLAYING, which
    also starts the clock. Revealing a mine ends in LOSE, revealing the
    last safe tile ends in WIN; both are terminal until the next reset.

    Invalid coordinates and actions in the wrong state are ignored, never
    raised.
    """

    def __init__(
        self,
        difficulty: DifficultyLike = Difficulty.EASY,
        overrides: Optional[Mapping[DifficultyLike, OverrideValue]] = None,
        audio: Optional[AudioService] = None,
        scheduler: Optional[Scheduler] = None,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[RandomSource] = None,
    ) -> None:
        """
        Initialize the controller and set up an empty board.

        Args:
            difficulty: Difficulty tag (easy, medium or hard).
            overrides: Optional per-difficulty board configurations that
                replace the built-in presets.
            audio: Sound service for the loss cue (default: silent).
            scheduler: Runs the clock tick and delayed sound cues.
            clock: Monotonic time source in seconds.
            rng: Random source for mine placement.

        Raises:
            ConfigurationError: If the difficulty or its board
                configuration is invalid.
        """
        self._overrides = dict(overrides) if overrides else None
        self._difficulty = parse_difficulty(difficulty)
        self.audio = audio or SilentAudio()
        self.scheduler = scheduler or ThreadingScheduler()
        self.rng = rng or random.Random()
        self.timer = GameTimer(self.scheduler, clock)

        self._listeners: List[BoardListener] = []
        self._pending_cues: List[Cancellable] = []

        self.board: Board
        self._state = GameState.START
        self._flagged_count = 0
        self._safe_revealed = 0
        self.setup_game()

    # ========================================================================
    # Setup
    # ========================================================================

    def setup_game(self) -> None:
        """Discard the current game and start over with an empty board."""
        config = resolve_config(self._difficulty, self._overrides)
        self._cancel_cues()
        self.timer.reset()
        self.board = Board(config)
        self._state = GameState.START
        self._flagged_count = 0
        self._safe_revealed = 0
        logger.debug(
            "New %s game: %dx%d with %d mines",
            self._difficulty.value, config.width, config.height, config.num_mines,
        )
        self._notify()

    def reset_game(self) -> None:
        """Start a new game at the current difficulty."""
        self.setup_game()

    def set_difficulty(self, difficulty: DifficultyLike) -> None:
        """
        Switch difficulty and start a new game.

        Raises:
            ConfigurationError: If the difficulty is unknown or its board
                configuration is invalid. The current game is kept.
        """
        level = parse_difficulty(difficulty)
        resolve_config(level, self._overrides)
        self._difficulty = level
        self.setup_game()

    def fill_board(self, x: int, y: int) -> bool:
        """
        Place the mines for this game, keeping (x, y) and its neighbors safe.

        Moves START to PLAYING and starts the clock. Only the first call
        of a game has any effect.

        Returns:
            True if mines were placed.

        Raises:
            ConfigurationError: If the board has too few tiles outside the
                safe zone for its mines.
        """
        if self._state != GameState.START:
            return False
        if not self.board.is_valid_position(x, y):
            return False
        self.board.place_mines(x, y, self.rng)
        self._state = GameState.PLAYING
        self.timer.start()
        logger.debug("Mines placed around first click at (%d, %d)", x, y)
        return True

    def destroy(self) -> None:
        """Stop the clock, cancel pending sound cues and drop listeners."""
        self.timer.stop()
        self._cancel_cues()
        self._listeners.clear()

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal_tile(self, x: int, y: int) -> RevealResult:
        """
        Reveal the tile at (x, y).

        The first reveal of a game places the mines. A hidden tile is
        flood-filled from; a revealed tile is chorded when its flagged
        neighbors match its number.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            What was uncovered; empty when nothing changed.
        """
        if not self.board.is_valid_position(x, y):
            return RevealResult()
        if self._state == GameState.START:
            self.fill_board(x, y)
        if self._state != GameState.PLAYING:
            return RevealResult()

        chorded = False
        if self.board.get_tile(x, y).is_revealed:
            seeds = chord_seeds(self.board, x, y)
            if not seeds:
                return RevealResult()
            pending = flood_fill(self.board, seeds)
            chorded = True
        else:
            pending = flood_fill(self.board, [(x, y)])

        result = commit(self.board, pending)
        result.chorded = chorded
        if not result:
            return result

        self._apply(result)
        self._notify()
        return result

    def flag_tile(self, x: int, y: int) -> bool:
        """
        Toggle the flag on the tile at (x, y).

        Args:
            x: Column index.
            y: Row index.

        Returns:
            True if the flag was toggled, False otherwise.
        """
        if self._state != GameState.PLAYING:
            return False
        tile = self.board.get_tile(x, y)
        if tile is None or not tile.toggle_flag():
            return False

        self._flagged_count += 1 if tile.is_flagged else -1
        self._notify()
        return True

    def _apply(self, result: RevealResult) -> None:
        """Update counters and the state machine after a commit."""
        if result.hit_mine:
            self._flagged_count -= sum(
                1 for _, tile in self.board.tiles()
                if tile.is_mine and tile.is_flagged
            )
            expose_mines(self.board)
            self._end_game(GameState.LOSE)
            self._play_loss_cues()
            return

        self._safe_revealed += result.safe_count
        if self._safe_revealed >= self.board.config.safe_tiles:
            self._end_game(GameState.WIN)

    def _end_game(self, state: GameState) -> None:
        self.timer.stop()
        self._state = state
        logger.debug(
            "Game over (%s) after %.1f seconds", state.value, self.timer.elapsed
        )

    # ========================================================================
    # Audio
    # ========================================================================

    def _play_loss_cues(self) -> None:
        """One explosion now, then a short delayed burst."""
        self._play_cue(EXPLOSION_CUE)
        for delay in EXPLOSION_BURST_DELAYS:
            try:
                handle = self.scheduler.call_later(
                    delay, partial(self._play_cue, EXPLOSION_CUE)
                )
            except Exception:
                logger.exception("Could not schedule sound cue %r", EXPLOSION_CUE)
                return
            self._pending_cues.append(handle)

    def _play_cue(self, cue: str) -> None:
        try:
            self.audio.play(cue)
        except Exception:
            logger.exception("Audio service failed to play %r", cue)

    def _cancel_cues(self) -> None:
        for handle in self._pending_cues:
            handle.cancel()
        self._pending_cues.clear()

    # ========================================================================
    # Observers
    # ========================================================================

    def subscribe(self, listener: BoardListener) -> Callable[[], None]:
        """
        Register a listener called with a board snapshot after every change.

        Returns:
            Callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def subscribe_elapsed(
        self, listener: Callable[[float], None]
    ) -> Callable[[], None]:
        """Register a listener for elapsed-time updates from the clock."""
        return self.timer.subscribe(listener)

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.board.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Board listener %r failed", listener)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def is_over(self) -> bool:
        """Check if the game has been won or lost."""
        return self._state in (GameState.WIN, GameState.LOSE)

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def config(self) -> BoardConfig:
        return self.board.config

    @property
    def width(self) -> int:
        return self.board.width

    @property
    def height(self) -> int:
        return self.board.height

    @property
    def total_mines(self) -> int:
        return self.board.config.num_mines

    @property
    def flagged_count(self) -> int:
        """Flags currently on the board."""
        return self._flagged_count

    @property
    def flags_remaining(self) -> int:
        """Mines minus flags placed; negative when over-flagged."""
        return self.total_mines - self._flagged_count

    @property
    def revealed_count(self) -> int:
        """Safe tiles revealed so far."""
        return self._safe_revealed

    @property
    def score(self) -> int:
        """Score placeholder; games are only timed."""
        return 0

    @property
    def elapsed(self) -> float:
        """Seconds on the clock: 0 before the first click, frozen after."""
        return self.timer.elapsed

    @property
    def tiles(self) -> List[List[TileView]]:
        """Row-major snapshot of the board."""
        return self.board.snapshot()

    def get_tile(self, x: int, y: int) -> Optional[Tile]:
        """Get tile at position, or None if out of bounds."""
        return self.board.get_tile(x, y)
