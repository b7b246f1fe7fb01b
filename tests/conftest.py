"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import (
    AudioService,
    Board,
    BoardConfig,
    GameController,
    Tile,
)


# ============================================================================
# Test Doubles
# ============================================================================

class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ManualHandle:
    """Cancellable handle recorded by ManualScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler that only runs callbacks when the test advances it."""

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.handles: List[ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.clock() + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> List[ManualHandle]:
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due callbacks in order."""
        target = self.clock() + seconds
        while True:
            due = [h for h in self.pending if h.due <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.due)
            handle.cancelled = True
            self.clock.now = max(self.clock.now, handle.due)
            handle.callback()
        self.clock.now = target


class ScriptedRandom:
    """Random source that replays x, y pairs, cycling when exhausted."""

    def __init__(self, positions: Iterable[Tuple[int, int]]) -> None:
        self._values = [v for position in positions for v in position]
        self._index = 0

    def randrange(self, stop: int) -> int:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value % stop


class RecordingAudio(AudioService):
    """Audio service that remembers what it was asked to play."""

    def __init__(self) -> None:
        self.played: List[str] = []

    def play(self, cue: str) -> None:
        self.played.append(cue)


# ============================================================================
# Helper Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock: FakeClock) -> ManualScheduler:
    return ManualScheduler(clock)


@pytest.fixture
def audio() -> RecordingAudio:
    return RecordingAudio()


@pytest.fixture
def make_controller(
    clock: FakeClock, scheduler: ManualScheduler, audio: RecordingAudio
) -> Callable[..., GameController]:
    """Factory for controllers on a custom board with scripted mines."""
    created = []

    def factory(
        width: int = 9,
        height: int = 9,
        mines: Iterable[Tuple[int, int]] = (),
        num_mines: int = None,
        audio_service: AudioService = None,
    ) -> GameController:
        mines = list(mines)
        if num_mines is None:
            num_mines = len(mines)
        config = BoardConfig(width=width, height=height, num_mines=num_mines)
        controller = GameController(
            "easy",
            overrides={"easy": config},
            audio=audio_service or audio,
            scheduler=scheduler,
            clock=clock,
            rng=ScriptedRandom(mines) if mines else None,
        )
        created.append(controller)
        return controller

    yield factory

    for controller in created:
        controller.destroy()


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board()


@pytest.fixture
def make_board() -> Callable[..., Board]:
    """Factory for boards with mines at chosen positions."""

    def factory(
        width: int,
        height: int,
        mines: Iterable[Tuple[int, int]],
        safe: Tuple[int, int],
    ) -> Board:
        mines = list(mines)
        board = Board(BoardConfig(width, height, len(mines)))
        board.place_mines(safe[0], safe[1], ScriptedRandom(mines))
        return board

    return factory


@pytest.fixture
def easy_game(
    clock: FakeClock, scheduler: ManualScheduler, audio: RecordingAudio
) -> GameController:
    """Easy controller with a fake clock and manual scheduler."""
    controller = GameController(
        "easy", audio=audio, scheduler=scheduler, clock=clock
    )
    yield controller
    controller.destroy()


# ============================================================================
# Tile Fixtures
# ============================================================================

@pytest.fixture
def hidden_tile() -> Tile:
    """Create a hidden tile."""
    return Tile()


@pytest.fixture
def mine_tile() -> Tile:
    """Create a tile containing a mine."""
    return Tile(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
