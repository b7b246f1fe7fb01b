"""
Game clock and callback scheduling.

The timer measures elapsed seconds on a monotonic clock and publishes the
value once per second while a game is running. Delayed work goes through
a Scheduler so tests and headless environments can control when it fires.
"""
import logging
import threading
import time
from typing import Callable, List, Optional, Protocol

logger = logging.getLogger(__name__)


# ============================================================================
# Scheduling
# ============================================================================

class Cancellable(Protocol):
    """Handle for a scheduled callback."""

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Runs a callback once after a delay in seconds."""

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> Cancellable:
        ...


class ThreadingScheduler:
    """Scheduler backed by daemon ``threading.Timer`` threads."""

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class _NullHandle:
    def cancel(self) -> None:
        pass


class NullScheduler:
    """Scheduler that never runs anything, for headless use."""

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> Cancellable:
        return _NullHandle()


# ============================================================================
# Game Timer
# ============================================================================

TICK_INTERVAL = 1.0


class GameTimer:
    """
    Elapsed-seconds clock for one game.

    ``start`` and ``stop`` are idempotent. While running, ``elapsed`` is
    read from the clock on demand; after ``stop`` it stays frozen at the
    value measured when the game ended.
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        clock: Callable[[], float] = time.monotonic,
        interval: float = TICK_INTERVAL,
    ) -> None:
        """
        Initialize the timer.

        Args:
            scheduler: Runs the periodic tick (default: threads).
            clock: Monotonic time source in seconds.
            interval: Seconds between ticks.
        """
        self.scheduler = scheduler or ThreadingScheduler()
        self.clock = clock
        self.interval = interval
        self._started_at: Optional[float] = None
        self._frozen = 0.0
        self._tick_handle: Optional[Cancellable] = None
        self._listeners: List[Callable[[float], None]] = []
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed(self) -> float:
        """Seconds since start, or the frozen value when stopped."""
        started_at = self._started_at
        if started_at is None:
            return self._frozen
        return max(0.0, self.clock() - started_at)

    def subscribe(self, listener: Callable[[float], None]) -> Callable[[], None]:
        """
        Register a listener for periodic elapsed-time updates.

        Returns:
            Callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> None:
        """Start counting from zero. No-op while already running."""
        with self._lock:
            if self._started_at is not None:
                return
            self._started_at = self.clock()
            self._frozen = 0.0
            self._schedule_tick()

    def stop(self) -> None:
        """Freeze elapsed time and cancel the tick. No-op when stopped."""
        with self._lock:
            if self._started_at is None:
                return
            self._frozen = max(0.0, self.clock() - self._started_at)
            self._started_at = None
            self._cancel_tick()
        self._publish(self._frozen)

    def reset(self) -> None:
        """Stop without publishing and go back to zero."""
        with self._lock:
            self._started_at = None
            self._frozen = 0.0
            self._cancel_tick()

    def _schedule_tick(self) -> None:
        self._tick_handle = self.scheduler.call_later(self.interval, self._tick)

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _tick(self) -> None:
        with self._lock:
            if self._started_at is None:
                return
            self._schedule_tick()
        self._publish(self.elapsed)

    def _publish(self, elapsed: float) -> None:
        for listener in list(self._listeners):
            try:
                listener(elapsed)
            except Exception:
                logger.exception("Elapsed-time listener %r failed", listener)
