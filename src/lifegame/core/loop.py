"""Timed driver that steps a GameOfLife at a fixed interval."""

import logging
import threading
from enum import Enum
from typing import Callable, Optional

from .config import DEFAULT_INTERVAL
from .game import GameOfLife

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """Run state of a LifeLoop."""

    STOPPED = "stopped"
    RUNNING = "running"


class LifeLoop:
    """Continuously advance a game on a background thread.

    The worker waits ``interval`` seconds between steps. Each run owns its
    own stop event: stop() sets it, which abandons the pending wait, and
    the worker re-checks it while holding the game lock right before
    stepping, so no step begins once stop() has returned. A step already
    underway when stop() is called runs to completion.
    """

    def __init__(
        self,
        game: GameOfLife,
        interval: float = DEFAULT_INTERVAL,
        on_step: Optional[Callable[[GameOfLife], None]] = None,
    ) -> None:
        """Initialize the loop in the stopped state.

        Args:
            game: Engine to drive
            interval: Seconds to wait before each step
            on_step: Optional callback invoked with the game after each step

        Raises:
            ValueError: If interval is negative
        """
        if interval < 0:
            raise ValueError(f"Interval must be non-negative, got {interval}")

        self.game = game
        self.interval = interval
        self.on_step = on_step
        self._state_lock = threading.Lock()
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def state(self) -> LoopState:
        """Current run state."""
        with self._state_lock:
            if self._stop_event is None or self._stop_event.is_set():
                return LoopState.STOPPED
            return LoopState.RUNNING

    @property
    def is_running(self) -> bool:
        return self.state is LoopState.RUNNING

    def start(self) -> None:
        """Start stepping the game. Does nothing if already running."""
        with self._state_lock:
            if self._stop_event is not None and not self._stop_event.is_set():
                return

            stop_event = threading.Event()
            self._stop_event = stop_event
            self._thread = threading.Thread(
                target=self._run, args=(stop_event,), name="lifegame-loop", daemon=True
            )
            self._thread.start()

        logger.info(f"Loop started (interval {self.interval}s)")

    def stop(self) -> None:
        """Stop stepping the game. Safe to call from any thread."""
        with self._state_lock:
            if self._stop_event is None or self._stop_event.is_set():
                return
            self._stop_event.set()

        logger.info(f"Loop stopped at generation {self.game.generation}")

    def toggle(self) -> LoopState:
        """Start if stopped, stop if running; returns the new state."""
        if self.is_running:
            self.stop()
        else:
            self.start()
        return self.state

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker thread to exit.

        Returns:
            True if no worker is alive afterwards
        """
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _run(self, stop_event: threading.Event) -> None:
        """Worker body: wait, then step, until stop_event is set."""
        while not stop_event.wait(self.interval):
            try:
                with self.game.lock:
                    if stop_event.is_set():
                        break
                    self.game.step()

                if self.on_step is not None:
                    self.on_step(self.game)
            except Exception:
                logger.exception("Loop aborted by an error while stepping")
                stop_event.set()
