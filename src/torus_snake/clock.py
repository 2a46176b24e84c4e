"""Fixed-step movement clock and the pause gate in front of it."""

from __future__ import annotations

import enum
import logging

logger = logging.getLogger(__name__)


class GameState(enum.Enum):
    RUNNING = "running"
    PAUSED = "paused"


class PauseGate:
    """Two-state machine toggled by a single input edge."""

    def __init__(self, state: GameState = GameState.RUNNING) -> None:
        self.state = state

    @property
    def is_running(self) -> bool:
        return self.state is GameState.RUNNING

    def toggle(self) -> GameState:
        """Flip between running and paused and return the new state."""
        if self.state is GameState.RUNNING:
            self.state = GameState.PAUSED
        else:
            self.state = GameState.RUNNING
        logger.debug("Game %s", self.state.value)
        return self.state


class MovementScheduler:
    """Repeating countdown that fires at most one tick per frame.

    Elapsed frame time accumulates until it reaches ``period``; then one tick
    fires and only the remainder past a whole number of periods is kept, so
    a long frame never queues up catch-up ticks. The caller simply stops
    calling :meth:`advance` while paused, which freezes the countdown.
    """

    def __init__(self, period: float) -> None:
        if period <= 0:
            raise ValueError("tick period must be positive")
        self.period = period
        self._elapsed = 0.0

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def remaining(self) -> float:
        """Seconds left until the next tick."""
        return self.period - self._elapsed

    def advance(self, dt: float) -> bool:
        """Accumulate ``dt`` seconds; True when a tick fires this frame."""
        if dt < 0:
            raise ValueError(f"frame time cannot be negative: {dt}")
        self._elapsed += dt
        if self._elapsed < self.period:
            return False
        self._elapsed %= self.period
        return True

    def reset(self) -> None:
        self._elapsed = 0.0
