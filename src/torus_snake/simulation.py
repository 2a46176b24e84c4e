"""The per-frame pipeline that owns all game state.

One :class:`Simulation` is created at startup and handed frame after frame
to the host. ``frame`` runs the ordered pipeline (pause gate, movement
clock, direction resolution, advance, eat check, grow or shrink) and
returns the events that fired, in order, for sound and HUD updates.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from .apple import ApplePlacer
from .chain import BodyChain, SegmentView
from .clock import GameState, MovementScheduler, PauseGate
from .config import SnakeSettings
from .direction import Direction, Intent, resolve
from .geometry import Cell, WorldPos, cell_to_world
from .scoring import ScoreKeeper, ScoreStore, is_eaten

logger = logging.getLogger(__name__)

SPAWN_CELL: Cell = (0, 0)


@dataclass(frozen=True, slots=True)
class AppleEaten:
    cell: Cell


@dataclass(frozen=True, slots=True)
class ScoreChanged:
    score: int


@dataclass(frozen=True, slots=True)
class HighScoreChanged:
    high_score: int


@dataclass(frozen=True, slots=True)
class SessionRestarted:
    final_score: int


@dataclass(frozen=True, slots=True)
class PauseToggled:
    state: GameState


Event = AppleEaten | ScoreChanged | HighScoreChanged | SessionRestarted | PauseToggled


class Simulation:
    """Explicit context for one running game."""

    def __init__(
        self,
        store: ScoreStore,
        settings: SnakeSettings | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or SnakeSettings()
        self.gate = PauseGate()
        self.scheduler = MovementScheduler(self.settings.tick_seconds)
        self.placer = ApplePlacer(self.settings.extent, rng)
        self.scores = ScoreKeeper(store)
        self.chain = self._spawn_chain()
        self.apple: Cell = self.placer.place(self.chain.cells())
        self.ticks = 0
        logger.info(
            "New game on a %dx%d torus, high score %d",
            self.settings.extent,
            self.settings.extent,
            self.scores.high_score,
        )

    def _spawn_chain(self) -> BodyChain:
        return BodyChain.spawn(
            SPAWN_CELL,
            self.settings.extent,
            length=self.settings.start_length,
            direction=Direction.RIGHT,
        )

    # --- Queries -------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self.gate.state

    @property
    def score(self) -> int:
        return self.scores.score

    @property
    def high_score(self) -> int:
        return self.scores.high_score

    @property
    def direction(self) -> Direction:
        return self.chain.heading.current

    def segments(self) -> list[SegmentView]:
        return self.chain.segments(self.settings.cell_size)

    def to_world(self, cell: Cell) -> WorldPos:
        return cell_to_world(cell, self.settings.cell_size)

    @property
    def head_position(self) -> WorldPos:
        return self.to_world(self.chain.head_cell)

    @property
    def apple_position(self) -> WorldPos:
        return self.to_world(self.apple)

    # --- Pipeline ------------------------------------------------------

    def toggle_pause(self) -> GameState:
        return self.gate.toggle()

    def steer(self, intent: Intent) -> Direction:
        """Fold this frame's input into the buffered heading."""
        heading = self.chain.heading
        heading.current = resolve(intent, heading.last, heading.current)
        return heading.current

    def frame(
        self, dt: float, intent: Intent | None = None, *, toggle_pause: bool = False
    ) -> list[Event]:
        """Run one host frame and return the events it produced."""
        events: list[Event] = []
        if toggle_pause:
            events.append(PauseToggled(self.toggle_pause()))
        if not self.gate.is_running:
            return events
        if intent is not None:
            self.steer(intent)
        if self.scheduler.advance(dt):
            events.extend(self.tick())
        return events

    def tick(self) -> list[Event]:
        """Advance the snake one cell and settle eating or shrinking."""
        events: list[Event] = []
        result = self.chain.advance()
        self.ticks += 1
        if is_eaten(result.new_head, self.apple):
            eaten = self.apple
            self.chain.grow()
            self.apple = self.placer.place(self.chain.cells())
            events.append(AppleEaten(eaten))
            # Saving may raise; the chain and apple are already consistent.
            update = self.scores.on_eat()
            events.append(ScoreChanged(update.score))
            if update.new_high:
                events.append(HighScoreChanged(update.high_score))
        else:
            self.chain.shrink_tail()
        if self.chain.head_collides():
            events.append(self.restart())
        return events

    def restart(self) -> SessionRestarted:
        """Begin a fresh session after the head ran into the body."""
        final = self.scores.reset_session()
        logger.info(
            "Snake bit itself after %d ticks, final score %d", self.ticks, final
        )
        self.chain = self._spawn_chain()
        self.apple = self.placer.place(self.chain.cells())
        self.scheduler.reset()
        self.ticks = 0
        return SessionRestarted(final)
