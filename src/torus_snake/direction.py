"""Directions, per-frame input intent, and the turn legality rules."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Direction(enum.Enum):
    """Unit step on the grid; y grows upward like the world space."""

    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def offset(self) -> tuple[int, int]:
        return self.value

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @property
    def opposite(self) -> Direction:
        return OPPOSITE[self]


OPPOSITE: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

HEAD_ROTATION: dict[Direction, float] = {
    Direction.RIGHT: 0.0,
    Direction.UP: 90.0,
    Direction.LEFT: 180.0,
    Direction.DOWN: -90.0,
}

# (last, new) pairs that bend the body clockwise when seen from above.
CLOCKWISE_TURNS = frozenset(
    {
        (Direction.RIGHT, Direction.DOWN),
        (Direction.DOWN, Direction.LEFT),
        (Direction.LEFT, Direction.UP),
        (Direction.UP, Direction.RIGHT),
    }
)


class Turn(enum.Enum):
    """How the segment behind the head bends; only the renderer cares."""

    STRAIGHT = "straight"
    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter_clockwise"


@dataclass(frozen=True, slots=True)
class Intent:
    """Raw four-way impulses sampled from whatever controls the host polls."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    @classmethod
    def from_direction(cls, direction: Direction | None) -> Intent:
        if direction is None:
            return cls()
        return cls(**{direction.name.lower(): True})

    def vertical(self) -> Direction | None:
        """The single vertical impulse, or None when absent or cancelled."""
        if self.up == self.down:
            return None
        return Direction.UP if self.up else Direction.DOWN

    def horizontal(self) -> Direction | None:
        if self.left == self.right:
            return None
        return Direction.LEFT if self.left else Direction.RIGHT


@dataclass(slots=True)
class DirectionState:
    """Buffered heading: ``current`` follows input, ``last`` follows ticks."""

    current: Direction = Direction.RIGHT
    last: Direction = Direction.RIGHT


def resolve(intent: Intent, last: Direction, current: Direction) -> Direction:
    """Return the next committed direction for this frame's ``intent``.

    Only an impulse perpendicular to ``last`` can change the heading, so the
    result is never the reverse of the direction applied on the last tick.
    """
    if last.is_horizontal:
        candidate = intent.vertical()
    else:
        candidate = intent.horizontal()
    if candidate is None:
        return current
    return candidate


def classify_turn(last: Direction, direction: Direction) -> Turn:
    if last == direction:
        return Turn.STRAIGHT
    if (last, direction) in CLOCKWISE_TURNS:
        return Turn.CLOCKWISE
    return Turn.COUNTER_CLOCKWISE


def head_rotation(direction: Direction) -> float:
    """Degrees to rotate a right-facing head sprite."""
    return HEAD_ROTATION[direction]


def rotation_towards(delta: tuple[int, int]) -> float:
    """Rotation of a segment pointing along ``delta`` (a single grid step)."""
    dx, dy = delta
    if dx == 0:
        return 90.0 if dy > 0 else -90.0
    return 0.0 if dx > 0 else 180.0
