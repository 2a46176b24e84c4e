"""The snake's body as an arena-backed chain of segments.

Segments live in a slab (a list of slots plus a free list) and point at the
segment closer to the head through ``next``. The chain tracks the head and
tail slots directly, so every per-tick operation is O(1):

* ``advance`` pushes a new head one cell ahead and demotes the old head to
  a body segment.
* ``shrink_tail`` frees the tail and promotes the segment it pointed to.
* ``grow`` keeps the tail where it is, which is all growing takes.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterator

from .direction import (
    Direction,
    DirectionState,
    Turn,
    classify_turn,
    head_rotation,
    rotation_towards,
)
from .errors import ChainInvariantError
from .geometry import (
    Cell,
    WorldPos,
    cell_to_world,
    offset_cell,
    toroidal_delta,
    wrap_cell,
)

logger = logging.getLogger(__name__)

MIN_LENGTH = 3


class Role(enum.Enum):
    HEAD = "head"
    BODY = "body"
    TAIL = "tail"


@dataclass(slots=True)
class Segment:
    role: Role
    cell: Cell
    next: int | None = None  # slot of the segment closer to the head
    bend: Turn = Turn.STRAIGHT


@dataclass(frozen=True, slots=True)
class AdvanceResult:
    new_head: Cell
    turned: Turn


@dataclass(frozen=True, slots=True)
class SegmentView:
    """Read-only snapshot of one segment for renderers."""

    role: Role
    cell: Cell
    world: WorldPos
    rotation: float
    bend: Turn


class BodyChain:
    """Owns every segment of one snake on a torus of ``extent`` cells."""

    def __init__(self, extent: int) -> None:
        self.extent = extent
        self.heading = DirectionState()
        self._slots: list[Segment | None] = []
        self._free: list[int] = []
        self._head: int | None = None
        self._tail: int | None = None
        self._length = 0

    @classmethod
    def spawn(
        cls,
        head: Cell,
        extent: int,
        *,
        length: int = MIN_LENGTH,
        direction: Direction = Direction.RIGHT,
    ) -> BodyChain:
        """Lay out a straight snake whose head at ``head`` faces ``direction``."""
        if length < MIN_LENGTH:
            raise ChainInvariantError(
                f"a snake needs {MIN_LENGTH} segments, got {length}"
            )
        if length > extent:
            raise ChainInvariantError(
                f"a {length} long snake does not fit in {extent} cells"
            )
        chain = cls(extent)
        chain.heading = DirectionState(current=direction, last=direction)
        back_x, back_y = direction.opposite.offset
        ahead: int | None = None
        # Build from the head backwards so each segment can point forward.
        for idx in range(length):
            if idx == 0:
                role = Role.HEAD
            elif idx == length - 1:
                role = Role.TAIL
            else:
                role = Role.BODY
            cell = wrap_cell((head[0] + back_x * idx, head[1] + back_y * idx), extent)
            slot = chain._allocate(Segment(role=role, cell=cell, next=ahead))
            if idx == 0:
                chain._head = slot
            ahead = slot
        chain._tail = ahead
        logger.debug(
            "Spawned %d segment snake at %s heading %s", length, head, direction.name
        )
        return chain

    # --- Slab bookkeeping ----------------------------------------------

    def _allocate(self, segment: Segment) -> int:
        if self._free:
            slot = self._free.pop()
            self._slots[slot] = segment
        else:
            slot = len(self._slots)
            self._slots.append(segment)
        self._length += 1
        return slot

    def _release(self, slot: int) -> None:
        self._slots[slot] = None
        self._free.append(slot)
        self._length -= 1

    def _segment(self, slot: int | None) -> Segment:
        segment = self._slots[slot] if slot is not None else None
        if segment is None:
            raise ChainInvariantError(f"slot {slot} holds no segment")
        return segment

    # --- Queries -------------------------------------------------------

    def __len__(self) -> int:
        return self._length

    @property
    def length(self) -> int:
        return self._length

    @property
    def head_cell(self) -> Cell:
        return self._segment(self._head).cell

    @property
    def tail_cell(self) -> Cell:
        return self._segment(self._tail).cell

    def cells(self) -> set[Cell]:
        return {segment.cell for segment in self._iter_from_tail()}

    def _iter_from_tail(self) -> Iterator[Segment]:
        slot = self._tail
        hops = 0
        while slot is not None:
            segment = self._segment(slot)
            yield segment
            slot = segment.next
            hops += 1
            if hops > self._length:
                raise ChainInvariantError("next links form a cycle")

    def segments(self, cell_size: float = 1.0) -> list[SegmentView]:
        """Head-first views with the world position and rotation of each sprite."""
        views: list[SegmentView] = []
        for segment in self._iter_from_tail():
            if segment.role is Role.HEAD:
                rotation = head_rotation(self.heading.last)
            else:
                rotation = self._rotation_to_next(segment)
            views.append(
                SegmentView(
                    segment.role,
                    segment.cell,
                    cell_to_world(segment.cell, cell_size),
                    rotation,
                    segment.bend,
                )
            )
        views.reverse()
        return views

    def head_rotation(self) -> float:
        return head_rotation(self.heading.last)

    def tail_rotation(self) -> float:
        """Rotation pointing from the tail towards the segment ahead of it."""
        return self._rotation_to_next(self._segment(self._tail))

    def _rotation_to_next(self, segment: Segment) -> float:
        ahead = self._segment(segment.next)
        return rotation_towards(toroidal_delta(segment.cell, ahead.cell, self.extent))

    # --- Movement ------------------------------------------------------

    def advance(self, direction: Direction | None = None) -> AdvanceResult:
        """Move the head one cell; the caller decides between grow and shrink."""
        if direction is None:
            direction = self.heading.current
        old_slot = self._head
        old_head = self._segment(old_slot)
        new_cell = offset_cell(old_head.cell, direction.offset, self.extent)

        new_slot = self._allocate(Segment(role=Role.HEAD, cell=new_cell))
        turned = classify_turn(self.heading.last, direction)
        old_head.role = Role.BODY
        old_head.next = new_slot
        old_head.bend = turned
        self._head = new_slot

        self.heading.last = direction
        return AdvanceResult(new_head=new_cell, turned=turned)

    def grow(self) -> int:
        """Keep the tail in place for this tick; returns the new length."""
        return self._length

    def shrink_tail(self) -> Cell:
        """Drop the tail segment and return the cell it freed."""
        tail = self._segment(self._tail)
        if tail.next is None:
            raise ChainInvariantError("tail has no segment ahead of it")
        if self._length <= MIN_LENGTH:
            raise ChainInvariantError(
                f"cannot shrink a {self._length} segment snake below {MIN_LENGTH}"
            )
        freed = tail.cell
        new_tail_slot = tail.next
        self._release(self._tail)
        new_tail = self._segment(new_tail_slot)
        new_tail.role = Role.TAIL
        new_tail.bend = Turn.STRAIGHT
        self._tail = new_tail_slot
        return freed

    def head_collides(self) -> bool:
        """True when the head shares its cell with any other segment."""
        head_cell = self.head_cell
        return any(
            segment.cell == head_cell
            for segment in self._iter_from_tail()
            if segment.role is not Role.HEAD
        )

    def validate(self) -> None:
        """Raise ChainInvariantError unless every chain invariant holds."""
        if self._length < MIN_LENGTH:
            raise ChainInvariantError(f"chain is {self._length} segments long")
        segments = list(self._iter_from_tail())
        if len(segments) != self._length:
            raise ChainInvariantError(
                f"tail reaches head in {len(segments) - 1} hops, "
                f"expected {self._length - 1}"
            )
        roles = [segment.role for segment in segments]
        if roles[0] is not Role.TAIL or roles[-1] is not Role.HEAD:
            raise ChainInvariantError("chain must run from a tail to a head")
        if any(role is not Role.BODY for role in roles[1:-1]):
            raise ChainInvariantError("inner segments must all be body segments")
        if len({segment.cell for segment in segments}) != self._length:
            raise ChainInvariantError("two segments share a cell")
        if self.heading.current == self.heading.last.opposite:
            raise ChainInvariantError("heading reverses the last applied direction")
