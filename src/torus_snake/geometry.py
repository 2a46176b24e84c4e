"""Pure helpers mapping torus cells to world positions and back."""

from __future__ import annotations

from typing import Iterator

Cell = tuple[int, int]
WorldPos = tuple[float, float]


def axis_range(extent: int) -> range:
    """Return the signed coordinates of one axis, centered on the origin."""
    half = extent // 2
    return range(-half, extent - half)


def wrap_axis(value: int, extent: int) -> int:
    """Fold ``value`` back into ``axis_range(extent)``."""
    half = extent // 2
    return (value + half) % extent - half


def wrap_cell(cell: Cell, extent: int) -> Cell:
    return wrap_axis(cell[0], extent), wrap_axis(cell[1], extent)


def offset_cell(cell: Cell, offset: Cell, extent: int) -> Cell:
    """Step ``cell`` by ``offset`` and wrap the result onto the torus."""
    return wrap_cell((cell[0] + offset[0], cell[1] + offset[1]), extent)


def toroidal_delta(start: Cell, end: Cell, extent: int) -> Cell:
    """Shortest signed per-axis step from ``start`` to ``end``.

    Neighbours across the wrap seam (x=6 and x=-6 on a 13 wide grid) come
    back as a single step instead of a jump across the whole board.
    """
    return (
        wrap_axis(end[0] - start[0], extent),
        wrap_axis(end[1] - start[1], extent),
    )


def cell_to_world(cell: Cell, cell_size: float) -> WorldPos:
    """World position of the cell center; the origin cell sits at (0, 0)."""
    return float(cell[0] * cell_size), float(cell[1] * cell_size)


def world_to_cell(
    pos: WorldPos, cell_size: float, extent: int | None = None
) -> Cell:
    """Snap a world position to its cell, wrapping when ``extent`` is given."""
    cell = (round(pos[0] / cell_size), round(pos[1] / cell_size))
    if extent is not None:
        return wrap_cell(cell, extent)
    return cell


def grid_cells(extent: int) -> Iterator[Cell]:
    """Yield every cell of the torus, row by row."""
    axis = axis_range(extent)
    for y in axis:
        for x in axis:
            yield x, y
