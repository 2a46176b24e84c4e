"""Apple placement on the free cells of the torus."""

from __future__ import annotations

import logging
import random
from typing import Collection

from .errors import GridExhaustedError
from .geometry import Cell, grid_cells

logger = logging.getLogger(__name__)


class ApplePlacer:
    """Picks apple cells uniformly among the cells the snake leaves free."""

    def __init__(self, extent: int, rng: random.Random | None = None) -> None:
        self.extent = extent
        self.rng = rng or random.Random()

    def free_cells(self, occupied: Collection[Cell]) -> list[Cell]:
        return [cell for cell in grid_cells(self.extent) if cell not in occupied]

    def place(self, occupied: Collection[Cell]) -> Cell:
        """Return a random unoccupied cell.

        A full board is treated as unreachable: the snake would have to cover
        all 169 cells of the default grid first.
        """
        options = self.free_cells(occupied)
        if not options:
            raise GridExhaustedError(
                f"no free cell left on the {self.extent}x{self.extent} grid"
            )
        cell = self.rng.choice(options)
        logger.debug("Apple placed at %s (%d free cells)", cell, len(options))
        return cell
