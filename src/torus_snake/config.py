"""Centralized configuration, paths, and palette definitions for Torus Snake."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

import pygame


def _default_data_dir() -> Path:
    """Return a platform-appropriate user data directory for saves/logs."""

    if sys.platform.startswith("win"):
        base = Path(os.getenv("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    return base / "torus-snake"


DATA_DIR = Path(os.getenv("TORUS_SNAKE_DATA_DIR") or _default_data_dir())
SAVES_DIR = DATA_DIR / "saves"
LOG_FILE = DATA_DIR / "logs" / "snake.log"
HIGHSCORE_FILE = Path(
    os.getenv("TORUS_SNAKE_HIGHSCORE_FILE") or SAVES_DIR / "highscore.bin"
)


def parse_log_level(name: str | None) -> int:
    """Map a level name such as "debug" to its number; unknown names give INFO."""
    level = logging.getLevelName((name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


LOG_LEVEL: int = parse_log_level(os.getenv("TORUS_SNAKE_LOG_LEVEL"))
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

GRID_EXTENT: int = 13  # 13 x 13 torus, cells -6..6 on each axis
CELL_SIZE: float = 50.0  # world units per cell
START_LENGTH: int = 3
TICK_SECONDS: float = 0.1

WINDOW_TITLE: str = "Snake"
WINDOW_SIZE: int = int(GRID_EXTENT * CELL_SIZE)
FPS: int = 120
FONT_NAME: str = "consolas"
FONT_SIZE: int = 22


@dataclass(frozen=True, slots=True)
class SnakeSettings:
    """Simulation parameters bundled for the context that owns the game state."""

    extent: int = GRID_EXTENT
    cell_size: float = CELL_SIZE
    start_length: int = START_LENGTH
    tick_seconds: float = TICK_SECONDS

    def __post_init__(self) -> None:
        if self.extent < 4:
            raise ValueError("grid extent must be at least 4 cells")
        if self.start_length < 3 or self.start_length > self.extent:
            raise ValueError("start length must be between 3 and the grid extent")
        if self.tick_seconds <= 0:
            raise ValueError("tick period must be positive")


# Keys are polled every frame; holding both keys of an axis cancels out.
INTENT_KEYS: dict[str, tuple[int, ...]] = {
    "up": (pygame.K_UP, pygame.K_w),
    "down": (pygame.K_DOWN, pygame.K_s),
    "left": (pygame.K_LEFT, pygame.K_a),
    "right": (pygame.K_RIGHT, pygame.K_d),
}
PAUSE_KEYS = (pygame.K_SPACE, pygame.K_p)
QUIT_KEYS = (pygame.K_ESCAPE,)

PALETTE = {
    "bg": pygame.Color(18, 22, 18),
    "grid": pygame.Color(32, 40, 32),
    "snake": pygame.Color(77, 128, 77),  # srgb(0.3, 0.5, 0.3)
    "snake_edge": pygame.Color(52, 92, 52),
    "eye": pygame.Color(240, 240, 230),
    "pupil": pygame.Color(20, 20, 20),
    "apple": pygame.Color(214, 48, 49),
    "apple_leaf": pygame.Color(90, 190, 90),
    "text": pygame.Color(226, 235, 226),
    "hud": pygame.Color(10, 10, 10, 150),
}
