"""Pygame host for Torus Snake: window, input polling, sprites and sound.

The host owns nothing of the game rules. Each frame it polls the keyboard
into an :class:`Intent`, hands it to :class:`Simulation`, reacts to the
returned events, and draws the queryable state.
"""

from __future__ import annotations

import logging

import pygame

from .audio import AudioEngine
from .chain import Role, SegmentView
from .config import (
    CELL_SIZE,
    FONT_NAME,
    FONT_SIZE,
    FPS,
    GRID_EXTENT,
    HIGHSCORE_FILE,
    INTENT_KEYS,
    PALETTE,
    PAUSE_KEYS,
    QUIT_KEYS,
    WINDOW_SIZE,
    WINDOW_TITLE,
)
from .direction import Intent, Turn
from .geometry import Cell
from .persistence import HighScoreStore
from .simulation import (
    AppleEaten,
    Event,
    HighScoreChanged,
    PauseToggled,
    SessionRestarted,
    Simulation,
)

logger = logging.getLogger(__name__)

BLOCK = int(CELL_SIZE)


def intent_from_keys(pressed: pygame.key.ScancodeWrapper) -> Intent:
    """Collapse the polled keyboard state into four directional impulses."""
    return Intent(
        **{
            name: any(pressed[key] for key in keys)
            for name, keys in INTENT_KEYS.items()
        }
    )


def cell_rect(cell: Cell) -> pygame.Rect:
    """Screen rect of a cell; world y grows upward, screen y downward."""
    center = WINDOW_SIZE // 2
    left = center + cell[0] * BLOCK - BLOCK // 2
    top = center - cell[1] * BLOCK - BLOCK // 2
    return pygame.Rect(left, top, BLOCK, BLOCK)


class SnakeGame:
    """Connects the simulation to a pygame window and the mixer."""

    def __init__(self, simulation: Simulation | None = None) -> None:
        pygame.init()
        self.window = pygame.display.set_mode(
            (WINDOW_SIZE, WINDOW_SIZE), pygame.DOUBLEBUF
        )
        pygame.display.set_caption(WINDOW_TITLE)
        self.font = pygame.font.SysFont(FONT_NAME, FONT_SIZE)
        self.audio = AudioEngine()
        self.sim = simulation or Simulation(HighScoreStore(HIGHSCORE_FILE))

        self.background = self._build_background()
        self.sprites = self._build_sprites()

    # --- Sprite building -----------------------------------------------

    def _build_background(self) -> pygame.Surface:
        surface = pygame.Surface((WINDOW_SIZE, WINDOW_SIZE))
        surface.fill(PALETTE["bg"])
        for i in range(0, WINDOW_SIZE + 1, BLOCK):
            pygame.draw.line(surface, PALETTE["grid"], (i, 0), (i, WINDOW_SIZE), 1)
            pygame.draw.line(surface, PALETTE["grid"], (0, i), (WINDOW_SIZE, i), 1)
        return surface

    def _build_sprites(self) -> dict[str, pygame.Surface]:
        """Right-facing sprites; they are rotated per segment when drawn."""
        inset = BLOCK // 8
        mid = BLOCK // 2
        band = BLOCK - 2 * inset
        eye_x = BLOCK - BLOCK // 3
        color = PALETTE["snake"]
        edge = PALETTE["snake_edge"]

        def blank() -> pygame.Surface:
            return pygame.Surface((BLOCK, BLOCK), pygame.SRCALPHA)

        head = blank()
        pygame.draw.rect(
            head,
            color,
            pygame.Rect(0, inset, BLOCK - inset, band),
            border_radius=BLOCK // 3,
        )
        pygame.draw.rect(head, color, pygame.Rect(0, inset, mid, band))
        for eye_y in (BLOCK // 3, BLOCK - BLOCK // 3):
            pygame.draw.circle(head, PALETTE["eye"], (eye_x, eye_y), BLOCK // 9)
            pygame.draw.circle(
                head, PALETTE["pupil"], (eye_x + 2, eye_y), BLOCK // 18
            )

        body = blank()
        pygame.draw.rect(body, color, pygame.Rect(0, inset, BLOCK, band))
        pygame.draw.line(body, edge, (0, inset), (BLOCK, inset), 2)
        pygame.draw.line(
            body, edge, (0, BLOCK - inset - 1), (BLOCK, BLOCK - inset - 1), 2
        )

        # Corners exit to the right; clockwise ones enter from below.
        bend_cw = blank()
        reach = BLOCK - inset
        pygame.draw.rect(bend_cw, color, pygame.Rect(inset, inset, reach, band))
        pygame.draw.rect(bend_cw, color, pygame.Rect(inset, inset, band, reach))
        bend_ccw = pygame.transform.flip(bend_cw, False, True)

        tail = blank()
        pygame.draw.polygon(
            tail, color, [(0, mid), (BLOCK, inset), (BLOCK, BLOCK - inset)]
        )

        return {
            "head": head,
            "body": body,
            "bend_cw": bend_cw,
            "bend_ccw": bend_ccw,
            "tail": tail,
        }

    def _sprite_for(self, view: SegmentView) -> pygame.Surface:
        if view.role is Role.HEAD:
            base = self.sprites["head"]
        elif view.role is Role.TAIL:
            base = self.sprites["tail"]
        elif view.bend is Turn.CLOCKWISE:
            base = self.sprites["bend_cw"]
        elif view.bend is Turn.COUNTER_CLOCKWISE:
            base = self.sprites["bend_ccw"]
        else:
            base = self.sprites["body"]
        if view.rotation:
            return pygame.transform.rotate(base, view.rotation)
        return base

    # --- Input ---------------------------------------------------------

    def handle_events(self) -> tuple[bool, bool]:
        """Drain window events; returns (keep running, pause edge)."""
        toggle = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False, toggle
            if event.type == pygame.KEYDOWN:
                if event.key in QUIT_KEYS:
                    return False, toggle
                if event.key in PAUSE_KEYS:
                    toggle = not toggle
        return True, toggle

    def react(self, events: list[Event]) -> None:
        for event in events:
            if isinstance(event, AppleEaten):
                self.audio.play("crunch")
            elif isinstance(event, HighScoreChanged):
                self.audio.play("record")
            elif isinstance(event, SessionRestarted):
                self.audio.play("restart")
            elif isinstance(event, PauseToggled):
                self.audio.play("pause")

    # --- Draw ----------------------------------------------------------

    def _draw_apple(self) -> None:
        rect = cell_rect(self.sim.apple)
        radius = BLOCK // 2 - BLOCK // 8
        pygame.draw.circle(self.window, PALETTE["apple"], rect.center, radius)
        leaf = pygame.Rect(0, 0, BLOCK // 4, BLOCK // 6)
        leaf.midbottom = (rect.centerx + BLOCK // 8, rect.top + BLOCK // 6)
        pygame.draw.ellipse(self.window, PALETTE["apple_leaf"], leaf)

    def _draw_hud(self) -> None:
        text = f"SCORE {self.sim.score:04}   BEST {self.sim.high_score:04}"
        surf = self.font.render(text, True, PALETTE["text"])
        size = (surf.get_width() + 16, surf.get_height() + 10)
        hud = pygame.Surface(size, pygame.SRCALPHA)
        hud.fill(PALETTE["hud"])
        hud.blit(surf, (8, 5))
        self.window.blit(hud, (10, 10))

    def _draw_overlay(self, lines: list[str]) -> None:
        overlay = pygame.Surface((WINDOW_SIZE, WINDOW_SIZE), pygame.SRCALPHA)
        overlay.fill((5, 5, 15, 140))
        for idx, text in enumerate(lines):
            surf = self.font.render(text, True, PALETTE["text"])
            rect = surf.get_rect()
            rect.center = (
                WINDOW_SIZE // 2,
                WINDOW_SIZE // 2 + idx * (FONT_SIZE + 8),
            )
            overlay.blit(surf, rect)
        self.window.blit(overlay, (0, 0))

    def draw(self) -> None:
        self.window.blit(self.background, (0, 0))
        self._draw_apple()
        for view in self.sim.segments():
            sprite = self._sprite_for(view)
            center = cell_rect(view.cell).center
            self.window.blit(sprite, sprite.get_rect(center=center))
        self._draw_hud()
        if not self.sim.gate.is_running:
            self._draw_overlay(["Paused", "Press SPACE to resume"])

    # --- Main loop -----------------------------------------------------

    def start(self) -> None:
        """Run frames until the window closes: input, one sim step, render."""
        clock = pygame.time.Clock()
        running = True
        logger.info(
            "Starting %dx%d game loop at %d FPS", GRID_EXTENT, GRID_EXTENT, FPS
        )
        try:
            while running:
                dt = clock.tick(FPS) / 1000.0
                running, toggle = self.handle_events()
                intent = intent_from_keys(pygame.key.get_pressed())
                events = self.sim.frame(dt, intent, toggle_pause=toggle)
                self.react(events)
                self.draw()
                pygame.display.update()
        finally:
            pygame.quit()
            logger.info("Game loop stopped")
