"""Exceptions raised by the Torus Snake simulation core.

All of these signal conditions the game cannot recover from: a corrupt save
file or a broken internal invariant. The host logs them and exits.
"""

from __future__ import annotations


class SnakeError(Exception):
    """Base class for every error raised by the simulation core."""


class ChainInvariantError(SnakeError):
    """The body chain lost its shape (too short, broken links, overlap)."""


class GridExhaustedError(SnakeError):
    """No free cell is left for an apple."""


class HighScoreDecodeError(SnakeError, ValueError):
    """The persisted high score file does not hold a valid encoding."""
