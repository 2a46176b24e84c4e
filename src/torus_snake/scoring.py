"""Eat detection plus the session score and persisted high score."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from .geometry import Cell

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    def load(self) -> int: ...

    def save(self, value: int) -> None: ...


@dataclass(frozen=True, slots=True)
class ScoreUpdate:
    score: int
    high_score: int
    new_high: bool


def is_eaten(head: Cell, apple: Cell | None) -> bool:
    """True when the head has just moved onto the apple."""
    return apple is not None and head == apple


class ScoreKeeper:
    """Counts apples for one session and keeps the stored best in sync."""

    def __init__(self, store: ScoreStore, high_score: int | None = None) -> None:
        self.store = store
        self.score = 0
        self.high_score = store.load() if high_score is None else high_score

    def on_eat(self) -> ScoreUpdate:
        """Count one apple; save synchronously when the record falls."""
        self.score += 1
        if self.score <= self.high_score:
            return ScoreUpdate(self.score, self.high_score, new_high=False)
        self.high_score = max(self.high_score, self.score)
        logger.info("New high score %d", self.high_score)
        self.store.save(self.high_score)
        return ScoreUpdate(self.score, self.high_score, new_high=True)

    def reset_session(self) -> int:
        """Start a new session; returns the score the old one ended with."""
        final = self.score
        self.score = 0
        return final
