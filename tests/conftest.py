from __future__ import annotations

import random

import pytest

from torus_snake.config import SnakeSettings
from torus_snake.simulation import Simulation


class MemoryStore:
    """In-memory stand-in for HighScoreStore that records every save."""

    def __init__(self, value: int = 0) -> None:
        self.value = value
        self.saves: list[int] = []

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.saves.append(value)
        self.value = value


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def sim(store: MemoryStore, rng: random.Random) -> Simulation:
    return Simulation(store, SnakeSettings(), rng=rng)
