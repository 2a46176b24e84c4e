from __future__ import annotations

import random

import pytest

from torus_snake.clock import GameState
from torus_snake.config import SnakeSettings
from torus_snake.direction import Direction, Intent
from torus_snake.simulation import (
    AppleEaten,
    HighScoreChanged,
    PauseToggled,
    ScoreChanged,
    SessionRestarted,
    Simulation,
)


def test_initial_state(sim: Simulation) -> None:
    assert sim.state is GameState.RUNNING
    assert sim.score == 0
    assert sim.high_score == 0
    assert sim.head_position == (0.0, 0.0)
    assert sim.direction is Direction.RIGHT
    assert sim.apple not in sim.chain.cells()
    assert len(sim.segments()) == 3


def test_head_wraps_to_the_left_edge(sim: Simulation) -> None:
    sim.apple = (0, 3)
    sim.tick()
    assert sim.head_position == (50.0, 0.0)
    for _ in range(6):
        sim.tick()
    assert sim.head_position == (-300.0, 0.0)
    assert len(sim.chain) == 3


def test_first_eat_scores_and_saves_once(sim: Simulation, store) -> None:
    sim.apple = (1, 0)
    events = sim.tick()
    assert events == [AppleEaten((1, 0)), ScoreChanged(1), HighScoreChanged(1)]
    assert sim.score == 1
    assert sim.high_score == 1
    assert store.saves == [1]
    assert len(sim.chain) == 4
    assert sim.apple not in sim.chain.cells()


def test_eating_below_the_record_does_not_save(store, rng: random.Random) -> None:
    store.value = 10
    sim = Simulation(store, rng=rng)
    sim.apple = (1, 0)
    events = sim.tick()
    assert HighScoreChanged(10) not in events
    assert sim.high_score == 10
    assert store.saves == []


def test_frame_ticks_at_the_fixed_rate(store, rng: random.Random) -> None:
    sim = Simulation(store, SnakeSettings(tick_seconds=1.0), rng=rng)
    sim.apple = (0, 5)
    sim.frame(0.5)
    assert sim.chain.head_cell == (0, 0)
    sim.frame(0.5)
    assert sim.chain.head_cell == (1, 0)
    # A long frame still moves the snake by one cell only.
    sim.frame(3.25)
    assert sim.chain.head_cell == (2, 0)
    assert sim.scheduler.elapsed == 0.25


def test_turn_applies_on_the_next_tick(store, rng: random.Random) -> None:
    sim = Simulation(store, SnakeSettings(tick_seconds=1.0), rng=rng)
    sim.apple = (5, 5)
    sim.frame(0.5, Intent(up=True))
    assert sim.direction is Direction.UP
    assert sim.chain.heading.last is Direction.RIGHT
    assert sim.chain.head_cell == (0, 0)
    sim.frame(0.5, Intent())
    assert sim.chain.head_cell == (0, 1)
    assert sim.chain.heading.last is Direction.UP


def test_reverse_input_is_ignored(sim: Simulation) -> None:
    sim.apple = (0, 4)
    sim.steer(Intent(left=True))
    assert sim.direction is Direction.RIGHT
    sim.tick()
    assert sim.chain.head_cell == (1, 0)


def test_pause_freezes_the_countdown(store, rng: random.Random) -> None:
    sim = Simulation(store, SnakeSettings(tick_seconds=1.0), rng=rng)
    sim.apple = (0, 5)
    sim.frame(0.5)
    events = sim.frame(0.0, toggle_pause=True)
    assert events == [PauseToggled(GameState.PAUSED)]

    assert sim.frame(5.0, Intent(up=True)) == []
    assert sim.chain.head_cell == (0, 0)
    assert sim.direction is Direction.RIGHT
    assert sim.scheduler.elapsed == 0.5

    assert sim.frame(0.0, toggle_pause=True) == [PauseToggled(GameState.RUNNING)]
    sim.frame(0.25)
    assert sim.chain.head_cell == (0, 0)
    sim.frame(0.25)
    assert sim.chain.head_cell == (1, 0)


def test_self_collision_starts_a_new_session(store, rng: random.Random) -> None:
    sim = Simulation(store, SnakeSettings(start_length=5), rng=rng)
    sim.apple = (5, 5)
    sim.scores.score = 4
    sim.tick()
    events = []
    for direction in (Direction.UP, Direction.LEFT, Direction.DOWN):
        sim.steer(Intent.from_direction(direction))
        events = sim.tick()
    assert events == [SessionRestarted(4)]
    assert sim.score == 0
    assert [v.cell for v in sim.segments()][0] == (0, 0)
    assert sim.direction is Direction.RIGHT
    sim.chain.validate()


@pytest.mark.parametrize("seed", range(4))
def test_random_play_keeps_every_invariant(store, seed: int) -> None:
    rng = random.Random(seed)
    sim = Simulation(store, rng=random.Random(seed + 100))
    choices = [*Direction, None, None]
    for _ in range(3000):
        sim.steer(Intent.from_direction(rng.choice(choices)))
        # Aim at the apple half of the time so the snake actually grows.
        if rng.random() < 0.5:
            sim.steer(_towards(sim))
        before = len(sim.chain)
        events = sim.tick()
        if any(isinstance(e, SessionRestarted) for e in events):
            assert len(sim.chain) == 3
        elif any(isinstance(e, AppleEaten) for e in events):
            assert len(sim.chain) == before + 1
        else:
            assert len(sim.chain) == before
        assert len(sim.chain) >= 3
        assert sim.apple not in sim.chain.cells()
        sim.chain.validate()
    assert sim.high_score == max(store.saves, default=0)


def _towards(sim: Simulation) -> Intent:
    hx, hy = sim.chain.head_cell
    ax, ay = sim.apple
    return Intent(up=ay > hy, down=ay < hy, left=ax < hx, right=ax > hx)


def test_segment_views_carry_world_positions(sim: Simulation) -> None:
    sim.apple = (0, 4)
    sim.tick()
    views = sim.segments()
    assert [v.world for v in views] == [(50.0, 0.0), (0.0, 0.0), (-50.0, 0.0)]
    for view in views:
        assert view.world == sim.to_world(view.cell)


class BrokenDiskStore:
    def load(self) -> int:
        return 0

    def save(self, value: int) -> None:
        raise OSError("disk full")


def test_failed_save_leaves_the_game_consistent(rng: random.Random) -> None:
    sim = Simulation(BrokenDiskStore(), rng=rng)
    sim.apple = (1, 0)
    with pytest.raises(OSError):
        sim.tick()
    assert len(sim.chain) == 4
    assert sim.chain.head_cell == (1, 0)
    assert sim.apple not in sim.chain.cells()
    assert sim.score == 1
    assert sim.high_score == 1
    sim.chain.validate()
