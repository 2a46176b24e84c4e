from __future__ import annotations

from torus_snake.scoring import ScoreKeeper, is_eaten


def test_is_eaten() -> None:
    assert is_eaten((1, 2), (1, 2))
    assert not is_eaten((1, 2), (2, 1))
    assert not is_eaten((1, 2), None)


def test_first_eat_sets_a_new_record(store) -> None:
    keeper = ScoreKeeper(store)
    update = keeper.on_eat()
    assert (update.score, update.high_score, update.new_high) == (1, 1, True)
    assert store.saves == [1]


def test_record_is_saved_only_when_beaten(store) -> None:
    store.value = 2
    keeper = ScoreKeeper(store)
    assert keeper.high_score == 2
    keeper.on_eat()
    keeper.on_eat()
    assert store.saves == []
    update = keeper.on_eat()
    assert update.new_high
    assert keeper.high_score == 3
    assert store.saves == [3]


def test_explicit_high_score_skips_loading(store) -> None:
    store.value = 99
    keeper = ScoreKeeper(store, high_score=5)
    assert keeper.high_score == 5


def test_reset_session_keeps_the_record(store) -> None:
    keeper = ScoreKeeper(store)
    keeper.on_eat()
    keeper.on_eat()
    assert keeper.reset_session() == 2
    assert keeper.score == 0
    assert keeper.high_score == 2
