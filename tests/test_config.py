from __future__ import annotations

import logging

import pytest

from torus_snake.config import SnakeSettings, parse_log_level


@pytest.mark.parametrize(
    ("name", "level"),
    [
        (None, logging.INFO),
        ("", logging.INFO),
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        ("basic_format", logging.INFO),
        ("nonsense", logging.INFO),
    ],
)
def test_parse_log_level(name: str | None, level: int) -> None:
    assert parse_log_level(name) == level


def test_settings_defaults() -> None:
    settings = SnakeSettings()
    assert settings.extent == 13
    assert settings.cell_size == 50.0
    assert settings.start_length == 3
    assert settings.tick_seconds == 0.1


@pytest.mark.parametrize(
    "kwargs",
    [{"extent": 3}, {"start_length": 2}, {"start_length": 14}, {"tick_seconds": 0}],
)
def test_settings_reject_unplayable_values(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        SnakeSettings(**kwargs)
