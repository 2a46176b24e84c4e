"""Entry point for the Torus Snake game."""

from __future__ import annotations

import logging

from torus_snake.config import LOG_FILE, LOG_FORMAT, LOG_LEVEL
from torus_snake.game import SnakeGame

logger = logging.getLogger("torus_snake")


def main() -> None:
    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(filename=LOG_FILE, level=LOG_LEVEL, format=LOG_FORMAT)
    logger.info("----- Starting Torus Snake -----")
    try:
        game = SnakeGame()
        game.start()
    except Exception:
        logger.exception("Torus Snake stopped on a fatal error")
        raise


if __name__ == "__main__":
    main()
