"""Durable storage for the single best score.

The file holds exactly four bytes: the score as an unsigned 32-bit
little-endian integer. A missing file means nobody has scored yet.
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path

from .errors import HighScoreDecodeError

logger = logging.getLogger(__name__)

HIGHSCORE_FORMAT = struct.Struct("<I")
MAX_HIGHSCORE = 2**32 - 1


def encode_high_score(value: int) -> bytes:
    if not 0 <= value <= MAX_HIGHSCORE:
        raise ValueError(f"high score {value} does not fit in 32 unsigned bits")
    return HIGHSCORE_FORMAT.pack(value)


def decode_high_score(blob: bytes) -> int:
    if len(blob) != HIGHSCORE_FORMAT.size:
        raise HighScoreDecodeError(
            f"expected {HIGHSCORE_FORMAT.size} bytes of high score, got {len(blob)}"
        )
    (value,) = HIGHSCORE_FORMAT.unpack(blob)
    return value


class HighScoreStore:
    """Loads and saves the high score at a fixed path."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> int:
        """Read the stored score; 0 when no file exists yet.

        Any other read or decode failure propagates, since playing on with
        an unknown baseline would overwrite the real record.
        """
        try:
            blob = self.path.read_bytes()
        except FileNotFoundError:
            logger.info("No high score at %s, starting from 0", self.path)
            return 0
        try:
            value = decode_high_score(blob)
        except HighScoreDecodeError as exc:
            raise HighScoreDecodeError(f"{self.path}: {exc}") from exc
        logger.info("Loaded high score %d from %s", value, self.path)
        return value

    def save(self, value: int) -> None:
        """Write the score to a sibling file, then swap it into place.

        The swap is atomic, so a crash mid-save leaves the old record intact
        instead of a truncated file the loader would reject.
        """
        blob = encode_high_score(value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        staging = self.path.with_name(self.path.name + ".tmp")
        staging.write_bytes(blob)
        staging.replace(self.path)
        logger.info("Saved high score %d to %s", value, self.path)
