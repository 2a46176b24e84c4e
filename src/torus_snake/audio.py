"""Procedural sound effects for Torus Snake, played from simulation events."""

from __future__ import annotations

import logging
import math
import random
from array import array
from dataclasses import dataclass
from typing import Dict

import pygame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tone:
    freq: float
    duration_ms: int
    sweep: float = 0.0
    noise: float = 0.0
    attack: float = 0.02
    release: float = 0.3
    volume: float = 0.5
    waveform: str = "square"  # "sine", "square"


TONES: Dict[str, Tone] = {
    # Short noisy drop for biting into an apple.
    "crunch": Tone(
        freq=520,
        duration_ms=110,
        sweep=-260,
        noise=0.55,
        attack=0.005,
        release=0.6,
        volume=0.7,
    ),
    "pause": Tone(freq=440, duration_ms=70, attack=0.01, release=0.4, volume=0.35),
    "record": Tone(
        freq=660,
        duration_ms=220,
        sweep=330,
        attack=0.01,
        release=0.5,
        volume=0.5,
        waveform="sine",
    ),
    "restart": Tone(
        freq=220,
        duration_ms=300,
        sweep=-120,
        noise=0.2,
        attack=0.01,
        release=0.7,
        volume=0.55,
    ),
}


class AudioEngine:
    """Mixer init plus one synthesized sound per game event.

    Playback is best effort: without an audio device the engine stays
    disabled and :meth:`play` does nothing.
    """

    def __init__(self, master_volume: float = 0.45) -> None:
        self.enabled = False
        self.master_volume = master_volume
        self.sample_rate: int = 22050
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self._init_audio()

    def _init_audio(self) -> None:
        try:
            pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=1)
        except pygame.error as exc:
            logger.warning("Audio disabled: %s", exc)
            return
        mixer_info = pygame.mixer.get_init()
        if mixer_info:
            self.sample_rate = mixer_info[0]
        self.sounds = {name: self._render(tone) for name, tone in TONES.items()}
        self.enabled = True

    def _render(self, tone: Tone) -> pygame.mixer.Sound:
        """Render a tone with a linear attack/release envelope."""
        sample_count = max(1, int(self.sample_rate * tone.duration_ms / 1000))
        attack = max(1, int(sample_count * tone.attack))
        release = max(1, int(sample_count * tone.release))
        release_start = sample_count - release
        two_pi = 2.0 * math.pi

        samples = array("h")
        scale = 32767 * tone.volume * self.master_volume
        for idx in range(sample_count):
            t = idx / self.sample_rate
            freq = tone.freq + tone.sweep * (idx / sample_count)
            if tone.waveform == "square":
                wave = 1.0 if (freq * t) % 1.0 < 0.5 else -1.0
            else:
                wave = math.sin(two_pi * freq * t)
            if tone.noise > 0.0:
                hiss = random.uniform(-1.0, 1.0)
                wave = (1.0 - tone.noise) * wave + tone.noise * hiss

            if idx < attack:
                env = idx / attack
            elif idx >= release_start:
                env = 1.0 - (idx - release_start) / release
            else:
                env = 1.0
            samples.append(int(max(-32767, min(32767, wave * env * scale))))
        return pygame.mixer.Sound(buffer=samples)

    def play(self, name: str) -> None:
        if not self.enabled:
            return
        sound = self.sounds.get(name)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as exc:
            logger.warning("Audio playback failed, disabling sound: %s", exc)
            self.enabled = False
