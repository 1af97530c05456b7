"""
Tone synthesis for touched values.

A value maps linearly onto [BASE_FREQ, BASE_FREQ + FREQ_SPAN]:

    freq = BASE_FREQ + (value / max_value) * FREQ_SPAN

Each tone is a plain sine with a linear fade-in and fade-out of TONE_RAMP
seconds (so the buffer starts and ends at zero and never clicks):

    wave[t] = amplitude * env[t] * sin(2pi * freq * t / sample_rate)
"""

import logging
import math

import numpy as np
import pygame

from .config import (BASE_FREQ, FREQ_SPAN, BAR_MAX, TONE_DURATION, TONE_RAMP,
                     TONE_AMPLITUDE, SAMPLE_RATE, ENABLE_SOUND)

log = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


def frequency_for(value, max_value=BAR_MAX) -> float:
    return BASE_FREQ + (value / max_value) * FREQ_SPAN


def tone_buffer(freq, duration=TONE_DURATION, sample_rate=SAMPLE_RATE,
                amplitude=TONE_AMPLITUDE, ramp=TONE_RAMP) -> np.ndarray:
    """Mono float64 samples in [-amplitude, amplitude]."""
    n   = int(duration * sample_rate)
    t   = np.arange(n, dtype=np.float64)
    env = np.ones(n, dtype=np.float64)

    r = min(int(ramp * sample_rate), n // 2)
    if r > 0:
        env[:r]      = t[:r] / r
        env[n - r:]  = (n - t[n - r:]) / r
        env[n - 1]   = 0.0

    return amplitude * env * np.sin(TWO_PI * freq * t / sample_rate)


def to_pcm(mono: np.ndarray) -> np.ndarray:
    """Float [-1,1] mono to int16 stereo (L/R identical)."""
    pcm = (np.clip(mono, -1.0, 1.0) * 32767).astype(np.int16)
    return np.column_stack((pcm, pcm))


class TonePlayer:
    """Plays one tone per touched value on a dedicated mixer channel."""

    def __init__(self, enabled=ENABLE_SOUND, max_value=BAR_MAX):
        self.enabled   = enabled
        self.max_value = max_value
        self._channel  = None
        self._ready    = False

    @property
    def available(self) -> bool:
        return self._ready

    def start(self):
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 512)
            pygame.mixer.init()
        except pygame.error as e:
            log.warning("sound disabled, could not start mixer: %s", e)
            self._ready = False
            return
        self._channel = pygame.mixer.Channel(1)
        self._ready   = True

    def stop(self):
        if self._channel:
            self._channel.stop()
        self._ready = False

    def set_enabled(self, enabled):
        self.enabled = enabled
        if not enabled and self._channel:
            self._channel.stop()

    def play(self, value):
        if not (self.enabled and self._ready):
            return
        mono = tone_buffer(frequency_for(value, self.max_value))
        snd  = pygame.mixer.Sound(buffer=to_pcm(mono).tobytes())
        # a new tone interrupts the previous one
        self._channel.play(snd)

    def on_step(self, step, values):
        """Controller listener: sound the first position the step touches."""
        idx = step.indices
        if idx and 0 <= idx[0] < len(values):
            self.play(values[idx[0]])
