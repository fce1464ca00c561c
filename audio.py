"""
Sound cues for the game using pygame's mixer.

The mixer is only opened on the first user input ("unlock"), mirroring how
audio must wait for a gesture in a browser. If the mixer or a sound file is
unavailable every call quietly becomes a no-op.
"""

import logging
import os

import numpy as np
import pygame

from constants import SAMPLE_RATE, SOUND_NAMES

logger = logging.getLogger(__name__)

# name -> (start Hz, duration ms, volume, end Hz)
TONES = {
    "eat": (720, 95, 0.26, 520),
    "die": (420, 420, 0.2, 110),
    "levelup": (520, 220, 0.24, 1040),
}


def create_tone(frequency_hz, duration_ms, volume=0.3, end_frequency_hz=None):
    """Return 16-bit mono samples for a chirp with a linear fade-out."""
    count = max(1, int(SAMPLE_RATE * duration_ms / 1000.0))
    end_frequency_hz = frequency_hz if end_frequency_hz is None else end_frequency_hz
    freqs = np.linspace(frequency_hz, end_frequency_hz, count)
    phase = np.cumsum(2.0 * np.pi * freqs / SAMPLE_RATE)
    envelope = np.linspace(1.0, 0.0, count)
    volume = max(0.0, min(volume, 1.0))
    return (32767 * volume * envelope * np.sin(phase)).astype(np.int16)


class AudioManager:
    def __init__(self, sounds_dir=None, enabled=True):
        self.sounds_dir = sounds_dir
        self.enabled = enabled
        self.sounds = {}
        self._muted = False
        self._unlocked = False

    @property
    def available(self):
        return bool(self.sounds)

    @property
    def muted(self):
        return self._muted

    @muted.setter
    def muted(self, value):
        self._muted = bool(value)

    def toggle_mute(self):
        """Flip the mute state and return the new value."""
        self._muted = not self._muted
        return self._muted

    def unlock(self):
        """Open the mixer and prepare sounds. Safe to call repeatedly."""
        if self._unlocked or not self.enabled:
            return
        self._unlocked = True
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=512)
        except pygame.error as e:
            logger.warning("Audio unavailable: %s", e)
            return
        for name in SOUND_NAMES:
            sound = self._load(name)
            if sound is not None:
                self.sounds[name] = sound

    def _load(self, name):
        """Load `<name>.wav` from the sounds directory, else synthesise a tone."""
        if self.sounds_dir:
            path = os.path.join(self.sounds_dir, f"{name}.wav")
            try:
                return pygame.mixer.Sound(path)
            except (pygame.error, FileNotFoundError) as e:
                logger.debug("Could not load %s: %s", path, e)
        if name not in TONES:
            return None
        frequency, duration, volume, end_frequency = TONES[name]
        try:
            samples = create_tone(frequency, duration, volume, end_frequency)
            # The mixer may have opened in stereo; duplicate the channel if so
            channels = pygame.mixer.get_init()[2]
            if channels > 1:
                samples = np.repeat(samples[:, None], channels, axis=1)
            return pygame.mixer.Sound(buffer=samples.tobytes())
        except pygame.error as e:
            logger.debug("Could not synthesise %s: %s", name, e)
            return None

    def play(self, name):
        """Play a named cue if sound is on and the cue is loaded."""
        if self._muted:
            return
        sound = self.sounds.get(name)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as e:
            logger.debug("Could not play %s: %s", name, e)
