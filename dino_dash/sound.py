import logging

import numpy as np
import pygame

logger = logging.getLogger(__name__)

SOUND_NAMES = ("jump", "point", "die")


class Synthesizer:
    def __init__(self, sample_rate=44100, channels=2):
        self.sample_rate = sample_rate
        self.channels = channels

    def _to_sound(self, wave):
        # Mixer expects one column per channel
        frames = np.repeat(wave[:, None], self.channels, axis=1) if self.channels > 1 else wave
        audio = np.ascontiguousarray((frames * 32767).astype(np.int16))
        return pygame.sndarray.make_sound(audio)

    def _timeline(self, duration):
        n_samples = int(self.sample_rate * duration)
        return np.linspace(0, duration, n_samples, False)

    def jump_wave(self):
        duration = 0.12
        t = self._timeline(duration)
        # Rising chirp 400 -> 800 Hz
        freq = np.linspace(400, 800, t.size)
        wave = np.sign(np.sin(2 * np.pi * freq * t)) * 0.15
        return wave * np.linspace(1, 0, t.size)

    def point_wave(self):
        t = self._timeline(0.24)
        half = t.size // 2
        freq = np.where(np.arange(t.size) < half, 1046.5, 1568.0)
        wave = np.sin(2 * np.pi * freq * t) * 0.2
        return wave * np.exp(-4 * t)

    def die_wave(self):
        duration = 0.35
        t = self._timeline(duration)
        freq = np.linspace(300, 80, t.size)
        wave = np.sign(np.sin(2 * np.pi * freq * t)) * 0.2
        return wave * np.linspace(1, 0, t.size)

    def generate(self, name):
        if name == "jump":
            return self._to_sound(self.jump_wave())
        if name == "point":
            return self._to_sound(self.point_wave())
        if name == "die":
            return self._to_sound(self.die_wave())
        raise ValueError(f"unknown sound {name!r}")


class SilentAudio:
    """Audio sink that only records what was requested."""

    def __init__(self):
        self.played = []

    def play(self, name):
        if name not in SOUND_NAMES:
            raise ValueError(f"unknown sound {name!r}")
        self.played.append(name)
        logger.debug("sfx: %s", name)

    def count(self, name):
        return self.played.count(name)


class SoundBank(SilentAudio):
    """Synthesized sound effects played through ``pygame.mixer``.

    Falls back to silent recording when no audio device is available.
    """

    def __init__(self, volume=0.6):
        super().__init__()
        self.sounds = {}
        self.enabled = False
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            sample_rate, _, channels = pygame.mixer.get_init()
            synth = Synthesizer(sample_rate=sample_rate, channels=channels)
            for name in SOUND_NAMES:
                sound = synth.generate(name)
                sound.set_volume(volume)
                self.sounds[name] = sound
            self.enabled = True
        except pygame.error as exc:
            logger.warning("Audio disabled, mixer unavailable: %s", exc)

    def play(self, name):
        super().play(name)
        if self.enabled:
            self.sounds[name].play()
