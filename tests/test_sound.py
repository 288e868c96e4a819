import logging

import numpy as np
import pygame
import pytest

from dino_dash.sound import SOUND_NAMES, SilentAudio, SoundBank, Synthesizer


@pytest.mark.parametrize("wave_name", ["jump_wave", "point_wave", "die_wave"])
def test_waves_are_short_and_bounded(wave_name):
    synth = Synthesizer(sample_rate=22050, channels=2)
    wave = getattr(synth, wave_name)()
    assert wave.ndim == 1
    assert 0 < wave.size < 22050
    assert np.abs(wave).max() <= 1.0


def test_silent_audio_records_requests():
    audio = SilentAudio()
    for name in SOUND_NAMES:
        audio.play(name)
    audio.play("jump")
    assert audio.played == ["jump", "point", "die", "jump"]
    assert audio.count("jump") == 2


def test_unknown_sound_rejected():
    with pytest.raises(ValueError):
        SilentAudio().play("boing")
    with pytest.raises(ValueError):
        Synthesizer().generate("boing")


def test_sound_bank_plays_synthesized_effects():
    bank = SoundBank()
    try:
        assert bank.enabled
        assert sorted(bank.sounds) == sorted(SOUND_NAMES)
        for name in SOUND_NAMES:
            assert bank.sounds[name].get_length() > 0
            bank.play(name)
        assert bank.played == list(SOUND_NAMES)
    finally:
        pygame.mixer.quit()


def test_sound_bank_without_mixer_is_silent(monkeypatch, caplog):
    def _fail():
        raise pygame.error("no audio device")

    monkeypatch.setattr(pygame.mixer, "get_init", lambda: None)
    monkeypatch.setattr(pygame.mixer, "init", _fail)

    with caplog.at_level(logging.WARNING, logger="dino_dash.sound"):
        bank = SoundBank()
    assert bank.enabled is False
    assert bank.sounds == {}
    assert "Audio disabled" in caplog.text

    bank.play("jump")
    assert bank.played == ["jump"]
    with pytest.raises(ValueError):
        bank.play("boing")
