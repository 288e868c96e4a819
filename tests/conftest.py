import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from dino_dash.controller import RunController
from dino_dash.sound import SilentAudio


@pytest.fixture
def audio():
    return SilentAudio()


@pytest.fixture
def controller(audio):
    return RunController(audio=audio, rng=np.random.default_rng(1234))


@pytest.fixture
def quiet_controller(audio):
    # No obstacle ever arrives, so a run can go on indefinitely
    c = RunController(audio=audio, rng=np.random.default_rng(1234))
    c.OBSTACLE_DELAY_MS = (10**9, 10**9)
    c.restart()
    return c
