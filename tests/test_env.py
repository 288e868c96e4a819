import gymnasium as gym
import numpy as np
import pytest

import dino_dash  # noqa: F401  registers DinoDash-v0
from dino_dash import constants as C
from dino_dash.env import GameEnv


@pytest.fixture
def env():
    env = GameEnv(render_mode="rgb_array")
    yield env
    env.close()


def _collide(env):
    obstacle = env.controller.spawn_obstacle()
    obstacle.body.x = env.controller.PLAYER_X


def test_spaces(env):
    assert env.action_space.nvec.tolist() == [5, 2, 2]
    assert env.observation_space.shape == (env.SCREEN_HEIGHT, env.SCREEN_WIDTH, 3)


def test_reset_returns_observation_and_info(env):
    obs, info = env.reset(seed=3)
    assert obs.shape == (env.SCREEN_HEIGHT, env.SCREEN_WIDTH, 3)
    assert obs.dtype == np.uint8
    assert info["score"] == 0
    assert info["display_score"] == 0
    assert info["game_over"] is False


def test_step_rewards_survival(env):
    env.reset(seed=3)
    obs, reward, terminated, truncated, info = env.step([0, 0, 0])
    assert reward == pytest.approx(0.1)
    assert terminated is False
    assert truncated is False
    assert info["score"] == 1


def test_space_component_jumps(env):
    env.reset(seed=3)
    env.step([0, 1, 0])
    assert env.controller.player.body.vy < 0
    assert env.controller.audio.count("jump") == 1


def test_collision_terminates_and_freezes(env):
    env.reset(seed=3)
    _collide(env)
    _, reward, terminated, _, info = env.step([0, 0, 0])
    assert terminated
    assert reward == pytest.approx(-10.0)
    assert info["game_over"] is True

    _, reward, terminated, _, after = env.step([0, 1, 0])
    assert terminated
    assert reward == 0.0
    assert after["score"] == info["score"]


def test_reset_after_game_over_keeps_high_score(env):
    env.reset(seed=3)
    env.controller.score = 1239
    env.step([0, 0, 0])
    _collide(env)
    env.step([0, 0, 0])
    _, info = env.reset()
    assert info["score"] == 0
    assert info["high_score"] == 124


def test_truncates_at_max_steps(env):
    env.reset(seed=3)
    env.controller.OBSTACLE_DELAY_MS = (10**9, 10**9)
    env.controller.restart()
    env.MAX_STEPS = 5
    truncated = False
    for _ in range(5):
        _, _, terminated, truncated, _ = env.step([0, 0, 0])
    assert truncated
    assert not terminated


def test_game_over_prompt_changes_the_frame(env):
    env.reset(seed=3)
    before = env.render()
    _collide(env)
    env.step([0, 0, 0])
    after = env.render()
    assert not np.array_equal(before, after)
    # Defeat text is drawn in red
    red = (after[:, :, 0] == 255) & (after[:, :, 1] == 0) & (after[:, :, 2] == 0)
    assert red.any()


def test_seeded_resets_are_reproducible():
    a, b = GameEnv(), GameEnv()
    a.reset(seed=11)
    b.reset(seed=11)
    assert a.controller.obstacle_timer.event.due == b.controller.obstacle_timer.event.due
    assert a.controller.cloud_timer.event.due == b.controller.cloud_timer.event.due
    a.close()
    b.close()


def test_validate_implementation(env):
    env.validate_implementation()


def test_registered_with_gymnasium():
    env = gym.make("DinoDash-v0")
    obs, info = env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step(np.array([0, 0, 0]))
    assert obs.shape == (540, 960, 3)
    assert "high_score" in info
    env.close()


def test_unknown_render_mode_rejected():
    with pytest.raises(ValueError):
        GameEnv(render_mode="ansi")


def test_fade_in_flight_completes_after_run_ends(env):
    env.reset(seed=3)
    env.controller.score = 999
    env.step([0, 0, 0])
    assert env.controller.dark_mode
    assert env.controller.palette == C.PALETTE_DAY

    _collide(env)
    env.step([0, 0, 0])
    assert env.controller.game_over
    for _ in range(120):
        env.step([0, 0, 0])
    assert env.controller.palette == C.PALETTE_NIGHT
    assert env.controller.fade_alpha == 0
