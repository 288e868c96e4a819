import logging
import os

import gymnasium as gym
import numpy as np
import pygame
from gymnasium.spaces import MultiDiscrete

from . import constants as C
from .controller import RunController
from .sound import SilentAudio, SoundBank

logger = logging.getLogger(__name__)


class GameEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array", "human"], "render_fps": C.FPS}

    # Must be a short, user-facing control string:
    user_guide = (
        "Controls: Press space to jump over the cacti. Click the prompt to play again."
    )

    # Must be a short, user-facing description of the game:
    game_description = (
        "An endless desert runner. Jump over cacti for as long as you can; "
        "the sky turns from day to night every 100 points."
    )

    # Should frames auto-advance or wait for user input?
    auto_advance = True

    def __init__(self, render_mode="rgb_array", sound=None):
        super().__init__()
        if render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"unsupported render mode {render_mode!r}")
        self.render_mode = render_mode

        # Screen constants
        self.SCREEN_WIDTH = C.SCREEN_WIDTH
        self.SCREEN_HEIGHT = C.SCREEN_HEIGHT
        self.MAX_STEPS = C.MAX_STEPS
        self.REWARD_ALIVE = C.REWARD_ALIVE
        self.REWARD_COLLISION = C.REWARD_COLLISION

        # EXACT spaces:
        self.observation_space = gym.spaces.Box(
            low=0, high=255, shape=(self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([5, 2, 2])

        # Pygame setup
        if render_mode != "human":
            os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        pygame.init()
        pygame.font.init()
        self.screen = pygame.Surface((self.SCREEN_WIDTH, self.SCREEN_HEIGHT))
        self.window = None
        self.clock = pygame.time.Clock()
        self.font_large = pygame.font.Font(None, 64)
        self.font_small = pygame.font.Font(None, 32)

        if sound is None:
            sound = render_mode == "human"
        audio = SoundBank() if sound else SilentAudio()
        self.controller = RunController(audio=audio, rng=self.np_random)

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        self.controller.restart(rng=self.np_random)

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action):
        if self.controller.game_over:
            # Run is over; only tweens such as a palette fade still advance
            self.controller.tick(1.0 / C.FPS)
            return self._get_observation(), 0.0, True, False, self._get_info()

        # Unpack factorized action
        space_pressed = action[1] == 1
        if space_pressed:
            self.controller.jump()

        self.controller.tick(1.0 / C.FPS)

        terminated = self.controller.game_over
        reward = self.REWARD_COLLISION if terminated else self.REWARD_ALIVE
        truncated = not terminated and self.controller.steps >= self.MAX_STEPS

        if self.render_mode == "human":
            self.render()
        return (
            self._get_observation(),
            reward,
            terminated,
            truncated,
            self._get_info()
        )

    def click(self, pos):
        return self.controller.click(pos)

    def render(self):
        frame = self._get_observation()
        if self.render_mode == "rgb_array":
            return frame
        if self.window is None:
            self.window = pygame.display.set_mode((self.SCREEN_WIDTH, self.SCREEN_HEIGHT))
            pygame.display.set_caption("Dino Dash")
        self.window.blit(self.screen, (0, 0))
        pygame.display.flip()
        self.clock.tick(self.metadata["render_fps"])
        return None

    def _get_observation(self):
        self._render_background()
        self._render_clouds()
        self._render_ground()
        self._render_obstacles()
        self._render_player()
        self._render_ui()
        self._render_fade()

        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _get_info(self):
        return self.controller.snapshot()

    def _render_background(self):
        self.screen.fill(self.controller.palette["bg"])

    def _render_ground(self):
        ground_y = self.controller.GROUND_Y
        color = self.controller.palette["ground"]
        pygame.draw.line(self.screen, color, (0, ground_y), (self.SCREEN_WIDTH, ground_y), 2)
        # Pebbles scroll with the obstacles
        offset = int(self.controller.steps * -C.OBSTACLE_SPEED / C.FPS) % 64
        for x in range(-offset, self.SCREEN_WIDTH, 64):
            pygame.draw.line(self.screen, color, (x + 10, ground_y + 5), (x + 16, ground_y + 5), 1)

    def _render_clouds(self):
        for cloud in self.controller.clouds:
            cloud.draw(self.screen, self.controller.palette["cloud"])

    def _render_obstacles(self):
        for obstacle in self.controller.obstacles:
            obstacle.draw(self.screen, self.controller.palette["obstacle"])

    def _render_player(self):
        self.controller.player.draw(self.screen, self.controller.palette["player"])

    def _render_ui(self):
        text_color = self.controller.palette["text"]
        score_text = self.font_small.render(f"Score: {self.controller.display_score}", True, text_color)
        self.screen.blit(score_text, (10, 10))

        high_text = self.font_small.render(f"HI {self.controller.high_score:05d}", True, text_color)
        self.screen.blit(high_text, high_text.get_rect(topright=(self.SCREEN_WIDTH - 10, 10)))

        prompt = self.controller.restart_prompt
        if prompt is not None:
            over_text = self.font_large.render("Game Over!", True, C.COLOR_GAME_OVER_TEXT)
            again_text = self.font_small.render("Click to play again.", True, C.COLOR_GAME_OVER_TEXT)
            self.screen.blit(over_text, over_text.get_rect(midbottom=prompt.center))
            self.screen.blit(again_text, again_text.get_rect(midtop=(prompt.centerx, prompt.centery + 8)))

    def _render_fade(self):
        alpha = self.controller.fade_alpha
        if alpha <= 0:
            return
        overlay = pygame.Surface((self.SCREEN_WIDTH, self.SCREEN_HEIGHT), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, alpha))
        self.screen.blit(overlay, (0, 0))

    def close(self):
        if self.window is not None:
            pygame.display.quit()
            self.window = None
        pygame.quit()

    def validate_implementation(self):
        logger.info("Validating implementation...")
        # Test action space
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 2, 2]

        # Test observation space
        test_obs = self._get_observation()
        assert test_obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert test_obs.dtype == np.uint8

        # Test reset
        obs, info = self.reset()
        assert obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert isinstance(info, dict)

        # Test step
        test_action = self.action_space.sample()
        obs, reward, term, trunc, info = self.step(test_action)
        assert obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert isinstance(reward, (int, float))
        assert isinstance(term, bool)
        assert trunc == False
        assert isinstance(info, dict)

        logger.info("Implementation validated successfully")
