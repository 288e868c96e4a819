import logging
from enum import Enum

import numpy as np
import pygame

from . import constants as C
from .entities import OBSTACLE_SHAPES, Cloud, Obstacle, Player
from .physics import ground_correct, integrate, overlaps
from .sound import SilentAudio
from .timers import Clock, Fade, TimerSlot

logger = logging.getLogger(__name__)


class RunState(Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


class RunController:
    """Owns one run of the game and reacts to frames, input and timers.

    The controller never sleeps or polls: the host calls ``tick`` once per
    rendered frame, ``jump`` on the jump key and ``click`` on a pointer
    press. Everything else (obstacle and cloud spawns, the running
    animation, palette fades) is driven by the controller's own ``Clock``
    which ``tick`` advances.
    """

    def __init__(self, audio=None, rng=None):
        # Screen and world
        self.SCREEN_WIDTH = C.SCREEN_WIDTH
        self.SCREEN_HEIGHT = C.SCREEN_HEIGHT
        self.GROUND_Y = C.SCREEN_HEIGHT - C.GROUND_OFFSET
        self.FPS = C.FPS

        # Player
        self.PLAYER_X = C.PLAYER_X
        self.PLAYER_SIZE = (C.PLAYER_WIDTH, C.PLAYER_HEIGHT)
        self.PLAYER_HITBOX = C.PLAYER_HITBOX
        self.GRAVITY = C.GRAVITY
        self.JUMP_VELOCITY = C.JUMP_VELOCITY
        self.RUN_FRAME_MS = C.RUN_FRAME_MS

        # Obstacles and clouds
        self.OBSTACLE_SPEED = C.OBSTACLE_SPEED
        self.OBSTACLE_DELAY_MS = C.OBSTACLE_DELAY_MS
        self.OBSTACLE_SPAWN_X = C.SCREEN_WIDTH + C.OBSTACLE_SPAWN_MARGIN
        self.OBSTACLE_DESPAWN_X = C.OBSTACLE_DESPAWN_X
        self.OBSTACLE_SIZES = dict(C.OBSTACLE_SIZES)
        self.CLOUD_DELAY_MS = C.CLOUD_DELAY_MS
        self.CLOUD_SPEED = C.CLOUD_SPEED
        self.CLOUD_BAND = (C.CLOUD_MIN_Y, C.SCREEN_HEIGHT // 2)
        self.CLOUD_SIZE = (C.CLOUD_WIDTH, C.CLOUD_HEIGHT)

        # Scoring
        self.SCORE_DIVISOR = C.SCORE_DIVISOR
        self.POINT_SOUND_EVERY = C.POINT_SOUND_EVERY
        self.MODE_SWITCH_EVERY = C.MODE_SWITCH_EVERY
        self.FADE_MS = C.FADE_MS

        self.audio = audio if audio is not None else SilentAudio()
        self.np_random = rng if rng is not None else np.random.default_rng()
        self.clock = Clock()
        self.obstacle_timer = TimerSlot(self.clock, "obstacle")
        self.cloud_timer = TimerSlot(self.clock, "cloud")
        self.anim_timer = TimerSlot(self.clock, "run-animation")

        # Survives restarts for the lifetime of the controller
        self.high_score = 0

        # Run state, filled in by restart()
        self.player = None
        self.obstacles = []
        self.clouds = []
        self.score = None
        self.steps = None
        self.game_over = None
        self.dark_mode = None
        self.palette = None
        self.fade = None
        self.last_point_sound_score = None
        self.last_mode_switch_score = None
        self.restart_prompt = None

        self.restart()

    # ------------------------------------------------------------------
    # Derived state

    @property
    def display_score(self):
        return self.score // self.SCORE_DIVISOR

    @property
    def state(self):
        return RunState.GAME_OVER if self.game_over else RunState.RUNNING

    @property
    def fade_alpha(self):
        return 0 if self.fade is None else self.fade.alpha

    # ------------------------------------------------------------------
    # Lifecycle

    def restart(self, rng=None):
        """Tear down the current run and start a fresh one."""
        if rng is not None:
            self.np_random = rng
        self.clock.clear()
        for obstacle in self.obstacles:
            obstacle.destroy()
        for cloud in self.clouds:
            cloud.destroy()

        self.player = Player(self.PLAYER_X, self.GROUND_Y, *self.PLAYER_SIZE, hitbox_box=self.PLAYER_HITBOX)
        self.obstacles = []
        self.clouds = []
        self.score = 0
        self.steps = 0
        self.game_over = False
        self.dark_mode = False
        self.palette = C.PALETTE_DAY
        self.fade = None
        self.last_point_sound_score = 0
        self.last_mode_switch_score = 0
        self.restart_prompt = None

        self.anim_timer.schedule(self.RUN_FRAME_MS, self.player.toggle_frame, loop=True)
        self.schedule_next_obstacle()
        self.schedule_next_cloud()
        logger.info("Run started (high score %d)", self.high_score)

    def tick(self, dt=None):
        """Advance one frame of ``dt`` seconds: timers, physics, then update."""
        if dt is None:
            dt = 1.0 / self.FPS
        if self.game_over:
            # Only tweens are still alive
            self.clock.advance(dt * 1000)
            return

        self.steps += 1
        self.clock.advance(dt * 1000)

        integrate(self.player.body, self.GRAVITY, dt)
        for obstacle in self.obstacles:
            integrate(obstacle.body, self.GRAVITY, dt)

        if self._player_hit():
            self.game_over_sequence()
            return

        self.update()

    def update(self):
        """Per-frame bookkeeping run after physics while the run is live."""
        if self.game_over:
            return

        body = self.player.body
        body.y, body.vy = ground_correct(body.y, body.vy, self.GROUND_Y)

        for obstacle in self.obstacles:
            if obstacle.x < self.OBSTACLE_DESPAWN_X:
                obstacle.destroy()
        self.obstacles = [o for o in self.obstacles if not o.destroyed]

        self.score += 1
        display = self.display_score
        if display > self.high_score:
            self.high_score = display

        if display > 0 and display % self.POINT_SOUND_EVERY == 0 and display != self.last_point_sound_score:
            self.last_point_sound_score = display
            self.audio.play("point")

        if display > 0 and display % self.MODE_SWITCH_EVERY == 0 and display != self.last_mode_switch_score:
            self.last_mode_switch_score = display
            self._switch_mode()

        for cloud in self.clouds:
            cloud.advance()
            if cloud.is_off_screen():
                cloud.destroy()
        self.clouds = [c for c in self.clouds if not c.destroyed]

    # ------------------------------------------------------------------
    # Input

    def jump(self):
        """Jump if standing on the ground. Returns whether the jump happened."""
        if self.game_over:
            return False
        body = self.player.body
        if body.y >= self.GROUND_Y and body.vy == 0:
            body.vy = self.JUMP_VELOCITY
            self.audio.play("jump")
            return True
        return False

    def click(self, pos):
        """Pointer press; restarts the run when it lands on the restart prompt."""
        if self.game_over and self.restart_prompt is not None and self.restart_prompt.collidepoint(pos):
            self.restart()
            return True
        return False

    # ------------------------------------------------------------------
    # Spawning

    def spawn_obstacle(self):
        if self.game_over:
            return None
        shape = OBSTACLE_SHAPES[int(self.np_random.integers(0, len(OBSTACLE_SHAPES)))]
        obstacle = Obstacle(
            shape,
            self.OBSTACLE_SPAWN_X,
            self.GROUND_Y,
            self.OBSTACLE_SIZES[shape],
            self.OBSTACLE_SPEED,
        )
        self.obstacles.append(obstacle)
        logger.debug("Spawned %s obstacle at step %d", shape, self.steps)
        self.schedule_next_obstacle()
        return obstacle

    def schedule_next_obstacle(self):
        low, high = self.OBSTACLE_DELAY_MS
        delay = int(self.np_random.integers(low, high + 1))
        self.obstacle_timer.schedule(delay, self.spawn_obstacle)
        return delay

    def spawn_cloud(self):
        if self.game_over:
            return None
        low, high = self.CLOUD_BAND
        y = int(self.np_random.integers(low, high + 1))
        speed = float(self.np_random.uniform(*self.CLOUD_SPEED))
        cloud = Cloud(self.SCREEN_WIDTH, y, speed, *self.CLOUD_SIZE)
        self.clouds.append(cloud)
        self.schedule_next_cloud()
        return cloud

    def schedule_next_cloud(self):
        low, high = self.CLOUD_DELAY_MS
        delay = int(self.np_random.integers(low, high + 1))
        self.cloud_timer.schedule(delay, self.spawn_cloud)
        return delay

    # ------------------------------------------------------------------
    # Game over

    def game_over_sequence(self):
        if self.game_over:
            return
        self.game_over = True
        self.player.tint = C.COLOR_DEFEAT_TINT
        self.audio.play("die")
        self.anim_timer.cancel()
        self.obstacle_timer.cancel()
        self.cloud_timer.cancel()

        prompt = pygame.Rect(0, 0, self.SCREEN_WIDTH // 2, self.SCREEN_HEIGHT // 4)
        prompt.center = (self.SCREEN_WIDTH // 2, self.SCREEN_HEIGHT // 2)
        self.restart_prompt = prompt
        logger.info("Game over at score %d (high score %d)", self.display_score, self.high_score)

    # ------------------------------------------------------------------
    # Internals

    def _player_hit(self):
        player_box = self.player.hitbox()
        return any(overlaps(player_box, o.hitbox()) for o in self.obstacles if not o.destroyed)

    def _switch_mode(self):
        self.dark_mode = not self.dark_mode
        target = C.PALETTE_NIGHT if self.dark_mode else C.PALETTE_DAY
        logger.info("Switching to %s palette at score %d", "night" if self.dark_mode else "day", self.display_score)

        def swap():
            self.palette = target
            self.fade = self.clock.add_tween(Fade(255, 0, self.FADE_MS))

        self.fade = self.clock.add_tween(Fade(0, 255, self.FADE_MS, on_complete=swap))

    def snapshot(self):
        return {
            "score": self.score,
            "display_score": self.display_score,
            "high_score": self.high_score,
            "steps": self.steps,
            "dark_mode": self.dark_mode,
            "game_over": self.game_over,
            "obstacles": len(self.obstacles),
            "clouds": len(self.clouds),
        }
