# Screen and world constants (world units == pixels)
SCREEN_WIDTH = 960
SCREEN_HEIGHT = 540
GROUND_OFFSET = 10
FPS = 60
MAX_STEPS = 20000

# Player constants
PLAYER_X = 150
PLAYER_WIDTH = 66
PLAYER_HEIGHT = 70
GRAVITY = 2000          # units/s^2
JUMP_VELOCITY = -900    # units/s, upward
RUN_FRAME_MS = 120
# width, height, offset_x, offset_y as fractions of the sprite
PLAYER_HITBOX = (0.6, 0.7, 0.2, 0.3)

# Obstacle constants
OBSTACLE_SPEED = -500   # units/s
OBSTACLE_DELAY_MS = (700, 1800)
OBSTACLE_SPAWN_MARGIN = 80
OBSTACLE_DESPAWN_X = -50
OBSTACLE_SIZES = {
    "single": (34, 70),
    "multi": (74, 70),
}

# Cloud constants
CLOUD_DELAY_MS = (1200, 2500)
CLOUD_SPEED = (1, 3)    # units/frame, leftward
CLOUD_MIN_Y = 50
CLOUD_WIDTH = 92
CLOUD_HEIGHT = 28

# Scoring constants
SCORE_DIVISOR = 10
POINT_SOUND_EVERY = 50
MODE_SWITCH_EVERY = 100
FADE_MS = 500

# Rewards
REWARD_ALIVE = 0.1
REWARD_COLLISION = -10.0

# Colors
PALETTE_DAY = {
    "bg": (255, 255, 255),
    "text": (83, 83, 83),
    "ground": (83, 83, 83),
    "player": (83, 83, 83),
    "obstacle": (83, 83, 83),
    "cloud": (218, 218, 218),
}
PALETTE_NIGHT = {
    "bg": (32, 33, 36),
    "text": (240, 240, 240),
    "ground": (200, 200, 200),
    "player": (230, 230, 230),
    "obstacle": (200, 200, 200),
    "cloud": (90, 92, 98),
}
COLOR_DEFEAT_TINT = (255, 0, 0)
COLOR_GAME_OVER_TEXT = (255, 0, 0)
