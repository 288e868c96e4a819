import pygame

from .physics import Body, hitbox

OBSTACLE_SHAPES = ("single", "multi")


class Player:
    def __init__(self, x, ground_y, width, height, hitbox_box=None):
        self.body = Body(x, ground_y, width, height)
        self.hitbox_box = hitbox_box
        self.frame = 0
        self.tint = None

    def toggle_frame(self):
        self.frame = 1 - self.frame

    def hitbox(self):
        return hitbox(self.body, self.hitbox_box)

    def draw(self, surface, color):
        color = self.tint or color
        rect = self.body.rect()
        w, h = rect.width, rect.height
        # Head
        pygame.draw.rect(surface, color, (rect.x + w * 0.5, rect.y, w * 0.5, h * 0.32), border_radius=3)
        # Torso and tail
        pygame.draw.rect(surface, color, (rect.x + w * 0.2, rect.y + h * 0.28, w * 0.55, h * 0.45))
        pygame.draw.rect(surface, color, (rect.x, rect.y + h * 0.35, w * 0.25, h * 0.15))
        # Legs alternate between the two running frames
        leg_w = w * 0.12
        front, back = (h * 0.27, h * 0.15) if self.frame == 0 else (h * 0.15, h * 0.27)
        pygame.draw.rect(surface, color, (rect.x + w * 0.3, rect.y + h * 0.73, leg_w, back))
        pygame.draw.rect(surface, color, (rect.x + w * 0.55, rect.y + h * 0.73, leg_w, front))
        # Eye
        eye_color = (255, 255, 255) if sum(color) < 600 else (40, 40, 40)
        pygame.draw.rect(surface, eye_color, (rect.x + w * 0.62, rect.y + h * 0.07, max(2, w * 0.06), max(2, w * 0.06)))


class Obstacle:
    def __init__(self, shape, x, ground_y, size, speed):
        if shape not in OBSTACLE_SHAPES:
            raise ValueError(f"unknown obstacle shape {shape!r}")
        width, height = size
        self.shape = shape
        self.body = Body(x, ground_y, width, height, vx=speed, allow_gravity=False, immovable=True)
        self.destroyed = False

    @property
    def x(self):
        return self.body.x

    def destroy(self):
        self.destroyed = True

    def hitbox(self):
        return hitbox(self.body)

    def draw(self, surface, color):
        rect = self.body.rect()
        stems = 1 if self.shape == "single" else 3
        slot_w = rect.width / stems
        stem_w = slot_w * 0.5
        for i in range(stems):
            sx = rect.x + slot_w * i + (slot_w - stem_w) / 2
            sh = rect.height if i % 2 == 0 else rect.height * 0.8
            stem = pygame.Rect(int(sx), int(rect.bottom - sh), int(stem_w), int(sh))
            pygame.draw.rect(surface, color, stem, border_radius=4)
            # Arms
            arm_y = stem.y + stem.height * 0.35
            pygame.draw.rect(surface, color, (stem.x - stem_w * 0.4, arm_y, stem_w * 0.4, stem_w * 0.3))
            pygame.draw.rect(surface, color, (stem.right, arm_y + stem_w * 0.3, stem_w * 0.4, stem_w * 0.3))


class Cloud:
    def __init__(self, x, y, speed, width, height):
        self.x = x
        self.y = y
        self.speed = speed
        self.width = width
        self.height = height
        self.destroyed = False

    def advance(self):
        self.x -= self.speed

    def is_off_screen(self):
        return self.x + self.width < 0

    def destroy(self):
        self.destroyed = True

    def draw(self, surface, color):
        x, y, w, h = int(self.x), int(self.y), self.width, self.height
        pygame.draw.ellipse(surface, color, (x, y + h // 3, w, h - h // 3))
        pygame.draw.ellipse(surface, color, (x + w // 4, y, w // 2, h))
