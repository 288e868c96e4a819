import pygame


class Body:
    """An arcade physics body anchored at its bottom-centre.

    ``x``/``y`` is the anchor point, so ``y`` is the body's feet. The sprite
    rectangle extends ``width / 2`` either side of ``x`` and ``height`` above
    ``y``.
    """

    def __init__(self, x, y, width, height, vx=0.0, vy=0.0, allow_gravity=True, immovable=False):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.vx = vx
        self.vy = vy
        self.allow_gravity = allow_gravity
        # Not read by any collision response; overlap only ends the run
        self.immovable = immovable

    @property
    def left(self):
        return self.x - self.width / 2

    @property
    def top(self):
        return self.y - self.height

    def rect(self):
        return pygame.Rect(int(self.left), int(self.top), int(self.width), int(self.height))


def integrate(body, gravity, dt):
    """Advance ``body`` by ``dt`` seconds (semi-implicit Euler)."""
    if body.allow_gravity:
        body.vy += gravity * dt
    body.x += body.vx * dt
    body.y += body.vy * dt


def ground_correct(y, vy, ground_y):
    """Return ``(y, vy)`` snapped onto the ground line.

    Only a body below the ground that is moving downward (or resting) is
    clamped; an ascending body is left alone even if it still reads below
    the line.
    """
    if y > ground_y and vy >= 0:
        return ground_y, 0
    return y, vy


def hitbox(body, box=None):
    """Collision rectangle for ``body``.

    ``box`` is ``(width, height, offset_x, offset_y)`` as fractions of the
    sprite size, offsets measured from the sprite's top-left corner. With
    no box the full sprite rectangle is used.
    """
    if box is None:
        return body.rect()
    fw, fh, fx, fy = box
    return pygame.Rect(
        int(body.left + body.width * fx),
        int(body.top + body.height * fy),
        int(body.width * fw),
        int(body.height * fh),
    )


def overlaps(a, b):
    return bool(a.colliderect(b))
