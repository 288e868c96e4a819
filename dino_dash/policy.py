def policy(env):
    # Strategy: jump as late as possible. The nearest obstacle still ahead of the
    # player is tracked; once its leading edge is within the distance it covers
    # while the player rises to clear its height, press jump. Anything else is a no-op.
    controller = env.controller if hasattr(env, "controller") else env
    player = controller.player.body
    ahead = [o for o in controller.obstacles if o.body.left + o.body.width > player.left]
    if not ahead:
        return [0, 0, 0]

    nearest = min(ahead, key=lambda o: o.body.left)
    speed = abs(controller.OBSTACLE_SPEED)
    # Time to rise above the obstacle: solve h = v*t - g*t^2/2 for the first root
    v, g, h = abs(controller.JUMP_VELOCITY), controller.GRAVITY, nearest.body.height
    disc = max(0.0, v * v - 2 * g * h)
    rise_time = (v - disc ** 0.5) / g
    trigger = speed * rise_time + player.width * 0.5
    gap = nearest.body.left - (player.left + player.width)

    if 0 <= gap <= trigger:
        return [0, 1, 0]  # Jump
    return [0, 0, 0]  # No-op
