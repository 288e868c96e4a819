import argparse
import logging
import os
import sys

logger = logging.getLogger("dino_dash")


def _parse_args(argv):
    parser = argparse.ArgumentParser(prog="dino-dash", description="Endless desert runner")
    parser.add_argument("--seed", type=int, default=None, help="seed for obstacle and cloud timing")
    parser.add_argument("--autopilot", action="store_true", help="let the heuristic policy press jump")
    parser.add_argument("--headless", action="store_true", help="run without a window")
    parser.add_argument("--frames", type=int, default=3600, help="frames to simulate when headless")
    parser.add_argument("--mute", action="store_true", help="disable sound effects")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def run_headless(args):
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
    from .env import GameEnv
    from .policy import policy

    env = GameEnv(render_mode="rgb_array", sound=False)
    obs, info = env.reset(seed=args.seed)
    for _ in range(args.frames):
        action = policy(env) if args.autopilot else [0, 0, 0]
        obs, reward, terminated, truncated, info = env.step(action)
        if terminated or truncated:
            break
    env.close()
    logger.info("Headless run finished after %d frames", info["steps"])
    print(info)
    return 0


def run_window(args):
    import pygame

    from .env import GameEnv
    from .policy import policy

    env = GameEnv(render_mode="human", sound=not args.mute)
    env.reset(seed=args.seed)

    running = True
    while running:
        action = [0, 0, 0]  # Default action: no-op

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in (pygame.K_SPACE, pygame.K_UP):
                    action[1] = 1  # Jump
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                env.click(event.pos)

        if args.autopilot and not env.controller.game_over:
            action = policy(env)

        if env.controller.game_over:
            # Keep fades and the prompt on screen until the player clicks
            env.controller.tick()
            env.render()
        else:
            env.step(action)

    env.close()
    return 0


def main(argv=None):
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if args.headless:
        return run_headless(args)
    return run_window(args)


if __name__ == "__main__":
    sys.exit(main())
