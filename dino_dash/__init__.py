from gymnasium.envs.registration import register

from .controller import RunController, RunState
from .env import GameEnv

register(id="DinoDash-v0", entry_point="dino_dash.env:GameEnv")

__all__ = ["GameEnv", "RunController", "RunState"]
