"""2D Game module - Square collector game core and environment"""

from .camera import Camera2D
from .entities import POOL_SIZE, Entity, Player, Target
from .game_state import FrameInput, Game
from .scenes import Event, Scene, transition
from .spawner import spawn_target
from .squares_env import SquaresEnv, run_random_episode
from .utils import collides

__all__ = [
    'Camera2D',
    'Entity',
    'Event',
    'FrameInput',
    'Game',
    'Player',
    'POOL_SIZE',
    'Scene',
    'SquaresEnv',
    'Target',
    'collides',
    'run_random_episode',
    'spawn_target',
    'transition',
]
