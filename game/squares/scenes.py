"""
Scene state machine

Transitions are a plain table keyed by (scene, event). Anything not in the
table leaves the scene unchanged.
"""

from enum import Enum, IntEnum
from typing import Dict, Tuple


class Scene(IntEnum):
    START_SCREEN = 0
    PLAYING = 1
    GAME_OVER = 2


class Event(Enum):
    CONFIRM = "confirm"      # confirm key pressed this frame
    ENEMY_HIT = "enemy_hit"  # player touched an active enemy


TRANSITIONS: Dict[Tuple[Scene, Event], Scene] = {
    (Scene.START_SCREEN, Event.CONFIRM): Scene.PLAYING,
    (Scene.GAME_OVER, Event.CONFIRM): Scene.PLAYING,
    (Scene.PLAYING, Event.ENEMY_HIT): Scene.GAME_OVER,
}


def transition(scene: Scene, event: Event) -> Scene:
    return TRANSITIONS.get((scene, event), scene)
