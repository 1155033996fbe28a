"""
Target spawner - fills free pool slots with random targets
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from .camera import Camera2D
from .entities import Target

TARGET_MIN_SIZE = 5.0
TARGET_MAX_SIZE = 20.0
ENEMY_CHANCE = 0.3


def first_free_slot(targets: Sequence[Target]) -> Optional[int]:
    """Lowest index of an inactive slot, or None when the pool is full"""
    for i, t in enumerate(targets):
        if not t.entity.active:
            return i
    return None


def count_free(targets: Sequence[Target]) -> int:
    return sum(1 for t in targets if not t.entity.active)


def spawn_target(
    targets: Sequence[Target],
    bounds: Tuple[float, float],
    camera: Camera2D,
    rng: np.random.Generator,
    enemy_chance: float = ENEMY_CHANCE,
    allow_enemy: bool = True,
) -> bool:
    """
    Spawn one target into the first free slot.

    bounds is the visible screen size; the target is placed so that the whole
    square stays on screen. Returns False if every slot is taken.

    An enemy is always accompanied by a non-enemy target spawned right after
    it. When there is no room for that companion, the roll is downgraded to a
    non-enemy.
    """
    slot = first_free_slot(targets)
    if slot is None:
        return False

    size = float(rng.uniform(TARGET_MIN_SIZE, TARGET_MAX_SIZE))

    # Pad by the on-screen size so the full square is visible
    pad = size * camera.zoom
    sx = float(rng.uniform(0.0, max(0.0, bounds[0] - pad)))
    sy = float(rng.uniform(0.0, max(0.0, bounds[1] - pad)))
    position = camera.screen_to_world((sx, sy))

    is_enemy = allow_enemy and rng.random() < enemy_chance
    if is_enemy and count_free(targets) < 2:
        is_enemy = False

    targets[slot].place(position, (size, size), is_enemy)

    if is_enemy:
        spawned = spawn_target(targets, bounds, camera, rng, enemy_chance, allow_enemy=False)
        assert spawned, "companion slot was checked before placing the enemy"

    return True
