"""
Unit tests for the target spawner and its fixed slot pool.
"""

import numpy as np
import pytest

from game.squares.camera import Camera2D
from game.squares.entities import POOL_SIZE, Target, allocate_state, count_active
from game.squares.spawner import (
    TARGET_MAX_SIZE,
    TARGET_MIN_SIZE,
    count_free,
    first_free_slot,
    spawn_target,
)

BOUNDS = (800.0, 600.0)


@pytest.fixture
def pool():
    state = allocate_state()
    slots = state["targets"][0]
    return [Target(slots[i:i + 1]) for i in range(POOL_SIZE)]


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


def fill(pool, count, is_enemy=False):
    for t in pool[:count]:
        t.place((0.0, 0.0), (5.0, 5.0), is_enemy)


class TestSlotSelection:

    def test_first_free_is_lowest_index(self, pool):
        fill(pool, 3)
        pool[1].entity.active = False
        assert first_free_slot(pool) == 1

    def test_full_pool_has_no_free_slot(self, pool):
        fill(pool, POOL_SIZE)
        assert first_free_slot(pool) is None
        assert count_free(pool) == 0

    def test_spawn_uses_lowest_free_slot(self, pool, rng):
        fill(pool, 2)
        assert spawn_target(pool, BOUNDS, Camera2D(), rng, enemy_chance=0.0)
        assert pool[2].entity.active
        assert count_active(pool) == 3


class TestSpawnTarget:

    def test_full_pool_returns_false_and_touches_nothing(self, pool, rng):
        fill(pool, POOL_SIZE)
        before = [(t.entity.position.copy(), t.entity.size.copy(), t.is_enemy) for t in pool]

        assert not spawn_target(pool, BOUNDS, Camera2D(), rng)

        for t, (pos, size, enemy) in zip(pool, before):
            assert np.array_equal(t.entity.position, pos)
            assert np.array_equal(t.entity.size, size)
            assert t.is_enemy == enemy

    def test_size_in_range_and_square(self, pool, rng):
        for _ in range(POOL_SIZE):
            spawn_target(pool, BOUNDS, Camera2D(), rng, enemy_chance=0.0)
        for t in pool:
            w, h = t.entity.size
            assert TARGET_MIN_SIZE <= w <= TARGET_MAX_SIZE
            assert w == h

    def test_target_fully_on_screen_with_zoom(self, pool, rng):
        camera = Camera2D(offset=(400, 300), target=(50, -20), zoom=2.0)
        for _ in range(POOL_SIZE):
            spawn_target(pool, BOUNDS, camera, rng, enemy_chance=0.0)

        for t in pool:
            sx, sy = camera.world_to_screen(t.entity.position)
            extent = t.entity.size[0] * camera.zoom
            assert -1e-9 <= sx <= BOUNDS[0] - extent + 1e-9
            assert -1e-9 <= sy <= BOUNDS[1] - extent + 1e-9

    def test_no_enemies_when_chance_is_zero(self, pool, rng):
        for _ in range(POOL_SIZE):
            spawn_target(pool, BOUNDS, Camera2D(), rng, enemy_chance=0.0)
        assert not any(t.is_enemy for t in pool)

    def test_enemy_spawns_with_companion(self, pool, rng):
        assert spawn_target(pool, BOUNDS, Camera2D(), rng, enemy_chance=1.0)
        assert count_active(pool) == 2
        assert pool[0].is_enemy
        assert pool[1].entity.active and not pool[1].is_enemy

    def test_enemy_downgraded_without_room_for_companion(self, pool, rng):
        fill(pool, POOL_SIZE - 1, is_enemy=True)
        assert spawn_target(pool, BOUNDS, Camera2D(), rng, enemy_chance=1.0)
        assert count_active(pool) == POOL_SIZE
        assert not pool[-1].is_enemy


class TestPoolInvariants:

    def test_active_count_never_exceeds_capacity(self, pool, rng):
        for i in range(200):
            spawn_target(pool, BOUNDS, Camera2D(), rng)
            assert count_active(pool) <= POOL_SIZE
            # Collect a random active target now and then
            if i % 3 == 0:
                active = [t for t in pool if t.entity.active]
                if active:
                    active[int(rng.integers(len(active)))].entity.active = False

    def test_enemy_spawn_leaves_a_non_enemy_active(self, pool, rng):
        for _ in range(100):
            for t in pool:
                t.entity.active = False
            fill(pool, int(rng.integers(0, POOL_SIZE)), is_enemy=True)
            enemies_before = sum(1 for t in pool if t.entity.active and t.is_enemy)

            spawn_target(pool, BOUNDS, Camera2D(), rng, enemy_chance=0.5)

            enemies_after = sum(1 for t in pool if t.entity.active and t.is_enemy)
            if enemies_after > enemies_before:
                assert any(t.entity.active and not t.is_enemy for t in pool)

    def test_capacity_is_fixed(self, pool):
        assert len(pool) == POOL_SIZE == 16
