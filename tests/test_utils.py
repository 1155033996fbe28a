"""
Unit tests for movement input and box collision.
"""

import itertools
import math

import numpy as np
import pytest

from game.squares.entities import Entity
from game.squares.utils import clamp, collides, movement_vector, normalize


# =============================================================================
# Movement
# =============================================================================

class TestMovementVector:

    @pytest.mark.parametrize("left,right", [(False, False), (True, False), (False, True), (True, True)])
    def test_up_and_down_cancel(self, left, right):
        v = movement_vector(up=True, down=True, left=left, right=right)
        assert v[1] == 0.0

    @pytest.mark.parametrize("up,down", [(False, False), (True, False), (False, True), (True, True)])
    def test_left_and_right_cancel(self, up, down):
        v = movement_vector(up=up, down=down, left=True, right=True)
        assert v[0] == 0.0

    def test_nonzero_input_is_unit_length(self):
        for keys in itertools.product([False, True], repeat=4):
            v = movement_vector(*keys)
            length = math.hypot(v[0], v[1])
            if length > 0:
                assert length == pytest.approx(1.0)

    def test_no_keys_is_zero(self):
        assert np.array_equal(movement_vector(False, False, False, False), [0.0, 0.0])

    def test_screen_axes(self):
        assert np.allclose(movement_vector(up=True, down=False, left=False, right=False), [0.0, -1.0])
        assert np.allclose(movement_vector(up=False, down=False, left=False, right=True), [1.0, 0.0])

    def test_diagonal_is_not_faster(self):
        v = movement_vector(up=True, down=False, left=True, right=False)
        assert np.allclose(v, [-math.sqrt(0.5), -math.sqrt(0.5)])


def test_normalize_zero_vector():
    assert normalize(0.0, 0.0) == (0.0, 0.0)


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2


# =============================================================================
# Collision
# =============================================================================

class TestCollides:

    def test_overlapping_boxes(self):
        a = Entity.new((0, 0), (10, 10))
        b = Entity.new((5, 5), (10, 10))
        assert collides(a, b)

    def test_separate_boxes(self):
        a = Entity.new((0, 0), (10, 10))
        b = Entity.new((20, 0), (10, 10))
        assert not collides(a, b)

    def test_touching_edges_do_not_collide(self):
        a = Entity.new((0, 0), (10, 10))
        b = Entity.new((10, 0), (10, 10))
        assert not collides(a, b)

    def test_contained_box(self):
        a = Entity.new((0, 0), (50, 50))
        b = Entity.new((10, 10), (5, 5))
        assert collides(a, b)
        assert collides(b, a)

    def test_symmetric(self):
        rng = np.random.default_rng(7)
        for _ in range(200):
            a = Entity.new(rng.uniform(0, 50, 2), rng.uniform(1, 20, 2))
            b = Entity.new(rng.uniform(0, 50, 2), rng.uniform(1, 20, 2))
            assert collides(a, b) == collides(b, a)

    def test_reflexive_for_real_boxes(self):
        a = Entity.new((3, 4), (5, 6))
        assert collides(a, a)

    @pytest.mark.parametrize("size", [(0, 10), (10, 0), (0, 0), (-5, 10)])
    def test_degenerate_size_never_collides(self, size):
        a = Entity.new((0, 0), size)
        b = Entity.new((-10, -10), (50, 50))
        assert not collides(a, b)
        assert not collides(b, a)
        assert not collides(a, a)
