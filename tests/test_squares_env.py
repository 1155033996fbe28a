"""
Tests for the Gymnasium wrapper around the game.
"""

import numpy as np
import pytest

from game.squares import SquaresEnv
from game.squares.scenes import Scene
from game.squares.squares_env import DEFAULT_REWARDS


@pytest.fixture
def env():
    e = SquaresEnv(enemy_chance=0.0, max_steps=50)
    yield e
    e.close()


def clear_and_place(env, is_enemy):
    game = env.game
    for t in game.targets:
        t.entity.active = False
    game.targets[0].place(game.player.entity.position.copy(), (5.0, 5.0), is_enemy)


def test_reset_starts_playing(env):
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert info["scene"] == Scene.PLAYING.name
    assert info["score"] == 0
    assert info["num_targets"] == 1


def test_seeded_reset_is_deterministic():
    a = SquaresEnv()
    b = SquaresEnv()
    obs_a, _ = a.reset(seed=5)
    obs_b, _ = b.reset(seed=5)
    assert np.array_equal(obs_a, obs_b)


def test_random_steps_stay_in_space():
    e = SquaresEnv(max_steps=200)
    obs, info = e.reset(seed=1)
    e.action_space.seed(1)
    for _ in range(200):
        obs, reward, terminated, truncated, info = e.step(e.action_space.sample())
        assert e.observation_space.contains(obs)
        assert isinstance(reward, float)
        if terminated or truncated:
            break
    assert terminated or truncated


def test_collect_reward(env):
    env.reset(seed=0)
    clear_and_place(env, is_enemy=False)
    _, reward, terminated, _, info = env.step([0, 0])
    assert not terminated
    assert info["score"] == 1
    assert reward == pytest.approx(DEFAULT_REWARDS["R_TARGET"] - DEFAULT_REWARDS["R_TIME"])


def test_enemy_terminates(env):
    env.reset(seed=0)
    clear_and_place(env, is_enemy=True)
    _, reward, terminated, truncated, info = env.step([0, 0])
    assert terminated
    assert info["scene"] == Scene.GAME_OVER.name
    assert reward == pytest.approx(-DEFAULT_REWARDS["R_DEATH"] - DEFAULT_REWARDS["R_TIME"])


def test_truncates_at_max_steps(env):
    env.reset(seed=0)
    for t in env.game.targets:
        t.entity.active = False
    truncated = False
    for _ in range(env.max_steps):
        _, _, terminated, truncated, _ = env.step([0, 0])
        assert not terminated
    assert truncated


def test_reset_after_game_over(env):
    env.reset(seed=0)
    clear_and_place(env, is_enemy=True)
    env.step([0, 0])
    obs, info = env.reset()
    assert info["scene"] == Scene.PLAYING.name
    assert info["score"] == 0
