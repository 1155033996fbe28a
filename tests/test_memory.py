"""
Tests for handing game state across a code reload: the game can be rebound
to caller-owned memory and picked up again by a fresh Game instance.
"""

import numpy as np
import pytest

from game.squares.entities import STATE_DTYPE
from game.squares.game_state import FrameInput, Game
from game.squares.scenes import Scene


@pytest.fixture
def playing_game():
    g = Game(seed=11, enemy_chance=0.0)
    g.update(FrameInput(confirm=True), 0.0)
    for t in g.targets:
        t.entity.active = False
    g.update(FrameInput(down=True, right=True), 0.25)
    return g


def test_memory_size_is_fixed():
    assert Game.memory_size() == STATE_DTYPE.itemsize
    assert Game(seed=0).memory.nbytes == Game.memory_size()


def test_adopt_does_not_reinitialize():
    blob = bytearray(Game.memory_size())
    g = Game(seed=0)

    g.adopt(blob)

    # Zeroed memory reads as a stopped game on the start screen
    assert g.scene == Scene.START_SCREEN
    assert not g.running
    assert g.player.score == 0


def test_adopt_writes_through_to_buffer():
    blob = bytearray(Game.memory_size())
    g = Game(seed=0)
    g.adopt(blob)

    g.player.score = 7
    g.targets[3].place((12.0, 34.0), (6.0, 6.0), True)

    view = np.frombuffer(bytes(blob), dtype=STATE_DTYPE)
    assert view["player"]["score"][0] == 7
    slot = view["targets"][0][3]
    assert slot["is_enemy"]
    assert slot["entity"]["active"]
    assert np.array_equal(slot["entity"]["position"], [12.0, 34.0])


def test_adopt_numpy_record():
    record = np.zeros(1, dtype=STATE_DTYPE)
    g = Game(seed=0)
    g.adopt(record)
    g.player.score = 3
    assert record["player"]["score"][0] == 3


def test_snapshot_survives_reload(playing_game):
    blob = bytearray(playing_game.memory.tobytes())

    reloaded = Game.from_memory(blob, seed=99, enemy_chance=0.0)

    assert reloaded.scene == Scene.PLAYING
    assert reloaded.running
    assert np.array_equal(reloaded.player.entity.position, playing_game.player.entity.position)
    assert np.array_equal(reloaded.player.entity.size, playing_game.player.entity.size)
    assert [t.entity.active for t in reloaded.targets] == [t.entity.active for t in playing_game.targets]

    # Reloaded game keeps simulating from where the old one stopped
    before = reloaded.player.entity.position.copy()
    reloaded.update(FrameInput(right=True), 0.1)
    assert reloaded.player.entity.position[0] > before[0]
    # The original copy is untouched
    assert np.array_equal(playing_game.player.entity.position, before)


def test_wrong_size_rejected():
    g = Game(seed=0)
    with pytest.raises(ValueError):
        g.adopt(bytearray(Game.memory_size() - 1))
    with pytest.raises(ValueError):
        Game.from_memory(bytearray(Game.memory_size() + 8))


def test_read_only_buffer_rejected():
    g = Game(seed=0)
    with pytest.raises(ValueError):
        g.adopt(bytes(Game.memory_size()))
