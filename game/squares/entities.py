"""
Game entity records

All game state lives in one record of STATE_DTYPE so that a host can hand the
game a block of memory and take it back later. Entity, Target and Player are
thin views over sub-records: reading or writing them touches the underlying
buffer directly.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

POOL_SIZE = 16  # target slots, never resized

ENTITY_DTYPE = np.dtype([
    ("position", "<f8", (2,)),  # top-left corner, world units
    ("size", "<f8", (2,)),      # width, height
    ("active", "?"),
])

TARGET_DTYPE = np.dtype([
    ("entity", ENTITY_DTYPE),
    ("is_enemy", "?"),
])

PLAYER_DTYPE = np.dtype([
    ("entity", ENTITY_DTYPE),
    ("score", "<i8"),
])

STATE_DTYPE = np.dtype([
    ("player", PLAYER_DTYPE),
    ("targets", TARGET_DTYPE, (POOL_SIZE,)),
    ("scene", "u1"),
    ("running", "?"),
])


class Entity:
    """Positioned, sized, activatable square"""

    __slots__ = ("_rec",)

    def __init__(self, record: np.ndarray):
        # record is a shape (1,) array of ENTITY_DTYPE
        self._rec = record

    @classmethod
    def new(cls, position: Sequence[float], size: Sequence[float], active: bool = True) -> "Entity":
        """Create a free-standing entity backed by its own record"""
        entity = cls(np.zeros(1, dtype=ENTITY_DTYPE))
        entity.position = position
        entity.size = size
        entity.active = active
        return entity

    @property
    def position(self) -> np.ndarray:
        return self._rec["position"][0]

    @position.setter
    def position(self, value: Sequence[float]):
        self._rec["position"][0] = value

    @property
    def size(self) -> np.ndarray:
        return self._rec["size"][0]

    @size.setter
    def size(self, value: Sequence[float]):
        self._rec["size"][0] = value

    @property
    def active(self) -> bool:
        return bool(self._rec["active"][0])

    @active.setter
    def active(self, value: bool):
        self._rec["active"][0] = value

    def __repr__(self) -> str:
        x, y = self.position
        w, h = self.size
        return f"Entity(x={x:.1f}, y={y:.1f}, w={w:.1f}, h={h:.1f}, active={self.active})"


class Target:
    """Collectible (or hostile) square living in a pool slot"""

    __slots__ = ("_rec", "entity")

    def __init__(self, record: np.ndarray):
        self._rec = record
        self.entity = Entity(record["entity"])

    @property
    def is_enemy(self) -> bool:
        return bool(self._rec["is_enemy"][0])

    @is_enemy.setter
    def is_enemy(self, value: bool):
        self._rec["is_enemy"][0] = value

    def place(self, position: Sequence[float], size: Sequence[float], is_enemy: bool):
        """Overwrite the slot with a freshly spawned target"""
        self.entity.position = position
        self.entity.size = size
        self.entity.active = True
        self.is_enemy = is_enemy

    def __repr__(self) -> str:
        return f"Target({self.entity!r}, is_enemy={self.is_enemy})"


class Player:
    """The single player square and its score"""

    __slots__ = ("_rec", "entity")

    def __init__(self, record: np.ndarray):
        self._rec = record
        self.entity = Entity(record["entity"])

    @property
    def score(self) -> int:
        return int(self._rec["score"][0])

    @score.setter
    def score(self, value: int):
        assert value >= 0, "score can't go negative"
        self._rec["score"][0] = value

    def __repr__(self) -> str:
        return f"Player({self.entity!r}, score={self.score})"


def allocate_state() -> np.ndarray:
    """Fresh zeroed state record owned by the caller"""
    return np.zeros(1, dtype=STATE_DTYPE)


def bind_state(buffer) -> np.ndarray:
    """
    View an externally owned buffer as a state record, without copying.

    The buffer must be writable and exactly STATE_DTYPE.itemsize bytes.
    """
    if isinstance(buffer, np.ndarray) and buffer.dtype == STATE_DTYPE:
        view = buffer.reshape(-1)
        if view.shape != (1,):
            raise ValueError(f"Expected a single state record, got shape {buffer.shape}")
        if not view.flags.writeable:
            raise ValueError("State buffer must be writable")
        return view

    mem = memoryview(buffer)
    if mem.nbytes != STATE_DTYPE.itemsize:
        raise ValueError(f"State buffer must be {STATE_DTYPE.itemsize} bytes, got {mem.nbytes}")
    if mem.readonly:
        raise ValueError("State buffer must be writable")
    return np.frombuffer(mem.cast("B"), dtype=STATE_DTYPE, count=1)


def count_active(targets: Sequence[Target]) -> int:
    return sum(1 for t in targets if t.entity.active)
