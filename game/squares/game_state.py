"""
Game - the square collector state machine
-----------------------------------------
- Player square moves with normalized 4-way input (100 units/s)
- Non-enemy targets add score; the player grows every 5 points
- Touching an enemy ends the run
- Fixed pool of 16 target slots, reused forever

One Game owns one state record (see entities.STATE_DTYPE). A host that wants
to swap code at runtime can read `memory`, keep the buffer alive, and hand it
to `Game.from_memory` / `adopt` on the other side.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .camera import Camera2D
from .entities import POOL_SIZE, STATE_DTYPE, Player, Target, allocate_state, bind_state, count_active
from .scenes import Event, Scene, transition
from .spawner import ENEMY_CHANCE, spawn_target
from .utils import collides, movement_vector

PLAYER_SPEED = 100.0  # world units per second
PLAYER_START_SIZE = 20.0
GROWTH_EVERY = 5  # score points per growth step
GROWTH_STEP = 2.0


@dataclass
class FrameInput:
    """Input sampled once per frame; confirm/quit are press edges"""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    confirm: bool = False
    quit: bool = False

    def movement(self) -> np.ndarray:
        return movement_vector(self.up, self.down, self.left, self.right)


class Game:
    """Player, target pool and scene, driven one frame at a time"""

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        camera: Optional[Camera2D] = None,
        player_speed: float = PLAYER_SPEED,
        enemy_chance: float = ENEMY_CHANCE,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        memory=None,
        verbose: int = 0,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Screen size must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.camera = camera if camera is not None else Camera2D()
        self.player_speed = player_speed
        self.enemy_chance = enemy_chance
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.verbose = verbose

        self._on_enter: Dict[Scene, Callable[[], None]] = {
            Scene.PLAYING: self._start_run,
        }
        self._scene_updates: Dict[Scene, Callable[[FrameInput, float], None]] = {
            Scene.PLAYING: self._update_playing,
        }

        if memory is None:
            self._bind(allocate_state())
            self.reset()
        else:
            # Adopted state is live; don't reinitialize it
            self._bind(bind_state(memory))

    @classmethod
    def from_memory(cls, memory, **kwargs) -> "Game":
        """Build a Game over an existing state buffer"""
        return cls(memory=memory, **kwargs)

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def reset(self):
        """Back to the start screen with an empty pool"""
        self.scene = Scene.START_SCREEN
        self.running = True
        self._reset_player()
        self.player.score = 0
        for t in self.targets:
            t.entity.active = False
            t.is_enemy = False

    def shutdown(self):
        self.running = False
        if self.verbose > 0:
            print(f"[Game] Shutdown with score {self.player.score}")

    # ----------------------------
    # Hot-reload boundary
    # ----------------------------

    @staticmethod
    def memory_size() -> int:
        return STATE_DTYPE.itemsize

    @property
    def memory(self) -> np.ndarray:
        """The state record this game reads and writes"""
        return self._state

    def adopt(self, memory):
        """Rebind to a caller-owned buffer without copying or resetting it"""
        self._bind(bind_state(memory))

    def _bind(self, state: np.ndarray):
        self._state = state
        self.player = Player(state["player"])
        pool = state["targets"][0]
        self.targets: Tuple[Target, ...] = tuple(Target(pool[i:i + 1]) for i in range(POOL_SIZE))

    # ----------------------------
    # State accessors
    # ----------------------------

    @property
    def scene(self) -> Scene:
        return Scene(int(self._state["scene"][0]))

    @scene.setter
    def scene(self, value: Scene):
        self._state["scene"][0] = int(value)

    @property
    def running(self) -> bool:
        return bool(self._state["running"][0])

    @running.setter
    def running(self, value: bool):
        self._state["running"][0] = value

    @property
    def bounds(self) -> Tuple[float, float]:
        return float(self.width), float(self.height)

    def active_targets(self):
        return [t for t in self.targets if t.entity.active]

    # ----------------------------
    # Frame update
    # ----------------------------

    def update(self, frame_input: FrameInput, dt: float) -> Scene:
        """Run exactly one frame tick and return the resulting scene"""
        if frame_input.quit:
            self.running = False
            return self.scene

        if frame_input.confirm and self._dispatch(Event.CONFIRM):
            return self.scene

        step = self._scene_updates.get(self.scene)
        if step is not None:
            step(frame_input, dt)
        return self.scene

    def spawn(self) -> bool:
        """Spawn a target into the pool; False when the pool is full"""
        spawned = spawn_target(self.targets, self.bounds, self.camera, self.rng, self.enemy_chance)
        if not spawned and self.verbose > 0:
            print(f"[Game] Target pool full ({POOL_SIZE} active), skipping spawn")
        return spawned

    def _dispatch(self, event: Event) -> bool:
        current = self.scene
        nxt = transition(current, event)
        if nxt == current:
            return False

        self.scene = nxt
        if self.verbose > 0:
            print(f"[Game] {current.name} -> {nxt.name} ({event.value}), score {self.player.score}")

        on_enter = self._on_enter.get(nxt)
        if on_enter is not None:
            on_enter()
        return True

    def _reset_player(self):
        size = PLAYER_START_SIZE
        center = self.camera.screen_to_world((self.width * 0.5, self.height * 0.5))
        self.player.entity.position = center - size * 0.5
        self.player.entity.size = (size, size)
        self.player.entity.active = True

    def _start_run(self):
        self.player.score = 0
        self._reset_player()
        for t in self.targets:
            t.entity.active = False
        self.spawn()

    def _update_playing(self, frame_input: FrameInput, dt: float):
        direction = frame_input.movement()
        self.player.entity.position += direction * self.player_speed * dt

        for t in self.targets:
            if not t.entity.active:
                continue
            if not collides(self.player.entity, t.entity):
                continue

            if t.is_enemy:
                self._dispatch(Event.ENEMY_HIT)
                return

            self._collect(t)

    def _collect(self, target: Target):
        target.entity.active = False
        self.player.score += 1
        if self.player.score % GROWTH_EVERY == 0:
            self.player.entity.size += GROWTH_STEP
        self.spawn()

    def __repr__(self) -> str:
        return (f"Game(scene={self.scene.name}, score={self.player.score}, "
                f"targets={count_active(self.targets)}/{POOL_SIZE}, running={self.running})")
