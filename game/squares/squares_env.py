"""
SquaresEnv - the square collector game as an RL environment
-----------------------------------------------------------
- Arcade for rendering (same window the human player uses)
- Gymnasium API
- 1 agent square that moves in 8 directions
- Gold targets for reward, red enemies end the episode
- Vector observation: player state + every slot of the 16-target pool
- MultiDiscrete action space: [vertical(3), horizontal(3)]

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.squares.squares_env
"""

from __future__ import annotations

import time
from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .camera import Camera2D
from .entities import POOL_SIZE, count_active
from .game_state import FrameInput, Game, PLAYER_SPEED
from .scenes import Scene
from .spawner import ENEMY_CHANCE, TARGET_MAX_SIZE
from .utils import clamp

DEFAULT_REWARDS = {
    "R_TARGET": 1.0,   # per collected target
    "R_DEATH": 5.0,    # touching an enemy
    "R_TIME": 0.001,   # per step
}


class SquaresEnv(gym.Env):
    """Square collector environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        zoom: float = 1.0,
        dt: float = 1 / 30,
        max_steps: int = 1800,  # 60s at 30 FPS
        player_speed: float = PLAYER_SPEED,
        enemy_chance: float = ENEMY_CHANCE,
        rewards: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode

        self.width = width
        self.height = height
        self.zoom = zoom
        self.dt = dt
        self.max_steps = max_steps
        self.player_speed = player_speed
        self.enemy_chance = enemy_chance
        self.rewards = dict(DEFAULT_REWARDS, **(rewards or {}))

        # Action space:
        # vertical: 0 none, 1 up, 2 down
        # horizontal: 0 none, 1 left, 2 right
        self.action_space = spaces.MultiDiscrete([3, 3])

        # Observation space (vector)
        # Player: pos(2) size(1)
        # Each slot: active(1) enemy(1) rel pos(2) size(1)
        obs_dim = 3 + POOL_SIZE * 5
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.game: Optional[Game] = None
        self._window = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        if self.game is None:
            self.game = Game(
                width=self.width,
                height=self.height,
                camera=Camera2D(zoom=self.zoom),
                player_speed=self.player_speed,
                enemy_chance=self.enemy_chance,
                rng=self.np_random,
            )
        else:
            # np_random is replaced when a new seed is given
            self.game.rng = self.np_random
            self.game.reset()

        self._step_count = 0

        # Skip the start screen
        self.game.update(FrameInput(confirm=True), 0.0)

        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self.game is not None, "Call reset() before step()"

        vertical, horizontal = int(action[0]), int(action[1])
        frame_input = FrameInput(
            up=vertical == 1,
            down=vertical == 2,
            left=horizontal == 1,
            right=horizontal == 2,
        )

        score_before = self.game.player.score
        scene = self.game.update(frame_input, self.dt)
        collected = self.game.player.score - score_before

        terminated = scene != Scene.PLAYING
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        reward = self.rewards["R_TARGET"] * collected - self.rewards["R_TIME"]
        if terminated:
            reward -= self.rewards["R_DEATH"]

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        camera = self.game.camera
        player = self.game.player.entity
        px, py = camera.world_to_screen(player.position)

        obs_parts = [
            clamp(px / self.width * 2 - 1, -1, 1),
            clamp(py / self.height * 2 - 1, -1, 1),
            clamp(player.size[0] * camera.zoom / self.height, -1, 1),
        ]

        for t in self.game.targets:
            if not t.entity.active:
                obs_parts += [0.0, 0.0, 0.0, 0.0, 0.0]
                continue
            tx, ty = camera.world_to_screen(t.entity.position)
            obs_parts += [
                1.0,
                1.0 if t.is_enemy else -1.0,
                clamp((tx - px) / self.width, -1, 1),
                clamp((ty - py) / self.height, -1, 1),
                clamp(t.entity.size[0] / TARGET_MAX_SIZE, -1, 1),
            ]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.player.score,
            "scene": self.game.scene.name,
            "num_targets": count_active(self.game.targets),
            "num_enemies": sum(1 for t in self.game.active_targets() if t.is_enemy),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import SquaresWindow
            self._window = SquaresWindow(self.game, title="SquaresEnv - Arcade")

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42) -> float:
    """Run a random episode and return its total reward"""
    env = SquaresEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render:
            time.sleep(env.dt)

    print(f"Random episode return: {total:.2f} (score {info['score']}, {info['step']} steps)")

    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
