"""
InvadersEnv - the invaders simulation as a Gymnasium environment
----------------------------------------------------------------
- Wraps one Game; actions become key events, each step is one tick
- Discrete action space: idle, hold left, hold right, fire
- Vector observation: player state + K lowest enemies + M nearest power-ups
- Episode terminates when the loss reset fires
- rgb_array frames rasterized from the draw commands with numpy,
  human mode through the arcade window

Quick test:
    python -m game.invaders.invaders_env
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .engine import Game, count_grounded_enemies
from .entities import Key, PowerUpType
from .render import draw, rasterize
from .utils import clamp, seed_everything

# Discrete actions
IDLE, LEFT, RIGHT, FIRE = 0, 1, 2, 3

DEFAULT_REWARD_CONFIG = {
    "R_KILL": 1.0,      # enemy destroyed
    "R_PICKUP": 0.5,    # power-up collected
    "R_SHOT": 0.01,     # penalty per bullet fired
    "R_TIME": 0.001,    # small time penalty
    "R_RESET": 5.0,     # too many enemies reached the ground
}


class InvadersEnv(gym.Env):
    """Invaders simulation exposed through the Gymnasium API"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 800,
        dt: float = 1 / 60,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 5,
        m_power_ups: int = 2,
        reward_config: Optional[Dict[str, float]] = None,
        game_config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode!r}")
        self.render_mode = render_mode

        self.width = width
        self.height = height
        self.dt = dt
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.m_power_ups = m_power_ups

        self.reward_config = dict(DEFAULT_REWARD_CONFIG)
        if reward_config:
            self.reward_config.update(reward_config)
        self.game_config = dict(game_config or {})

        self.action_space = spaces.Discrete(4)

        # Player: x(1) effect one-hot(2) effect time(1) spawn timer(1) grounded(1)
        # Each enemy: rel pos(2)
        # Each power-up: rel pos(2)
        obs_dim = 6 + (self.k_enemies * 2) + (self.m_power_ups * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self.game: Game = None  # type: ignore
        self._step_count = 0
        self._totals: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self._step_count = 0
        self._totals = {"shots": 0.0, "kills": 0.0, "pickups": 0.0, "resets": 0.0}
        self.game = Game(self.width, self.height, rng=self.np_random, **self.game_config)
        if self._window is not None:
            self._window.game = self.game

        return self._get_obs(), self._get_info()

    def step(self, action):
        self._apply_action(int(action))
        events = self.game.update(self.dt)
        for name, value in events.items():
            self._totals[name] += value

        reward = self._compute_reward(events)
        terminated = events["resets"] > 0
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _apply_action(self, action: int):
        held = self.game.state.key_state
        if action == IDLE:
            if held is not None:
                self.game.key_released(held)
        elif action == LEFT:
            if held != Key.LEFT:
                self.game.key_pressed(Key.LEFT)
        elif action == RIGHT:
            if held != Key.RIGHT:
                self.game.key_pressed(Key.RIGHT)
        elif action == FIRE:
            # Every fire action is a fresh press
            if held is not None:
                self.game.key_released(held)
            self.game.key_pressed(Key.SPACE)
        else:
            raise ValueError(f"Invalid action: {action}")

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        state = self.game.state
        cfg = self.game.config
        px, py = state.player.x, state.player.y

        obs_parts = [
            clamp((px / self.width) * 2 - 1, -1, 1),
            1.0 if state.power_up_active == PowerUpType.SPEED_BOOST else 0.0,
            1.0 if state.power_up_active == PowerUpType.TRIPLE_SHOT else 0.0,
            clamp(state.power_up_active_timer / cfg["boost_time"], 0, 1),
            clamp(state.enemy_spawn_timer / cfg["enemy_spawn_interval"], 0, 1),
            clamp(count_grounded_enemies(state, cfg) / cfg["max_enemies_on_ground"], 0, 1),
        ]

        # Enemies closest to the ground first
        enemies_sorted = sorted(state.enemies, key=lambda e: -e.y)
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.x - px) / self.width, -1, 1),
                    clamp((e.y - py) / self.height, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0]

        power_ups_sorted = sorted(
            state.power_ups,
            key=lambda p: (p.x - px) ** 2 + (p.y - py) ** 2
        )
        for i in range(self.m_power_ups):
            if i < len(power_ups_sorted):
                p = power_ups_sorted[i]
                obs_parts += [
                    clamp((p.x - px) / self.width, -1, 1),
                    clamp((p.y - py) / self.height, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, events: Dict[str, float]) -> float:
        rc = self.reward_config
        reward = 0.0
        reward += rc["R_KILL"] * events.get("kills", 0.0)
        reward += rc["R_PICKUP"] * events.get("pickups", 0.0)
        reward -= rc["R_SHOT"] * events.get("shots", 0.0)
        reward -= rc["R_TIME"]
        if events.get("resets", 0.0) > 0:
            reward -= rc["R_RESET"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        state = self.game.state
        active = state.power_up_active.name if state.power_up_active else None
        return {
            "num_enemies": len(state.enemies),
            "num_bullets": len(state.bullets),
            "num_power_ups": len(state.power_ups),
            "power_up_active": active,
            "enemies_killed": self._totals["kills"],
            "power_ups_collected": self._totals["pickups"],
            "shots_fired": self._totals["shots"],
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return rasterize(draw(self.game.state), self.width, self.height)

        if self._window is None:
            # Imported here so headless use never needs a display
            from .window import InvadersWindow
            self._window = InvadersWindow(self.game)

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
    """Run a random episode for testing"""
    env = InvadersEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... Press ESC or close window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f} "
          f"(kills: {info['enemies_killed']:.0f}, steps: {info['step']})")

    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
