"""
Custom callback for tracking task-specific metrics during training.
Records: enemies killed, power-ups collected, shots fired per episode.
"""

import os
import csv
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback


class MetricsCallback(BaseCallback):
    """
    Callback to track and log task-specific metrics per episode.
    Saves to CSV for easy plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        # Episode tracking
        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_kills: List[float] = []
        self.episode_pickups: List[float] = []
        self.episode_shots: List[float] = []

        # CSV file
        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        """Initialize CSV file for logging."""
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow([
            "timestep", "episode", "reward", "length", "kills", "pickups", "shots"
        ])
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        """Called after each step."""
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor wrapper adds episode info on the final step
            if not (done and "episode" in info):
                continue
            self.record_episode(info)

        return True

    def record_episode(self, info: Dict[str, Any]):
        ep_info = info["episode"]
        ep_reward = float(ep_info["r"])
        ep_length = int(ep_info["l"])
        kills = info.get("enemies_killed", 0)
        pickups = info.get("power_ups_collected", 0)
        shots = info.get("shots_fired", 0)

        self.episode_rewards.append(ep_reward)
        self.episode_lengths.append(ep_length)
        self.episode_kills.append(kills)
        self.episode_pickups.append(pickups)
        self.episode_shots.append(shots)

        if self.csv_writer:
            self.csv_writer.writerow([
                self.num_timesteps,
                len(self.episode_rewards),
                ep_reward,
                ep_length,
                kills,
                pickups,
                shots,
            ])
            self.csv_file.flush()

        if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
            avg_reward = sum(self.episode_rewards[-10:]) / 10
            print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                  f"Timestep {self.num_timesteps}, "
                  f"Avg Reward (10 ep): {avg_reward:.2f}")

        if self.logger:
            self.logger.record("custom/episode_kills", kills)
            self.logger.record("custom/episode_pickups", pickups)

    def _on_training_end(self) -> None:
        """Cleanup CSV file."""
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics."""
        if not self.episode_rewards:
            return {}

        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "total_episodes": len(self.episode_rewards),
            "mean_kills": np.mean(self.episode_kills),
            "mean_pickups": np.mean(self.episode_pickups),
        }
