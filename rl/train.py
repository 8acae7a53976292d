"""
Training script for the invaders environment using Stable-Baselines3
Supports PPO and DQN with per-episode metrics tracking.
"""

import os
import argparse
from typing import Optional

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.invaders import InvadersEnv
from rl.configs.invaders_config import ENV_CONFIG, REWARD_CONFIG, PPO_CONFIG, DQN_CONFIG, TRAINING_CONFIG
from rl.metrics_callback import MetricsCallback

ALGORITHMS = {
    "ppo": (PPO, PPO_CONFIG),
    "dqn": (DQN, DQN_CONFIG),
}


def make_env(render_mode: Optional[str] = None, seed: Optional[int] = None):
    """Factory function to create the environment"""
    def _init():
        env = InvadersEnv(render_mode=render_mode, reward_config=REWARD_CONFIG, **ENV_CONFIG)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def train(
    algo: str = "ppo",
    total_timesteps: Optional[int] = None,
    n_envs: int = 4,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
):
    """Train an agent on the invaders environment"""
    if algo not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm {algo!r}, expected one of {sorted(ALGORITHMS)}")
    model_cls, model_config = ALGORITHMS[algo]

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]
    # DQN learns from a single environment
    if algo == "dqn":
        n_envs = 1

    save_dir = save_dir or os.path.join(TRAINING_CONFIG["model_dir"], algo)
    log_dir = log_dir or os.path.join(TRAINING_CONFIG["log_dir"], algo)
    tensorboard_log = os.path.join(TRAINING_CONFIG["tensorboard_log"], algo)
    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training {algo.upper()} for {total_timesteps:,} timesteps...")
    print(f"Using {n_envs} parallel environment(s)")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=i) for i in range(n_envs)])
    eval_env = DummyVecEnv([make_env(seed=100)])
    if algo == "ppo":
        # Normalize observations and rewards
        env = VecNormalize(env, norm_obs=True, norm_reward=True)
        eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    checkpoint_callback = CheckpointCallback(
        save_freq=max(TRAINING_CONFIG["save_freq"] // n_envs, 1),
        save_path=save_dir,
        name_prefix=f"{algo}_invaders",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=max(TRAINING_CONFIG["eval_freq"] // n_envs, 1),
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(log_dir=log_dir, algo_name=algo, verbose=1)

    model = model_cls(env=env, tensorboard_log=tensorboard_log, **model_config)
    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback],
    )

    final_path = os.path.join(save_dir, f"{algo}_invaders_final")
    model.save(final_path)
    if isinstance(env, VecNormalize):
        env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    print(f"\n{'='*60}")
    print(f"{algo.upper()} Training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Kills: {summary['mean_kills']:.1f}")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")

    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on the invaders environment")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn", "all"],
        help="RL algorithm to use (default: ppo)",
    )
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments for PPO (default: 4)",
    )

    args = parser.parse_args()

    if args.algo == "all":
        print("Training all algorithms sequentially...")
        for algo in ALGORITHMS:
            train(algo, total_timesteps=args.timesteps, n_envs=args.n_envs)
    else:
        train(args.algo, total_timesteps=args.timesteps, n_envs=args.n_envs)


if __name__ == "__main__":
    main()
