"""
Evaluation script for trained RL agents
"""

import argparse
from typing import Optional

import numpy as np

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from game.invaders import InvadersEnv
from rl.configs.invaders_config import ENV_CONFIG, REWARD_CONFIG

MODEL_CLASSES = {"ppo": PPO, "dqn": DQN}


def summarize(name: str, episode_rewards, episode_lengths, episode_kills):
    results = {
        "mean_reward": float(np.mean(episode_rewards)),
        "std_reward": float(np.std(episode_rewards)),
        "mean_length": float(np.mean(episode_lengths)),
        "mean_kills": float(np.mean(episode_kills)),
        "episode_rewards": list(episode_rewards),
    }
    print("\n" + "="*50)
    print(f"{name} ({len(episode_rewards)} episodes):")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Episode Length: {results['mean_length']:.1f}")
    print(f"Mean Kills: {results['mean_kills']:.1f}")
    print("="*50)
    return results


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats (for PPO)
    """
    if algo not in MODEL_CLASSES:
        raise ValueError(f"Unknown algorithm: {algo}")
    model = MODEL_CLASSES[algo].load(model_path)

    render_mode = "human" if render else None
    env = DummyVecEnv([
        lambda: InvadersEnv(render_mode=render_mode, reward_config=REWARD_CONFIG, **ENV_CONFIG)
    ])
    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    episode_rewards, episode_lengths, episode_kills = [], [], []

    for episode in range(n_episodes):
        if seed is not None:
            env.seed(seed + episode)
        obs = env.reset()

        total_reward = 0.0
        steps = 0
        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, info = env.step(action)
            total_reward += float(reward[0])
            steps += 1
            if done[0]:
                break

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_kills.append(info[0].get("enemies_killed", 0.0))

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Length = {steps}")

    env.close()
    return summarize("Evaluation Results", episode_rewards, episode_lengths, episode_kills)


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None):
    """
    Evaluate a random policy baseline
    """
    print("Evaluating random policy baseline...")

    env = InvadersEnv(render_mode=None, reward_config=REWARD_CONFIG, **ENV_CONFIG)
    env.action_space.seed(seed)

    episode_rewards, episode_lengths, episode_kills = [], [], []

    for episode in range(n_episodes):
        env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0
        info = {}
        while not (terminated or truncated):
            action = env.action_space.sample()
            _, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_kills.append(info.get("enemies_killed", 0.0))

    env.close()
    return summarize("Random Policy Results", episode_rewards, episode_lengths, episode_kills)


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained RL agent")
    parser.add_argument("model_path", type=str, help="Path to the trained model")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=sorted(MODEL_CLASSES),
        help="Algorithm used to train the model (default: ppo)",
    )
    parser.add_argument("--n-episodes", type=int, default=10,
                        help="Number of evaluation episodes (default: 10)")
    parser.add_argument("--no-render", action="store_true", help="Disable rendering")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--vec-normalize", type=str, default=None,
                        help="Path to VecNormalize stats file (for PPO)")
    parser.add_argument("--compare-random", action="store_true",
                        help="Also evaluate random policy for comparison")

    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )

    if args.compare_random:
        print("\n")
        random_results = compare_with_random(n_episodes=args.n_episodes, seed=args.seed)
        improvement = results["mean_reward"] - random_results["mean_reward"]
        print(f"\nImprovement over random: {improvement:.2f}")


if __name__ == "__main__":
    main()
