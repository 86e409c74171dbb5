from __future__ import annotations

import argparse
import logging
from typing import Optional

import gymnasium as gym

import tetris_rl.env  # noqa: F401  ensure registration


def run_random(episodes: int = 3, max_steps: int = 5_000, seed: Optional[int] = None) -> None:
    env = gym.make("Tetris-10x20-v0", max_episode_steps=max_steps)
    env.action_space.seed(seed)
    try:
        for episode in range(episodes):
            obs, info = env.reset(seed=None if seed is None else seed + episode)
            total_reward = 0.0
            terminated = truncated = False
            while not (terminated or truncated):
                action = env.action_space.sample()
                obs, reward, terminated, truncated, info = env.step(action)
                total_reward += float(reward)
            print(
                f"episode {episode}: reward {total_reward:.0f}  lines {info['lines']}  "
                f"level {info['level']}  steps {info['steps']}"
            )
    finally:
        env.close()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--episodes", type=int, default=3)
    p.add_argument("--max_steps", type=int, default=5_000)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log_level", type=str, default="WARNING")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    run_random(args.episodes, args.max_steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
