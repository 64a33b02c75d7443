from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import gymnasium as gym

import bombtris.env  # noqa: F401


def run_random(steps: int = 200, seed: Optional[int] = None, frame_time: float = 100.0) -> float:
    env = gym.make("Bombtris-10x20-v0", frame_time=frame_time)
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 1
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
            episodes += 1
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} episode(s)")
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--frame_time", type=float, default=100.0)
    p.add_argument("--log_level", type=str, default="WARNING")
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    run_random(args.steps, args.seed, args.frame_time)


if __name__ == "__main__":  # pragma: no cover
    main()
