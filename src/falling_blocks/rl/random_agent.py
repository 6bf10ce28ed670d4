from __future__ import annotations

import argparse
import logging

import gymnasium as gym

import falling_blocks.env  # noqa: F401  ensure registration


logger = logging.getLogger(__name__)


def run_random(steps: int = 2000, seed: int | None = None) -> float:
    env = gym.make("FallingBlocks-10x20-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("episode %d: score %d, lines %d, pieces %d", episodes, info["score"],
                        info["lines_cleared_total"], info["pieces_locked"])
            obs, info = env.reset()
    env.close()
    logger.info("random agent total reward: %.2f over %d finished episode(s)", total_reward, episodes)
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", type=str, default="INFO")
    args = p.parse_args()
    log_format = '%(asctime)s %(levelname)s <%(name)s.%(funcName)s> %(message)s'
    logging.basicConfig(level=args.log_level.upper(), format=log_format)
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
