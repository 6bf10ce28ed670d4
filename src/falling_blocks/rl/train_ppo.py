from __future__ import annotations

import argparse
import logging
import os

import gymnasium as gym

# Ensure envs are registered
import falling_blocks.env  # noqa: F401
from falling_blocks.env.wrappers import FlattenIntentActionWrapper


logger = logging.getLogger(__name__)


def make_env(seed: int | None = None, max_episode_steps: int = 5000) -> gym.Env:
    env = gym.make("FallingBlocks-10x20-v0", max_episode_steps=max_episode_steps)
    # PPO's MultiInputPolicy handles Discrete actions; flatten the intent bits
    env = FlattenIntentActionWrapper(env)
    if seed is not None:
        env.reset(seed=seed)
    return env


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--timesteps", type=int, default=500_000)
    p.add_argument("--logdir", type=str, default="./logs/ppo")
    p.add_argument("--save_path", type=str, default="./models/ppo_falling_blocks.zip")
    p.add_argument("--n_envs", type=int, default=4)
    p.add_argument("--max_episode_steps", type=int, default=5000)
    p.add_argument("--log-level", type=str, default="INFO")
    return p


def main() -> None:
    args = build_parser().parse_args()
    log_format = '%(asctime)s %(levelname)s <%(name)s.%(funcName)s> %(message)s'
    logging.basicConfig(level=args.log_level.upper(), format=log_format)

    from stable_baselines3 import PPO
    from stable_baselines3.common.vec_env import SubprocVecEnv, VecMonitor

    def make_env_idx(i: int):
        def thunk():
            return make_env(seed=i, max_episode_steps=args.max_episode_steps)
        return thunk

    vec_env = SubprocVecEnv([make_env_idx(i) for i in range(args.n_envs)])
    vec_env = VecMonitor(vec_env)
    model = PPO(
        policy="MultiInputPolicy",
        env=vec_env,
        verbose=1,
        tensorboard_log=args.logdir,
    )

    logger.info("training for %d timesteps on %d env(s)", args.timesteps, args.n_envs)
    os.makedirs(os.path.dirname(args.save_path), exist_ok=True)
    model.learn(total_timesteps=args.timesteps)
    model.save(args.save_path)
    logger.info("model saved to %s", args.save_path)


if __name__ == "__main__":  # pragma: no cover
    main()
