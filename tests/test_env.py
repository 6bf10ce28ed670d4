import unittest

import numpy as np
import gymnasium as gym

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_blocks_env import FallingBlocksEnv, intents_from_action
from falling_blocks.env.wrappers import FlattenIntentActionWrapper
from falling_blocks.game import Intents


class TestFallingBlocksEnv(unittest.TestCase):
    def test_reset_observation(self):
        env = FallingBlocksEnv()
        obs, info = env.reset(seed=3)
        self.assertTrue(env.observation_space.contains(obs))
        self.assertEqual((20, 10), obs["board"].shape)
        self.assertEqual(0, info["score"])

    def test_intents_from_action(self):
        self.assertEqual(Intents(move_left=True, rotate=True), intents_from_action(np.array([1, 0, 0, 1])))
        self.assertEqual(Intents(), intents_from_action([0, 0, 0, 0]))

    def test_soft_drop_until_game_over(self):
        env = gym.make("FallingBlocks-10x20-v0")
        env.reset(seed=0)
        terminated = False
        info = {}
        for _ in range(2000):
            obs, reward, terminated, truncated, info = env.step(np.array([0, 0, 1, 0], dtype=np.int8))
            if terminated:
                break
        self.assertTrue(terminated)
        self.assertGreater(info["pieces_locked"], 0)
        self.assertIn("new_high_score", info)
        env.close()

    def test_truncation(self):
        env = FallingBlocksEnv(max_episode_steps=5)
        env.reset(seed=1)
        for _ in range(5):
            _, _, terminated, truncated, _ = env.step(np.zeros(4, dtype=np.int8))
        self.assertFalse(terminated)
        self.assertTrue(truncated)

    def test_truncation_records_high_score(self):
        env = FallingBlocksEnv(max_episode_steps=3)
        env.reset(seed=1)
        env.game.score = 500
        for _ in range(3):
            _, _, terminated, truncated, info = env.step(np.zeros(4, dtype=np.int8))
        self.assertTrue(truncated)
        self.assertTrue(info["new_high_score"])
        env.reset(seed=1)
        self.assertEqual(500, env.game.high_score)

    def test_render_rgb_array(self):
        env = FallingBlocksEnv(render_mode="rgb_array")
        env.reset(seed=2)
        env.step(np.zeros(4, dtype=np.int8))
        img = env.render()
        self.assertEqual((240, 120, 3), img.shape)


class TestFlattenIntentActionWrapper(unittest.TestCase):
    def test_bits_map_to_intents(self):
        env = FlattenIntentActionWrapper(FallingBlocksEnv())
        self.assertEqual(16, env.action_space.n)
        np.testing.assert_array_equal([1, 0, 1, 0], env.action(5))
        np.testing.assert_array_equal([0, 0, 0, 1], env.action(8))


if __name__ == '__main__':
    unittest.main()
