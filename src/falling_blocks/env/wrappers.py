from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces


class FlattenIntentActionWrapper(gym.ActionWrapper):
    """Flattens MultiBinary(4) intents -> Discrete(16) for PPO.

    Bit i of the discrete action sets intent i, in the order
    (move_left, move_right, soft_drop, rotate).
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.MultiBinary)
        self.n_intents = int(np.prod(env.action_space.shape))
        self.n = 1 << self.n_intents
        self.action_space = spaces.Discrete(self.n)

    def _unflatten(self, idx: int) -> np.ndarray:
        return np.array([(idx >> bit) & 1 for bit in range(self.n_intents)], dtype=np.int8)

    def action(self, action: int):  # type: ignore[override]
        return self._unflatten(int(action))
