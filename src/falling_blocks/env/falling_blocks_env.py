from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import FallingBlockGame, GameConfig, Intents, NUM_PIECES


def intents_from_action(action) -> Intents:
    left, right, drop, rotate = (bool(int(v)) for v in np.asarray(action).reshape(-1)[:4])
    return Intents(move_left=left, move_right=right, soft_drop=drop, rotate=rotate)


class FallingBlocksEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 20}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 max_episode_steps: int = 10000,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = FallingBlockGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)

        self.reward_weights: Dict[str, float] = {
            "score": 0.01,           # per engine score point
            "lock": 0.1,             # per piece locked
            "holes": 0.5,            # penalize holes created
            "height": 0.1,           # penalize stack height increase
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        h, w = self.game.board.height, self.game.board.width

        # Board: 0 empty, 1 locked, 2 falling piece
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=2, shape=(h, w), dtype=np.int8),
                "next_piece": spaces.Discrete(NUM_PIECES),
                "rotation": spaces.Discrete(4),
            }
        )

        # (move_left, move_right, soft_drop, rotate)
        self.action_space = spaces.MultiBinary(4)

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        active = self.game.active
        return {
            "board": self.game.get_state(),
            "next_piece": int(self.game.next_piece),
            "rotation": int(active.rotation) if active is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "high_score": self.game.high_score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_locked": self.game.pieces_locked,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.begin_episode(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        holes_before = self.game.board.count_holes()
        height_before = self.game.board.get_max_height()
        score_before = self.game.score

        result = self.game.tick(intents_from_action(action))
        self._steps += 1

        reward_components: Dict[str, float] = {
            "score": self.reward_weights["score"] * float(result.score - score_before),
        }
        if result.locked:
            reward_components["lock"] = self.reward_weights["lock"]
            reward_components["holes"] = -self.reward_weights["holes"] * float(
                max(0, self.game.board.count_holes() - holes_before))
            reward_components["height"] = -self.reward_weights["height"] * float(
                max(0, self.game.board.get_max_height() - height_before))

        terminated = bool(result.game_over)
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        if terminated or truncated:
            episode = self.game.end_episode()

        reward = float(sum(reward_components.values()))

        info = self._get_info()
        info["reward_components"] = reward_components
        info["lines_cleared"] = result.lines_cleared
        if terminated or truncated:
            info["new_high_score"] = episode.new_high_score
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.game.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        colors = {0: (30, 30, 36), 1: (70, 200, 120), 2: (230, 230, 230)}
        for y in range(h):
            # Row 0 is the floor, image rows grow downward
            row = h - 1 - y
            for x in range(w):
                img[row * cell : (row + 1) * cell, x * cell : (x + 1) * cell, :] = colors[int(state[y, x])]
        return img

    def close(self) -> None:
        pass
