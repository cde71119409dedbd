from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import PALETTE, Action, GameConfig, GameEngine, Outcome, StepResult, format_grid


class BlockfallEnv(gym.Env):
    """One engine command per step; reward is the score the command earned."""

    metadata = {"render_modes": ["ansi"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 5000,
                 gravity_every: int = 0,
                 reward_scale: float = 1.0) -> None:
        super().__init__()
        self.engine = GameEngine(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.gravity_every = int(gravity_every)
        self.reward_scale = float(reward_scale)

        height = self.engine.grid.height
        width = self.engine.grid.width
        n_colors = len(PALETTE) - 1

        # Locked cells are 1..7, the falling piece is -1..-7
        self.observation_space = spaces.Box(low=-n_colors, high=n_colors, shape=(height, width), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.engine.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        info = self.engine.get_info()
        info["steps"] = self._steps
        info["action_mask"] = self.get_action_mask()
        return info

    def get_action_mask(self) -> np.ndarray:
        mask = np.zeros((self.action_space.n,), dtype=np.bool_)
        for action in self.engine.available_actions():
            mask[int(action)] = True
        return mask

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.engine.reset(seed)
        self.engine.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        if not self.action_space.contains(int(action)):
            raise ValueError(f"invalid action {action!r}")
        score_before = self.engine.score
        result = self.engine.step(Action(int(action)))
        self._steps += 1
        if self.gravity_every > 0 and self._steps % self.gravity_every == 0 and not self.engine.game_over:
            gravity = self.engine.soft_drop()
            if gravity.outcome is not Outcome.OK:
                # Keep what the command itself cleared and scored
                result = StepResult(gravity.outcome, result.lines_cleared + gravity.lines_cleared,
                                    result.points + gravity.points)

        reward = float(self.engine.score - score_before) * self.reward_scale
        terminated = bool(self.engine.game_over)
        truncated = self._steps >= self.max_episode_steps

        info = self._get_info()
        info["outcome"] = result.outcome.value
        info["lines_cleared"] = result.lines_cleared
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[str]:
        if self.render_mode == "ansi":
            return format_grid(self.engine.get_state())
        return None

    def close(self) -> None:
        pass
