from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from bombtris.game import Action, BombtrisGame, GameConfig, SpecialBlock, SpecialConfig
from bombtris.visualization.palette import color_for_value


class BombtrisEnv(gym.Env):
    """One env step is one input command followed by one frame of `frame_time`.

    Reward is the change in engine score. An episode ends when a spawned
    piece tops out (the engine itself wipes the field and keeps going).
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, specials: Optional[SpecialConfig] = None,
                 render_mode: Optional[str] = None, frame_time: float = 0.0,
                 terminal_penalty: float = 0.0, max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.specials = specials
        self.game = BombtrisGame(self.config, specials=self.specials)
        self.render_mode = render_mode
        self.frame_time = float(frame_time)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.config.height, self.config.width
        max_id = int(SpecialBlock.EXTRUDER)
        # Falling piece is overlaid with negative ids
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-max_id, high=max_id, shape=(h, w), dtype=np.int8),
                "bomb_timers": spaces.Box(low=0, high=self.config.bomb_timer, shape=(h, w), dtype=np.int16),
            }
        )
        self.action_space = spaces.Discrete(len(Action))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "grid": self.game.get_state().astype(np.int8),
            "bomb_timers": self.game.grid.clone_timers().astype(np.int16),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "top_outs": self.game.top_outs,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        score_before = self.game.score
        lock_before = self.game.last_lock
        top_outs_before = self.game.top_outs

        self.game.step(int(action))
        if self.frame_time > 0:
            self.game.advance(self.frame_time)
        self._steps += 1

        terminated = self.game.top_outs > top_outs_before
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward = self.terminal_penalty
        else:
            reward = float(self.game.score - score_before)

        info = self._get_info()
        if self.game.last_lock is not lock_before and self.game.last_lock is not None:
            info["lines_cleared"] = self.game.last_lock.lines_cleared
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self.game.get_state()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = color_for_value(grid[y, x])
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
