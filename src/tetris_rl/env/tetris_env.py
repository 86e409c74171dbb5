from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_rl.game import Action, GameConfig, GameEvent, GameState, ScoringRules, TetrisGame
from tetris_rl.game.pieces import COLORS, color_of, hex_to_rgb


def _kind_index(kind) -> int:
    # 0 means "none"; piece kinds are 1..7
    return 0 if kind is None else int(kind)


class TetrisEnv(gym.Env):
    """Frame-stepped Tetris with one discrete input per frame.

    Each step applies an :class:`Action` and then advances the session by one
    frame of game time, so gravity, lock delay and line-clear animation run
    exactly as they do for a human player. The reward is the score gained.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 20_000,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.game = TetrisGame(config, rules)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)

        h = self.game.config.height
        w = self.game.config.width
        n_kinds = len(COLORS)

        # Locked cells hold 1..7; the falling piece is overlaid as -1..-7
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-n_kinds, high=n_kinds, shape=(h, w), dtype=np.int8),
                "next": spaces.Discrete(n_kinds + 1),
                "hold": spaces.Discrete(n_kinds + 1),
                "can_hold": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0
        self._events: Dict[str, int] = {}
        self.game.events.subscribe(self._count_event)

    def _count_event(self, event: GameEvent, **payload: Any) -> None:
        self._events[event.value] = self._events.get(event.value, 0) + 1

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "grid": self.game.get_state().astype(np.int8),
            "next": _kind_index(self.game.next_kind),
            "hold": _kind_index(self.game.hold_kind),
            "can_hold": int(self.game.can_hold),
        }

    def _get_info(self) -> Dict[str, Any]:
        info = self.game.get_game_stats()
        info["steps"] = self._steps
        info["events"] = dict(self._events)
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset()
        if seed is not None:
            self.game.bag.reset(seed)
        start_level = (options or {}).get("start_level")
        self.game.start(start_level)
        self._steps = 0
        self._events = {}
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        if self.game.state == GameState.MENU:
            raise RuntimeError("call reset() before step()")
        before = self.game.score
        self.game.apply(Action(int(action)))
        self.game.tick(self.game.config.frame_ms)
        self._steps += 1

        reward = float(self.game.score - before)
        terminated = self.game.state == GameState.GAMEOVER
        truncated = not terminated and self._steps >= self.max_episode_steps
        if terminated:
            reward += self.terminal_penalty
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self.game.get_state()
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(grid[y, x])
                color = hex_to_rgb(color_of(abs(v))) if v else (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        # Dim the falling piece so it stands apart from locked cells
        overlay = np.kron((grid < 0).astype(np.uint8), np.ones((cell, cell), dtype=np.uint8)).astype(bool)
        img[overlay] = (img[overlay] * 0.7).astype(np.uint8)
        return img

    def close(self) -> None:
        pass
