from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, FallingBlockGame, GameConfig, ScoringRules, TetrominoType

# Agent-facing actions; pause and reset stay with the env lifecycle.
ENV_ACTIONS = (
    Action.LEFT,
    Action.RIGHT,
    Action.ROTATE_CW,
    Action.SOFT_DROP,
    Action.HARD_DROP,
    Action.NONE,
)


def _compute_action_mask(game: FallingBlockGame) -> np.ndarray:
    """Boolean mask over ENV_ACTIONS; True where the action would change state."""
    mask = np.zeros((len(ENV_ACTIONS),), dtype=np.bool_)
    if game.current_piece is None or game.game_over:
        mask[ENV_ACTIONS.index(Action.NONE)] = True
        return mask
    mask[ENV_ACTIONS.index(Action.LEFT)] = game.can_move(-1, 0)
    mask[ENV_ACTIONS.index(Action.RIGHT)] = game.can_move(1, 0)
    mask[ENV_ACTIONS.index(Action.ROTATE_CW)] = game.can_rotate()
    # Dropping always does something: it either moves or lands the piece.
    mask[ENV_ACTIONS.index(Action.SOFT_DROP)] = True
    mask[ENV_ACTIONS.index(Action.HARD_DROP)] = True
    mask[ENV_ACTIONS.index(Action.NONE)] = True
    return mask


class FallingBlocksEnv(gym.Env):
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 rules: Optional[ScoringRules] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 gravity: bool = True,
                 terminal_penalty: float = -10.0) -> None:
        super().__init__()
        self.game = FallingBlockGame(config, rules)
        self.render_mode = render_mode
        self.gravity = bool(gravity)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            "score": 0.01,           # reward per engine point
            "lines": 1.0,            # reward per row removed
            "holes": 0.1,            # penalize holes created
            "height": 0.05,          # penalize max height increase
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        height, width = self.game.grid.height, self.game.grid.width
        n_kinds = len(TetrominoType)
        self.observation_space = spaces.Box(low=-n_kinds, high=n_kinds, shape=(height, width), dtype=np.int8)
        self.action_space = spaces.Discrete(len(ENV_ACTIONS))

        self._last_obs: Optional[np.ndarray] = None

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {"action_mask": _compute_action_mask(self.game)}
        info.update(self.game.get_game_stats())
        return info

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.reset()
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        idx = int(action)
        if not 0 <= idx < len(ENV_ACTIONS):
            raise ValueError(f"invalid action {action!r}")

        score_before = self.game.state.score
        lines_before = self.game.state.lines_cleared
        holes_before = self.game.grid.count_holes()
        height_before = self.game.grid.get_max_height()

        self.game.step(ENV_ACTIONS[idx])
        self.game.settle()
        if self.gravity and ENV_ACTIONS[idx] != Action.HARD_DROP:
            self.game.tick()
            self.game.settle()

        score_delta = self.game.state.score - score_before
        lines_delta = self.game.state.lines_cleared - lines_before
        holes_delta = self.game.grid.count_holes() - holes_before
        height_delta = self.game.grid.get_max_height() - height_before

        reward_components: Dict[str, float] = {
            "score": self.reward_weights["score"] * float(score_delta),
            "lines": self.reward_weights["lines"] * float(lines_delta),
            "holes": -self.reward_weights["holes"] * float(max(0, holes_delta)),
            "height": -self.reward_weights["height"] * float(max(0, height_delta)),
        }
        terminated = self.game.game_over
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = score_delta
        self._last_obs = obs
        return obs, reward, terminated, False, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self._last_obs if self._last_obs is not None else self.game.get_state()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    if grid[y, x] > 0:
                        color = (70, 200, 120)
                    elif grid[y, x] < 0:
                        color = (220, 200, 80)
                    else:
                        color = (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        # human rendering delegated to external UI; noop
        return None

    def close(self) -> None:
        pass
