from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_blast.game import BOARD_SIZE, NUM_COLORS, BlockBlastGame, GameConfig, ScoringRules
from block_blast.game.pieces import MAX_PIECE_SIZE


def _compute_action_mask(game: BlockBlastGame) -> np.ndarray:
    k = game.config.pieces_per_set
    mask = np.zeros((k, BOARD_SIZE, BOARD_SIZE), dtype=np.bool_)
    for slot, row, col in game.get_valid_actions():
        if 0 <= slot < k:
            mask[slot, row, col] = True
    return mask


class BlockBlastEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 rules: Optional[ScoringRules] = None,
                 reward_scale: float = 0.01,
                 invalid_action_penalty: float = -0.1,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        # Episodes end on game over, so the session must not reset itself
        config = replace(config or GameConfig(), auto_reset=False)
        self.game = BlockBlastGame(config, rules)
        self.render_mode = render_mode

        self.reward_scale = float(reward_scale)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)

        k = self.game.config.pieces_per_set

        # Observation space: colored grid plus padded stencils of the current set
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=NUM_COLORS, shape=(BOARD_SIZE, BOARD_SIZE), dtype=np.int8),
                "pieces": spaces.Box(low=0, high=1, shape=(k, MAX_PIECE_SIZE, MAX_PIECE_SIZE), dtype=np.int8),
                "colors": spaces.Box(low=0, high=NUM_COLORS, shape=(k,), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )

        # Action: (slot, row, col)
        self.action_space = spaces.MultiDiscrete((k, BOARD_SIZE, BOARD_SIZE))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        k = self.game.config.pieces_per_set
        pieces = np.zeros((k, MAX_PIECE_SIZE, MAX_PIECE_SIZE), dtype=np.int8)
        colors = np.zeros((k,), dtype=np.int8)
        for i, piece in enumerate(self.game.pieces[:k]):
            if piece is None:
                continue
            pieces[i, : piece.rows, : piece.cols] = piece.mask()
            colors[i] = piece.color
        return {
            "grid": self.game.board.astype(np.int8),
            "pieces": pieces,
            "colors": colors,
            "pieces_remaining": self.game.pieces_remaining,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "steps": self.game.step_count,
            "lines_cleared": self.game.total_lines_cleared,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))
        self.game.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        slot, row, col = map(int, action)

        outcome = self.game.place_piece(slot, row, col)

        reward_components: Dict[str, float] = {}
        if outcome.success:
            reward_components["score"] = self.reward_scale * float(outcome.score_gained)
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        terminated = bool(self.game.game_over)
        self._steps += 1
        truncated = self._steps >= self.game.config.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))

        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = float(outcome.score_gained)
        info["lines_cleared_step"] = outcome.lines_cleared
        if outcome.rejection is not None:
            info["rejection"] = outcome.rejection.value
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            from block_blast.visualization.palette import color_for_value

            grid = self.game.board
            cell = 12
            img = np.zeros((BOARD_SIZE * cell, BOARD_SIZE * cell, 3), dtype=np.uint8)
            for y in range(BOARD_SIZE):
                for x in range(BOARD_SIZE):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(grid[y, x]))
            return img
        return None

    def close(self) -> None:
        pass
