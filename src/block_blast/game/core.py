from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from . import frames
from .grid import (
    BOARD_SIZE,
    can_place,
    empty_board,
    find_full_lines,
    get_filled_ratio,
    has_any_valid_move,
    place,
    resolve_lines,
    valid_placements,
)
from .pieces import Piece, generate_batch
from .rules import ScoringRules


logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    pieces_per_set: int = 3
    random_seed: Optional[int] = None
    auto_reset: bool = False
    max_episode_steps: int = 10000


class Rejection(Enum):
    GAME_OVER = "game_over"
    BAD_SLOT = "bad_slot"
    EMPTY_SLOT = "empty_slot"
    MALFORMED_PIECE = "malformed_piece"
    INVALID_PLACEMENT = "invalid_placement"


@dataclass
class PlacementOutcome:
    success: bool
    slot: int
    row: int
    col: int
    rejection: Optional[Rejection] = None
    cells_placed: int = 0
    lines_cleared: int = 0
    placed_cells: List[Tuple[int, int]] = field(default_factory=list)
    cleared_rows: List[int] = field(default_factory=list)
    cleared_cols: List[int] = field(default_factory=list)
    score_gained: int = 0
    placed_board: Optional[np.ndarray] = None
    board: Optional[np.ndarray] = None
    refilled: bool = False
    game_over: bool = False
    final_score: int = 0

    @property
    def cleared_cells(self) -> List[Tuple[int, int]]:
        cells = {(r, c) for r in self.cleared_rows for c in range(BOARD_SIZE)}
        cells.update((r, c) for c in self.cleared_cols for r in range(BOARD_SIZE))
        return sorted(cells)

    def keyframes(self) -> List[np.ndarray]:
        if not self.success or self.placed_board is None:
            return []
        return frames.clear_keyframes(self.placed_board, self.cleared_rows, self.cleared_cols)


class BlockBlastGame:
    """8x8 block blast session: board, three-slot piece set and score.

    Every successful `place_piece` runs validate, place, resolve lines,
    score, slot update and terminal check as one transaction. Refused moves
    leave the session untouched.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self._board = empty_board()
        self._pieces: List[Optional[Piece]] = []
        self.score = 0
        self.best_score = 0
        self.games_played = 0
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.step_count = 0
        self.game_over = False
        self.reset()

    # ---------- Observers ----------
    @property
    def board(self) -> np.ndarray:
        return self._board.copy()

    @property
    def pieces(self) -> Tuple[Optional[Piece], ...]:
        return tuple(self._pieces)

    @property
    def pieces_remaining(self) -> int:
        return sum(1 for p in self._pieces if p is not None)

    def get_state(self) -> dict:
        return {
            "grid": self._board.copy(),
            "pieces": tuple(self._pieces),
            "pieces_remaining": self.pieces_remaining,
            "score": self.score,
            "total_lines_cleared": self.total_lines_cleared,
            "total_pieces_placed": self.total_pieces_placed,
            "step_count": self.step_count,
            "game_over": self.game_over,
            "filled_ratio": get_filled_ratio(self._board),
        }

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "best_score": self.best_score,
            "games_played": self.games_played,
            "pieces_placed": self.total_pieces_placed,
            "lines_cleared": self.total_lines_cleared,
            "steps_taken": self.step_count,
            "final_fill_ratio": get_filled_ratio(self._board),
            "avg_score_per_piece": self.score / max(1, self.total_pieces_placed),
        }

    # ---------- Lifecycle ----------
    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        if self.step_count > 0 or self.game_over:
            self.games_played += 1
        self._board = empty_board()
        self.score = 0
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.step_count = 0
        self.game_over = False
        self._refill()
        logger.debug("session reset (games played: %d)", self.games_played)

    def _refill(self) -> None:
        self._pieces = list(generate_batch(self.rng, self.config.pieces_per_set))
        self._check_terminal()

    def _check_terminal(self) -> None:
        if not has_any_valid_move(self._board, self._pieces):
            self.game_over = True
            logger.info("game over: no valid move, score=%d", self.score)

    def can_place_any_piece(self) -> bool:
        return has_any_valid_move(self._board, self._pieces)

    def get_valid_actions(self) -> List[Tuple[int, int, int]]:
        """List of (slot, row, col) placements that would be accepted."""
        actions: List[Tuple[int, int, int]] = []
        if self.game_over:
            return actions
        for slot, piece in enumerate(self._pieces):
            for row, col in valid_placements(self._board, piece):
                actions.append((slot, row, col))
        return actions

    # ---------- Moves ----------
    def _check_move(self, slot: int, row: int, col: int) -> Optional[Rejection]:
        if self.game_over:
            return Rejection.GAME_OVER
        if slot < 0 or slot >= len(self._pieces):
            return Rejection.BAD_SLOT
        piece = self._pieces[slot]
        if piece is None:
            return Rejection.EMPTY_SLOT
        if not isinstance(piece, Piece) or not piece.is_well_formed():
            return Rejection.MALFORMED_PIECE
        if not can_place(self._board, row, col, piece):
            return Rejection.INVALID_PLACEMENT
        return None

    def _evaluate(self, slot: int, row: int, col: int) -> PlacementOutcome:
        rejection = self._check_move(slot, row, col)
        if rejection is not None:
            return PlacementOutcome(success=False, slot=slot, row=row, col=col,
                                    rejection=rejection, final_score=self.score)
        piece: Piece = self._pieces[slot]  # type: ignore[assignment]
        placed_board = place(self._board, row, col, piece)
        cleared_rows, cleared_cols = find_full_lines(placed_board)
        final_board, lines = resolve_lines(placed_board)
        gained = self.rules.score_for_placement(piece.cell_count, lines)
        return PlacementOutcome(
            success=True,
            slot=slot,
            row=row,
            col=col,
            cells_placed=piece.cell_count,
            lines_cleared=lines,
            placed_cells=[(row + i, col + j) for i, j in piece.cells()],
            cleared_rows=cleared_rows,
            cleared_cols=cleared_cols,
            score_gained=gained,
            placed_board=placed_board,
            board=final_board,
            final_score=self.score + gained,
        )

    def simulate_placement(self, slot: int, row: int, col: int) -> PlacementOutcome:
        """Score and clear a hypothetical move without committing it."""
        return self._evaluate(slot, row, col)

    def place_piece(self, slot: int, row: int, col: int) -> PlacementOutcome:
        outcome = self._evaluate(slot, row, col)
        if not outcome.success:
            logger.debug("refused slot=%d at (%d, %d): %s", slot, row, col, outcome.rejection.value)
            return outcome

        self._board = outcome.board.copy()
        self.score += outcome.score_gained
        self.best_score = max(self.best_score, self.score)
        self.total_pieces_placed += 1
        self.total_lines_cleared += outcome.lines_cleared
        self.step_count += 1
        self._pieces[slot] = None

        if all(p is None for p in self._pieces):
            outcome.refilled = True
            logger.debug("piece set exhausted, drawing a new batch")
            self._refill()
        else:
            self._check_terminal()

        outcome.game_over = self.game_over
        outcome.final_score = self.score
        if self.game_over and self.config.auto_reset:
            self.reset()
        return outcome
