from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from block_blast.game import PIECE_SHAPES, BlockBlastGame, GameConfig, Piece, ShapeType


def shape_piece(kind: ShapeType, color: int = 1) -> Piece:
    return Piece(shape=PIECE_SHAPES[kind], color=color, kind=kind)


def sparse_board() -> np.ndarray:
    """Filled board with two isolated holes per row and per column.

    Holes sit at (i, i) and (i, (i + 4) % 8); no two holes share an edge, so
    only a single block fits, and filling one hole never completes a line.
    """
    board = np.full((8, 8), 2, dtype=np.int8)
    for i in range(8):
        board[i, i] = 0
        board[i, (i + 4) % 8] = 0
    return board


def rigged_game(board: Optional[np.ndarray] = None,
                pieces: Optional[Sequence[Optional[Piece]]] = None,
                **config) -> BlockBlastGame:
    """Session with a chosen board and piece set in place of the random start."""
    game = BlockBlastGame(GameConfig(random_seed=7, **config))
    if board is not None:
        game._board = board.copy()
    if pieces is not None:
        game._pieces = list(pieces)
    game.game_over = False
    return game
