from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import numpy as np

from .errors import InvalidPlacement
from .pieces import Piece


BOARD_SIZE = 8

Coordinate = Tuple[int, int]


def empty_board() -> np.ndarray:
    """8x8 board: 0 is empty, 1..6 a filled color, negative a clearing marker."""
    return np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)


def can_place(board: np.ndarray, row: int, col: int, piece: Optional[Piece]) -> bool:
    """Check whether `piece` fits with its top-left corner at (row, col).

    Fails closed on a missing or malformed piece. Any nonzero board value,
    including negative clearing markers, counts as occupied.
    """
    if not isinstance(piece, Piece) or not piece.is_well_formed():
        return False
    if row < 0 or col < 0:
        return False
    if row + piece.rows > BOARD_SIZE or col + piece.cols > BOARD_SIZE:
        return False
    for i, j in piece.cells():
        if board[row + i, col + j] != 0:
            return False
    return True


def place(board: np.ndarray, row: int, col: int, piece: Piece) -> np.ndarray:
    """Return a copy of `board` with the piece color written into its cells."""
    if not can_place(board, row, col, piece):
        raise InvalidPlacement(row, col)
    new_board = board.copy()
    for i, j in piece.cells():
        new_board[row + i, col + j] = piece.color
    return new_board


def find_full_lines(board: np.ndarray) -> Tuple[List[int], List[int]]:
    """Indices of full rows and full columns, detected on the same board."""
    occupied = board != 0
    rows = [int(r) for r in np.flatnonzero(np.all(occupied, axis=1))]
    cols = [int(c) for c in np.flatnonzero(np.all(occupied, axis=0))]
    return rows, cols


def clear_lines(board: np.ndarray, rows: Iterable[int], cols: Iterable[int]) -> np.ndarray:
    new_board = board.copy()
    for r in rows:
        new_board[r, :] = 0
    for c in cols:
        new_board[:, c] = 0
    return new_board


def resolve_lines(board: np.ndarray) -> Tuple[np.ndarray, int]:
    """Clear every full row and column at once.

    An intersection cell is cleared once, but its row and its column each
    count toward the returned line count.
    """
    rows, cols = find_full_lines(board)
    if not rows and not cols:
        return board.copy(), 0
    return clear_lines(board, rows, cols), len(rows) + len(cols)


def valid_placements(board: np.ndarray, piece: Optional[Piece]) -> List[Coordinate]:
    """All (row, col) origins where `piece` fits, row-major."""
    if not isinstance(piece, Piece) or not piece.is_well_formed():
        return []
    positions: List[Coordinate] = []
    for row in range(BOARD_SIZE - piece.rows + 1):
        for col in range(BOARD_SIZE - piece.cols + 1):
            if can_place(board, row, col, piece):
                positions.append((row, col))
    return positions


def has_any_valid_move(board: np.ndarray, pieces: Iterable[Optional[Piece]]) -> bool:
    for piece in pieces:
        if not isinstance(piece, Piece) or not piece.is_well_formed():
            continue
        for row in range(BOARD_SIZE - piece.rows + 1):
            for col in range(BOARD_SIZE - piece.cols + 1):
                if can_place(board, row, col, piece):
                    return True
    return False


def get_filled_ratio(board: np.ndarray) -> float:
    return float(np.count_nonzero(board)) / float(board.size)
