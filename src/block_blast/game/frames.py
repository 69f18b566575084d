"""Keyframe boards for presentation playback.

The engine commits its final state at once; these helpers describe the
intermediate boards a frontend may show on its own clock. Negative values
mark cells that are being cleared.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np


def mark_lines(board: np.ndarray, rows: Iterable[int], cols: Iterable[int]) -> np.ndarray:
    marked = board.copy()
    for r in rows:
        marked[r, :] = -np.abs(marked[r, :])
    for c in cols:
        marked[:, c] = -np.abs(marked[:, c])
    return marked


def clear_keyframes(placed_board: np.ndarray, rows: Iterable[int], cols: Iterable[int]) -> List[np.ndarray]:
    rows = list(rows)
    cols = list(cols)
    if not rows and not cols:
        return [placed_board.copy()]
    marked = mark_lines(placed_board, rows, cols)
    final = marked.copy()
    for r in rows:
        final[r, :] = 0
    for c in cols:
        final[:, c] = 0
    return [placed_board.copy(), marked, final]


def explosion_keyframes(board: np.ndarray) -> List[np.ndarray]:
    """Game-over effect: every occupied cell flashes, then the board empties."""
    marked = -np.abs(board)
    return [board.copy(), marked, np.zeros_like(board)]


def changed_cells(before: np.ndarray, after: np.ndarray) -> List[Tuple[int, int]]:
    return [(int(r), int(c)) for r, c in np.argwhere(before != after)]
