from __future__ import annotations

from enum import IntEnum
from typing import List, NamedTuple

import numpy as np


class CellKind(IntEnum):
    EMPTY = 0
    FILLED = 1
    CLEARING = 2


class Cell(NamedTuple):
    kind: CellKind
    color: int = 0


EMPTY_CELL = Cell(CellKind.EMPTY)


def decode_cell(value: int) -> Cell:
    value = int(value)
    if value == 0:
        return EMPTY_CELL
    if value > 0:
        return Cell(CellKind.FILLED, value)
    return Cell(CellKind.CLEARING, -value)


def encode_cell(cell: Cell) -> int:
    if cell.kind == CellKind.EMPTY:
        return 0
    if cell.kind == CellKind.FILLED:
        return cell.color
    return -cell.color


def board_cells(board: np.ndarray) -> List[List[Cell]]:
    """Tagged view of a raw board for rendering."""
    return [[decode_cell(v) for v in row] for row in board]
