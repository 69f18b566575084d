from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .errors import MalformedPiece


NUM_COLORS = 6

Stencil = Tuple[Tuple[int, ...], ...]


class ShapeType(IntEnum):
    SINGLE = 0
    DOMINO_H = 1
    DOMINO_V = 2
    SQUARE_2 = 3
    DIAG2_DOWN = 4
    DIAG2_UP = 5
    CORNER_TL = 6
    CORNER_TR = 7
    CORNER_BL = 8
    CORNER_BR = 9
    LINE3_V = 10
    LINE3_H = 11
    DIAG3_DOWN = 12
    DIAG3_UP = 13
    RECT_2X3 = 14
    SQUARE_3 = 15
    Z = 16
    S = 17


PIECE_SHAPES = {
    ShapeType.SINGLE: ((1,),),
    ShapeType.DOMINO_H: ((1, 1),),
    ShapeType.DOMINO_V: ((1,), (1,)),
    ShapeType.SQUARE_2: ((1, 1), (1, 1)),
    ShapeType.DIAG2_DOWN: ((1, 0), (0, 1)),
    ShapeType.DIAG2_UP: ((0, 1), (1, 0)),
    ShapeType.CORNER_TL: ((1, 1), (1, 0)),
    ShapeType.CORNER_TR: ((1, 1), (0, 1)),
    ShapeType.CORNER_BL: ((1, 0), (1, 1)),
    ShapeType.CORNER_BR: ((0, 1), (1, 1)),
    ShapeType.LINE3_V: ((1,), (1,), (1,)),
    ShapeType.LINE3_H: ((1, 1, 1),),
    ShapeType.DIAG3_DOWN: ((1, 0, 0), (0, 1, 0), (0, 0, 1)),
    ShapeType.DIAG3_UP: ((0, 0, 1), (0, 1, 0), (1, 0, 0)),
    ShapeType.RECT_2X3: ((1, 1, 1), (1, 1, 1)),
    ShapeType.SQUARE_3: ((1, 1, 1), (1, 1, 1), (1, 1, 1)),
    ShapeType.Z: ((1, 1, 0), (0, 1, 1)),
    ShapeType.S: ((0, 1, 1), (1, 1, 0)),
}

# Largest stencil extent in the catalog (3x3)
MAX_PIECE_SIZE = 3

_default_rng = random.Random()


def _stencil_ok(shape) -> bool:
    try:
        rows = [tuple(row) for row in shape]
    except TypeError:
        return False
    if len(rows) == 0:
        return False
    width = len(rows[0])
    if width == 0:
        return False
    for row in rows:
        if len(row) != width:
            return False
        for cell in row:
            try:
                if cell not in (0, 1):
                    return False
            except ValueError:
                # nested array cell
                return False
    return True


@dataclass(frozen=True)
class Piece:
    """A polyomino stencil plus the color shared by all of its filled cells.

    `shape` is a tuple of rows of 0/1 values. The bounding box need not be
    filled on every border (diagonals, corners).
    """

    shape: Stencil
    color: int
    kind: Optional[ShapeType] = None

    @property
    def rows(self) -> int:
        return len(self.shape)

    @property
    def cols(self) -> int:
        return len(self.shape[0]) if len(self.shape) else 0

    @property
    def cell_count(self) -> int:
        return sum(1 for row in self.shape for cell in row if cell == 1)

    def is_well_formed(self) -> bool:
        if isinstance(self.color, bool) or not isinstance(self.color, (int, np.integer)):
            return False
        return _stencil_ok(self.shape) and 1 <= self.color <= NUM_COLORS

    def mask(self) -> np.ndarray:
        return np.array(self.shape, dtype=np.int8)

    def cells(self) -> List[Tuple[int, int]]:
        """Offsets (i, j) of filled cells, row-major."""
        return [
            (i, j)
            for i, row in enumerate(self.shape)
            for j, cell in enumerate(row)
            if cell == 1
        ]

    def anchor_offset(self) -> Tuple[int, int]:
        """Top-most row and left-most column holding a filled cell.

        The frontend subtracts this from the hovered cell to get the drop origin.
        """
        filled = self.cells()
        if not filled:
            return 0, 0
        return min(i for i, _ in filled), min(j for _, j in filled)


def make_piece(shape: Sequence[Sequence[int]], color: int, kind: Optional[ShapeType] = None) -> Piece:
    """Build a validated piece; raises MalformedPiece on a bad stencil or color."""
    stencil = tuple(tuple(int(v) for v in row) for row in shape)
    if not _stencil_ok(stencil):
        raise MalformedPiece(f"invalid stencil: {stencil!r}")
    if not 1 <= int(color) <= NUM_COLORS:
        raise MalformedPiece(f"color must be in 1..{NUM_COLORS}, got {color}")
    return Piece(shape=stencil, color=int(color), kind=kind)


def generate_piece(rng: Optional[random.Random] = None) -> Piece:
    rng = rng or _default_rng
    kind = rng.choice(list(ShapeType))
    color = rng.randint(1, NUM_COLORS)
    return Piece(shape=PIECE_SHAPES[kind], color=color, kind=kind)


def generate_batch(rng: Optional[random.Random] = None, count: int = 3) -> List[Piece]:
    """Draw `count` independent pieces; repeats are allowed."""
    return [generate_piece(rng) for _ in range(count)]
