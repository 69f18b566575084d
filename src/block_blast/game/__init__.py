"""Board engine for the 8x8 Block Blast puzzle.

Exports the pure rule functions and the session object:
- generate_piece / generate_batch: random colored pieces from the catalog
- can_place / place / resolve_lines: placement validity and line clearing
- has_any_valid_move: terminal-state detection
- ScoringRules: points per placed cell and per cleared line
- BlockBlastGame: session state driven one placement at a time
"""

from .errors import BlockBlastError, InvalidPlacement, MalformedPiece
from .pieces import (
    NUM_COLORS,
    PIECE_SHAPES,
    Piece,
    ShapeType,
    generate_batch,
    generate_piece,
    make_piece,
)
from .grid import (
    BOARD_SIZE,
    can_place,
    empty_board,
    find_full_lines,
    has_any_valid_move,
    place,
    resolve_lines,
    valid_placements,
)
from .rules import ScoringRules
from .cells import Cell, CellKind, board_cells, decode_cell
from .core import BlockBlastGame, GameConfig, PlacementOutcome, Rejection

__all__ = [
    "BlockBlastError",
    "InvalidPlacement",
    "MalformedPiece",
    "NUM_COLORS",
    "PIECE_SHAPES",
    "Piece",
    "ShapeType",
    "generate_batch",
    "generate_piece",
    "make_piece",
    "BOARD_SIZE",
    "can_place",
    "empty_board",
    "find_full_lines",
    "has_any_valid_move",
    "place",
    "resolve_lines",
    "valid_placements",
    "ScoringRules",
    "Cell",
    "CellKind",
    "board_cells",
    "decode_cell",
    "BlockBlastGame",
    "GameConfig",
    "PlacementOutcome",
    "Rejection",
]
