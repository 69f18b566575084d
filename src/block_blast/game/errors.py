from __future__ import annotations


class BlockBlastError(Exception):
    """Base class for engine errors."""


class InvalidPlacement(BlockBlastError):
    """A placement was committed that does not pass `can_place`."""

    def __init__(self, row: int, col: int, reason: str = "piece does not fit") -> None:
        super().__init__(f"cannot place piece at ({row}, {col}): {reason}")
        self.row = row
        self.col = col


class MalformedPiece(BlockBlastError, ValueError):
    """Stencil with no rows, no columns, ragged rows or non-binary cells."""
