from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    cell_points: int = 10
    line_points: int = 100

    def score_for_placement(self, cells_placed: int, lines_cleared: int) -> int:
        """Points for one placement; the line term is applied even when it is 0."""
        return cells_placed * self.cell_points + max(0, lines_cleared) * self.line_points
