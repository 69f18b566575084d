from __future__ import annotations

from typing import Tuple

Color = Tuple[int, int, int]

EMPTY_COLOR: Color = (40, 40, 48)
BACKGROUND: Color = (15, 15, 20)

PIECE_COLORS = {
    1: (235, 80, 80),    # red
    2: (245, 160, 50),   # orange
    3: (240, 220, 70),   # yellow
    4: (90, 200, 110),   # green
    5: (70, 150, 235),   # blue
    6: (170, 100, 220),  # purple
}


def _lighten(color: Color, amount: float = 0.55) -> Color:
    return tuple(int(c + (255 - c) * amount) for c in color)  # type: ignore[return-value]


def color_for_value(v: int) -> Color:
    """Board value to RGB; negative values are drawn as a flash of their color."""
    if v == 0:
        return EMPTY_COLOR
    base = PIECE_COLORS.get(abs(v), (200, 200, 200))
    return _lighten(base) if v < 0 else base
