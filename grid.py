"""
Protoboard hole geometry.

Holes sit on a GRID_ROWS x GRID_COLS lattice at GRID_PITCH spacing. Positions
returned here are rounded so that two legs placed in the same hole always
produce the exact same coordinate, which is what node identity relies on.
"""
from typing import Optional, Tuple

import numpy as np

from components import GRID_COLS, GRID_ORIGIN, GRID_PITCH, GRID_ROWS, Position

__all__ = [
    "hole_position",
    "hole_at",
    "snap",
    "hole_distance",
    "is_valid_placement",
    "led_polarity",
    "PLACEMENT_SPAN",
]

# holes between the two legs, measured along a single row or column
PLACEMENT_SPAN = {"resistor": 2, "led": 1}

_DECIMALS = 6


def hole_position(row: int, col: int) -> Position:
    x0, y0, z0 = GRID_ORIGIN
    x, z = np.round([x0 + col * GRID_PITCH, z0 + row * GRID_PITCH], _DECIMALS)
    return (float(x) + 0.0, float(y0), float(z) + 0.0)


def hole_at(position: Position) -> Optional[Tuple[int, int]]:
    x0, _, z0 = GRID_ORIGIN
    row = int(np.rint((position[2] - z0) / GRID_PITCH))
    col = int(np.rint((position[0] - x0) / GRID_PITCH))
    if 0 <= row < GRID_ROWS and 0 <= col < GRID_COLS:
        return row, col
    return None


def snap(position: Position) -> Optional[Position]:
    """Nearest hole position, or None when the point is off the board."""
    hole = hole_at(position)
    return hole_position(*hole) if hole is not None else None


def hole_distance(start: Position, end: Position) -> Optional[Tuple[int, int]]:
    a, b = hole_at(start), hole_at(end)
    if a is None or b is None:
        return None
    return abs(b[0] - a[0]), abs(b[1] - a[1])


def is_valid_placement(ctype: str, start: Position, end: Position) -> bool:
    span = PLACEMENT_SPAN.get(ctype)
    if span is None:
        return True
    d = hole_distance(start, end)
    if d is None:
        return False
    return d in ((span, 0), (0, span))


def led_polarity(start: Position, end: Position) -> str:
    # right-to-left or bottom-to-top placement flips the LED
    a, b = hole_at(start), hole_at(end)
    if a is None or b is None:
        return "normal"
    return "reversed" if b[1] < a[1] or b[0] < a[0] else "normal"
