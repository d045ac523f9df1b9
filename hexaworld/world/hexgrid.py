"""Hex grid — axial coordinate arithmetic for the hexagonal world.

Every cell, plant, fire mark, and animal is addressed by an axial
``Hex(q, r)`` coordinate.  The grid has no bounds: sparse maps keyed by
``Hex`` grow outward from the origin as the world is generated.

Directions are numbered 0-5 clockwise starting from "top" for flat-top
hexagons.  Direction ``d`` and ``opposite(d)`` always cancel out.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import NamedTuple

SQRT3 = math.sqrt(3.0)


class Hex(NamedTuple):
    """An axial hex coordinate.

    Attributes:
        q: Column axis.
        r: Skewed row axis.
    """

    q: int
    r: int

    def __add__(self, other: object) -> Hex:  # type: ignore[override]
        if not isinstance(other, Hex):
            return NotImplemented
        return Hex(self.q + other.q, self.r + other.r)


ORIGIN = Hex(0, 0)

DIRECTIONS: tuple[Hex, ...] = (
    Hex(0, -1),  # top
    Hex(1, -1),  # upper-right
    Hex(1, 0),  # lower-right
    Hex(0, 1),  # bottom
    Hex(-1, 1),  # lower-left
    Hex(-1, 0),  # upper-left
)


def neighbour(coord: Hex, direction: int) -> Hex:
    """Return the coordinate one step from ``coord`` in ``direction``."""
    return coord + DIRECTIONS[direction % 6]


def opposite(direction: int) -> int:
    """Return the direction pointing back the way ``direction`` came."""
    return (direction + 3) % 6


def neighbours(coord: Hex) -> Iterator[Hex]:
    """Yield the six neighbouring coordinates in direction order."""
    for offset in DIRECTIONS:
        yield coord + offset


def hex_distance(a: Hex, b: Hex) -> int:
    """Return the number of single-hex steps between ``a`` and ``b``."""
    dq = a.q - b.q
    dr = a.r - b.r
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


def to_pixel(coord: Hex, size: float) -> tuple[float, float]:
    """Project an axial coordinate to the centre of its flat-top hexagon.

    Args:
        coord: Axial coordinate.
        size: Hexagon radius in pixels (centre to corner).

    Returns:
        ``(x, y)`` position relative to the origin hex centre.

    Raises:
        ValueError: If ``size`` is not positive.
    """
    if size <= 0:
        msg = f"hex size must be positive, got {size}"
        raise ValueError(msg)
    x = size * 1.5 * coord.q
    y = size * (SQRT3 / 2.0 * coord.q + SQRT3 * coord.r)
    return x, y
