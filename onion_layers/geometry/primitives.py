"""
Geometry Primitives
===================

Pure functions over (x, y) pairs - NO state, NO side effects.

Conventions:
- Math coordinates (y up); counter-clockwise is positive.
- Slopes are atan2 angles in (-pi, pi]. Every edge slope and every query
  key goes through the same function so exact ties compare equal.
- "Above" a directed line p1 -> p2 means strictly on its left side.
"""

import math
from typing import Sequence, Tuple

import numpy as np

from onion_layers.errors import NumericDomainError

Coordinate = Tuple[float, float]

TAU = 2.0 * math.pi


def _cross(ux: float, uy: float, vx: float, vy: float) -> float:
    return ux * vy - uy * vx


def _sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def orientation(a: Coordinate, b: Coordinate, c: Coordinate, d: Coordinate) -> int:
    """
    CCW test between directed segments ab and cd.

    Returns:
        1 if cd turns counter-clockwise from ab, -1 if clockwise,
        0 if parallel (or either segment has zero length)
    """
    return _sign(_cross(b[0] - a[0], b[1] - a[1], d[0] - c[0], d[1] - c[1]))


def angle_between(a: Coordinate, b: Coordinate, c: Coordinate, d: Coordinate) -> float:
    """
    Unsigned angle in [0, pi] between directions b - a and d - c.

    Raises:
        NumericDomainError: If a direction has zero length or the
            coordinates carry NaN
    """
    ux, uy = b[0] - a[0], b[1] - a[1]
    vx, vy = d[0] - c[0], d[1] - c[1]
    norms = math.hypot(ux, uy) * math.hypot(vx, vy)
    if norms == 0.0:
        raise NumericDomainError("angle_between needs two non-zero directions")

    cosine = (ux * vx + uy * vy) / norms
    # Clamp: floating overshoot past +-1 would otherwise make acos fail
    cosine = float(np.clip(cosine, -1.0, 1.0))
    if math.isnan(cosine):
        raise NumericDomainError(
            f"angle_between received NaN for segments {a}->{b} and {c}->{d}"
        )
    return math.acos(cosine)


def slope(a: Coordinate, b: Coordinate) -> float:
    """Cyclic slope of the directed edge a -> b, in (-pi, pi]."""
    return float(np.arctan2(b[1] - a[1], b[0] - a[0]))


def edge_slopes(coords: np.ndarray) -> np.ndarray:
    """
    Slopes of every edge of a closed cycle.

    Args:
        coords: (M, 2) vertex coordinates in cycle order

    Returns:
        (M,) array where entry k is the slope of coords[k] -> coords[k+1 mod M]
    """
    deltas = np.roll(coords, -1, axis=0) - coords
    return np.arctan2(deltas[:, 1], deltas[:, 0])


def signed_side(p1: Coordinate, p2: Coordinate, p: Coordinate) -> int:
    """
    Side of p relative to the directed line p1 -> p2.

    Returns:
        1: left side (above)
        -1: right side (below)
        0: on the line
    """
    return _sign(_cross(p2[0] - p1[0], p2[1] - p1[1], p[0] - p1[0], p[1] - p1[1]))


def is_above_line(p1: Coordinate, p2: Coordinate, p: Coordinate) -> bool:
    """Strict test: collinear points are never above."""
    return signed_side(p1, p2, p) > 0


def circular_gap(from_angle: float, to_angle: float) -> float:
    """Counter-clockwise angular distance from from_angle to to_angle, in [0, 2pi)."""
    gap = math.fmod(to_angle - from_angle, TAU)
    if gap < 0.0:
        gap += TAU
    return gap


def linear_ccw_search(segments: Sequence[Tuple[Coordinate, Coordinate]],
                      target: Tuple[Coordinate, Coordinate]) -> int:
    """
    Linear scan for the segment the target turns counter-clockwise from
    by the smallest angle.

    Zero-length segments are skipped. Returns 0 when no segment qualifies.
    """
    c, d = target
    best_idx = 0
    smallest_angle = TAU
    for idx, (a, b) in enumerate(segments):
        if a[0] == b[0] and a[1] == b[1]:
            continue
        if orientation(a, b, c, d) >= 0:
            angle = angle_between(a, b, c, d)
            if angle < smallest_angle:
                smallest_angle = angle
                best_idx = idx
    return best_idx
