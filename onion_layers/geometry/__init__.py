"""
Geometry Layer
==============

Bounded Context: Pure geometric primitives and value types.

Responsibilities:
- Orientation, angle and slope primitives
- Line side calculations
- Immutable point arena and query line
- NO layers, NO cascading, NO rendering

Design Philosophy:
- Pure functions where possible
- Immutable data structures
- Fail-fast validation
"""

from onion_layers.geometry.primitives import (
    orientation,
    angle_between,
    slope,
    edge_slopes,
    signed_side,
    is_above_line,
    circular_gap,
    linear_ccw_search,
)
from onion_layers.geometry.shapes import PointSet, QueryLine

__all__ = [
    "orientation",
    "angle_between",
    "slope",
    "edge_slopes",
    "signed_side",
    "is_above_line",
    "circular_gap",
    "linear_ccw_search",
    "PointSet",
    "QueryLine",
]
