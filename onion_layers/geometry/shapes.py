"""
Geometric Shapes Module
========================

Pure geometric value types - NO state, NO side effects.

Design:
- Immutable shapes (frozen dataclass pattern)
- Read-only numpy storage for the point arena
- Cross-product for line side calculation
- Thread-safe by design (immutability)
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple

from onion_layers.errors import InsufficientPointsError, DegenerateQueryLineError
from onion_layers.geometry.primitives import Coordinate, signed_side, slope


@dataclass(frozen=True, eq=False)
class PointSet:
    """
    Immutable arena of input points.

    Every other structure refers to points by their integer index into
    this arena, never by copy.

    Attributes:
        coords: Nx2 float array of (x, y) coordinates (read-only)
    """

    coords: np.ndarray

    def __post_init__(self):
        """Validate coordinates and freeze the array."""
        if not isinstance(self.coords, np.ndarray):
            raise TypeError(f"coords must be np.ndarray, got {type(self.coords)}")
        if self.coords.ndim != 2 or self.coords.shape[1] != 2:
            raise ValueError(f"coords must be Nx2 array, got shape {self.coords.shape}")
        if len(self.coords) == 0:
            raise InsufficientPointsError("At least one point is required")
        if not np.all(np.isfinite(self.coords)):
            raise ValueError("coords must be finite (no NaN or inf)")

        self.coords.flags.writeable = False

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> "PointSet":
        """
        Build a PointSet from any sequence of (x, y) pairs.

        The input is copied, so later mutation by the caller cannot
        reach the arena.
        """
        data = [tuple(p) for p in points]
        if not data:
            raise InsufficientPointsError("At least one point is required")
        coords = np.array(data, dtype=float)
        return cls(coords=coords)

    def __len__(self) -> int:
        return len(self.coords)

    def __getitem__(self, index: int) -> Coordinate:
        x, y = self.coords[index]
        return float(x), float(y)

    def __iter__(self) -> Iterator[Coordinate]:
        for index in range(len(self.coords)):
            yield self[index]


@dataclass(frozen=True)
class QueryLine:
    """
    Immutable directed query line.

    "Above" is the strict left side of start -> end.

    Attributes:
        start: (x, y) first point on the line
        end: (x, y) second point on the line
    """

    start: Tuple[float, float]
    end: Tuple[float, float]

    def __post_init__(self):
        """Validate line and precompute the search key."""
        start = (float(self.start[0]), float(self.start[1]))
        end = (float(self.end[0]), float(self.end[1]))
        if not all(math.isfinite(v) for v in start + end):
            raise ValueError("Query line endpoints must be finite")
        if start == end:
            raise DegenerateQueryLineError(
                f"Query line start and end must be different points, got {start}"
            )

        # Normalize to float tuples (using object.__setattr__ for frozen)
        object.__setattr__(self, 'start', start)
        object.__setattr__(self, 'end', end)
        # Reversed direction: on a CCW convex cycle, the predecessor edge
        # of this slope ends at the vertex farthest above the line
        object.__setattr__(self, '_search_key', slope(end, start))

    @property
    def search_key(self) -> float:
        """Slope used to search cascade lists and layers."""
        return self._search_key

    def get_side(self, point: Coordinate) -> int:
        """
        Determine which side of the line a point is on.

        Returns:
            1: above (left of start -> end)
            -1: below
            0: on the line
        """
        return signed_side(self.start, self.end, point)

    def is_above(self, point: Coordinate) -> bool:
        """Strict "above" test; collinear points are not above."""
        return self.get_side(point) > 0
