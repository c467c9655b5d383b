"""
Layer Module
============

One convex layer, canonicalised into ascending cyclic-slope order.

Design:
- Built once from a hull cycle, never mutated (frozen dataclass)
- Vertices are point indices into the PointSet arena
- Slope table and segment cache materialised for O(1) lookup
- Degenerate layers (1 or 2 vertices) are a self-loop or a digon
"""

import numpy as np
from dataclasses import dataclass
from typing import Sequence, Tuple

from onion_layers.geometry.primitives import Coordinate, edge_slopes
from onion_layers.geometry.shapes import PointSet


@dataclass(frozen=True, eq=False)
class Layer:
    """
    Immutable convex layer.

    Invariants:
        - edge k runs vertices[k] -> vertices[(k + 1) % len]
        - slopes are ascending; the only wrap is between the last and
          the first edge
        - the cycle is counter-clockwise (math coordinates)

    Attributes:
        index: Layer number, 0 = outermost
        vertices: Point indices in canonical cycle order
        slopes: (M,) edge slopes, read-only
        segments: (M, 2, 2) edge endpoint coordinates, read-only
    """

    index: int
    vertices: Tuple[int, ...]
    slopes: np.ndarray
    segments: np.ndarray

    def __post_init__(self):
        """Validate shape agreement and freeze arrays."""
        if len(self.vertices) == 0:
            raise ValueError(f"Layer {self.index} has no vertices")
        if self.slopes.shape != (len(self.vertices),):
            raise ValueError(
                f"slopes must have shape ({len(self.vertices)},), got {self.slopes.shape}"
            )
        if self.segments.shape != (len(self.vertices), 2, 2):
            raise ValueError(
                f"segments must have shape ({len(self.vertices)}, 2, 2), "
                f"got {self.segments.shape}"
            )

        self.slopes.flags.writeable = False
        self.segments.flags.writeable = False

    @classmethod
    def from_cycle(
        cls,
        index: int,
        cycle: Sequence[int],
        points: PointSet,
        slope_tolerance: float = 1e-12
    ) -> "Layer":
        """
        Canonicalise a counter-clockwise hull cycle.

        The cycle is rotated so that the edge with the smallest slope
        comes first. For a convex counter-clockwise cycle this sorts the
        edges by slope.

        Args:
            index: Layer number
            cycle: Point indices in counter-clockwise order
            points: Point arena the indices refer to
            slope_tolerance: Allowed decrease between consecutive slopes
                (floating noise on nearly collinear hull vertices)

        Raises:
            ValueError: If the cycle is empty or not convex
        """
        cycle = [int(i) for i in cycle]
        if not cycle:
            raise ValueError(f"Layer {index} has no vertices")

        coords = points.coords[cycle]
        slopes = edge_slopes(coords)

        start = int(np.argmin(slopes))
        cycle = cycle[start:] + cycle[:start]
        coords = np.roll(coords, -start, axis=0)
        slopes = np.roll(slopes, -start)

        if len(slopes) > 1 and np.any(np.diff(slopes) < -slope_tolerance):
            raise ValueError(
                f"Layer {index} is not a convex counter-clockwise cycle: {cycle}"
            )

        segments = np.stack([coords, np.roll(coords, -1, axis=0)], axis=1)
        return cls(
            index=index,
            vertices=tuple(cycle),
            slopes=slopes,
            segments=segments,
        )

    def __len__(self) -> int:
        return len(self.vertices)

    @property
    def is_degenerate(self) -> bool:
        """True for layers with no enclosing polygon (1 or 2 vertices)."""
        return len(self.vertices) < 3

    def predecessor(self, key: float) -> int:
        """
        Circular predecessor: index of the last edge whose slope is <= key,
        or the last edge when key is below every slope.
        """
        idx = int(np.searchsorted(self.slopes, key, side="right")) - 1
        return idx % len(self.vertices)

    def head(self, edge: int) -> int:
        """Cycle position of the vertex edge `edge` ends at."""
        return (edge + 1) % len(self.vertices)

    def segment(self, edge: int) -> Tuple[Coordinate, Coordinate]:
        """Endpoints of edge `edge` as float tuples."""
        (ax, ay), (bx, by) = self.segments[edge]
        return (float(ax), float(ay)), (float(bx), float(by))

    def vertex_coords(self, position: int) -> Coordinate:
        """Coordinates of the vertex at cycle position `position`."""
        x, y = self.segments[position][0]
        return float(x), float(y)

    def __repr__(self) -> str:
        return f"Layer(index={self.index}, size={len(self.vertices)})"
