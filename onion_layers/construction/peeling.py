"""
Convex Layer Peeling Module
===========================

Repeated convex-hull extraction ("onion peeling").

Design:
- State is external (BuildState in, BuildState out)
- step() peels exactly one layer; callers decide pacing
- Hulls come from scipy.spatial.ConvexHull (Qhull)
- Removal by index membership, never by geometric re-test
"""

import numpy as np
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple
from scipy.spatial import ConvexHull, QhullError

from onion_layers.construction.layer import Layer
from onion_layers.geometry.shapes import PointSet
from onion_layers.logging import StructuredLogger, LogEvent


@dataclass(frozen=True)
class BuildState:
    """
    Immutable snapshot of a peeling run.

    Attributes:
        remaining: Point indices not yet assigned to a layer (ascending)
        layers: Layers peeled so far, outermost first
    """

    remaining: Tuple[int, ...]
    layers: Tuple[Layer, ...] = ()

    @property
    def done(self) -> bool:
        """True once every point belongs to a layer."""
        return len(self.remaining) == 0


class ConvexLayerBuilder:
    """
    Decomposes a point set into nested convex layers, outermost first.

    Design Philosophy:
    - Single Responsibility: only peeling; cascading lives elsewhere
    - Functional step API: step(state) -> new state
    - Every input index lands in exactly one layer

    Usage:
        builder = ConvexLayerBuilder(points)

        # All at once
        layers = builder.build()

        # Or one peel at a time
        state = builder.initial_state()
        while not state.done:
            state = builder.step(state)
    """

    def __init__(
        self,
        points: PointSet,
        qhull_options: Optional[str] = None,
        slope_tolerance: float = 1e-12,
        logger: Optional[StructuredLogger] = None
    ):
        """
        Args:
            points: Point arena to peel
            qhull_options: Extra Qhull options passed to ConvexHull
            slope_tolerance: Forwarded to Layer.from_cycle
            logger: Structured logger (default: "builder" component)
        """
        self.points = points
        self.qhull_options = qhull_options
        self.slope_tolerance = slope_tolerance
        self.logger = logger or StructuredLogger(component="builder", level=None)

    def initial_state(self) -> BuildState:
        """State before the first peel: every index remains."""
        return BuildState(remaining=tuple(range(len(self.points))))

    def step(self, state: BuildState) -> BuildState:
        """
        Peel one layer off the remaining points.

        With 3 or more points left, the hull of the remainder becomes the
        next layer. With fewer, the remainder becomes the final layer.

        Args:
            state: Current build state (not mutated)

        Returns:
            New state with one more layer

        Raises:
            ValueError: If the state is already done
        """
        if state.done:
            raise ValueError("Peeling is already complete")

        remaining = np.asarray(state.remaining, dtype=int)
        if len(remaining) < 3:
            cycle = [int(i) for i in remaining]
        else:
            cycle = self.hull_cycle(remaining)

        layer = Layer.from_cycle(
            index=len(state.layers),
            cycle=cycle,
            points=self.points,
            slope_tolerance=self.slope_tolerance,
        )

        left = remaining[~np.isin(remaining, cycle)]

        self.logger.debug(
            event=LogEvent.LAYER_PEELED,
            message=f"Peeled layer {layer.index}",
            metadata={
                'layer_index': layer.index,
                'layer_size': len(layer),
                'remaining': int(len(left)),
            }
        )

        return BuildState(
            remaining=tuple(int(i) for i in left),
            layers=state.layers + (layer,),
        )

    def iter_states(self) -> Iterator[BuildState]:
        """Yield the state after every peel, ending with the final state."""
        state = self.initial_state()
        while not state.done:
            state = self.step(state)
            yield state

    def build(self) -> Tuple[Layer, ...]:
        """Peel until every point belongs to a layer."""
        state = self.initial_state()
        for state in self.iter_states():
            pass
        return state.layers

    def hull_cycle(self, candidates: np.ndarray) -> List[int]:
        """
        Counter-clockwise hull of the candidate points.

        Args:
            candidates: Point indices (at least 3)

        Returns:
            Point indices of the hull vertices, CCW order
        """
        coords = self.points.coords[candidates]
        try:
            hull = ConvexHull(coords, qhull_options=self.qhull_options)
        except QhullError:
            # Collinear or coincident remainder: Qhull needs full rank
            return self._degenerate_cycle(candidates)

        # In 2-D, ConvexHull.vertices is already counter-clockwise
        return [int(candidates[v]) for v in hull.vertices]

    def _degenerate_cycle(self, candidates: np.ndarray) -> List[int]:
        coords = self.points.coords[candidates]
        order = np.lexsort((coords[:, 1], coords[:, 0]))
        first, last = int(order[0]), int(order[-1])

        if np.array_equal(coords[first], coords[last]):
            cycle = [int(candidates[first])]
        else:
            cycle = [int(candidates[first]), int(candidates[last])]

        self.logger.debug(
            event=LogEvent.HULL_DEGENERATE,
            message="Remaining points span no area; using extreme points",
            metadata={'candidates': int(len(candidates)), 'layer_size': len(cycle)}
        )
        return cycle
