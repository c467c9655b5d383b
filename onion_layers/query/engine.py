"""
Query Engine Module
===================

"Which points lie above this line?" answered layer by layer.

Design:
- Stateless engine; QueryState in, QueryState out
- One binary search on the outermost cascade list, then O(1) pointer
  correction per layer (fractional cascading)
- Boundary walk from the extreme vertex is output-sensitive
- Early stop is safe: every inner layer lies inside the hull of the
  outer one, whose extreme vertex was already not above
"""

from typing import TYPE_CHECKING, Optional, Tuple

from onion_layers.config import QueryConfig
from onion_layers.construction.layer import Layer
from onion_layers.errors import DegenerateLayerError
from onion_layers.geometry.primitives import linear_ccw_search
from onion_layers.geometry.shapes import QueryLine
from onion_layers.logging import StructuredLogger, LogEvent
from onion_layers.query.state import LayerArc, QueryResult, QueryState

if TYPE_CHECKING:
    from onion_layers.onion import Onion


class QueryEngine:
    """
    Runs point location queries against a built Onion.

    Usage:
        engine = QueryEngine()
        result = engine.run(onion, QueryLine(start=(0, 0), end=(4, 4)))

        # Or one layer at a time
        state = engine.seed(onion, line)
        while not state.done:
            state = engine.step(onion, state)
        result = QueryResult.from_state(state)
    """

    def __init__(
        self,
        config: Optional[QueryConfig] = None,
        logger: Optional[StructuredLogger] = None
    ):
        """
        Args:
            config: Query settings (default: QueryConfig())
            logger: Structured logger (default: "query" component)
        """
        self.config = config or QueryConfig()
        self.logger = logger or StructuredLogger(component="query", level=None)

    def seed(self, onion: "Onion", line: QueryLine) -> QueryState:
        """
        Initial state: the only binary search of the query.

        Args:
            onion: Built structure
            line: Query line

        Returns:
            State pointing at layer 0
        """
        if self.config.strategy == "cascade":
            idx = onion.cascades[0].predecessor(line.search_key)
        else:
            idx = 0

        self.logger.debug(
            event=LogEvent.QUERY_SEEDED,
            message="Query seeded on outermost layer",
            metadata={
                'start': list(line.start),
                'end': list(line.end),
                'search_key': line.search_key,
                'cascade_idx': idx,
                'strategy': self.config.strategy,
            }
        )
        return QueryState(line=line, layer_index=0, cascade_idx=idx)

    def step(self, onion: "Onion", state: QueryState) -> QueryState:
        """
        Resolve one layer and descend.

        Args:
            onion: Built structure
            state: Current state (not mutated)

        Returns:
            New state with one more arc

        Raises:
            ValueError: If the query is already done
            DegenerateLayerError: Degenerate layer under the "raise" policy
        """
        if state.done:
            raise ValueError("Query is already complete")

        line = state.line
        layer = onion.layers[state.layer_index]

        if self.config.strategy == "cascade":
            cascade = onion.cascades[state.layer_index]
            idx = cascade.resolve(state.cascade_idx, line.search_key)
            entry = cascade[idx]
            edge = entry.layer_ptr
            next_idx = entry.parent_ptr
        else:
            edge = linear_ccw_search(
                [layer.segment(k) for k in range(len(layer))],
                (line.end, line.start),
            )
            next_idx = 0

        walked = True
        if layer.is_degenerate and self.config.degenerate_layers != "include":
            if self.config.degenerate_layers == "raise":
                raise DegenerateLayerError(layer.index, len(layer))
            walked = False
            points: Tuple[int, ...] = ()
        else:
            points = self.walk_boundary(layer, edge, line)

        arc = LayerArc(layer_index=layer.index, point_indices=points)

        self.logger.debug(
            event=LogEvent.QUERY_LAYER_RESOLVED,
            message=f"Layer {layer.index} resolved",
            metadata={
                'layer_index': layer.index,
                'edge': edge,
                'above': len(arc),
                'walked': walked,
            }
        )

        last = state.layer_index == len(onion.layers) - 1
        stop_early = (
            self.config.stop_at_empty_layer
            and walked
            and arc.is_empty
            and not last
        )

        if stop_early:
            self.logger.debug(
                event=LogEvent.QUERY_TERMINATED_EARLY,
                message=f"No vertex above on layer {layer.index}; inner layers skipped",
                metadata={
                    'layer_index': layer.index,
                    'skipped_layers': len(onion.layers) - layer.index - 1,
                }
            )

        return QueryState(
            line=line,
            layer_index=state.layer_index + 1,
            cascade_idx=next_idx,
            arcs=state.arcs + (arc,),
            done=last or stop_early,
            terminated_early=stop_early,
        )

    def run(self, onion: "Onion", line: QueryLine) -> QueryResult:
        """Seed and step until done."""
        state = self.seed(onion, line)
        while not state.done:
            state = self.step(onion, state)

        result = QueryResult.from_state(state)
        self.logger.debug(
            event=LogEvent.QUERY_COMPLETED,
            message="Query completed",
            metadata={
                'layers_visited': len(result.arcs),
                'total_above': result.total_above,
                'terminated_early': result.terminated_early,
            }
        )
        return result

    @staticmethod
    def walk_boundary(layer: Layer, edge: int, line: QueryLine) -> Tuple[int, ...]:
        """
        Contiguous arc of vertices strictly above the line.

        Starts at the head of `edge` (the extreme vertex) and grows the arc
        in both directions while vertices stay above.

        Returns:
            Point indices in counter-clockwise order; the whole layer comes
            back in canonical cycle order
        """
        size = len(layer)
        start = layer.head(edge)
        if not line.is_above(layer.vertex_coords(start)):
            return ()

        first = last = start
        count = 1
        while count < size and line.is_above(layer.vertex_coords((last + 1) % size)):
            last = (last + 1) % size
            count += 1
        while count < size and line.is_above(layer.vertex_coords((first - 1) % size)):
            first = (first - 1) % size
            count += 1

        if count == size:
            first = 0
        return tuple(layer.vertices[(first + k) % size] for k in range(count))
