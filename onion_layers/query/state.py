"""
Query State Module
==================

Immutable value types threaded through the query engine.

Design:
- QueryState is injected into and returned from QueryEngine.step()
  (functional style, no hidden progress)
- LayerArc / QueryResult are the outputs handed to callers
"""

from dataclasses import dataclass
from typing import FrozenSet, Tuple

from onion_layers.geometry.shapes import QueryLine


@dataclass(frozen=True)
class LayerArc:
    """
    Vertices of one layer strictly above the query line.

    Attributes:
        layer_index: Layer number, 0 = outermost
        point_indices: Contiguous arc of point indices in counter-clockwise
            order (empty when no vertex is above)
    """

    layer_index: int
    point_indices: Tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.point_indices)

    @property
    def is_empty(self) -> bool:
        return len(self.point_indices) == 0


@dataclass(frozen=True)
class QueryState:
    """
    Progress of one query through the layer stack.

    Attributes:
        line: Query line
        layer_index: Next layer to resolve
        cascade_idx: Candidate index into that layer's cascade list
        arcs: Arcs of the layers resolved so far
        done: True once no further layer will be visited
        terminated_early: True if an empty layer stopped the descent
    """

    line: QueryLine
    layer_index: int
    cascade_idx: int
    arcs: Tuple[LayerArc, ...] = ()
    done: bool = False
    terminated_early: bool = False


@dataclass(frozen=True)
class QueryResult:
    """
    Final answer to a query.

    Attributes:
        line: Query line
        arcs: One arc per visited layer, outermost first
        terminated_early: True if inner layers were skipped after an
            empty layer
    """

    line: QueryLine
    arcs: Tuple[LayerArc, ...]
    terminated_early: bool = False

    @classmethod
    def from_state(cls, state: QueryState) -> "QueryResult":
        return cls(line=state.line, arcs=state.arcs, terminated_early=state.terminated_early)

    def as_pairs(self) -> Tuple[Tuple[int, Tuple[int, ...]], ...]:
        """(layer_index, point_indices) pairs, outermost first."""
        return tuple((arc.layer_index, arc.point_indices) for arc in self.arcs)

    def above_indices(self) -> FrozenSet[int]:
        """Union of every arc."""
        return frozenset(i for arc in self.arcs for i in arc.point_indices)

    @property
    def total_above(self) -> int:
        return sum(len(arc) for arc in self.arcs)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            'line': {'start': list(self.line.start), 'end': list(self.line.end)},
            'layers': [
                {'layer_index': arc.layer_index, 'point_indices': list(arc.point_indices)}
                for arc in self.arcs
            ],
            'total_above': self.total_above,
            'terminated_early': self.terminated_early,
        }
