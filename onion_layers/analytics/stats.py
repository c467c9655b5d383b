"""
Onion Statistics Module
=======================

Immutable snapshots of structure shape and query activity.

Design:
- Frozen snapshots (OnionStats, QueryStats)
- Mutable accumulator (QueryCounter) behind get_stats()
- Reset capability
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from onion_layers.query.state import QueryResult


@dataclass(frozen=True)
class OnionStats:
    """
    Immutable shape snapshot of a built Onion.

    Design:
    - Frozen dataclass (thread-safe read)
    - Can be serialized to JSON
    """

    num_points: int
    layer_sizes: Tuple[int, ...]
    cascade_sizes: Tuple[int, ...]

    @classmethod
    def from_onion(cls, onion) -> "OnionStats":
        return cls(
            num_points=len(onion.points),
            layer_sizes=tuple(len(layer) for layer in onion.layers),
            cascade_sizes=tuple(len(cascade) for cascade in onion.cascades),
        )

    @property
    def num_layers(self) -> int:
        return len(self.layer_sizes)

    @property
    def degenerate_layers(self) -> int:
        """Layers with fewer than 3 vertices."""
        return sum(1 for size in self.layer_sizes if size < 3)

    @property
    def total_cascade_entries(self) -> int:
        return sum(self.cascade_sizes)

    def to_dict(self) -> Dict[str, object]:
        """Serialize to JSON-compatible dict."""
        return {
            'num_points': self.num_points,
            'num_layers': self.num_layers,
            'layer_sizes': list(self.layer_sizes),
            'cascade_sizes': list(self.cascade_sizes),
            'degenerate_layers': self.degenerate_layers,
            'total_cascade_entries': self.total_cascade_entries,
        }

    def __str__(self) -> str:
        """Human-readable representation."""
        return (
            f"{self.num_points} points in {self.num_layers} layers "
            f"(sizes={list(self.layer_sizes)}, cascade={list(self.cascade_sizes)})"
        )


@dataclass(frozen=True)
class QueryStats:
    """Immutable query activity snapshot."""

    queries: int = 0
    points_reported: int = 0
    layers_visited: int = 0
    early_terminations: int = 0
    per_layer_reported: Dict[int, int] = field(default_factory=dict)

    def __str__(self) -> str:
        """Human-readable representation."""
        return (
            f"queries={self.queries}, reported={self.points_reported}, "
            f"early_stops={self.early_terminations}"
        )


class QueryCounter:
    """
    Stateful accumulator for query results.

    Design:
    - Mutable accumulators (private state)
    - Public immutable snapshots (get_stats())
    - Caller must synchronize if multi-threaded

    Usage:
        counter = QueryCounter()
        counter.update(engine.run(onion, line))
        stats = counter.get_stats()  # Immutable
    """

    def __init__(self):
        self._queries = 0
        self._points_reported = 0
        self._layers_visited = 0
        self._early_terminations = 0
        self._per_layer_reported: Dict[int, int] = {}

    def update(self, result: QueryResult) -> None:
        """Account for one finished query."""
        self._queries += 1
        self._points_reported += result.total_above
        self._layers_visited += len(result.arcs)
        if result.terminated_early:
            self._early_terminations += 1

        for arc in result.arcs:
            self._per_layer_reported[arc.layer_index] = (
                self._per_layer_reported.get(arc.layer_index, 0) + len(arc)
            )

    def get_stats(self) -> QueryStats:
        """
        Get immutable statistics snapshot.

        Returns:
            Frozen QueryStats with current state
        """
        return QueryStats(
            queries=self._queries,
            points_reported=self._points_reported,
            layers_visited=self._layers_visited,
            early_terminations=self._early_terminations,
            per_layer_reported=dict(self._per_layer_reported)  # Copy dict
        )

    def reset(self) -> None:
        """Reset all counters to zero."""
        self._queries = 0
        self._points_reported = 0
        self._layers_visited = 0
        self._early_terminations = 0
        self._per_layer_reported.clear()
