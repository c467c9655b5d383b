"""
Onion Layers
============

Bounded Context: Point location above a query line over nested convex
layers ("onion peeling") with fractional cascading.

Design Philosophy:
- Separation of Concerns: geometry, construction, query, analytics
- Index ownership: points live once in a PointSet; layers and cascade
  lists refer to them by index
- Immutable results: Onion, layers and cascade lists are frozen
- Step-wise APIs: BuildState / QueryState in, new state out

Architecture:

    onion_layers/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── primitives.py  # slope, orientation, side tests, linear search
    │   └── shapes.py      # PointSet, QueryLine
    │
    ├── construction/      # Build time
    │   ├── peeling.py     # ConvexLayerBuilder (scipy ConvexHull)
    │   ├── layer.py       # Layer (slope-canonical cycle)
    │   └── cascade.py     # CascadeBuilder, CascadeList, CascadeEntry
    │
    ├── query/             # Query time
    │   ├── state.py       # QueryState, QueryResult, LayerArc
    │   └── engine.py      # QueryEngine (seed, resolve, walk, descend)
    │
    ├── analytics/         # OnionStats, QueryCounter
    ├── logging/           # Structured JSON logging
    ├── config.py          # OnionConfig (YAML)
    ├── errors.py          # Error taxonomy
    └── onion.py           # Onion, OnionBuilder, build(), query()

Usage:

    from onion_layers import build, query

    onion = build([(0, 0), (4, 0), (4, 4), (0, 4), (2, 2)])
    query(onion, (0, 1), (4, 3))
    # ((0, (2, 3)), (1, ()))

    # Or step-wise
    from onion_layers import QueryEngine, QueryLine

    engine = QueryEngine()
    state = engine.seed(onion, QueryLine(start=(0, 1), end=(4, 3)))
    while not state.done:
        state = engine.step(onion, state)
"""

# Geometry Layer (immutable, stateless)
from onion_layers.geometry.shapes import PointSet, QueryLine

# Construction Layer
from onion_layers.construction.layer import Layer
from onion_layers.construction.peeling import ConvexLayerBuilder, BuildState
from onion_layers.construction.cascade import CascadeBuilder, CascadeList, CascadeEntry

# Query Layer
from onion_layers.query.engine import QueryEngine
from onion_layers.query.state import QueryState, QueryResult, LayerArc

# Analytics Layer (stateful)
from onion_layers.analytics.stats import OnionStats, QueryCounter, QueryStats

# Configuration and errors
from onion_layers.config import OnionConfig, BuildConfig, QueryConfig, LoggingConfig
from onion_layers.errors import (
    OnionError,
    InsufficientPointsError,
    DegenerateLayerError,
    DegenerateQueryLineError,
    NumericDomainError,
)

# Entry points
from onion_layers.onion import Onion, OnionBuilder, build, query

__all__ = [
    # Geometry
    "PointSet",
    "QueryLine",
    # Construction
    "Layer",
    "ConvexLayerBuilder",
    "BuildState",
    "CascadeBuilder",
    "CascadeList",
    "CascadeEntry",
    # Query
    "QueryEngine",
    "QueryState",
    "QueryResult",
    "LayerArc",
    # Analytics
    "OnionStats",
    "QueryCounter",
    "QueryStats",
    # Config
    "OnionConfig",
    "BuildConfig",
    "QueryConfig",
    "LoggingConfig",
    # Errors
    "OnionError",
    "InsufficientPointsError",
    "DegenerateLayerError",
    "DegenerateQueryLineError",
    "NumericDomainError",
    # Entry points
    "Onion",
    "OnionBuilder",
    "build",
    "query",
]

__version__ = "1.0.0"
