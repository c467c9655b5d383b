"""
Construction Layer
==================

Bounded Context: Building the onion structure from a point set.

Responsibilities:
- Peel nested convex layers (ConvexLayerBuilder)
- Canonicalise each layer into slope order (Layer)
- Build cross-linked cascade lists (CascadeBuilder)

Design Philosophy:
- Built once, read-only afterwards
- Index-based references only (points, layers, entries)
- Step-wise peeling with explicit BuildState
"""

from onion_layers.construction.layer import Layer
from onion_layers.construction.peeling import ConvexLayerBuilder, BuildState
from onion_layers.construction.cascade import CascadeEntry, CascadeList, CascadeBuilder

__all__ = [
    "Layer",
    "ConvexLayerBuilder",
    "BuildState",
    "CascadeEntry",
    "CascadeList",
    "CascadeBuilder",
]
