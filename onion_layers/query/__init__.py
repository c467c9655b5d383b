"""
Query
=====

Bounded Context: Point location against a built Onion

Design:
- QueryEngine is stateless; progress lives in QueryState
- Cascade strategy: one binary search, O(1) per further layer
- Linear strategy: independent scan per layer (reference)
"""

from onion_layers.query.engine import QueryEngine
from onion_layers.query.state import LayerArc, QueryResult, QueryState

__all__ = [
    'QueryEngine',
    'QueryState',
    'QueryResult',
    'LayerArc',
]
