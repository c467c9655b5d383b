"""
Analytics
=========

Bounded Context: Structure and query statistics

Design:
- Frozen snapshots, mutable counter behind get_stats()
"""

from onion_layers.analytics.stats import OnionStats, QueryCounter, QueryStats

__all__ = [
    'OnionStats',
    'QueryStats',
    'QueryCounter',
]
