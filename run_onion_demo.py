"""
Onion Layers Demo
=================

Demonstrates onion_layers on the built-in 13-point sample.

Architecture:
- construction: ConvexLayerBuilder + CascadeBuilder (via OnionBuilder)
- query: QueryEngine, stepped one layer at a time
- analytics: OnionStats, QueryCounter
"""

from onion_layers import (
    OnionBuilder,
    QueryCounter,
    QueryEngine,
    QueryLine,
    QueryResult,
)
from onion_layers.samples import SAMPLE_POINTS, SAMPLE_QUERIES


def main():
    """Build the sample onion and walk a few queries layer by layer."""

    # 1. Build (immutable)
    onion = OnionBuilder().with_points(SAMPLE_POINTS).build()
    print(onion.stats())
    for layer in onion.layers:
        print(f"  layer {layer.index}: {list(layer.vertices)}")

    # 2. Query step by step
    engine = QueryEngine()
    counter = QueryCounter()

    for name, start, end in SAMPLE_QUERIES:
        print(f"\n{name}: {start} -> {end}")
        state = engine.seed(onion, QueryLine(start=start, end=end))
        while not state.done:
            state = engine.step(onion, state)
            arc = state.arcs[-1]
            print(f"  layer {arc.layer_index}: {list(arc.point_indices)}")
        if state.terminated_early:
            print("  (inner layers skipped)")

        counter.update(QueryResult.from_state(state))

    # 3. Summary
    print(f"\n{counter.get_stats()}")


if __name__ == '__main__':
    main()
