"""Tests for convex layer peeling and layer canonicalisation."""

import math

import numpy as np
import pytest

from onion_layers import ConvexLayerBuilder, Layer, PointSet
from onion_layers.geometry.primitives import signed_side

from tests.conftest import SQUARE, random_points


def _cross(a, b, c):
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def test_square_is_one_layer():
    layers = ConvexLayerBuilder(PointSet.from_points(SQUARE)).build()
    assert len(layers) == 1
    assert sorted(layers[0].vertices) == [0, 1, 2, 3]


def test_canonical_rotation_starts_at_smallest_slope():
    layers = ConvexLayerBuilder(PointSet.from_points(SQUARE)).build()
    layer = layers[0]
    # Edge (0, 4) -> (0, 0) points straight down: slope -pi/2
    assert layer.vertices == (3, 0, 1, 2)
    np.testing.assert_allclose(layer.slopes, [-math.pi / 2, 0.0, math.pi / 2, math.pi])


@pytest.mark.parametrize("seed", [11, 12, 13])
def test_layers_partition_the_input(seed):
    """Every index appears in exactly one layer."""
    points = random_points(seed=seed, n=60)
    layers = ConvexLayerBuilder(points).build()

    seen = [v for layer in layers for v in layer.vertices]
    assert sorted(seen) == list(range(len(points)))
    assert [layer.index for layer in layers] == list(range(len(layers)))


@pytest.mark.parametrize("seed", [21, 22])
def test_layers_are_convex_and_counter_clockwise(seed):
    points = random_points(seed=seed, n=50)
    layers = ConvexLayerBuilder(points).build()

    for layer in layers:
        assert np.all(np.diff(layer.slopes) >= 0.0)
        if len(layer) < 3:
            continue
        m = len(layer)
        for k in range(m):
            a = points[layer.vertices[k]]
            b = points[layer.vertices[(k + 1) % m]]
            c = points[layer.vertices[(k + 2) % m]]
            assert _cross(a, b, c) > 0


def test_inner_layers_lie_inside_outer_layers():
    points = random_points(seed=31, n=45)
    layers = ConvexLayerBuilder(points).build()

    for outer_pos, outer in enumerate(layers):
        if len(outer) < 3:
            continue
        inner_points = [v for inner in layers[outer_pos + 1:] for v in inner.vertices]
        for edge in range(len(outer)):
            a, b = outer.segment(edge)
            for v in inner_points:
                assert signed_side(a, b, points[v]) > 0


def test_step_api_matches_build():
    points = random_points(seed=41, n=30)
    builder = ConvexLayerBuilder(points)

    state = builder.initial_state()
    assert not state.done
    steps = 0
    while not state.done:
        state = builder.step(state)
        steps += 1

    layers = builder.build()
    assert steps == len(layers)
    assert [l.vertices for l in state.layers] == [l.vertices for l in layers]

    with pytest.raises(ValueError):
        builder.step(state)


def test_iter_states_shrinks_remaining():
    points = random_points(seed=42, n=25)
    states = list(ConvexLayerBuilder(points).iter_states())

    remaining = [len(s.remaining) for s in states]
    assert remaining == sorted(remaining, reverse=True)
    assert remaining[-1] == 0
    assert states[-1].done


def test_single_point_is_self_loop():
    layers = ConvexLayerBuilder(PointSet.from_points([(3, 4)])).build()
    assert len(layers) == 1
    layer = layers[0]
    assert layer.vertices == (0,)
    assert layer.is_degenerate
    assert layer.slopes[0] == 0.0
    assert layer.head(0) == 0


def test_two_points_are_a_digon():
    layers = ConvexLayerBuilder(PointSet.from_points([(3, 3), (0, 0)])).build()
    layer = layers[0]
    assert len(layer) == 2
    assert layer.is_degenerate
    # Edge (3, 3) -> (0, 0) has the smaller slope, so (3, 3) starts the cycle
    assert layer.vertices == (0, 1)
    np.testing.assert_allclose(layer.slopes, [-3 * math.pi / 4, math.pi / 4])


def test_collinear_points_fall_back_to_extremes():
    points = PointSet.from_points([(0, 0), (1, 1), (2, 2), (3, 3)])
    layers = ConvexLayerBuilder(points).build()

    assert [sorted(l.vertices) for l in layers] == [[0, 3], [1, 2]]
    assert all(l.is_degenerate for l in layers)


def test_coincident_points_collapse_to_one_vertex_per_peel():
    points = PointSet.from_points([(1, 1), (1, 1), (1, 1), (1, 1)])
    layers = ConvexLayerBuilder(points).build()

    seen = sorted(v for layer in layers for v in layer.vertices)
    assert seen == [0, 1, 2, 3]
    assert len(layers[0]) == 1


def test_duplicate_points_keep_distinct_indices():
    points = PointSet.from_points(SQUARE + [(0.0, 0.0)])
    layers = ConvexLayerBuilder(points).build()

    seen = sorted(v for layer in layers for v in layer.vertices)
    assert seen == [0, 1, 2, 3, 4]


def test_layer_from_cycle_rejects_clockwise_cycle():
    points = PointSet.from_points(SQUARE)
    with pytest.raises(ValueError):
        Layer.from_cycle(index=0, cycle=[0, 3, 2, 1], points=points)


def test_layer_predecessor_is_circular():
    layer = ConvexLayerBuilder(PointSet.from_points(SQUARE)).build()[0]
    # slopes: [-pi/2, 0, pi/2, pi]
    assert layer.predecessor(0.1) == 1
    assert layer.predecessor(0.0) == 1
    assert layer.predecessor(-3.0) == 3
    assert layer.predecessor(math.pi) == 3
