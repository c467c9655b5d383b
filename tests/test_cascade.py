"""Tests for cascade list construction (fractional cascading)."""

import math

import numpy as np
import pytest

from onion_layers import CascadeBuilder, ConvexLayerBuilder, PointSet
from onion_layers.geometry.primitives import circular_gap

from tests.conftest import SQUARE, random_points


def _build(points):
    layers = ConvexLayerBuilder(points).build()
    return layers, CascadeBuilder().build(layers)


def _is_circular_predecessor(slopes, idx, key):
    """slopes[idx] is the last slope <= key, wrapping to the end when key is below all."""
    if key < slopes[0]:
        return idx == len(slopes) - 1
    return slopes[idx] <= key and (idx == len(slopes) - 1 or slopes[idx + 1] > key)


@pytest.mark.parametrize("seed", [1, 2, 3, 4])
def test_cascade_size_formula(seed):
    """len(M_i) == len(L_i) + ceil(len(M_{i+1}) / 2); innermost M == L."""
    layers, cascades = _build(random_points(seed=seed, n=70))

    assert len(cascades) == len(layers)
    assert len(cascades[-1]) == len(layers[-1])
    for i in range(len(layers) - 1):
        assert len(cascades[i]) == len(layers[i]) + math.ceil(len(cascades[i + 1]) / 2)


@pytest.mark.parametrize("seed", [5, 6])
def test_cascade_slopes_sorted(seed):
    _, cascades = _build(random_points(seed=seed, n=50))
    for cascade in cascades:
        assert np.all(np.diff(cascade.slopes) >= 0.0)


@pytest.mark.parametrize("seed", [7, 8])
def test_cascade_contains_own_edges_and_every_second_inner_entry(seed):
    layers, cascades = _build(random_points(seed=seed, n=50))

    for i in range(len(layers) - 1):
        sources = {(e.source_layer, e.source_idx) for e in cascades[i].entries}
        own = {(i, k) for k in range(len(layers[i]))}
        carried = {
            (cascades[i + 1][j].source_layer, cascades[i + 1][j].source_idx)
            for j in range(0, len(cascades[i + 1]), 2)
        }
        assert own <= sources
        assert carried <= sources


@pytest.mark.parametrize("seed", [9, 10, 11])
def test_layer_and_parent_pointers_are_predecessors(seed):
    layers, cascades = _build(random_points(seed=seed, n=60))

    for i, cascade in enumerate(cascades):
        for n, entry in enumerate(cascade.entries):
            key = float(cascade.slopes[n])
            assert _is_circular_predecessor(layers[i].slopes, entry.layer_ptr, key)
            if i + 1 < len(cascades):
                assert _is_circular_predecessor(cascades[i + 1].slopes, entry.parent_ptr, key)
            else:
                assert entry.parent_ptr == 0


@pytest.mark.parametrize("seed", [12, 13])
def test_descent_resolves_within_one_step(seed):
    """Following parent_ptr and checking neighbours finds the true predecessor."""
    _, cascades = _build(random_points(seed=seed, n=80))
    rng = np.random.default_rng(seed)

    for key in rng.uniform(-math.pi, math.pi, size=200):
        idx = cascades[0].predecessor(key)
        for i in range(len(cascades) - 1):
            candidate = cascades[i][idx].parent_ptr
            idx = cascades[i + 1].resolve(candidate, key)
            assert idx == cascades[i + 1].predecessor(key)


def test_predecessor_has_smallest_circular_gap():
    _, cascades = _build(random_points(seed=14, n=40))
    cascade = cascades[0]

    for key in np.linspace(-math.pi, math.pi, 37):
        idx = cascade.predecessor(key)
        gaps = [circular_gap(float(s), key) for s in cascade.slopes]
        assert gaps[idx] == min(gaps)


def test_single_layer_cascade_equals_layer():
    layers, cascades = _build(PointSet.from_points(SQUARE))

    assert len(cascades) == 1
    cascade = cascades[0]
    assert len(cascade) == 4
    assert [e.layer_ptr for e in cascade.entries] == [0, 1, 2, 3]
    assert [e.source_idx for e in cascade.entries] == [0, 1, 2, 3]
    np.testing.assert_array_equal(cascade.slopes, layers[0].slopes)


def test_single_point_innermost_layer():
    layers, cascades = _build(PointSet.from_points(SQUARE + [(2.0, 2.0)]))

    assert [len(c) for c in cascades] == [5, 1]
    assert all(e.parent_ptr == 0 for e in cascades[0].entries)


def test_cascade_entries_are_read_only():
    _, cascades = _build(PointSet.from_points(SQUARE))
    with pytest.raises(ValueError):
        cascades[0].slopes[0] = 1.0


def test_empty_layers_build_no_cascades():
    assert CascadeBuilder().build(()) == ()
