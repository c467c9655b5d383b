"""Shared fixtures for the onion_layers test suite."""

import numpy as np
import pytest

from onion_layers import PointSet, build
from onion_layers.samples import SAMPLE_POINTS


SQUARE = [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0)]


@pytest.fixture
def square_onion():
    """Single layer: the 4 corners of a square."""
    return build(SQUARE)


@pytest.fixture
def square_with_center_onion():
    """Square corners (0-3) plus the center (4) as a 1-point layer."""
    return build(SQUARE + [(2.0, 2.0)])


@pytest.fixture
def collinear_onion():
    """Points on y = x: two digon layers."""
    return build([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0), (3.0, 3.0)])


@pytest.fixture
def sample_onion():
    return build(SAMPLE_POINTS)


def random_points(seed: int, n: int) -> PointSet:
    rng = np.random.default_rng(seed)
    return PointSet(coords=rng.uniform(-100.0, 100.0, size=(n, 2)))


def random_lines(seed: int, count: int):
    rng = np.random.default_rng(seed)
    for _ in range(count):
        start = tuple(rng.uniform(-150.0, 150.0, size=2))
        end = tuple(rng.uniform(-150.0, 150.0, size=2))
        yield start, end


@pytest.fixture(params=[1, 2, 3, 4, 5])
def random_onion(request):
    """Random point sets of different sizes (general position)."""
    n = 10 + 17 * request.param
    return build(random_points(seed=request.param, n=n))
