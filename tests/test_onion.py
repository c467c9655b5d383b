"""Tests for the build() / query() entry points and OnionBuilder."""

import json
import logging

import pytest

from onion_layers import (
    DegenerateLayerError,
    DegenerateQueryLineError,
    InsufficientPointsError,
    Onion,
    OnionBuilder,
    OnionConfig,
    PointSet,
    QueryConfig,
    build,
    query,
)
from onion_layers.logging import StructuredLogger
from onion_layers.samples import SAMPLE_POINTS

from tests.conftest import SQUARE


def _events(caplog):
    return [json.loads(record.getMessage())['event'] for record in caplog.records]


def test_sample_fixture_layers(sample_onion):
    assert [len(layer) for layer in sample_onion.layers] == [6, 3, 4]
    assert [set(layer.vertices) for layer in sample_onion.layers] == [
        {0, 1, 3, 7, 8, 12},
        {4, 5, 10},
        {2, 6, 9, 11},
    ]


def test_sample_fixture_cascade_sizes(sample_onion):
    assert [len(cascade) for cascade in sample_onion.cascades] == [9, 5, 4]


def test_sample_fixture_stats(sample_onion):
    stats = sample_onion.stats()
    assert stats.num_points == 13
    assert stats.num_layers == 3
    assert stats.layer_sizes == (6, 3, 4)
    assert stats.cascade_sizes == (9, 5, 4)
    assert stats.degenerate_layers == 0


def test_square_is_single_layer(square_onion):
    assert len(square_onion) == 1
    assert len(square_onion.cascades[0]) == len(square_onion.layers[0]) == 4


def test_single_leftover_point_builds(square_with_center_onion):
    onion = square_with_center_onion
    assert [len(layer) for layer in onion.layers] == [4, 1]
    assert len(onion.cascades[-1]) == 1
    assert onion.innermost.vertices == (4,)
    assert onion.layer_of()[4] == 1


def test_build_accepts_point_set():
    onion = build(PointSet.from_points(SQUARE))
    assert isinstance(onion, Onion)


def test_build_single_point():
    onion = build([(5.0, 5.0)])
    assert onion.layers[0].vertices == (0,)
    assert query(onion, (0, 0), (10, 0)) == ((0, (0,)),)
    assert query(onion, (10, 0), (0, 0)) == ((0, ()),)


def test_build_rejects_empty_input():
    with pytest.raises(InsufficientPointsError):
        build([])


def test_query_entry_point(square_onion):
    assert query(square_onion, (0, 2), (4, 2)) == ((0, (2, 3)),)


def test_query_rejects_identical_points(square_onion):
    with pytest.raises(DegenerateQueryLineError):
        query(square_onion, (1, 1), (1, 1))


def test_query_uses_config(square_with_center_onion):
    config = OnionConfig(query=QueryConfig(degenerate_layers="raise"))
    with pytest.raises(DegenerateLayerError):
        query(square_with_center_onion, (0, 1), (4, 1), config=config)


def test_onion_is_frozen(square_onion):
    with pytest.raises(Exception):
        square_onion.layers = ()


def test_onion_rejects_mismatched_cascades(square_onion):
    with pytest.raises(ValueError):
        Onion(points=square_onion.points, layers=square_onion.layers, cascades=())


def test_onion_builder_with_points():
    onion = OnionBuilder().with_points(SAMPLE_POINTS).build()
    assert [len(layer) for layer in onion.layers] == [6, 3, 4]


def test_onion_builder_uses_config_points():
    config = OnionConfig(points=list(SQUARE))
    onion = OnionBuilder().with_config(config).build()
    assert len(onion.points) == 4


def test_onion_builder_requires_points():
    with pytest.raises(InsufficientPointsError):
        OnionBuilder().build()


def test_build_logs_lifecycle_events(caplog):
    logger = StructuredLogger(component="test_build", level=logging.DEBUG)
    with caplog.at_level(logging.DEBUG):
        build(SAMPLE_POINTS, logger=logger)

    events = _events(caplog)
    assert events[0] == "build.started"
    assert events[-1] == "build.completed"
    assert events.count("build.layer.peeled") == 3
    assert events.count("cascade.list.built") == 3


def test_build_logs_error_before_raising(caplog):
    logger = StructuredLogger(component="test_build_error", level=logging.DEBUG)
    with caplog.at_level(logging.DEBUG):
        with pytest.raises(InsufficientPointsError):
            build([], logger=logger)

    assert _events(caplog) == ["error.insufficient_points"]
    entry = json.loads(caplog.records[0].getMessage())
    assert entry['level'] == "ERROR"
    assert entry['exception']['type'] == "InsufficientPointsError"


def test_query_logs_error_before_raising(caplog, square_onion):
    logger = StructuredLogger(component="test_query_error", level=logging.DEBUG)
    with caplog.at_level(logging.DEBUG):
        with pytest.raises(DegenerateQueryLineError):
            query(square_onion, (1, 1), (1, 1), logger=logger)

    assert _events(caplog) == ["error.degenerate_query_line"]


def test_query_logs_per_layer_events(caplog, sample_onion):
    logger = StructuredLogger(component="test_query", level=logging.DEBUG)
    with caplog.at_level(logging.DEBUG):
        query(sample_onion, (0, -1000), (1, -1000), logger=logger)

    events = _events(caplog)
    assert events[0] == "query.seeded"
    assert events.count("query.layer.resolved") == 3
    assert events[-1] == "query.completed"
