"""
Onion Structure
===============

The finished, read-only structure (point arena, layers, cascade lists)
and the build() / query() entry points.

Design:
- Frozen dataclass; rebuilt from scratch for a new point set
- layers[i] and cascades[i] describe the same layer (0 = outermost)
- Safe to share between concurrent read-only queries
- Entry points log error.* events before re-raising
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple, Union

from onion_layers.analytics.stats import OnionStats
from onion_layers.config import OnionConfig
from onion_layers.construction.cascade import CascadeBuilder, CascadeList
from onion_layers.construction.layer import Layer
from onion_layers.construction.peeling import ConvexLayerBuilder
from onion_layers.errors import (
    DegenerateLayerError,
    DegenerateQueryLineError,
    InsufficientPointsError,
    NumericDomainError,
)
from onion_layers.geometry.shapes import PointSet, QueryLine
from onion_layers.logging import StructuredLogger, LogEvent
from onion_layers.query.engine import QueryEngine


@dataclass(frozen=True, eq=False)
class Onion:
    """
    Nested convex layers plus their cascade lists.

    Attributes:
        points: Point arena every index refers to
        layers: Layers, outermost first
        cascades: Cascade list per layer, same order
    """

    points: PointSet
    layers: Tuple[Layer, ...]
    cascades: Tuple[CascadeList, ...]

    def __post_init__(self):
        """Validate layer / cascade agreement."""
        if len(self.layers) == 0:
            raise ValueError("Onion needs at least one layer")
        if len(self.layers) != len(self.cascades):
            raise ValueError(
                f"Got {len(self.layers)} layers but {len(self.cascades)} cascade lists"
            )
        for i, (layer, cascade) in enumerate(zip(self.layers, self.cascades)):
            if layer.index != i or cascade.layer_index != i:
                raise ValueError(f"Layer / cascade list {i} is out of order")

    def __len__(self) -> int:
        return len(self.layers)

    @property
    def outermost(self) -> Layer:
        return self.layers[0]

    @property
    def innermost(self) -> Layer:
        return self.layers[-1]

    def layer_of(self) -> Dict[int, int]:
        """Map point index -> layer index."""
        return {
            point: layer.index
            for layer in self.layers
            for point in layer.vertices
        }

    def __repr__(self) -> str:
        sizes = [len(layer) for layer in self.layers]
        return f"Onion(points={len(self.points)}, layer_sizes={sizes})"

    def stats(self) -> OnionStats:
        """Immutable shape snapshot."""
        return OnionStats.from_onion(self)


def _entry_logger(
    component: str,
    config: Optional[OnionConfig],
    logger: Optional[StructuredLogger]
) -> StructuredLogger:
    if logger is not None:
        return logger
    level = config.logging.level if config is not None else None
    return StructuredLogger(component=component, level=level)


def build(
    points: Union[PointSet, Iterable[Sequence[float]]],
    config: Optional[OnionConfig] = None,
    logger: Optional[StructuredLogger] = None
) -> Onion:
    """
    Peel the points into convex layers and link the cascade lists.

    Args:
        points: PointSet or any sequence of (x, y) pairs
        config: Build settings (default: OnionConfig())
        logger: Structured logger shared by every build stage

    Returns:
        Read-only Onion

    Raises:
        InsufficientPointsError: If no points are given
    """
    logger = _entry_logger("builder", config, logger)
    config = config or OnionConfig()

    try:
        point_set = points if isinstance(points, PointSet) else PointSet.from_points(points)
    except InsufficientPointsError as e:
        logger.error(
            event=LogEvent.INSUFFICIENT_POINTS_ERROR,
            message="Cannot build an onion without points",
            exc_info=e,
        )
        raise

    logger.info(
        event=LogEvent.BUILD_STARTED,
        message=f"Building onion over {len(point_set)} points",
        metadata={'num_points': len(point_set)}
    )

    layers = ConvexLayerBuilder(
        point_set,
        qhull_options=config.build.qhull_options,
        slope_tolerance=config.build.slope_tolerance,
        logger=logger,
    ).build()
    cascades = CascadeBuilder(logger=logger).build(layers)

    onion = Onion(points=point_set, layers=layers, cascades=cascades)

    logger.info(
        event=LogEvent.BUILD_COMPLETED,
        message="Onion built",
        metadata=onion.stats().to_dict()
    )
    return onion


def query(
    onion: Onion,
    p1: Sequence[float],
    p2: Sequence[float],
    config: Optional[OnionConfig] = None,
    logger: Optional[StructuredLogger] = None
) -> Tuple[Tuple[int, Tuple[int, ...]], ...]:
    """
    Points strictly above the directed line p1 -> p2, per layer.

    Args:
        onion: Built structure
        p1: First point on the line
        p2: Second point on the line
        config: Query settings (default: OnionConfig())
        logger: Structured logger

    Returns:
        (layer_index, point_indices) pairs, outermost first. Each
        point_indices tuple is a counter-clockwise arc of that layer

    Raises:
        DegenerateQueryLineError: If p1 == p2
        DegenerateLayerError: Degenerate layer under the "raise" policy
    """
    logger = _entry_logger("query", config, logger)
    config = config or OnionConfig()

    try:
        line = QueryLine(start=tuple(p1), end=tuple(p2))
    except DegenerateQueryLineError as e:
        logger.error(
            event=LogEvent.DEGENERATE_QUERY_LINE_ERROR,
            message="Query line endpoints coincide",
            metadata={'p1': list(p1), 'p2': list(p2)},
            exc_info=e,
        )
        raise

    engine = QueryEngine(config=config.query, logger=logger)
    try:
        result = engine.run(onion, line)
    except DegenerateLayerError as e:
        logger.error(
            event=LogEvent.DEGENERATE_LAYER_ERROR,
            message="Boundary walk refused on a degenerate layer",
            metadata={'layer_index': e.layer_index, 'size': e.size},
            exc_info=e,
        )
        raise
    except NumericDomainError as e:
        logger.error(
            event=LogEvent.NUMERIC_DOMAIN_ERROR,
            message="Angle computation left its numeric domain",
            exc_info=e,
        )
        raise

    return result.as_pairs()


class OnionBuilder:
    """
    Builder for Onion.

    Design:
    - Fluent API for construction
    - Fail-fast validation
    - Sensible defaults

    Usage:
        onion = (
            OnionBuilder()
            .with_points([(0, 0), (4, 0), (4, 4), (0, 4), (2, 2)])
            .with_config(OnionConfig.from_yaml("config/onion.yaml"))
            .build()
        )
    """

    def __init__(self):
        self._points: Optional[PointSet] = None
        self._config: Optional[OnionConfig] = None
        self._logger: Optional[StructuredLogger] = None

    def with_points(self, points: Union[PointSet, Iterable[Sequence[float]]]) -> "OnionBuilder":
        """Set the input points (copied into a PointSet)."""
        self._points = points if isinstance(points, PointSet) else PointSet.from_points(points)
        return self

    def with_config(self, config: OnionConfig) -> "OnionBuilder":
        """Set configuration."""
        self._config = config
        return self

    def with_logger(self, logger: StructuredLogger) -> "OnionBuilder":
        """Set structured logger."""
        self._logger = logger
        return self

    def build(self) -> Onion:
        """
        Build the Onion.

        Points come from with_points(), or from the configuration's
        scene when none were given.

        Raises:
            InsufficientPointsError: If no points were provided
        """
        points = self._points
        if points is None:
            if self._config is None or not self._config.points:
                raise InsufficientPointsError(
                    "Points are required (use with_points() or a config with points)"
                )
            points = PointSet.from_points(self._config.points)

        return build(points, config=self._config, logger=self._logger)
