"""
Configuration schema for onion construction and queries.

This module defines the configuration structure: hull options, query
strategy and policies, logging level, and optionally a point set with
named query lines (used by the CLI and the demo).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import yaml


@dataclass(frozen=True)
class BuildConfig:
    """
    Construction settings.

    qhull_options are passed straight to scipy.spatial.ConvexHull
    (None keeps SciPy's defaults).
    """

    qhull_options: Optional[str] = None
    slope_tolerance: float = 1e-12

    def __post_init__(self):
        """Validate build configuration."""
        if self.slope_tolerance < 0.0:
            raise ValueError(
                f"slope_tolerance must be >= 0, got {self.slope_tolerance}"
            )


@dataclass(frozen=True)
class QueryConfig:
    """
    Query settings.

    strategy:
        "cascade": one search on the outer list, O(1) descent per layer
        "linear": independent linear scan on every layer (reference)
    degenerate_layers (layers with fewer than 3 vertices):
        "include": walk them like any layer (self-loop / digon)
        "skip": report them empty
        "raise": raise DegenerateLayerError
    stop_at_empty_layer:
        Stop descending once a layer has no vertex above the line
    """

    strategy: str = "cascade"
    degenerate_layers: str = "include"
    stop_at_empty_layer: bool = True

    def __post_init__(self):
        """Validate query configuration."""
        valid_strategies = {"cascade", "linear"}
        if self.strategy not in valid_strategies:
            raise ValueError(
                f"Invalid strategy: {self.strategy}. "
                f"Must be one of {valid_strategies}"
            )

        valid_policies = {"include", "skip", "raise"}
        if self.degenerate_layers not in valid_policies:
            raise ValueError(
                f"Invalid degenerate_layers: {self.degenerate_layers}. "
                f"Must be one of {valid_policies}"
            )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging settings for the structured loggers."""

    level: str = "WARNING"

    def __post_init__(self):
        """Validate logging configuration."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR"}
        if self.level.upper() not in valid_levels:
            raise ValueError(
                f"Invalid logging level: {self.level}. "
                f"Must be one of {valid_levels}"
            )


@dataclass(frozen=True)
class QueryLineConfig:
    """Named query line (two distinct points)."""

    name: str
    start: Tuple[float, float]
    end: Tuple[float, float]

    def __post_init__(self):
        """Validate query line configuration."""
        if not self.name:
            raise ValueError("Query line name cannot be empty")
        if len(self.start) != 2 or len(self.end) != 2:
            raise ValueError(
                f"Query line '{self.name}' endpoints must be (x, y) pairs"
            )
        if tuple(self.start) == tuple(self.end):
            raise ValueError(
                f"Query line '{self.name}' must have two different points"
            )


@dataclass(frozen=True)
class OnionConfig:
    """
    Main configuration.

    Loaded from YAML and validated at construction. Immutable.
    """

    build: BuildConfig = field(default_factory=BuildConfig)
    query: QueryConfig = field(default_factory=QueryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Optional scene (CLI / demo input)
    points: List[Tuple[float, float]] = field(default_factory=list)
    queries: List[QueryLineConfig] = field(default_factory=list)

    def __post_init__(self):
        """Validate scene."""
        for point in self.points:
            if len(point) != 2:
                raise ValueError(f"Points must be (x, y) pairs, got {point}")

        names = [q.name for q in self.queries]
        if len(names) != len(set(names)):
            raise ValueError(f"Query line names must be unique, got {names}")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "OnionConfig":
        """
        Build configuration from a plain dict (parsed YAML).

        Missing sections fall back to defaults.
        """
        data = data or {}

        build = BuildConfig(**data.get("build", {}))
        query = QueryConfig(**data.get("query", {}))
        logging_config = LoggingConfig(**data.get("logging", {}))

        points = [
            (float(p[0]), float(p[1]))
            for p in data.get("points", [])
        ]
        queries = [
            QueryLineConfig(
                name=q["name"],
                start=(float(q["start"][0]), float(q["start"][1])),
                end=(float(q["end"][0]), float(q["end"][1])),
            )
            for q in data.get("queries", [])
        ]

        return cls(
            build=build,
            query=query,
            logging=logging_config,
            points=points,
            queries=queries,
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "OnionConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            build:
              qhull_options: null
            query:
              strategy: "cascade"
              degenerate_layers: "include"
              stop_at_empty_layer: true
            logging:
              level: "INFO"

            points: [[0, 0], [4, 0], [4, 4], [0, 4], [2, 2]]

            queries:
              - name: "diagonal"
                start: [0, 0]
                end: [4, 4]
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}")

        if data is not None and not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        return cls.from_dict(data)
