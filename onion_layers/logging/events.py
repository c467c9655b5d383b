"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for structured logging.

Event Naming Convention:
    <component>.<category>.<action>

    component: build, cascade, query, error
    category: layer, list, seed
    action: peeled, built, resolved
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - build.*: Convex layer peeling
    - cascade.*: Cascade list construction
    - query.*: Point location queries
    - error.*: Error conditions
    """

    # ========== Build Events ==========
    BUILD_STARTED = "build.started"
    """Peeling started for a point set."""

    LAYER_PEELED = "build.layer.peeled"
    """One convex layer removed from the remaining points."""

    HULL_DEGENERATE = "build.hull.degenerate"
    """Remaining points are collinear or coincident; extremes used instead."""

    BUILD_COMPLETED = "build.completed"
    """All layers and cascade lists are ready."""

    # ========== Cascade Events ==========
    CASCADE_LIST_BUILT = "cascade.list.built"
    """Cascade list for one layer merged and linked."""

    # ========== Query Events ==========
    QUERY_SEEDED = "query.seeded"
    """Initial search on the outermost cascade list finished."""

    QUERY_LAYER_RESOLVED = "query.layer.resolved"
    """Boundary walk finished on one layer."""

    QUERY_TERMINATED_EARLY = "query.terminated_early"
    """A layer had no vertex above the line; inner layers skipped."""

    QUERY_COMPLETED = "query.completed"
    """Query finished."""

    # ========== Error Events ==========
    INSUFFICIENT_POINTS_ERROR = "error.insufficient_points"
    """build() called without points."""

    DEGENERATE_LAYER_ERROR = "error.degenerate_layer"
    """Boundary walk refused on a layer with fewer than 3 vertices."""

    DEGENERATE_QUERY_LINE_ERROR = "error.degenerate_query_line"
    """Query line endpoints coincide."""

    NUMERIC_DOMAIN_ERROR = "error.numeric_domain"
    """NaN or zero-length direction in an angle computation."""

    CONFIG_ERROR = "error.config"
    """Configuration file could not be loaded or validated."""


# Event categories for filtering
BUILD_EVENTS = {
    LogEvent.BUILD_STARTED,
    LogEvent.LAYER_PEELED,
    LogEvent.HULL_DEGENERATE,
    LogEvent.BUILD_COMPLETED,
    LogEvent.CASCADE_LIST_BUILT,
}

QUERY_EVENTS = {
    LogEvent.QUERY_SEEDED,
    LogEvent.QUERY_LAYER_RESOLVED,
    LogEvent.QUERY_TERMINATED_EARLY,
    LogEvent.QUERY_COMPLETED,
}

ERROR_EVENTS = {
    LogEvent.INSUFFICIENT_POINTS_ERROR,
    LogEvent.DEGENERATE_LAYER_ERROR,
    LogEvent.DEGENERATE_QUERY_LINE_ERROR,
    LogEvent.NUMERIC_DOMAIN_ERROR,
    LogEvent.CONFIG_ERROR,
}
