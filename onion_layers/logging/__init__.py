"""
Structured Logging for Onion Layers
===================================

Bounded Context: Observability

JSON-structured logging for construction and query pipelines.

Design:
- JSON output (one object per line)
- Typed events (enums prevent typos)
- Contextual metadata (layer_index, cascade sizes, etc.)

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from onion_layers.logging import create_logger, LogEvent
    >>> logger = create_logger("builder")
    >>> logger.info(
    ...     event=LogEvent.BUILD_COMPLETED,
    ...     message="Built 3 layers",
    ...     metadata={'layer_sizes': [6, 3, 4]}
    ... )

Output:
    {
        "timestamp": "2026-10-18T15:30:45.123456+00:00",
        "level": "INFO",
        "component": "builder",
        "event": "build.completed",
        "message": "Built 3 layers",
        "metadata": {"layer_sizes": [6, 3, 4]}
    }
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
