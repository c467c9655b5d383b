"""
Structured JSON Logger
=====================

Bounded Context: Observability Infrastructure

Structured logger that outputs one JSON object per log record.

Design:
- JSON output (compatible with log aggregators)
- Wraps Python's logging module (handlers, levels, propagation)
- Contextual metadata (layer_index, cascade_size, etc.)
- Type-safe events (LogEvent enum)

Example:
    >>> logger = StructuredLogger(component="query")
    >>> logger.debug(
    ...     event=LogEvent.QUERY_LAYER_RESOLVED,
    ...     message="Layer 0 resolved",
    ...     metadata={'layer_index': 0, 'above': 2}
    ... )
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional, Union
from .events import LogEvent


class StructuredLogger:
    """
    JSON structured logger.

    Attributes:
        component: Component name (e.g., "builder", "query")
        logger: Underlying Python logger instance

    Thread Safety:
        Thread-safe via Python's logging module.
    """

    def __init__(
        self,
        component: str,
        level: Optional[Union[int, str]] = logging.INFO,
        logger_name: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component identifier (e.g., "builder")
            level: Logging level, int or name (default: INFO).
                None leaves the level of an existing logger untouched
            logger_name: Custom logger name (default: onion_layers.<component>)
        """
        self.component = component
        self.logger_name = logger_name or f"onion_layers.{component}"
        self.logger = logging.getLogger(self.logger_name)
        if level is not None:
            self.logger.setLevel(_coerce_level(level))

        # Configure JSON formatter if not already configured
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def _log(
        self,
        level: str,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[Exception] = None
    ) -> None:
        """
        Internal log method with structured format.

        Args:
            level: Log level name (DEBUG, INFO, WARNING, ERROR)
            event: Typed log event
            message: Human-readable message
            metadata: Additional context
            exc_info: Exception for ERROR logs
        """
        log_level = getattr(logging, level)
        if not self.logger.isEnabledFor(log_level):
            return

        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': level,
            'component': self.component,
            'event': event.value,
            'message': message,
        }

        if metadata:
            log_entry['metadata'] = metadata

        if exc_info:
            log_entry['exception'] = {
                'type': type(exc_info).__name__,
                'message': str(exc_info)
            }

        self.logger.log(log_level, json.dumps(log_entry, default=_json_default))

    def debug(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log DEBUG level message (per-layer detail)."""
        self._log('DEBUG', event, message, metadata)

    def info(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log INFO level message.

        Example:
            >>> logger.info(
            ...     event=LogEvent.BUILD_COMPLETED,
            ...     message="Built 3 layers",
            ...     metadata={'point_count': 13}
            ... )
        """
        self._log('INFO', event, message, metadata)

    def warning(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log WARNING level message."""
        self._log('WARNING', event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[Exception] = None
    ) -> None:
        """
        Log ERROR level message.

        Args:
            event: Typed log event
            message: Human-readable message
            metadata: Additional context
            exc_info: Exception instance being reported

        Example:
            >>> try:
            ...     query(onion, (0, 0), (0, 0))
            ... except DegenerateQueryLineError as e:
            ...     logger.error(
            ...         event=LogEvent.DEGENERATE_QUERY_LINE_ERROR,
            ...         message="Rejected query",
            ...         exc_info=e,
            ...     )
        """
        self._log('ERROR', event, message, metadata, exc_info)

    def set_level(self, level: Union[int, str]) -> None:
        """
        Change logging level dynamically.

        Args:
            level: New logging level (logging.DEBUG or "DEBUG", ...)
        """
        self.logger.setLevel(_coerce_level(level))


class JSONFormatter(logging.Formatter):
    """
    Formatter used internally by StructuredLogger.

    The message built by StructuredLogger is already JSON, so it is
    passed through unchanged.
    """

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        value = getattr(logging, level.upper(), None)
        if not isinstance(value, int):
            raise ValueError(f"Unknown logging level: {level}")
        return value
    return level


def _json_default(value: Any) -> Any:
    # numpy scalars and arrays leak into metadata from the geometry layer
    if hasattr(value, 'tolist'):
        return value.tolist()
    return str(value)


# Convenience factory function
def create_logger(
    component: str,
    level: Union[int, str] = logging.INFO
) -> StructuredLogger:
    """
    Factory function to create configured StructuredLogger.

    Args:
        component: Component identifier
        level: Logging level (default: INFO)

    Returns:
        Configured StructuredLogger instance

    Example:
        >>> logger = create_logger("builder", level=logging.DEBUG)
    """
    return StructuredLogger(component=component, level=level)
