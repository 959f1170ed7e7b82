"""
Observability module for the schema exporter.

Provides:
- Structured logging with JSON format and an export correlation ID
- Export correlation ID (export_id) generation and propagation
- Prometheus metrics collection for schema exports

Usage:
    from spice2json.core.observability import (
        configure_logging,
        get_export_id,
        metrics,
    )
"""

import json
import logging
import uuid
from contextvars import ContextVar
from datetime import UTC, datetime

from prometheus_client import CollectorRegistry, Counter, Histogram

# ============================================================================
# Context Variables for Export Tracking
# ============================================================================

# Correlation ID - links all logs for a single export pass
_export_id_ctx: ContextVar[str] = ContextVar("export_id", default="")


def generate_export_id() -> str:
    """
    Generate a unique export ID for correlation.

    Returns:
        String representation of a UUID4
    """
    return str(uuid.uuid4())


def get_export_id() -> str:
    """Get the current export ID from context."""
    return _export_id_ctx.get()


def set_export_id(export_id: str) -> None:
    """Set the export ID for the current context."""
    _export_id_ctx.set(export_id)


# ============================================================================
# Structured Logging Configuration
# ============================================================================

# LogRecord attributes that are not user-supplied extras
_RESERVED_RECORD_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
    }
)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs as JSON with standard fields:
    - timestamp: ISO 8601 format
    - level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - logger: Logger name
    - message: Log message
    - export_id: Correlation ID (if available)
    - extra: Any additional context from logging.extra
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Python logging LogRecord

        Returns:
            JSON-formatted log string
        """
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        export_id = get_export_id()
        if export_id:
            log_entry["export_id"] = export_id

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
            }

        log_entry["function"] = record.funcName
        log_entry["line"] = record.lineno

        # These come from logger.info("msg", extra={"key": "value"})
        extra_keys = {
            k: v for k, v in record.__dict__.items() if k not in _RESERVED_RECORD_KEYS
        }
        if extra_keys:
            log_entry["extra"] = extra_keys

        return json.dumps(log_entry, default=str)


def configure_logging(level: str = "WARNING", structured: bool = False) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Emit JSON lines via StructuredFormatter instead of plain text
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Logs go to stderr so stdout stays reserved for the exported document
    handler = logging.StreamHandler()
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    root_logger.addHandler(handler)


# ============================================================================
# Prometheus Metrics
# ============================================================================

# Use a custom registry to avoid conflicts with other Prometheus metrics
_registry = CollectorRegistry()


class Metrics:
    """
    Centralized metrics collection for schema exports.

    Metrics:
    - Export success/failure count
    - Export duration
    - Number of definitions per exported schema
    """

    def __init__(self, registry: CollectorRegistry) -> None:
        """Initialize all metrics with proper labels."""
        self.registry = registry

        self.schema_exports_total = Counter(
            "schema_exports_total",
            "Total schema exports",
            ["status"],
            registry=self.registry,
        )

        self.schema_export_duration_seconds = Histogram(
            "schema_export_duration_seconds",
            "Schema export duration in seconds",
            buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
            registry=self.registry,
        )

        self.schema_export_definitions_count = Histogram(
            "schema_export_definitions_count",
            "Number of object definitions in an exported schema",
            buckets=(1, 5, 10, 25, 50, 100, 250, 500),
            registry=self.registry,
        )


# Global metrics instance
metrics = Metrics(_registry)
