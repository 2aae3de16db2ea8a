"""Observability for usercache: structured logging and Prometheus metrics."""

from usercache.observability.logging import LogContext, configure_logging
from usercache.observability.metrics import MetricsRegistry, get_metrics

__all__ = [
    "configure_logging",
    "LogContext",
    "MetricsRegistry",
    "get_metrics",
]
