"""Prometheus metrics for usercache.

Provides cache and store instrumentation:
- Cache hits, misses and downgraded errors
- Store operation latency

Usage:
    from usercache.observability.metrics import get_metrics

    metrics = get_metrics()
    metrics.cache_hits_total.inc()
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

logger = logging.getLogger(__name__)


class NoOpMetric:
    """No-op metric for when metrics are disabled."""

    def labels(self, **kwargs: Any) -> "NoOpMetric":
        """Return self for chaining."""
        return self

    def inc(self, amount: float = 1) -> None:
        """No-op."""
        pass

    def observe(self, amount: float) -> None:
        """No-op."""
        pass


@dataclass
class MetricsRegistry:
    """Registry for Prometheus metrics.

    Each instance owns its CollectorRegistry so several coordinators (or
    tests) can coexist in one process.
    """

    enabled: bool = True

    cache_hits_total: Any = None
    cache_misses_total: Any = None
    cache_errors_total: Any = None
    store_operation_duration_seconds: Any = None

    _registry: CollectorRegistry | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.enabled:
            noop = NoOpMetric()
            self.cache_hits_total = noop
            self.cache_misses_total = noop
            self.cache_errors_total = noop
            self.store_operation_duration_seconds = noop
            logger.info("Metrics are disabled")
            return

        self._registry = CollectorRegistry()

        self.cache_hits_total = Counter(
            "usercache_cache_hits_total",
            "Cache hits on user reads",
            registry=self._registry,
        )

        self.cache_misses_total = Counter(
            "usercache_cache_misses_total",
            "Cache misses on user reads (absent, corrupt or unavailable)",
            registry=self._registry,
        )

        self.cache_errors_total = Counter(
            "usercache_cache_errors_total",
            "Cache errors discarded by the coordinator",
            ["operation"],
            registry=self._registry,
        )

        self.store_operation_duration_seconds = Histogram(
            "usercache_store_operation_duration_seconds",
            "User store operation latency in seconds",
            ["operation"],
            buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
            registry=self._registry,
        )

    @contextmanager
    def time_store(self, operation: str) -> Iterator[None]:
        """Observe the duration of a store call, successful or not."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.store_operation_duration_seconds.labels(operation=operation).observe(
                time.perf_counter() - start
            )

    def generate_latest(self) -> bytes:
        """Generate Prometheus metrics in exposition format."""
        if self._registry is None:
            return b"# Metrics disabled\n"
        return generate_latest(self._registry)


_metrics: MetricsRegistry | None = None


def get_metrics() -> MetricsRegistry:
    """Get the process-wide metrics registry.

    Created on first access from the current settings.
    """
    global _metrics
    if _metrics is None:
        from usercache.config import settings

        _metrics = MetricsRegistry(enabled=settings.enable_metrics)
    return _metrics
