"""Prometheus metrics for the document store."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all document store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Operation metrics
        self.operations_total = Counter(
            "jsondb_operations_total",
            "Total number of store operations",
            ["operation", "status"],  # status: success, error
            registry=self._registry,
        )

        self.operation_latency_seconds = Histogram(
            "jsondb_operation_latency_seconds",
            "Store operation latency in seconds",
            ["operation"],
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
            registry=self._registry,
        )

        # Persistence metrics
        self.table_writes_total = Counter(
            "jsondb_table_writes_total",
            "Total number of full table rewrites",
            registry=self._registry,
        )

        self.table_bytes_written_total = Counter(
            "jsondb_table_bytes_written_total",
            "Total bytes written to table files",
            registry=self._registry,
        )

        # Query metrics
        self.records_scanned_total = Counter(
            "jsondb_records_scanned_total",
            "Total records examined by filter evaluation",
            registry=self._registry,
        )

        self.tables = Gauge(
            "jsondb_tables",
            "Number of tables known to the store",
            registry=self._registry,
        )

        # Server info
        self.info = Info(
            "jsondb",
            "Document store information",
            registry=self._registry,
        )


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from jsondb import __version__
    _metrics.info.info({
        "version": __version__,
    })

    # Start HTTP server for Prometheus scraping
    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
