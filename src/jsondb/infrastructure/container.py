"""Dependency injection container for the document store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

import structlog

from jsondb.infrastructure.config import Config, get_config
from jsondb.infrastructure.logging import get_logger, setup_logging
from jsondb.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from jsondb.infrastructure.tracing import setup_tracing

if TYPE_CHECKING:
    from jsondb.application import TableStore


@dataclass
class Container:
    """Wires configuration, logging, metrics and the table store together."""

    config: Config
    logger: structlog.BoundLogger
    metrics: MetricsRegistry
    store: "TableStore"

    _instance: ClassVar["Container | None"] = None

    @classmethod
    def create(
        cls,
        config: Config | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> "Container":
        """Build a container from configuration.

        Args:
            config: Configuration (default: environment via get_config()).
            metrics: Metrics registry (default: the global registry, with
                the scrape server started if the config enables it).
        """
        from jsondb.adapters.outbound import JsonFileTableStorage
        from jsondb.application import TableStore

        config = config or get_config()
        config.ensure_directories()

        setup_logging(config.observability.log_level, config.observability.log_format)
        if config.observability.otel_endpoint:
            setup_tracing(
                service_name=config.observability.otel_service_name,
                otlp_endpoint=config.observability.otel_endpoint,
            )

        if metrics is None:
            if config.server.metrics_enabled:
                metrics = setup_metrics(config.server.metrics_port)
            else:
                metrics = get_metrics()

        storage = JsonFileTableStorage(
            config.storage.data_dir,
            sync=config.storage.sync_mode == "fsync",
            indent=config.storage.indent,
            metrics=metrics,
        )
        store = TableStore(storage, permissive=config.query.permissive, metrics=metrics)

        logger = get_logger(__name__)
        logger.info(
            "jsondb_container_initialized",
            data_dir=str(config.storage.data_dir),
            permissive=config.query.permissive,
        )

        return cls(config=config, logger=logger, metrics=metrics, store=store)

    @classmethod
    def get(cls) -> "Container":
        """Get the singleton container instance."""
        if cls._instance is None:
            cls._instance = cls.create()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the container (useful for testing)."""
        cls._instance = None


def get_container() -> Container:
    """Get the dependency injection container."""
    return Container.get()
