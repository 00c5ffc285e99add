"""Pytest configuration and fixtures for jsondb tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from jsondb.adapters.outbound import InMemoryTableStorage, JsonFileTableStorage
from jsondb.application import TableStore
from jsondb.infrastructure.config import Config, QueryConfig, StorageConfig
from jsondb.infrastructure.container import Container
from jsondb.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a test configuration with a temporary data directory."""
    return Config(
        storage=StorageConfig(
            data_dir=temp_dir / "data",
            sync_mode="none",  # Faster for tests
        ),
        query=QueryConfig(permissive=True),
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def file_storage(temp_dir: Path, metrics_registry: MetricsRegistry) -> JsonFileTableStorage:
    """Provide JSON file storage in a temporary directory."""
    return JsonFileTableStorage(temp_dir / "data", sync=False, metrics=metrics_registry)


@pytest.fixture
def store(file_storage: JsonFileTableStorage, metrics_registry: MetricsRegistry) -> TableStore:
    """Provide a permissive, file-backed table store."""
    return TableStore(file_storage, metrics=metrics_registry)


@pytest.fixture
def strict_store(file_storage: JsonFileTableStorage, metrics_registry: MetricsRegistry) -> TableStore:
    """Provide a strict, file-backed table store."""
    return TableStore(file_storage, permissive=False, metrics=metrics_registry)


@pytest.fixture
def memory_store(metrics_registry: MetricsRegistry) -> TableStore:
    """Provide a table store over in-memory storage."""
    return TableStore(InMemoryTableStorage(), metrics=metrics_registry)


@pytest.fixture
def people(store: TableStore) -> TableStore:
    """Provide a store with a populated ``people`` table."""
    store.create_table("people", "name:string,age:number,email:string")
    store.insert_record("people", {"name": "Yunus", "age": 30, "email": "yunus@gmail.com"})
    store.insert_record("people", {"name": "Ali", "age": 25, "email": "ali@example.org"})
    return store


@pytest.fixture
def container(test_config: Config, metrics_registry: MetricsRegistry) -> Generator[Container, None, None]:
    """Provide a configured container for testing."""
    Container.reset()
    yield Container.create(test_config, metrics=metrics_registry)
    Container.reset()


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")
