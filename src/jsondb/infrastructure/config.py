"""Configuration management for the document store."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseModel):
    """Storage configuration."""

    data_dir: Path = Field(default=Path("data"), description="Directory holding one JSON file per table")
    sync_mode: Literal["fsync", "none"] = Field(
        default="fsync", description="Whether table writes are fsynced before the atomic replace"
    )
    indent: int = Field(default=2, ge=0, le=8, description="JSON indentation of table files")


class QueryConfig(BaseModel):
    """Filter language configuration."""

    permissive: bool = Field(
        default=True,
        description="Drop malformed filter tokens and let unknown operators match everything",
    )


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, ge=1, le=65535, description="HTTP API port")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")
    metrics_enabled: bool = Field(default=False, description="Start the Prometheus scrape server")


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="console", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="jsondb", description="Service name for tracing")


class Config(BaseSettings):
    """Main configuration for the document store."""

    model_config = SettingsConfigDict(
        env_prefix="JSONDB_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    def ensure_directories(self) -> None:
        """Ensure the data directory exists."""
        self.storage.data_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    config = Config()
    config.ensure_directories()
    return config
