"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
graph construction (edge model, admission rule), region partitioning,
route costs, CSV export file names and logging.

Configuration can be overridden via environment variables:
- RAILMAP_INGEST_EDGE_MODEL=node_chain
- RAILMAP_INGEST_INCLUDE_TRAIN_ROUTES=true
- RAILMAP_ROUTING_COST_POLICY=planar
- RAILMAP_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngestConfig(BaseSettings):
    """Graph construction configuration.

    Environment variables prefixed with RAILMAP_INGEST_.
    """

    model_config = SettingsConfigDict(env_prefix="RAILMAP_INGEST_")

    edge_model: Literal["entity_vertex", "node_chain"] = "entity_vertex"
    admission_keys: tuple[str, ...] = ("railway", "public_transport")
    include_train_routes: bool = False


class PartitionConfig(BaseSettings):
    """Region partitioning configuration.

    Environment variables prefixed with RAILMAP_PARTITION_.
    """

    model_config = SettingsConfigDict(env_prefix="RAILMAP_PARTITION_")

    seed_tag: str = "ref:crs"


class RoutingConfig(BaseSettings):
    """Shortest-path cost configuration.

    Environment variables prefixed with RAILMAP_ROUTING_.
    """

    model_config = SettingsConfigDict(env_prefix="RAILMAP_ROUTING_")

    cost_policy: Literal["unit", "kind", "planar"] = "planar"
    node_weight: float = Field(default=1.0, ge=0.0)
    way_weight: float = Field(default=1.0, ge=0.0)
    relation_weight: float = Field(default=1.0, ge=0.0)
    use_planar_heuristic: bool = False


class ExportConfig(BaseSettings):
    """CSV export configuration.

    Environment variables prefixed with RAILMAP_EXPORT_.
    """

    model_config = SettingsConfigDict(env_prefix="RAILMAP_EXPORT_")

    nodes_file: str = "nodes.csv"
    ways_file: str = "ways.csv"
    way_nodes_file: str = "way-nodes.csv"
    relations_file: str = "relations.csv"
    relation_members_file: str = "relation-members.csv"


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with RAILMAP_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="RAILMAP_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.ingest.edge_model)
        print(config.routing.cost_policy)

    Environment variables prefixed with RAILMAP_.
    """

    model_config = SettingsConfigDict(env_prefix="RAILMAP_")

    ingest: IngestConfig = Field(default_factory=IngestConfig)
    partition: PartitionConfig = Field(default_factory=PartitionConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
