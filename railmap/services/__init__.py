"""Services layer - Application orchestration.

This module contains the application services that orchestrate the
flow of data from entity sources through the graph core.

Available services:
- RailNetworkService: Builds the graph, partitions it and finds routes
"""

from .network_service import RailNetworkService

__all__ = ["RailNetworkService"]
