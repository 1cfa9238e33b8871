"""Rail network service - Main orchestrator.

This service ties an entity source to the graph core: it builds the
graph once, then answers partitioning and routing requests against it
and optionally renders the results on a map.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from ..config import AppConfig, get_config
from ..domain.errors import ConfigurationError, NoRouteFoundError, VertexNotFoundError
from ..domain.models import EntityId, Node, PathResult
from ..graph.astar import AStarPathFinder
from ..graph.builder import GraphBuilder
from ..graph.costs import build_edge_cost, build_heuristic
from ..graph.partition import PartitionResult, RegionPartitioner, boundary_nodes, seeds_from_tag
from ..graph.rail_graph import RailGraph
from ..ports.entities import EntitySourcePort
from ..ports.rendering import MapRendererPort


@dataclass
class RailNetworkService:
    """Main service for analysing a rail network.

    Attributes:
        source: Entity stream the graph is built from
        config: Application configuration
        partitioner: Region partitioner
        path_finder: Shortest path search
        map_renderer: Optional map rendering
    """

    source: EntitySourcePort
    config: AppConfig = field(default_factory=get_config)
    partitioner: RegionPartitioner = field(default_factory=RegionPartitioner)
    path_finder: AStarPathFinder = field(default_factory=AStarPathFinder)
    map_renderer: Optional[MapRendererPort] = None

    _graph: Optional[RailGraph] = field(default=None, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> RailGraph:
        """Build the graph from the source, once.

        Raises:
            IngestionError: If the source cannot be read.
        """
        if self._graph is not None:
            return self._graph

        self._logger.debug(
            "Loading graph",
            extra={"edge_model": self.config.ingest.edge_model},
        )
        self._graph = GraphBuilder.from_config(self.config.ingest).build(self.source)
        return self._graph

    def default_seeds(self) -> Dict[str, EntityId]:
        """Seeds taken from the configured node tag (``ref:crs`` by default)."""
        return seeds_from_tag(self.load(), self.config.partition.seed_tag)

    def partition(
        self,
        seeds: Optional[Mapping[str, EntityId]] = None,
        map_output_path: Optional[Path] = None,
    ) -> PartitionResult:
        """Partition the network into regions.

        Args:
            seeds: Region label -> seed id; defaults to ``default_seeds()``.
            map_output_path: Render boundary paths to this file if given.

        Raises:
            SeedNotFoundError: If a seed is not in the graph.
            RenderingError: If map generation fails.
        """
        graph = self.load()
        if seeds is None:
            seeds = self.default_seeds()

        self._logger.info("Partitioning network", extra={"seeds": len(seeds)})
        result = self.partitioner.partition(graph, seeds)

        if map_output_path is not None:
            lines = {
                f"{a}--{b}": boundary_nodes(graph, path)
                for (a, b), path in result.boundaries.items()
            }
            self._render(lines, map_output_path)

        return result

    def route(
        self,
        source: EntityId,
        target: EntityId,
        map_output_path: Optional[Path] = None,
    ) -> PathResult:
        """Find the least-cost path between two entities.

        Raises:
            VertexNotFoundError: If either entity is not in the graph.
            NoRouteFoundError: If no path exists.
            RenderingError: If map generation fails.
        """
        graph = self.load()
        source_vertex = self._vertex(graph, source)
        target_vertex = self._vertex(graph, target)

        self._logger.debug(
            "Solving route",
            extra={"source": str(source), "target": str(target)},
        )

        result = self.path_finder.find(
            graph,
            source_vertex,
            target_vertex,
            build_edge_cost(self.config.routing, graph.store),
            build_heuristic(self.config.routing, graph, target),
        )

        if result is None:
            self._logger.warning(
                "No route found",
                extra={"source": str(source), "target": str(target)},
            )
            raise NoRouteFoundError(
                f"No path from {source} to {target}",
                source=str(source),
                target=str(target),
            )

        self._logger.info(
            "Route found",
            extra={
                "source": str(source),
                "target": str(target),
                "hops": result.hops,
                "cost": result.cost,
            },
        )

        if map_output_path is not None:
            self._render({"route": self.route_nodes(result)}, map_output_path)

        return result

    def route_safe(self, source: EntityId, target: EntityId) -> Optional[PathResult]:
        """Like route(), but returns None when either end is unknown or unreachable."""
        graph = self.load()
        source_vertex = graph.vertex_of(source)
        target_vertex = graph.vertex_of(target)
        if source_vertex is None or target_vertex is None:
            return None
        return self.path_finder.find(
            graph,
            source_vertex,
            target_vertex,
            build_edge_cost(self.config.routing, graph.store),
            build_heuristic(self.config.routing, graph, target),
        )

    def route_nodes(self, result: PathResult) -> List[Node]:
        """Stored nodes along a route, in order."""
        return boundary_nodes(self.load(), result.entity_ids)

    def _vertex(self, graph: RailGraph, entity_id: EntityId) -> int:
        vertex = graph.vertex_of(entity_id)
        if vertex is None:
            raise VertexNotFoundError(
                f"Entity not in graph: {entity_id}",
                entity_id=str(entity_id),
            )
        return vertex

    def _render(self, lines: Mapping[str, List[Node]], output_path: Path) -> None:
        if self.map_renderer is None:
            raise ConfigurationError(
                "A map was requested but no map renderer is configured",
                setting_name="map_renderer",
            )
        self.map_renderer.render(lines, output_path)
