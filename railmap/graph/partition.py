"""Region partitioning by multi-source frontier expansion.

Every seed starts a breadth-first wave carrying its region label. All
waves share one FIFO queue, so they advance in lock-step; the first wave
to reach a vertex claims it. When a wave touches a vertex already owned
by another region, the contact path between the two seeds is recorded
as the boundary of that pair of regions. Only the first contact per pair
is kept.

Processing order is fixed: seeds are enqueued in ascending label order
and neighbors are visited in ascending (vertex handle, edge handle)
order. Which region claims a vertex reached by two waves in the same
round, and which crossing becomes a pair's boundary, both follow from
that order, so repeated runs give identical results.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterator, List, Mapping, Optional

from ..domain.errors import SeedNotFoundError
from ..domain.models import EntityId, EntityKind, Node
from .rail_graph import RailGraph

logger = logging.getLogger(__name__)

BoundaryKey = tuple[str, str]


@dataclass(frozen=True, slots=True)
class Claim:
    """Ownership of one vertex: its region and how the wave got there.

    Attributes:
        label: Region label
        parent: Vertex the wave came from; None for the seed itself
        via: Id of the way/relation on the crossed edge, if any
    """

    label: str
    parent: Optional[int] = None
    via: Optional[EntityId] = None


@dataclass(frozen=True, slots=True)
class RegionAssignment:
    """Region of a vertex and the path from its seed to it."""

    label: str
    path: tuple[EntityId, ...]


@dataclass
class PartitionResult:
    """Outcome of one partitioning run.

    Attributes:
        graph: The partitioned graph
        seeds: Seed vertex per region label
        claims: Ownership of every reached vertex
        boundaries: Contact path per canonical label pair
    """

    graph: RailGraph
    seeds: Dict[str, int]
    claims: Dict[int, Claim] = field(default_factory=dict)
    boundaries: Dict[BoundaryKey, tuple[EntityId, ...]] = field(default_factory=dict)

    def label_of(self, vertex: int) -> Optional[str]:
        claim = self.claims.get(vertex)
        return claim.label if claim else None

    def path_to(self, vertex: int) -> tuple[EntityId, ...]:
        """Path from the owning seed to ``vertex``; empty if unassigned."""
        if vertex not in self.claims:
            return ()
        reversed_path: List[EntityId] = []
        current: Optional[int] = vertex
        while current is not None:
            claim = self.claims[current]
            reversed_path.append(self.graph.entity_id(current))
            if claim.via is not None:
                reversed_path.append(claim.via)
            current = claim.parent
        reversed_path.reverse()
        return tuple(reversed_path)

    def assignment(self, vertex: int) -> Optional[RegionAssignment]:
        claim = self.claims.get(vertex)
        if claim is None:
            return None
        return RegionAssignment(claim.label, self.path_to(vertex))

    def assignments(self) -> Iterator[tuple[int, RegionAssignment]]:
        """All assignments in vertex order."""
        for vertex in sorted(self.claims):
            yield vertex, RegionAssignment(self.claims[vertex].label, self.path_to(vertex))

    def regions(self) -> Dict[str, List[int]]:
        """Vertices of each region, sorted."""
        regions: Dict[str, List[int]] = {label: [] for label in sorted(self.seeds)}
        for vertex in sorted(self.claims):
            regions[self.claims[vertex].label].append(vertex)
        return regions

    def unassigned(self) -> List[int]:
        """Vertices no wave reached."""
        return [v for v in self.graph.vertices() if v not in self.claims]


@dataclass
class RegionPartitioner:
    """Assigns region labels to vertices and finds region boundaries."""

    def partition(self, graph: RailGraph, seeds: Mapping[str, EntityId]) -> PartitionResult:
        """Run the frontier expansion.

        Args:
            graph: A fully built graph.
            seeds: Region label -> seed entity id.

        Returns:
            PartitionResult with claims and boundaries.

        Raises:
            SeedNotFoundError: If a seed id has no vertex. Checked for all
                seeds before any expansion happens.
        """
        seed_vertices: Dict[str, int] = {}
        for label in sorted(seeds):
            entity_id = seeds[label]
            vertex = graph.vertex_of(entity_id)
            if vertex is None:
                raise SeedNotFoundError(
                    f"Seed {label!r} refers to {entity_id}, which is not in the graph",
                    label=label,
                    entity_id=str(entity_id),
                )
            seed_vertices[label] = vertex

        result = PartitionResult(graph=graph, seeds=seed_vertices)
        claims = result.claims
        queue: Deque[int] = deque()

        for label, vertex in seed_vertices.items():
            if vertex in claims:
                logger.warning(
                    "Seed vertex already claimed",
                    extra={"label": label, "owner": claims[vertex].label},
                )
                continue
            claims[vertex] = Claim(label)
            queue.append(vertex)

        while queue:
            vertex = queue.popleft()
            label = claims[vertex].label
            logger.debug("Visit:\t%s: %d; %s", label, vertex, graph.entity_id(vertex))

            for succ, edge_handle in graph.neighbors(vertex):
                succ_claim = claims.get(succ)

                if succ_claim is None:
                    via = graph.edges[edge_handle].label
                    claims[succ] = Claim(
                        label,
                        parent=vertex,
                        via=via if isinstance(via, EntityId) else None,
                    )
                    queue.append(succ)
                    logger.debug("New:\t%s[%d]", label, succ)
                elif succ_claim.label != label:
                    logger.debug(
                        "Boundary:\t%s[%d]--%s[%d]", label, vertex, succ_claim.label, succ
                    )
                    self._record_boundary(result, vertex, succ)

        logger.info(
            "Partition complete",
            extra={
                "regions": len(seed_vertices),
                "assigned": len(claims),
                "unassigned": graph.vertex_count - len(claims),
                "boundaries": len(result.boundaries),
            },
        )
        return result

    @staticmethod
    def _record_boundary(result: PartitionResult, vertex: int, succ: int) -> None:
        label = result.claims[vertex].label
        succ_label = result.claims[succ].label
        if label <= succ_label:
            key = (label, succ_label)
            first, second = vertex, succ
        else:
            key = (succ_label, label)
            first, second = succ, vertex

        if key in result.boundaries:
            return
        result.boundaries[key] = result.path_to(first) + tuple(reversed(result.path_to(second)))


def seeds_from_tag(graph: RailGraph, tag: str = "ref:crs") -> Dict[str, EntityId]:
    """Seed mapping from a node tag, e.g. station CRS codes.

    Nodes are scanned in stream order; when two nodes share a code the
    one read later wins.
    """
    seeds: Dict[str, EntityId] = {}
    for node_id, node in graph.store.nodes.items():
        code = node.tags.get(tag)
        if code:
            seeds[code] = node_id
    return seeds


def boundary_nodes(graph: RailGraph, path: tuple[EntityId, ...]) -> List[Node]:
    """Stored nodes along a path, skipping ways, relations and dangling ids."""
    nodes: List[Node] = []
    for entity_id in path:
        if entity_id.kind is not EntityKind.NODE:
            continue
        node = graph.store.node(entity_id)
        if node is not None:
            nodes.append(node)
    return nodes
