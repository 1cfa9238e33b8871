"""The graph aggregate: entity store, vertex index and edge arena.

Vertices and edges are plain integer handles. Edges live in a single
list; each vertex keeps the handles of its incident edges. Nothing in
the arena points back at the graph object itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from ..domain.models import EdgeLabel, Entity, EntityId
from .index import VertexIndex
from .store import EntityStore


@dataclass(frozen=True, slots=True)
class Edge:
    """Undirected edge between two vertex handles."""

    a: int
    b: int
    label: EdgeLabel = None

    def other(self, vertex: int) -> int:
        """Endpoint opposite ``vertex``."""
        return self.b if vertex == self.a else self.a


@dataclass
class RailGraph:
    """Undirected multigraph over admitted (and dangling) entities.

    Attributes:
        store: Entities that passed admission
        index: EntityId <-> vertex handle mapping
        edges: Edge arena, indexed by edge handle
    """

    store: EntityStore = field(default_factory=EntityStore)
    index: VertexIndex = field(default_factory=VertexIndex)
    edges: List[Edge] = field(default_factory=list)
    _incident: List[List[int]] = field(default_factory=list, repr=False)

    def vertex(self, entity_id: EntityId) -> int:
        """Return the vertex of ``entity_id``, creating it on first reference."""
        vertex, created = self.index.assign(entity_id)
        if created:
            self._incident.append([])
        return vertex

    def add_edge(self, a: int, b: int, label: EdgeLabel = None) -> int:
        """Add an undirected edge and return its handle.

        Raises:
            IndexError: If either endpoint is not a known vertex.
        """
        for endpoint in (a, b):
            if not 0 <= endpoint < len(self._incident):
                raise IndexError(f"Unknown vertex handle: {endpoint}")
        handle = len(self.edges)
        self.edges.append(Edge(a, b, label))
        self._incident[a].append(handle)
        if b != a:
            self._incident[b].append(handle)
        return handle

    def vertex_of(self, entity_id: EntityId) -> Optional[int]:
        """Vertex of ``entity_id`` without creating one."""
        return self.index.vertex_of(entity_id)

    def entity_id(self, vertex: int) -> EntityId:
        return self.index.entity_id(vertex)

    def entity(self, vertex: int) -> Optional[Entity]:
        """Stored entity behind a vertex; None for dangling vertices."""
        return self.store.get(self.index.entity_id(vertex))

    def neighbors(self, vertex: int) -> List[tuple[int, int]]:
        """Incident ``(neighbor, edge handle)`` pairs, sorted.

        The ordering by neighbor handle, then edge handle, is what makes
        every traversal over the graph reproducible.
        """
        pairs = [(self.edges[e].other(vertex), e) for e in self._incident[vertex]]
        pairs.sort()
        return pairs

    def degree(self, vertex: int) -> int:
        return len(self._incident[vertex])

    def vertices(self) -> Iterator[int]:
        return iter(range(len(self.index)))

    @property
    def vertex_count(self) -> int:
        return len(self.index)

    @property
    def edge_count(self) -> int:
        return len(self.edges)
