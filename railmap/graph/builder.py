"""Graph construction from an entity stream.

Two edge models are supported; one is chosen per build and applied to
every entity of that build:

- ``EdgeModel.ENTITY_VERTEX``: nodes, ways and relations all become
  vertices. A way links to each of its nodes (no label); a relation
  links to each member, labeled with the member's role.
- ``EdgeModel.NODE_CHAIN``: only nodes become vertices. A way links its
  consecutive nodes, labeled with the way id; a ``stop_area`` relation
  links every pair of its member nodes, labeled with the relation id.

Entities rejected by the admission rule are not stored, but a vertex is
still created for them when an admitted way or relation references them,
so connectivity through filtered-out nodes is preserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Optional

from ..config import IngestConfig, get_config
from ..domain.models import Entity, Node, Relation, Way
from .rail_graph import RailGraph

logger = logging.getLogger(__name__)


class EdgeModel(str, Enum):
    """How ways and relations turn into edges."""

    ENTITY_VERTEX = "entity_vertex"
    NODE_CHAIN = "node_chain"


@dataclass(frozen=True)
class AdmissionPolicy:
    """Tag-based rule selecting the entities that enter the graph.

    An entity is admitted when its tags contain any of ``keys``, or, with
    ``include_train_routes``, when its ``route`` tag equals ``train``.
    """

    keys: tuple[str, ...] = ("railway", "public_transport")
    include_train_routes: bool = False

    @classmethod
    def from_config(cls, config: IngestConfig) -> AdmissionPolicy:
        return cls(
            keys=tuple(config.admission_keys),
            include_train_routes=config.include_train_routes,
        )

    def admits_tags(self, tags: Mapping[str, str]) -> bool:
        if any(key in tags for key in self.keys):
            return True
        return self.include_train_routes and tags.get("route") == "train"

    def __call__(self, entity: Entity) -> bool:
        return self.admits_tags(entity.tags)


def is_stop_area(relation: Relation) -> bool:
    return relation.tags.get("public_transport") == "stop_area"


@dataclass
class GraphBuilder:
    """Builds a RailGraph from entities in stream order.

    Attributes:
        admission: Predicate deciding which entities are retained
        edge_model: Edge model applied to the whole build
    """

    admission: AdmissionPolicy = field(default_factory=AdmissionPolicy)
    edge_model: EdgeModel = EdgeModel.ENTITY_VERTEX

    @classmethod
    def from_config(cls, config: Optional[IngestConfig] = None) -> GraphBuilder:
        config = config or get_config().ingest
        return cls(
            admission=AdmissionPolicy.from_config(config),
            edge_model=EdgeModel(config.edge_model),
        )

    def build(self, entities: Iterable[Entity]) -> RailGraph:
        """Consume ``entities`` to exhaustion and return the finished graph.

        Errors raised while iterating ``entities`` propagate unchanged.
        """
        graph = RailGraph()
        seen = admitted = 0

        for entity in entities:
            seen += 1
            if not self.admission(entity):
                continue
            admitted += 1
            self.add(graph, entity)

        logger.info(
            "Graph built",
            extra={
                "edge_model": self.edge_model.value,
                "entities_read": seen,
                "entities_admitted": admitted,
                "vertices": graph.vertex_count,
                "edges": graph.edge_count,
            },
        )
        return graph

    def add(self, graph: RailGraph, entity: Entity) -> None:
        """Add one already-admitted entity to ``graph``."""
        if isinstance(entity, Node):
            self._add_node(graph, entity)
        elif isinstance(entity, Way):
            self._add_way(graph, entity)
        elif isinstance(entity, Relation):
            self._add_relation(graph, entity)
        else:
            raise TypeError(f"Not an entity: {entity!r}")
        graph.store.add(entity)

    def _add_node(self, graph: RailGraph, node: Node) -> None:
        vertex = graph.vertex(node.id)
        logger.debug("%s[%d]: %s, %s,%s", node.id, vertex, dict(node.tags), node.lat, node.lon)

    def _add_way(self, graph: RailGraph, way: Way) -> None:
        logger.debug("%s: %s; %s", way.id, dict(way.tags), [str(n) for n in way.nodes])

        if self.edge_model is EdgeModel.ENTITY_VERTEX:
            way_vertex = graph.vertex(way.id)
            for node_id in way.nodes:
                graph.add_edge(way_vertex, graph.vertex(node_id))
            return

        for a, b in zip(way.nodes, way.nodes[1:]):
            a_vertex = graph.vertex(a)
            b_vertex = graph.vertex(b)
            logger.debug("\t%s[%d] -- %s[%d]", a, a_vertex, b, b_vertex)
            graph.add_edge(a_vertex, b_vertex, way.id)

    def _add_relation(self, graph: RailGraph, relation: Relation) -> None:
        logger.debug(
            "%s: %s; %s",
            relation.id,
            dict(relation.tags),
            [f"{m.member}[{m.role}]" for m in relation.members],
        )

        if self.edge_model is EdgeModel.ENTITY_VERTEX:
            rel_vertex = graph.vertex(relation.id)
            for member in relation.members:
                graph.add_edge(rel_vertex, graph.vertex(member.member), member.role)
            return

        if not is_stop_area(relation):
            return

        nodes = relation.member_nodes
        for a in nodes:
            a_vertex = graph.vertex(a)
            for b in nodes:
                if not a < b:
                    continue
                b_vertex = graph.vertex(b)
                logger.debug("\t%s[%d] -- %s[%d]", a, a_vertex, b, b_vertex)
                graph.add_edge(a_vertex, b_vertex, relation.id)


def build_graph(
    entities: Iterable[Entity],
    config: Optional[IngestConfig] = None,
) -> RailGraph:
    """Build a graph with the builder described by ``config``."""
    return GraphBuilder.from_config(config).build(entities)
