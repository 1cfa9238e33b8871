"""Edge-cost policies and heuristics for path search.

Distances are planar: the Euclidean norm of the latitude/longitude
difference in degrees. This is an approximation, not a geodesic
distance, but it is consistent and cheap.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Mapping, Optional, Protocol

from ..config import RoutingConfig
from ..domain.models import EdgeLabel, EntityId, EntityKind, Node
from .rail_graph import RailGraph
from .store import EntityStore


class EdgeCost(Protocol):
    """Cost of traversing one edge; must be non-negative."""

    def __call__(self, a: EntityId, b: EntityId, label: EdgeLabel) -> float: ...


class Heuristic(Protocol):
    """Lower bound on the remaining cost from a vertex to the target."""

    def __call__(self, entity_id: EntityId) -> float: ...


def unit_cost(a: EntityId, b: EntityId, label: EdgeLabel) -> float:
    """Every edge costs 1, so path cost is the hop count."""
    return 1.0


def zero_heuristic(entity_id: EntityId) -> float:
    return 0.0


def planar_distance(a: Node, b: Node) -> Optional[float]:
    """Planar distance between two nodes, or None without coordinates."""
    if not (a.has_location and b.has_location):
        return None
    return math.hypot(a.lat - b.lat, a.lon - b.lon)  # type: ignore[operator]


@dataclass(frozen=True)
class KindWeightedCost:
    """Sum of a fixed weight for the kind of each endpoint."""

    weights: Mapping[EntityKind, float] = field(
        default_factory=lambda: {
            EntityKind.NODE: 1.0,
            EntityKind.WAY: 1.0,
            EntityKind.RELATION: 1.0,
        }
    )

    def __call__(self, a: EntityId, b: EntityId, label: EdgeLabel) -> float:
        return self.weights.get(a.kind, 0.0) + self.weights.get(b.kind, 0.0)


@dataclass(frozen=True)
class PlanarDistanceCost:
    """Planar distance between the endpoints.

    Costs 0 unless both endpoints are stored nodes with coordinates.
    """

    store: EntityStore

    def __call__(self, a: EntityId, b: EntityId, label: EdgeLabel) -> float:
        a_node = self.store.node(a)
        b_node = self.store.node(b)
        if a_node is None or b_node is None:
            return 0.0
        distance = planar_distance(a_node, b_node)
        return 0.0 if distance is None else distance


def fully_located(graph: RailGraph) -> bool:
    """True when every vertex is a stored node with coordinates."""
    for vertex in graph.vertices():
        node = graph.store.node(graph.entity_id(vertex))
        if node is None or not node.has_location:
            return False
    return True


@dataclass
class PlanarHeuristic:
    """Planar distance to the target node.

    PlanarDistanceCost charges nothing for a hop that touches a way,
    a relation, a dangling node or a node without coordinates, so the
    straight-line distance only bounds the remaining cost when the graph
    has no such vertex. On any other graph the estimate is 0.
    """

    graph: RailGraph
    target: EntityId
    exact: bool = field(init=False)

    def __post_init__(self) -> None:
        self.exact = fully_located(self.graph)

    def __call__(self, entity_id: EntityId) -> float:
        if not self.exact:
            return 0.0
        here = self.graph.store.node(entity_id)
        goal = self.graph.store.node(self.target)
        if here is None or goal is None:
            return 0.0
        distance = planar_distance(here, goal)
        return 0.0 if distance is None else distance


def build_edge_cost(config: RoutingConfig, store: EntityStore) -> EdgeCost:
    """Edge-cost function selected by ``config.cost_policy``."""
    if config.cost_policy == "unit":
        return unit_cost
    if config.cost_policy == "kind":
        return KindWeightedCost(
            {
                EntityKind.NODE: config.node_weight,
                EntityKind.WAY: config.way_weight,
                EntityKind.RELATION: config.relation_weight,
            }
        )
    return PlanarDistanceCost(store)


def build_heuristic(config: RoutingConfig, graph: RailGraph, target: EntityId) -> Heuristic:
    if config.use_planar_heuristic and config.cost_policy == "planar":
        return PlanarHeuristic(graph, target)
    return zero_heuristic
