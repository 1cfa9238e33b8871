"""Graph construction and analysis for the rail network.

This subpackage builds an in-memory multigraph from OSM entities and
runs region partitioning and A* path search on top of that graph.
"""

from .astar import AStarPathFinder
from .builder import AdmissionPolicy, EdgeModel, GraphBuilder, build_graph
from .costs import (
    KindWeightedCost,
    PlanarDistanceCost,
    PlanarHeuristic,
    build_edge_cost,
    build_heuristic,
    unit_cost,
    zero_heuristic,
)
from .index import VertexIndex
from .partition import PartitionResult, RegionAssignment, RegionPartitioner, seeds_from_tag
from .rail_graph import Edge, RailGraph
from .store import EntityStore

__all__ = [
    "EntityStore",
    "VertexIndex",
    "Edge",
    "RailGraph",
    "AdmissionPolicy",
    "EdgeModel",
    "GraphBuilder",
    "build_graph",
    "RegionPartitioner",
    "PartitionResult",
    "RegionAssignment",
    "seeds_from_tag",
    "AStarPathFinder",
    "unit_cost",
    "zero_heuristic",
    "KindWeightedCost",
    "PlanarDistanceCost",
    "PlanarHeuristic",
    "build_edge_cost",
    "build_heuristic",
]
