"""Shortest-path computation using A*.

With the zero heuristic this is plain Dijkstra. Heap entries are
``(priority, vertex)`` tuples, so equal priorities are settled in vertex
handle order and results are reproducible across runs.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from ..domain.models import PathResult
from .costs import EdgeCost, Heuristic, zero_heuristic
from .rail_graph import RailGraph

logger = logging.getLogger(__name__)


@dataclass
class AStarPathFinder:
    """Heuristic-guided least-cost search over a RailGraph."""

    def find(
        self,
        graph: RailGraph,
        source: int,
        target: int,
        cost: EdgeCost,
        heuristic: Heuristic = zero_heuristic,
    ) -> Optional[PathResult]:
        """Find the least-cost path from ``source`` to ``target``.

        Args:
            graph: The graph to search.
            source: Source vertex handle.
            target: Target vertex handle.
            cost: Edge cost, called with both endpoint ids and the edge label.
            heuristic: Admissible estimate of the remaining cost, called
                with a vertex's entity id.

        Returns:
            PathResult with total cost and vertices (inclusive), or None
            if the target cannot be reached.

        Raises:
            ValueError: If ``cost`` returns a negative value.
        """
        distances: Dict[int, float] = {source: 0.0}
        previous: Dict[int, int] = {}
        visited: Set[int] = set()

        heap: List[Tuple[float, int]] = [(heuristic(graph.entity_id(source)), source)]

        while heap:
            _, u = heapq.heappop(heap)

            if u in visited:
                continue

            visited.add(u)

            if u == target:
                break

            u_id = graph.entity_id(u)
            for v, edge_handle in graph.neighbors(u):
                if v in visited:
                    continue
                v_id = graph.entity_id(v)
                weight = cost(u_id, v_id, graph.edges[edge_handle].label)
                if weight < 0:
                    raise ValueError(f"Negative edge cost {weight} between {u_id} and {v_id}")
                new_distance = distances[u] + weight
                if new_distance < distances.get(v, float("inf")):
                    distances[v] = new_distance
                    previous[v] = u
                    heapq.heappush(heap, (new_distance + heuristic(v_id), v))

        if target not in visited:
            logger.debug(
                "No path",
                extra={"source": str(graph.entity_id(source)), "target": str(graph.entity_id(target))},
            )
            return None

        path: List[int] = [target]
        while path[-1] != source:
            path.append(previous[path[-1]])
        path.reverse()

        return PathResult(
            cost=distances[target],
            vertices=tuple(path),
            entity_ids=tuple(graph.entity_id(v) for v in path),
        )
