"""Bidirectional EntityId <-> vertex handle mapping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..domain.models import EntityId


@dataclass
class VertexIndex:
    """Dense integer handles for entity ids.

    Handles are assigned in first-reference order starting at 0 and never
    change afterwards, so a handle doubles as a position in any per-vertex
    list kept by the graph.
    """

    _by_id: Dict[EntityId, int] = field(default_factory=dict, repr=False)
    _ids: List[EntityId] = field(default_factory=list, repr=False)

    def assign(self, entity_id: EntityId) -> tuple[int, bool]:
        """Return the handle of ``entity_id``, creating it on first reference.

        Returns:
            The handle and whether it was newly created.
        """
        vertex = self._by_id.get(entity_id)
        if vertex is not None:
            return vertex, False
        vertex = len(self._ids)
        self._by_id[entity_id] = vertex
        self._ids.append(entity_id)
        return vertex, True

    def vertex_of(self, entity_id: EntityId) -> Optional[int]:
        return self._by_id.get(entity_id)

    def entity_id(self, vertex: int) -> EntityId:
        """Entity id of a vertex handle.

        Raises:
            IndexError: If the handle was never assigned.
        """
        if vertex < 0:
            raise IndexError(f"Invalid vertex handle: {vertex}")
        return self._ids[vertex]

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._by_id

    def __len__(self) -> int:
        return len(self._ids)
