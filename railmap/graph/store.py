"""Entity storage keyed by EntityId."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional

from ..domain.models import Entity, EntityId, EntityKind, Node, Relation, Way


@dataclass
class EntityStore:
    """Holds every retained entity, one table per kind.

    Lookup of an id that was never stored (for example a node that
    failed admission but is referenced by an admitted way) returns None.
    """

    nodes: Dict[EntityId, Node] = field(default_factory=dict)
    ways: Dict[EntityId, Way] = field(default_factory=dict)
    relations: Dict[EntityId, Relation] = field(default_factory=dict)

    @classmethod
    def from_entities(cls, entities: Iterable[Entity]) -> EntityStore:
        store = cls()
        for entity in entities:
            store.add(entity)
        return store

    def add(self, entity: Entity) -> None:
        """Store an entity, replacing any previous entity with the same id."""
        if isinstance(entity, Node):
            self.nodes[entity.id] = entity
        elif isinstance(entity, Way):
            self.ways[entity.id] = entity
        elif isinstance(entity, Relation):
            self.relations[entity.id] = entity
        else:
            raise TypeError(f"Not an entity: {entity!r}")

    def get(self, entity_id: EntityId) -> Optional[Entity]:
        if entity_id.kind is EntityKind.NODE:
            return self.nodes.get(entity_id)
        if entity_id.kind is EntityKind.WAY:
            return self.ways.get(entity_id)
        return self.relations.get(entity_id)

    def node(self, entity_id: EntityId) -> Optional[Node]:
        return self.nodes.get(entity_id)

    def __contains__(self, entity_id: object) -> bool:
        return isinstance(entity_id, EntityId) and self.get(entity_id) is not None

    def __len__(self) -> int:
        return len(self.nodes) + len(self.ways) + len(self.relations)

    def __iter__(self) -> Iterator[Entity]:
        """Iterate entities in id order: nodes, then ways, then relations."""
        for table in (self.nodes, self.ways, self.relations):
            for key in sorted(table):
                yield table[key]
