"""Human-readable inspection helpers for map data.

Nothing here is part of a stable output format; the CLI prints these
lines for a person to read.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Tuple

from .domain.models import Entity, EntityId, EntityKind, Node, Relation, Way
from .graph.store import EntityStore


def format_entity(entity: Entity) -> str:
    """One-line summary: padded id, ``k=v`` tags, and coordinates for nodes."""
    text = f"{entity.id.kind.prefix.upper()}{entity.id.ref:<14}\t"
    text += " ".join(f"{k}={v}" for k, v in entity.tags.items()) + ";"
    if isinstance(entity, Node) and entity.has_location:
        text += f"\t{entity.lat:.6f},{entity.lon:.6f}"
    return text


def _children(entity: Entity) -> Tuple[EntityId, ...]:
    if isinstance(entity, Relation):
        return tuple(m.member for m in entity.members)
    if isinstance(entity, Way):
        return entity.nodes
    if isinstance(entity, Node):
        return ()
    raise TypeError(f"Not an entity: {entity!r}")


def member_tree(store: EntityStore, root: EntityId) -> List[str]:
    """Indented tree of ``root`` and its members, depth first.

    Members missing from ``store`` are left out, as are members that
    would revisit an ancestor (self-containing relations).
    """
    lines: List[str] = []
    stack: List[Tuple[int, EntityId, Tuple[EntityId, ...]]] = [(0, root, ())]

    while stack:
        depth, entity_id, ancestors = stack.pop()
        entity = store.get(entity_id)
        if entity is None or entity_id in ancestors:
            continue

        lines.append("  " * depth + format_entity(entity))

        chain = ancestors + (entity_id,)
        for child in reversed(_children(entity)):
            stack.append((depth + 1, child, chain))

    return lines


def railway_kinds(entities: Iterable[Entity]) -> Dict[EntityKind, Counter]:
    """Count ``railway=*`` values per entity kind."""
    counts: Dict[EntityKind, Counter] = {kind: Counter() for kind in EntityKind}
    for entity in entities:
        value = entity.tags.get("railway")
        if value is not None:
            counts[entity.id.kind][value] += 1
    return counts
