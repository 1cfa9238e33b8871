"""Immutable domain models for railmap.

All models are frozen dataclasses with slots. Entities mirror the three
OpenStreetMap object kinds; each kind has its own identifier namespace,
so ``EntityId`` always carries the kind next to the numeric reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Mapping, Optional, Union


class EntityKind(IntEnum):
    """Kind of an OpenStreetMap entity.

    The integer values define the ordering of ids across kinds:
    nodes sort before ways, ways before relations.
    """

    NODE = 1
    WAY = 2
    RELATION = 3

    @property
    def prefix(self) -> str:
        return _PREFIXES[self]


_PREFIXES = {
    EntityKind.NODE: "n",
    EntityKind.WAY: "w",
    EntityKind.RELATION: "r",
}
_KINDS_BY_PREFIX = {prefix: kind for kind, prefix in _PREFIXES.items()}
_KINDS_BY_OSM_TYPE = {"n": EntityKind.NODE, "w": EntityKind.WAY, "r": EntityKind.RELATION}


@dataclass(frozen=True, slots=True, order=True)
class EntityId:
    """Identifier of an entity within its kind namespace.

    ``EntityId.node(5)`` and ``EntityId.way(5)`` are different entities.
    Ids are totally ordered by kind first, then by reference.

    Attributes:
        kind: Entity kind
        ref: Numeric identifier within the kind
    """

    kind: EntityKind
    ref: int

    @classmethod
    def node(cls, ref: int) -> EntityId:
        return cls(EntityKind.NODE, ref)

    @classmethod
    def way(cls, ref: int) -> EntityId:
        return cls(EntityKind.WAY, ref)

    @classmethod
    def relation(cls, ref: int) -> EntityId:
        return cls(EntityKind.RELATION, ref)

    @classmethod
    def from_osm_type(cls, osm_type: str, ref: int) -> EntityId:
        """Build an id from an OSM member type letter ('n', 'w' or 'r')."""
        try:
            kind = _KINDS_BY_OSM_TYPE[osm_type]
        except KeyError:
            raise ValueError(f"Unknown OSM member type: {osm_type!r}") from None
        return cls(kind, ref)

    @classmethod
    def parse(cls, text: str) -> EntityId:
        """Parse the textual form produced by ``str()``, e.g. ``n7159246417``.

        Raises:
            ValueError: If the text is not a prefixed integer id.
        """
        value = text.strip()
        if len(value) < 2 or value[0].lower() not in _KINDS_BY_PREFIX:
            raise ValueError(f"Invalid entity id: {text!r} (expected n<id>, w<id> or r<id>)")
        try:
            ref = int(value[1:])
        except ValueError:
            raise ValueError(f"Invalid entity id: {text!r}") from None
        return cls(_KINDS_BY_PREFIX[value[0].lower()], ref)

    @property
    def is_node(self) -> bool:
        return self.kind is EntityKind.NODE

    def __str__(self) -> str:
        return f"{self.kind.prefix}{self.ref}"


@dataclass(frozen=True, slots=True)
class Node:
    """A point entity.

    Attributes:
        id: Node identifier
        tags: OSM tags
        lat: Latitude in degrees, if the source carried a valid location
        lon: Longitude in degrees, if the source carried a valid location
    """

    id: EntityId
    tags: Mapping[str, str] = field(default_factory=dict)
    lat: Optional[float] = None
    lon: Optional[float] = None

    def __post_init__(self) -> None:
        if self.id.kind is not EntityKind.NODE:
            raise ValueError(f"Node requires a node id, got {self.id}")

    @property
    def has_location(self) -> bool:
        return self.lat is not None and self.lon is not None


@dataclass(frozen=True, slots=True)
class Way:
    """An ordered chain of nodes.

    Attributes:
        id: Way identifier
        tags: OSM tags
        nodes: Member node ids, in path order
    """

    id: EntityId
    tags: Mapping[str, str] = field(default_factory=dict)
    nodes: tuple[EntityId, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.id.kind is not EntityKind.WAY:
            raise ValueError(f"Way requires a way id, got {self.id}")


@dataclass(frozen=True, slots=True)
class Member:
    """A relation member reference with its role."""

    member: EntityId
    role: str = ""


@dataclass(frozen=True, slots=True)
class Relation:
    """A grouping of entities with roles.

    Attributes:
        id: Relation identifier
        tags: OSM tags
        members: Ordered member references
    """

    id: EntityId
    tags: Mapping[str, str] = field(default_factory=dict)
    members: tuple[Member, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.id.kind is not EntityKind.RELATION:
            raise ValueError(f"Relation requires a relation id, got {self.id}")

    @property
    def member_nodes(self) -> tuple[EntityId, ...]:
        """Node members, in member order."""
        return tuple(m.member for m in self.members if m.member.is_node)


Entity = Union[Node, Way, Relation]

# None for plain membership edges, a role string for relation membership
# edges, or the id of the way/relation that produced a node-to-node edge.
EdgeLabel = Union[None, str, EntityId]


@dataclass(frozen=True, slots=True)
class PathResult:
    """Result of a shortest-path search.

    Attributes:
        cost: Total accumulated edge cost
        vertices: Vertex handles from source to target, inclusive
        entity_ids: Entity ids matching ``vertices``
    """

    cost: float
    vertices: tuple[int, ...]
    entity_ids: tuple[EntityId, ...] = field(default_factory=tuple)

    @property
    def hops(self) -> int:
        """Number of edges on the path."""
        return max(len(self.vertices) - 1, 0)
