"""OSM file entity source adapter.

This adapter decodes OpenStreetMap PBF or XML files with pyosmium and
converts each object into a domain entity:
- Lazy, streaming iteration in file order
- Typed errors naming the failing read step
- Nodes without a valid location keep ``lat``/``lon`` as None
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Union

from ...domain.errors import IngestionError
from ...domain.models import Entity, EntityId, Member, Node, Relation, Way


@dataclass
class OsmiumEntitySource:
    """Entity source backed by ``osmium.FileProcessor``.

    This adapter implements EntitySourcePort. Each iteration re-reads
    the file from the start.

    Attributes:
        path: Path of the .osm.pbf / .osm file
    """

    path: Union[str, Path]
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self._logger = logging.getLogger(__name__)

    def __iter__(self) -> Iterator[Entity]:
        """Yield every node, way and relation in file order.

        Raises:
            IngestionError: If the file cannot be opened or decoded.
        """
        path = Path(self.path)
        if not path.is_file():
            raise IngestionError(
                f"Source file not found: {path}",
                step="open source",
                file_path=str(path),
            )

        try:
            import osmium
        except ImportError as e:
            raise IngestionError(
                "pyosmium not installed",
                step="open source",
                file_path=str(path),
                cause=e,
            )

        self._logger.debug("Reading entities", extra={"file_path": str(path)})

        count = 0
        try:
            processor = osmium.FileProcessor(
                str(path),
                osmium.osm.NODE | osmium.osm.WAY | osmium.osm.RELATION,
            )
            for obj in processor:
                entity = _to_entity(obj)
                count += 1
                yield entity
        except (RuntimeError, ValueError, OSError) as e:
            raise IngestionError(
                f"Failed to read entity #{count + 1}",
                step="read item",
                file_path=str(path),
                cause=e,
            )

        self._logger.info(
            "Entities read",
            extra={"file_path": str(path), "entities": count},
        )


def _tags(obj: Any) -> dict[str, str]:
    return {tag.k: tag.v for tag in obj.tags}


def _to_entity(obj: Any) -> Entity:
    """Copy a pyosmium object into a domain entity.

    pyosmium objects are only valid during iteration, so everything is
    copied out immediately.
    """
    if obj.is_node():
        location = obj.location
        if location.valid():
            return Node(EntityId.node(obj.id), _tags(obj), location.lat, location.lon)
        return Node(EntityId.node(obj.id), _tags(obj))
    if obj.is_way():
        return Way(
            EntityId.way(obj.id),
            _tags(obj),
            tuple(EntityId.node(ref.ref) for ref in obj.nodes),
        )
    if obj.is_relation():
        return Relation(
            EntityId.relation(obj.id),
            _tags(obj),
            tuple(
                Member(EntityId.from_osm_type(m.type, m.ref), m.role)
                for m in obj.members
            ),
        )
    raise ValueError(f"Unsupported OSM object: {obj!r}")
