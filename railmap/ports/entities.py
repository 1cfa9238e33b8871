"""Entity source port - Abstraction for decoding map data.

The graph core consumes entities as a finite iterable read to
exhaustion before any query runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Protocol

if TYPE_CHECKING:
    from ..domain.models import Entity


class EntitySourcePort(Protocol):
    """Port for reading OSM entities in file order.

    Implementations: adapters/osm/osmium_source.py,
    adapters/osm/memory_source.py

    Iteration yields Node, Way and Relation entities. Read failures are
    raised as IngestionError and are fatal.
    """

    def __iter__(self) -> Iterator[Entity]:
        """Iterate over every entity of the source, in file order."""
        ...
