"""Entity source adapters - Implementations of EntitySourcePort.

Available implementations:
- OsmiumEntitySource: Decodes OSM PBF/XML files with pyosmium
- InMemoryEntitySource: Serves pre-decoded entities
"""

from .memory_source import InMemoryEntitySource
from .osmium_source import OsmiumEntitySource

__all__ = ["OsmiumEntitySource", "InMemoryEntitySource"]
