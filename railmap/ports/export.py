"""Export port - Abstraction for tabular output of stored entities."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Protocol

if TYPE_CHECKING:
    from ..domain.models import Entity


class EntityExporterPort(Protocol):
    """Port for writing entities as tables.

    Implementation: adapters/export/csv_exporter.py
    """

    def export(self, entities: Iterable[Entity], output_dir: Path) -> List[Path]:
        """Write ``entities`` below ``output_dir``.

        Args:
            entities: Entities to write, in the order they should appear.
            output_dir: Directory receiving the output files.

        Returns:
            Paths of the files written.
        """
        ...
