"""CSV entity exporter adapter.

Writes five tables, one row per entity or membership:
- nodes: node_id, lat, lon, tags
- ways: way_id, tags
- way-nodes: way_id, ordinal, node_id
- relations: rel_id, tags
- relation-members: rel_id, ordinal, role, node_id, way_id, member_rel_id

Tags are serialized as JSON objects. Member id columns that do not apply
to a row are left empty.
"""

from __future__ import annotations

import csv
import json
import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ...config import ExportConfig, get_config
from ...domain.errors import ExportError
from ...domain.models import Entity, EntityKind, Node, Relation, Way

NODE_COLUMNS = ["node_id", "lat", "lon", "tags"]
WAY_COLUMNS = ["way_id", "tags"]
WAY_NODE_COLUMNS = ["way_id", "ordinal", "node_id"]
RELATION_COLUMNS = ["rel_id", "tags"]
RELATION_MEMBER_COLUMNS = ["rel_id", "ordinal", "role", "node_id", "way_id", "member_rel_id"]


@dataclass
class CSVEntityExporter:
    """Entity exporter writing CSV files.

    This adapter implements EntityExporterPort.

    Attributes:
        config: Export configuration (file names)
    """

    config: ExportConfig = field(default_factory=lambda: get_config().export)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def export(self, entities: Iterable[Entity], output_dir: Path) -> List[Path]:
        """Write all entities to CSV files in ``output_dir``.

        Returns:
            Paths of the five files, in table order.

        Raises:
            ExportError: If a file cannot be written.
        """
        output_dir = Path(output_dir)
        paths = {
            "nodes": output_dir / self.config.nodes_file,
            "ways": output_dir / self.config.ways_file,
            "way_nodes": output_dir / self.config.way_nodes_file,
            "relations": output_dir / self.config.relations_file,
            "relation_members": output_dir / self.config.relation_members_file,
        }
        headers = {
            "nodes": NODE_COLUMNS,
            "ways": WAY_COLUMNS,
            "way_nodes": WAY_NODE_COLUMNS,
            "relations": RELATION_COLUMNS,
            "relation_members": RELATION_MEMBER_COLUMNS,
        }
        counts = dict.fromkeys(paths, 0)

        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            with ExitStack() as stack:
                writers: Dict[str, Any] = {}
                for name, path in paths.items():
                    f = stack.enter_context(path.open("w", newline="", encoding="utf-8"))
                    writers[name] = csv.writer(f)
                    writers[name].writerow(headers[name])

                for entity in entities:
                    if isinstance(entity, Node):
                        writers["nodes"].writerow(_node_row(entity))
                        counts["nodes"] += 1
                    elif isinstance(entity, Way):
                        writers["ways"].writerow([entity.id.ref, _tags_json(entity)])
                        counts["ways"] += 1
                        for ordinal, node_id in enumerate(entity.nodes):
                            writers["way_nodes"].writerow([entity.id.ref, ordinal, node_id.ref])
                            counts["way_nodes"] += 1
                    elif isinstance(entity, Relation):
                        writers["relations"].writerow([entity.id.ref, _tags_json(entity)])
                        counts["relations"] += 1
                        for row in _member_rows(entity):
                            writers["relation_members"].writerow(row)
                            counts["relation_members"] += 1
                    else:
                        raise TypeError(f"Not an entity: {entity!r}")
        except OSError as e:
            raise ExportError(
                f"Failed to write CSV export: {e}",
                output_path=str(output_dir),
                cause=e,
            )

        self._logger.info(
            "CSV export written",
            extra={"output_dir": str(output_dir), **{f"{k}_rows": v for k, v in counts.items()}},
        )
        return list(paths.values())


def _tags_json(entity: Entity) -> str:
    return json.dumps(dict(entity.tags), ensure_ascii=False, sort_keys=True)


def _coordinate(value: Optional[float]) -> str:
    return "" if value is None else repr(value)


def _node_row(node: Node) -> List[Any]:
    return [node.id.ref, _coordinate(node.lat), _coordinate(node.lon), _tags_json(node)]


def _member_rows(relation: Relation) -> Iterable[List[Any]]:
    for ordinal, member in enumerate(relation.members):
        ids: List[Any] = ["", "", ""]
        ids[member.member.kind - EntityKind.NODE] = member.member.ref
        yield [relation.id.ref, ordinal, member.role, *ids]
