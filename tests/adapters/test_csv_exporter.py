"""Tests for the CSV entity exporter."""

import csv
import json

import pytest

from railmap.adapters.export import CSVEntityExporter
from railmap.config import ExportConfig
from railmap.domain.errors import ExportError
from railmap.domain.models import EntityId, Member, Node, Relation, Way


def _read(path):
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


@pytest.fixture
def entities():
    return [
        Node(EntityId.node(1), {"railway": "station", "name": "Hayes"}, 51.3763, -0.0107),
        Node(EntityId.node(2), {}),
        Way(EntityId.way(10), {"railway": "rail"}, (EntityId.node(1), EntityId.node(2))),
        Relation(
            EntityId.relation(100),
            {"type": "route", "route": "train"},
            (
                Member(EntityId.node(1), "stop"),
                Member(EntityId.way(10), ""),
                Member(EntityId.relation(200), "sub"),
            ),
        ),
    ]


def test_export_writes_five_tables(tmp_path, entities):
    paths = CSVEntityExporter(ExportConfig()).export(entities, tmp_path)

    assert [p.name for p in paths] == [
        "nodes.csv",
        "ways.csv",
        "way-nodes.csv",
        "relations.csv",
        "relation-members.csv",
    ]
    assert all(p.exists() for p in paths)


def test_node_rows(tmp_path, entities):
    CSVEntityExporter(ExportConfig()).export(entities, tmp_path)

    rows = _read(tmp_path / "nodes.csv")
    assert rows[0] == ["node_id", "lat", "lon", "tags"]
    assert rows[1][:3] == ["1", "51.3763", "-0.0107"]
    assert json.loads(rows[1][3]) == {"railway": "station", "name": "Hayes"}
    # Missing coordinates are left empty
    assert rows[2] == ["2", "", "", "{}"]


def test_way_node_ordinals(tmp_path, entities):
    CSVEntityExporter(ExportConfig()).export(entities, tmp_path)

    assert _read(tmp_path / "ways.csv")[1][0] == "10"
    assert _read(tmp_path / "way-nodes.csv")[1:] == [["10", "0", "1"], ["10", "1", "2"]]


def test_relation_member_columns(tmp_path, entities):
    CSVEntityExporter(ExportConfig()).export(entities, tmp_path)

    rows = _read(tmp_path / "relation-members.csv")
    assert rows[0] == ["rel_id", "ordinal", "role", "node_id", "way_id", "member_rel_id"]
    assert rows[1:] == [
        ["100", "0", "stop", "1", "", ""],
        ["100", "1", "", "", "10", ""],
        ["100", "2", "sub", "", "", "200"],
    ]


def test_custom_file_names(tmp_path, entities):
    config = ExportConfig(nodes_file="n.csv")

    paths = CSVEntityExporter(config).export(entities, tmp_path / "out")

    assert paths[0] == tmp_path / "out" / "n.csv"


def test_unwritable_directory_raises_export_error(tmp_path, entities):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")

    with pytest.raises(ExportError):
        CSVEntityExporter(ExportConfig()).export(entities, blocker)
