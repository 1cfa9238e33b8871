"""Tests for the pyosmium entity source, reading a small OSM XML file."""

from pathlib import Path

import pytest

from railmap.adapters.osm import InMemoryEntitySource, OsmiumEntitySource
from railmap.domain.errors import IngestionError
from railmap.domain.models import EntityId, Member, Node, Relation, Way

MINI_OSM = Path(__file__).resolve().parents[1] / "data" / "mini.osm"


def test_missing_file_fails_at_open(tmp_path):
    source = OsmiumEntitySource(tmp_path / "nope.osm.pbf")

    with pytest.raises(IngestionError) as excinfo:
        list(source)

    assert excinfo.value.step == "open source"
    assert "open source" in str(excinfo.value)


def test_reads_entities_in_file_order():
    pytest.importorskip("osmium")

    entities = list(OsmiumEntitySource(MINI_OSM))

    assert [e.id for e in entities] == [
        EntityId.node(1),
        EntityId.node(2),
        EntityId.node(3),
        EntityId.node(4),
        EntityId.node(5),
        EntityId.way(10),
        EntityId.relation(100),
    ]


def test_converts_each_kind():
    pytest.importorskip("osmium")

    by_id = {e.id: e for e in OsmiumEntitySource(MINI_OSM)}

    hayes = by_id[EntityId.node(1)]
    assert isinstance(hayes, Node)
    assert hayes.tags["ref:crs"] == "HYS"
    assert hayes.lat == pytest.approx(51.3763)
    assert hayes.lon == pytest.approx(-0.0107)

    way = by_id[EntityId.way(10)]
    assert isinstance(way, Way)
    assert way.nodes == tuple(EntityId.node(i) for i in (1, 2, 3, 4))

    relation = by_id[EntityId.relation(100)]
    assert isinstance(relation, Relation)
    assert relation.members == (
        Member(EntityId.node(4), "stop"),
        Member(EntityId.way(10), ""),
    )


def test_corrupt_file_fails_at_read(tmp_path):
    pytest.importorskip("osmium")
    broken = tmp_path / "broken.osm"
    broken.write_text("<osm><node id='1' lat='x'", encoding="utf-8")

    with pytest.raises(IngestionError) as excinfo:
        list(OsmiumEntitySource(broken))

    assert excinfo.value.file_path == str(broken)


def test_in_memory_source_is_reiterable():
    entities = [Node(EntityId.node(1), {"railway": "halt"})]
    source = InMemoryEntitySource(entities)

    assert list(source) == entities
    assert list(source) == entities
    assert len(source) == 1
