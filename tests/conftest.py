"""Shared fixtures: small synthetic rail networks."""

from __future__ import annotations

import pytest

from railmap.config import reset_config
from railmap.domain.models import EntityId, Member, Node, Relation, Way

RAIL = {"railway": "rail"}


def node(ref, lat=None, lon=None, **tags):
    return Node(EntityId.node(ref), tags or dict(RAIL), lat, lon)


def way(ref, *node_refs, **tags):
    return Way(EntityId.way(ref), tags or dict(RAIL), tuple(EntityId.node(r) for r in node_refs))


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    for name in ("RAILMAP_INGEST_EDGE_MODEL", "RAILMAP_ROUTING_COST_POLICY"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def three_node_line():
    """Three rail nodes joined by one way."""
    return [
        node(1, 51.0, 0.0),
        node(2, 51.0, 0.1),
        node(3, 51.0, 0.2),
        way(10, 1, 2, 3),
    ]


@pytest.fixture
def five_node_line():
    """Nodes A..E (ids 1..5) on a single way, west to east."""
    return [
        node(1, 51.0, 0.0, railway="station", name="A"),
        node(2, 51.0, 0.1),
        node(3, 51.0, 0.2),
        node(4, 51.0, 0.3),
        node(5, 51.0, 0.4, railway="station", name="E"),
        way(10, 1, 2, 3, 4, 5),
    ]


@pytest.fixture
def station_network():
    """Two lines sharing an interchange, with CRS-coded stations.

    Line 1: 1 - 2 - 3 - 4      (way 10)
    Line 2: 5 - 6 - 7          (way 11)
    Stop area 100 joins 4 and 5 (and platform node 8).
    Node 9 sits on its own way with no connection to the rest.
    """
    return [
        node(1, 51.00, 0.00, railway="station", **{"ref:crs": "AAA"}),
        node(2, 51.00, 0.10),
        node(3, 51.00, 0.20),
        node(4, 51.00, 0.30, railway="station", **{"ref:crs": "BBB"}),
        node(5, 51.01, 0.30, public_transport="station"),
        node(6, 51.10, 0.30),
        node(7, 51.20, 0.30, railway="station", **{"ref:crs": "CCC"}),
        node(8, 51.005, 0.30, public_transport="platform"),
        node(9, 52.00, 1.00, railway="halt"),
        node(20, 52.00, 1.10),
        way(10, 1, 2, 3, 4),
        way(11, 5, 6, 7),
        way(12, 9, 20),
        Relation(
            EntityId.relation(100),
            {"public_transport": "stop_area", "name": "Interchange"},
            (
                Member(EntityId.node(4), "stop"),
                Member(EntityId.node(5), "stop"),
                Member(EntityId.node(8), "platform"),
                Member(EntityId.way(10), ""),
            ),
        ),
    ]
