"""Tests for region partitioning by frontier expansion."""

import pytest

from railmap.domain.errors import SeedNotFoundError
from railmap.domain.models import EntityId, Node, Way
from railmap.graph import EdgeModel, GraphBuilder, RegionPartitioner, seeds_from_tag

A, B, C, D, E = (EntityId.node(i) for i in range(1, 6))
W = EntityId.way(10)


@pytest.fixture
def line_graph(five_node_line):
    return GraphBuilder(edge_model=EdgeModel.NODE_CHAIN).build(five_node_line)


def _labels(result, graph):
    return {graph.entity_id(v): result.label_of(v) for v in graph.vertices()}


def test_line_split_between_two_seeds(line_graph):
    result = RegionPartitioner().partition(line_graph, {"X": A, "Y": E})

    labels = _labels(result, line_graph)
    assert labels[A] == labels[B] == "X"
    assert labels[D] == labels[E] == "Y"
    # Both waves reach C in the same round; X is enqueued first and wins.
    assert labels[C] == "X"


def test_line_boundary_path_threads_through_crossing(line_graph):
    result = RegionPartitioner().partition(line_graph, {"X": A, "Y": E})

    assert list(result.boundaries) == [("X", "Y")]
    assert result.boundaries[("X", "Y")] == (A, W, B, W, C, D, W, E)


def test_boundary_key_canonical_regardless_of_seed_labels(line_graph):
    result = RegionPartitioner().partition(line_graph, {"west": E, "east": A})

    assert list(result.boundaries) == [("east", "west")]
    path = result.boundaries[("east", "west")]
    assert path[0] == A and path[-1] == E


def test_assignment_paths_start_at_seed(line_graph):
    result = RegionPartitioner().partition(line_graph, {"X": A, "Y": E})

    c_vertex = line_graph.vertex_of(C)
    d_vertex = line_graph.vertex_of(D)
    assert result.assignment(c_vertex).path == (A, W, B, W, C)
    assert result.assignment(d_vertex).path == (E, W, D)
    assert result.path_to(line_graph.vertex_of(A)) == (A,)


def test_single_seed_claims_everything_reachable(line_graph):
    result = RegionPartitioner().partition(line_graph, {"only": C})

    assert set(_labels(result, line_graph).values()) == {"only"}
    assert result.boundaries == {}
    assert result.unassigned() == []


def test_partition_is_deterministic(station_network):
    graph = GraphBuilder(edge_model=EdgeModel.NODE_CHAIN).build(station_network)
    seeds = seeds_from_tag(graph)
    partitioner = RegionPartitioner()

    first = partitioner.partition(graph, seeds)
    second = partitioner.partition(graph, dict(reversed(list(seeds.items()))))

    assert dict(first.assignments()) == dict(second.assignments())
    assert first.boundaries == second.boundaries


def test_boundaries_between_adjacent_regions(station_network):
    graph = GraphBuilder(edge_model=EdgeModel.NODE_CHAIN).build(station_network)

    result = RegionPartitioner().partition(graph, seeds_from_tag(graph))

    assert set(result.boundaries) == {("AAA", "BBB"), ("BBB", "CCC")}
    for a, b in result.boundaries:
        assert a < b
    aaa_bbb = result.boundaries[("AAA", "BBB")]
    assert aaa_bbb[0] == EntityId.node(1)
    assert aaa_bbb[-1] == EntityId.node(4)


def test_unreachable_vertices_stay_unassigned(station_network):
    graph = GraphBuilder(edge_model=EdgeModel.NODE_CHAIN).build(station_network)

    result = RegionPartitioner().partition(graph, {"AAA": EntityId.node(1)})

    isolated = {graph.entity_id(v) for v in result.unassigned()}
    assert isolated == {EntityId.node(9), EntityId.node(20)}
    assert result.label_of(graph.vertex_of(EntityId.node(9))) is None
    assert result.assignment(graph.vertex_of(EntityId.node(9))) is None


def test_regions_group_vertices_by_label(line_graph):
    result = RegionPartitioner().partition(line_graph, {"X": A, "Y": E})

    regions = result.regions()
    assert [line_graph.entity_id(v) for v in regions["X"]] == [A, B, C]
    assert [line_graph.entity_id(v) for v in regions["Y"]] == [D, E]


def test_missing_seed_fails_before_expansion(line_graph):
    with pytest.raises(SeedNotFoundError) as excinfo:
        RegionPartitioner().partition(line_graph, {"X": A, "ZZZ": EntityId.node(999)})

    assert excinfo.value.label == "ZZZ"
    assert excinfo.value.entity_id == "n999"
    assert "ZZZ" in str(excinfo.value)


def test_entity_vertex_model_paths_skip_role_labels(station_network):
    graph = GraphBuilder().build(station_network)

    result = RegionPartitioner().partition(graph, {"AAA": EntityId.node(1)})

    path = result.path_to(graph.vertex_of(EntityId.node(3)))
    assert path == (EntityId.node(1), EntityId.way(10), EntityId.node(3))


def test_seeds_from_tag(station_network):
    graph = GraphBuilder().build(station_network)

    assert seeds_from_tag(graph, "ref:crs") == {
        "AAA": EntityId.node(1),
        "BBB": EntityId.node(4),
        "CCC": EntityId.node(7),
    }
    assert seeds_from_tag(graph, "ref:tiploc") == {}


def test_first_crossing_wins_for_a_label_pair():
    # Two parallel ways join the seeds; X claims both middle nodes, and Y
    # reaches node 3 (lower handle) before node 4.
    entities = [
        Node(EntityId.node(1), {"railway": "rail"}, 51.0, 0.0),
        Node(EntityId.node(2), {"railway": "rail"}, 51.0, 0.2),
        Node(EntityId.node(3), {"railway": "rail"}, 51.1, 0.1),
        Node(EntityId.node(4), {"railway": "rail"}, 50.9, 0.1),
        Way(EntityId.way(10), {"railway": "rail"}, (EntityId.node(1), EntityId.node(3), EntityId.node(2))),
        Way(EntityId.way(11), {"railway": "rail"}, (EntityId.node(1), EntityId.node(4), EntityId.node(2))),
    ]
    graph = GraphBuilder(edge_model=EdgeModel.NODE_CHAIN).build(entities)

    result = RegionPartitioner().partition(graph, {"X": EntityId.node(1), "Y": EntityId.node(2)})

    assert result.label_of(graph.vertex_of(EntityId.node(3))) == "X"
    assert result.label_of(graph.vertex_of(EntityId.node(4))) == "X"
    assert result.boundaries == {
        ("X", "Y"): (EntityId.node(1), EntityId.way(10), EntityId.node(3), EntityId.node(2)),
    }


def test_seeds_from_tag_later_node_overrides_earlier():
    entities = [
        Node(EntityId.node(50), {"railway": "station", "ref:crs": "DUP"}, 51.0, 0.0),
        Node(EntityId.node(7), {"railway": "station", "ref:crs": "DUP"}, 51.0, 0.1),
    ]
    graph = GraphBuilder().build(entities)

    assert seeds_from_tag(graph) == {"DUP": EntityId.node(7)}
