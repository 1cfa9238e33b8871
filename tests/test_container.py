import pytest

from railmap.adapters.osm import InMemoryEntitySource, OsmiumEntitySource
from railmap.container import Container
from railmap.ports.entities import EntitySourcePort
from railmap.services import RailNetworkService


def test_default_bindings(tmp_path):
    container = Container.create_default(tmp_path / "map.osm.pbf")

    source = container.resolve(EntitySourcePort)
    service = container.resolve(RailNetworkService)

    assert isinstance(source, OsmiumEntitySource)
    assert service.source is source
    assert service.map_renderer is not None
    assert container.resolve(RailNetworkService) is service


def test_override_binding(tmp_path, three_node_line):
    container = Container.create_default(tmp_path / "map.osm.pbf")
    container.register(EntitySourcePort, lambda: InMemoryEntitySource(three_node_line))

    service = container.resolve(RailNetworkService)

    assert service.load().vertex_count == 4


def test_unregistered_type():
    with pytest.raises(KeyError):
        Container().resolve(RailNetworkService)


def test_non_singleton_factory():
    container = Container()
    container.register(list, list, singleton=False)

    assert container.resolve(list) is not container.resolve(list)
