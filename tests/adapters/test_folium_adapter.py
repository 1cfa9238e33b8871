"""Tests for the Folium map renderer."""

import pytest

from railmap.adapters.rendering import FoliumMapRenderer
from railmap.domain.errors import RenderingError
from railmap.domain.models import EntityId, Node


def test_render_writes_html(tmp_path):
    pytest.importorskip("folium")
    nodes = [
        Node(EntityId.node(1), {"name": "Hayes"}, 51.3763, -0.0107),
        Node(EntityId.node(2), {}, 51.39, -0.008),
    ]

    out = FoliumMapRenderer().render({"route": nodes}, tmp_path / "maps" / "route.html")

    assert out.exists()
    assert "Hayes" in out.read_text(encoding="utf-8")


def test_render_without_located_nodes_fails(tmp_path):
    unlocated = [Node(EntityId.node(1), {})]

    with pytest.raises(RenderingError) as excinfo:
        FoliumMapRenderer().render({"route": unlocated}, tmp_path / "route.html")

    assert excinfo.value.renderer_type == "folium"
