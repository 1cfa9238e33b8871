"""Rendering port - Abstraction for map and visualization generation.

This protocol defines the contract for map rendering, allowing
different implementations (Folium, Plotly, etc.) to be used.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Mapping, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Node


class MapRendererPort(Protocol):
    """Port for map rendering.

    Implementation: adapters/rendering/folium_adapter.py

    Map renderers draw named node sequences (a route, or the boundary
    paths between regions) on interactive maps.
    """

    def render(
        self,
        lines: Mapping[str, Sequence[Node]],
        output_path: Path,
    ) -> Path:
        """Render named node sequences on a map and save to file.

        Args:
            lines: Line name -> nodes along the line, in order.
            output_path: Where to save the rendered map.

        Returns:
            Path to the generated map file.
        """
        ...
