"""Folium map renderer adapter.

Draws named node sequences (a route, or region boundary paths) as
polylines with markers at both ends:
- Domain model input (Node entities)
- Better error handling
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Sequence

from ...domain.errors import RenderingError
from ...domain.models import Node

_COLORS = ["blue", "red", "green", "purple", "orange", "darkred", "cadetblue", "darkgreen"]


@dataclass
class FoliumMapRenderer:
    """Folium-based interactive map renderer.

    This adapter implements MapRendererPort using Folium for
    generating interactive HTML maps. Nodes without coordinates are
    skipped.
    """

    zoom_start: int = 11
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def render(
        self,
        lines: Mapping[str, Sequence[Node]],
        output_path: Path,
    ) -> Path:
        """Render named lines on a map and save to file.

        Args:
            lines: Line name -> nodes along the line.
            output_path: Where to save the rendered map.

        Returns:
            Path to the generated map file.

        Raises:
            RenderingError: If there is nothing to draw or rendering fails.
        """
        located = {
            name: [n for n in nodes if n.has_location] for name, nodes in lines.items()
        }
        located = {name: nodes for name, nodes in located.items() if nodes}
        if not located:
            raise RenderingError(
                "Cannot render a map without located nodes",
                output_path=str(output_path),
                renderer_type="folium",
            )

        self._logger.info(
            "Rendering map",
            extra={
                "lines": len(located),
                "output_path": str(output_path),
            },
        )

        try:
            import folium

            points: List[Node] = [n for nodes in located.values() for n in nodes]
            center_lat = sum(n.lat for n in points) / len(points)  # type: ignore[misc]
            center_lon = sum(n.lon for n in points) / len(points)  # type: ignore[misc]

            m = folium.Map(location=[center_lat, center_lon], zoom_start=self.zoom_start)

            for i, (name, nodes) in enumerate(sorted(located.items())):
                color = _COLORS[i % len(_COLORS)]
                for node, icon_color in ((nodes[0], "green"), (nodes[-1], "red")):
                    folium.Marker(
                        location=[node.lat, node.lon],
                        popup=node.tags.get("name", str(node.id)),
                        tooltip=f"{name}: {node.id}",
                        icon=folium.Icon(color=icon_color),
                    ).add_to(m)

                if len(nodes) >= 2:
                    folium.PolyLine(
                        [[n.lat, n.lon] for n in nodes],
                        weight=3,
                        color=color,
                        opacity=0.8,
                        tooltip=name,
                    ).add_to(m)

            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))

            self._logger.info(
                "Map rendered successfully",
                extra={"output_path": str(output_path)},
            )

            return output_path

        except ImportError as e:
            raise RenderingError(
                "Folium not installed",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )
        except Exception as e:
            self._logger.error(
                "Map rendering failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                f"Map rendering failed: {e}",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )
