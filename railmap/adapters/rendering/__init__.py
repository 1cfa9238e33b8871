"""Rendering adapters - Implementations of MapRendererPort.

Available implementations:
- FoliumMapRenderer: HTML maps of routes and region boundaries
"""

from .folium_adapter import FoliumMapRenderer

__all__ = ["FoliumMapRenderer"]
