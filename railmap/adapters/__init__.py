"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the graph core to external systems like:
- Map data files (OSM PBF/XML through pyosmium)
- Tabular output (CSV files)
- Rendering engines (Folium)
"""
