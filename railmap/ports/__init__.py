"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the graph core and external
adapters. They enable dependency injection and make the system testable.

This module follows the Hexagonal Architecture pattern:
- Input ports: How the application is driven (services)
- Output ports: How the application drives external systems (adapters)
"""

from .entities import EntitySourcePort
from .export import EntityExporterPort
from .rendering import MapRendererPort

__all__ = [
    "EntitySourcePort",
    "EntityExporterPort",
    "MapRendererPort",
]
