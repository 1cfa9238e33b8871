"""Domain layer - Core models and errors.

This module contains the immutable entity models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    ExportError,
    IngestionError,
    NoRouteFoundError,
    RailMapError,
    RenderingError,
    SeedNotFoundError,
    VertexNotFoundError,
)
from .models import (
    EdgeLabel,
    Entity,
    EntityId,
    EntityKind,
    Member,
    Node,
    PathResult,
    Relation,
    Way,
)

__all__ = [
    # Models
    "EntityKind",
    "EntityId",
    "Node",
    "Way",
    "Member",
    "Relation",
    "Entity",
    "EdgeLabel",
    "PathResult",
    # Errors
    "RailMapError",
    "IngestionError",
    "SeedNotFoundError",
    "VertexNotFoundError",
    "NoRouteFoundError",
    "ExportError",
    "RenderingError",
    "ConfigurationError",
]
