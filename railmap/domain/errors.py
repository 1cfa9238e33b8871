"""Typed domain errors for railmap.

All errors inherit from RailMapError and can optionally wrap a root
cause exception for debugging. Not-found outcomes of the graph
algorithms themselves (no path, unassigned vertex) are plain result
values, not errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RailMapError(Exception):
    """Base error for the railmap domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class IngestionError(RailMapError):
    """Reading the entity stream failed. Always fatal.

    Attributes:
        step: The read step that failed (e.g. "open source", "read item")
        file_path: Path of the source file if relevant
    """

    step: str = ""
    file_path: Optional[str] = None

    def __str__(self) -> str:
        text = super().__str__()
        if self.step:
            return f"{self.step}: {text}"
        return text


@dataclass
class SeedNotFoundError(RailMapError):
    """A region seed does not resolve to a vertex of the graph.

    This is a configuration error, not a data condition.

    Attributes:
        label: Region label of the offending seed
        entity_id: Textual id the seed pointed at
    """

    label: str = ""
    entity_id: str = ""


@dataclass
class VertexNotFoundError(RailMapError):
    """An entity id requested by a caller is not in the graph.

    Attributes:
        entity_id: Textual id that was not found
    """

    entity_id: str = ""


@dataclass
class NoRouteFoundError(RailMapError):
    """No path exists between the requested entities.

    Attributes:
        source: Source entity id
        target: Target entity id
    """

    source: str = ""
    target: str = ""


@dataclass
class ExportError(RailMapError):
    """Writing tabular output failed.

    Attributes:
        output_path: Directory or file being written
    """

    output_path: Optional[str] = None


@dataclass
class RenderingError(RailMapError):
    """Map rendering failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""


@dataclass
class ConfigurationError(RailMapError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
