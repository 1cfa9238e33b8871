"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It allows registering and resolving dependencies for the application.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations
3. Lazy loading - adapters instantiated on first use
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default("great-britain.osm.pbf")
        service = container.resolve(RailNetworkService)

        # Testing
        container = Container()
        container.register(EntitySourcePort, lambda: InMemoryEntitySource(entities))
        source = container.resolve(EntitySourcePort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        self._factories[port_type] = factory
        self._singletons.pop(port_type, None)
        if singleton:
            self._singleton_types.add(port_type)
        else:
            self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        if port_type not in self._factories:
            raise KeyError(f"Type not registered: {port_type}")

        if port_type in self._singleton_types:
            if port_type not in self._singletons:
                self._singletons[port_type] = self._factories[port_type]()
            return self._singletons[port_type]

        return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Clear all cached singletons.

        Call this in tests to ensure fresh instances.
        """
        self._singletons.clear()

    @classmethod
    def create_default(
        cls,
        source_path: Union[str, Path],
        config: Optional[AppConfig] = None,
    ) -> Container:
        """Create a container with default production bindings.

        Args:
            source_path: OSM file the entity source reads.
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.export import CSVEntityExporter
        from .adapters.osm import OsmiumEntitySource
        from .adapters.rendering import FoliumMapRenderer
        from .ports.entities import EntitySourcePort
        from .ports.export import EntityExporterPort
        from .ports.rendering import MapRendererPort
        from .services import RailNetworkService

        config = config or get_config()
        container = cls(config=config)

        container.register(
            EntitySourcePort,
            lambda: OsmiumEntitySource(source_path),
        )
        container.register(
            EntityExporterPort,
            lambda: CSVEntityExporter(config.export),
        )
        container.register(
            MapRendererPort,
            lambda: FoliumMapRenderer(),
        )

        def create_network_service() -> RailNetworkService:
            return RailNetworkService(
                source=container.resolve(EntitySourcePort),
                config=config,
                map_renderer=container.resolve(MapRendererPort),
            )

        container.register(RailNetworkService, create_network_service)

        return container
