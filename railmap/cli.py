"""Command-line entry points: route, partition, export, kinds and dump."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import get_config
from .container import Container
from .diagnostics import member_tree, railway_kinds
from .domain.errors import RailMapError
from .domain.models import EntityId
from .graph.store import EntityStore
from .logging_setup import configure_logging
from .ports.entities import EntitySourcePort
from .ports.export import EntityExporterPort
from .services import RailNetworkService

app = typer.Typer(add_completion=False, help="Rail network graphs from OpenStreetMap data.")
console = Console()


@app.callback()
def main() -> None:
    configure_logging(get_config().observability)


def _entity_id(text: str) -> EntityId:
    try:
        return EntityId.parse(text)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _parse_seeds(values: List[str]) -> Dict[str, EntityId]:
    seeds: Dict[str, EntityId] = {}
    for value in values:
        label, sep, raw_id = value.partition("=")
        if not sep or not label:
            raise typer.BadParameter(f"Expected LABEL=ID, got {value!r}", param_hint="--seed")
        seeds[label] = _entity_id(raw_id)
    return seeds


def _fail(error: RailMapError) -> typer.Exit:
    console.print(f"[red]Error:[/red] {error}")
    return typer.Exit(code=1)


@app.command()
def route(
    src: Path = typer.Argument(..., help="OSM .pbf or .osm file"),
    source: str = typer.Argument(..., help="Start entity, e.g. n7159246417"),
    target: str = typer.Argument(..., help="End entity, e.g. n5883033866"),
    map_path: Optional[Path] = typer.Option(None, "--map", help="Write an HTML map of the route"),
) -> None:
    """Least-cost path between two entities."""
    service: RailNetworkService = Container.create_default(src).resolve(RailNetworkService)
    try:
        result = service.route(_entity_id(source), _entity_id(target), map_output_path=map_path)
    except RailMapError as e:
        raise _fail(e)

    graph = service.load()
    table = Table(title=f"{source} → {target}")
    table.add_column("#", justify="right")
    table.add_column("Entity")
    table.add_column("Name")
    for i, entity_id in enumerate(result.entity_ids):
        entity = graph.store.get(entity_id)
        name = entity.tags.get("name", "") if entity else ""
        table.add_row(str(i), str(entity_id), name)
    console.print(table)
    console.print(f"Cost: {result.cost:.6f} over {result.hops} hops")


@app.command()
def partition(
    src: Path = typer.Argument(..., help="OSM .pbf or .osm file"),
    seed: Optional[List[str]] = typer.Option(
        None, "--seed", help="Region seed as LABEL=ID; repeatable. Defaults to ref:crs tags."
    ),
    map_path: Optional[Path] = typer.Option(None, "--map", help="Write an HTML map of the boundaries"),
) -> None:
    """Grow regions from seed stations and list the boundaries between them."""
    service: RailNetworkService = Container.create_default(src).resolve(RailNetworkService)
    seeds = _parse_seeds(seed) if seed else None
    try:
        result = service.partition(seeds, map_output_path=map_path)
    except RailMapError as e:
        raise _fail(e)

    regions = Table(title="Regions")
    regions.add_column("Label")
    regions.add_column("Seed")
    regions.add_column("Vertices", justify="right")
    for label, vertices in result.regions().items():
        regions.add_row(label, str(result.graph.entity_id(result.seeds[label])), str(len(vertices)))
    console.print(regions)

    for (a, b), path in sorted(result.boundaries.items()):
        console.print(f"{a}--{b}; {' '.join(str(p) for p in path)}")
    console.print(f"Unassigned vertices: {len(result.unassigned())}")


@app.command()
def export(
    src: Path = typer.Argument(..., help="OSM .pbf or .osm file"),
    dst_dir: Path = typer.Argument(..., help="Directory for the CSV files"),
) -> None:
    """Write every entity of the file as CSV tables."""
    container = Container.create_default(src)
    source: EntitySourcePort = container.resolve(EntitySourcePort)
    exporter: EntityExporterPort = container.resolve(EntityExporterPort)
    try:
        paths = exporter.export(source, dst_dir)
    except RailMapError as e:
        raise _fail(e)
    for path in paths:
        console.print(str(path))


@app.command()
def kinds(src: Path = typer.Argument(..., help="OSM .pbf or .osm file")) -> None:
    """Count railway=* values per entity kind."""
    source: EntitySourcePort = Container.create_default(src).resolve(EntitySourcePort)
    try:
        counts = railway_kinds(source)
    except RailMapError as e:
        raise _fail(e)

    for kind, counter in counts.items():
        table = Table(title=kind.name.title() + "s")
        table.add_column("railway")
        table.add_column("Count", justify="right")
        for value, count in sorted(counter.items()):
            table.add_row(value, str(count))
        console.print(table)


@app.command()
def dump(
    src: Path = typer.Argument(..., help="OSM .pbf or .osm file"),
    entity: str = typer.Argument(..., help="Root entity, e.g. r408573"),
) -> None:
    """Print an entity and its members as an indented tree."""
    root = _entity_id(entity)
    source: EntitySourcePort = Container.create_default(src).resolve(EntitySourcePort)
    try:
        store = EntityStore.from_entities(source)
    except RailMapError as e:
        raise _fail(e)

    lines = member_tree(store, root)
    if not lines:
        console.print(f"[yellow]{root} not found[/yellow]")
        raise typer.Exit(code=1)
    for line in lines:
        console.print(line, markup=False, highlight=False)


if __name__ == "__main__":
    app()
