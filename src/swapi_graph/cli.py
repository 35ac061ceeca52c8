"""Command-line interface for SWAPI Graph."""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from swapi_graph import __version__
from swapi_graph.errors import SwapiGraphError

console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    from swapi_graph.config import get_settings

    level = "DEBUG" if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load(seeds: str | None):
    from swapi_graph.repository import load_repository

    return load_repository(Path(seeds) if seeds else None)


def _fail(error: Exception) -> None:
    err_console.print(f"[red]Error:[/red] {error}")
    sys.exit(1)


seeds_option = click.option(
    "--seeds",
    type=click.Path(exists=True, file_okay=False),
    help="Seed directory (defaults to SWAPI_DATA_DIR/seeds)",
)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """SWAPI Graph - query the Star Wars catalog as a graph."""
    _setup_logging(verbose)


@main.command()
@seeds_option
def status(seeds: str | None) -> None:
    """Show settings and entity counts."""
    from swapi_graph.config import get_settings

    settings = get_settings()
    console.print("[bold]SWAPI Graph Status[/bold]\n")
    console.print(f"Seeds: {seeds or settings.seeds_dir}")

    try:
        repo = _load(seeds)
    except SwapiGraphError as e:
        _fail(e)

    table = Table(title="Catalog")
    table.add_column("Kind", style="cyan")
    table.add_column("Count", style="green", justify="right")
    for kind, count in repo.stats.items():
        table.add_row(kind, f"{count:,}")
    console.print(table)


@main.command()
@click.argument("document", required=False)
@click.option("--file", "-f", "path", type=click.Path(exists=True, dir_okay=False), help="Read the query from a file")
@seeds_option
def query(document: str | None, path: str | None, seeds: str | None) -> None:
    """Execute a query document and print the result as JSON.

    Example: swapi-graph query '{ allPeople(filter: "Luke") { name height(unit: METER) } }'
    """
    from swapi_graph.config import get_settings
    from swapi_graph.query import QueryExecutor

    if path:
        document = Path(path).read_text(encoding="utf-8")
    if not document:
        raise click.UsageError("Provide a DOCUMENT argument or --file")

    try:
        executor = QueryExecutor(_load(seeds))
        result = executor.execute_document(document)
    except SwapiGraphError as e:
        _fail(e)

    click.echo(json.dumps(result, indent=get_settings().json_indent, ensure_ascii=False))


@main.command()
@click.argument("kind", type=click.Choice(["Film", "Person", "Planet", "Species", "Starship", "Vehicle"], case_sensitive=False))
@click.argument("name", required=False)
@seeds_option
def find(kind: str, name: str | None, seeds: str | None) -> None:
    """List entities of KIND whose name (or title) contains NAME."""
    from swapi_graph.models import EntityKind

    entity_kind = next(k for k in EntityKind if k.value.lower() == kind.lower())
    try:
        repo = _load(seeds)
    except SwapiGraphError as e:
        _fail(e)

    matches = repo.find_by_name(entity_kind, name)
    if not matches:
        console.print("[yellow]No matches[/yellow]")
        return

    table = Table(title=f"{entity_kind.value} matches")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    for entity in matches:
        table.add_row(entity.id, entity.display_name)
    console.print(table)


@main.command()
@seeds_option
def check(seeds: str | None) -> None:
    """Verify that every relation has its inverse edge."""
    try:
        repo = _load(seeds)
    except SwapiGraphError as e:
        _fail(e)

    problems = repo.check_inverse_edges()
    if not problems:
        console.print("[green]OK[/green] All relations are bidirectionally consistent")
        return

    console.print(f"[red]Found {len(problems)} inconsistent edges:[/red]")
    for problem in problems:
        console.print(f"  {problem}")
    sys.exit(1)


if __name__ == "__main__":
    main()
