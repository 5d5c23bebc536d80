"""Command-line interface for History Graph Analyzer."""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from history_graph_analyzer import __version__
from history_graph_analyzer.models.relationships import RelationshipType

console = Console()

LEXICON_TAGS = [t.value for t in RelationshipType if t is not RelationshipType.ASSOCIATED]


def configure_logging(verbosity: int) -> None:
    """Route library logging through rich; -v for INFO, -vv for DEBUG."""
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-v, -vv)")
def main(verbose: int) -> None:
    """History Graph Analyzer - Map historical figures and their relationships."""
    configure_logging(verbose)


@main.command()
def status() -> None:
    """Check system status (settings, Neo4j connection)."""
    from history_graph_analyzer.config import get_settings
    from history_graph_analyzer.graph.connection import check_neo4j_connection

    settings = get_settings()

    console.print("[bold]History Graph Analyzer Status[/bold]\n")
    console.print(f"Source: {settings.wiki_base_url}")
    console.print(f"Request timeout: {settings.request_timeout:g}s")
    console.print(f"Throttle: {settings.throttle_seconds:g}s per task")
    workers = settings.max_workers or "one per item"
    console.print(f"Workers: {workers}")
    console.print(f"Neo4j URI: {settings.neo4j_uri}")

    if check_neo4j_connection(settings):
        console.print("[green]✓[/green] Neo4j connected")
    else:
        console.print("[red]✗[/red] Neo4j not reachable")


# ============================================================================
# Scraping Commands
# ============================================================================

@main.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--relationships/--no-relationships", default=True, help="Link scraped people to each other")
@click.option("--output", "-o", type=click.Path(), help="Write the resulting graph as JSON")
@click.option("--neo4j", "use_neo4j", is_flag=True, help="Also write results to Neo4j")
def scrape(names: tuple[str, ...], relationships: bool, output: str | None, use_neo4j: bool) -> None:
    """Scrape historical figures by name and discover their connections."""
    from history_graph_analyzer.graph.store import InMemoryGraphStore
    from history_graph_analyzer.pipeline import HistoryCrawler

    store = InMemoryGraphStore()

    with HistoryCrawler() as crawler:
        if relationships:
            with console.status(f"Crawling {len(names)} figure(s)..."):
                result = crawler.crawl(list(names))
            people, connections, failures = result.people, result.connections, result.failures
        else:
            with console.status(f"Scraping {len(names)} figure(s)..."):
                people, error = crawler.scrape_many(list(names))
            connections = []
            failures = [error] if error else []

    for error in failures:
        _report_failure(error)

    for person in people:
        store.upsert_person(person)
    console.print(f"[green]✓[/green] Scraped {len(people)} of {len(set(names))} figure(s)")

    if relationships:
        added = sum(store.upsert_connection(conn) for conn in connections)
        console.print(f"[green]✓[/green] Found {len(connections)} connection(s), {added} new")

    _print_people(store.people())
    if store.connections():
        _print_connections(store.connections())

    if output:
        store.export_json(Path(output))
        console.print(f"\n[dim]Graph written to {output}[/dim]")

    if use_neo4j:
        _write_neo4j(store)


@main.command(name="relationships")
@click.argument("ids", nargs=-1, required=True)
@click.option("--known", "-k", multiple=True, help="Names to treat as already scraped")
def find_relationships(ids: tuple[str, ...], known: tuple[str, ...]) -> None:
    """Discover relationships on the pages of already-known people."""
    from history_graph_analyzer.extract.discovery import KnownNamesRegistry
    from history_graph_analyzer.pipeline import HistoryCrawler

    registry = KnownNamesRegistry(list(known))

    with HistoryCrawler(registry=registry) as crawler:
        with console.status(f"Analyzing {len(ids)} page(s)..."):
            connections, error = crawler.discover_relationships_many(list(ids))
    _report_failure(error)

    if connections:
        _print_connections(connections)
    else:
        console.print("[yellow]No relationships found[/yellow]")


@main.command()
@click.argument("query")
@click.option("--limit", "-n", type=int, default=None, help="Maximum number of results")
def search(query: str, limit: int | None) -> None:
    """Search encyclopedia page titles."""
    from history_graph_analyzer.errors import FetchError
    from history_graph_analyzer.fetch import WikipediaClient

    try:
        with WikipediaClient() as client:
            results = client.search(query, limit=limit)
    except FetchError as exc:
        console.print(f"[red]Search failed:[/red] {exc}")
        raise SystemExit(1)

    table = Table(title=f"Results for '{query}'")
    table.add_column("Title", style="cyan")
    table.add_column("Description")
    table.add_column("URL", style="dim")
    for result in results:
        table.add_row(result.title, result.description, result.url)
    console.print(table)


# ============================================================================
# Text Analysis Commands
# ============================================================================

@main.command()
@click.argument("text")
@click.option("--json", "as_json", is_flag=True, help="Print entities as a JSON array")
def entities(text: str, as_json: bool) -> None:
    """Extract candidate person names from text."""
    from history_graph_analyzer.extract.ner import NameRecognizer

    names = NameRecognizer().extract_entities(text)

    if as_json:
        click.echo(json.dumps(names))
        return

    if not names:
        console.print("[yellow]No entities found[/yellow]")
        return
    for name in names:
        console.print(f"  • {name}")


@main.command()
@click.argument("text")
@click.option("--source", "-s", required=True, help="Source person name")
@click.option("--target", "-t", required=True, help="Target person name")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def classify(text: str, source: str, target: str, as_json: bool) -> None:
    """Classify the relationship between two people described in text."""
    from history_graph_analyzer.extract.classifier import RelationshipClassifier

    result = RelationshipClassifier().classify(text, source, target)
    rel_type = result.type.value if result.type else None

    if as_json:
        click.echo(json.dumps({
            "type": rel_type,
            "strength": result.strength,
            "description": result.description,
        }))
        return

    console.print(f"[bold]Type:[/bold] {rel_type or '[dim]none[/dim]'}")
    console.print(f"[bold]Strength:[/bold] {result.strength}/10")
    console.print(f"[bold]Description:[/bold] {result.description}")

    if result.scores:
        table = Table(title="Scores")
        table.add_column("Type", style="cyan")
        table.add_column("Score", justify="right", style="green")
        for score_type, score in sorted(result.scores.items(), key=lambda item: -item[1]):
            table.add_row(score_type.value, f"{score:.2f}")
        console.print(table)


@main.command()
@click.argument("tag", type=click.Choice(LEXICON_TAGS))
@click.option("--top", "-n", type=int, default=10, help="Number of indicators to show")
def lexicon(tag: str, top: int) -> None:
    """Show the strongest lexicon phrases for a relationship type."""
    from history_graph_analyzer.extract.lexicon import RelationshipLexicon

    lex = RelationshipLexicon()
    rel_type = RelationshipType(tag)

    table = Table(title=f"Top indicators: {tag}")
    table.add_column("Phrase", style="cyan")
    table.add_column("Weight", justify="right", style="green")
    for phrase in lex.top_indicators(rel_type, top):
        table.add_row(phrase, str(lex.weight(rel_type, phrase)))
    console.print(table)


# ============================================================================
# Graph Commands
# ============================================================================

@main.group()
def graph() -> None:
    """Graph export commands."""
    pass


@graph.command(name="stats")
@click.argument("path", type=click.Path(exists=True))
@click.option("--top", "-n", type=int, default=10, help="Number of best-connected people to list")
def graph_stats(path: str, top: int) -> None:
    """Show statistics for an exported graph JSON file."""
    from history_graph_analyzer.graph.store import graph_from_data, graph_summary

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    summary = graph_summary(graph_from_data(data), top=top)

    console.print(f"[bold]People:[/bold] {summary['nodes']:,}")
    console.print(f"[bold]Connections:[/bold] {summary['edges']:,}")
    console.print(f"[bold]Components:[/bold] {summary['components']:,}")
    console.print(f"[bold]Density:[/bold] {summary['density']:.3f}")

    if summary["top_connected"]:
        table = Table(title="Best connected")
        table.add_column("Person", style="cyan")
        table.add_column("Degree", justify="right", style="green")
        for person_id, degree in summary["top_connected"]:
            table.add_row(person_id, str(degree))
        console.print(table)


# ============================================================================
# Helpers
# ============================================================================

def _report_failure(error) -> None:
    if error is None:
        return
    console.print(f"[yellow]⚠ {error}[/yellow]")
    for key, exc in error.failures:
        console.print(f"  [dim]{key}: {exc}[/dim]")


def _print_people(people) -> None:
    table = Table(title="People")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Lifespan")
    table.add_column("Profession")
    table.add_column("Era")
    table.add_column("Country")
    for person in people:
        table.add_row(
            person.id,
            person.name,
            person.lifespan(),
            person.profession,
            person.era,
            person.country,
        )
    console.print(table)


def _print_connections(connections) -> None:
    table = Table(title="Connections")
    table.add_column("Source", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Target", style="cyan")
    table.add_column("Strength", justify="right", style="green")
    table.add_column("Description")
    for conn in connections:
        table.add_row(conn.source, conn.type.value, conn.target, str(conn.strength), conn.description)
    console.print(table)


def _write_neo4j(store) -> None:
    from neo4j.exceptions import Neo4jError, ServiceUnavailable

    from history_graph_analyzer.graph.writer import Neo4jGraphWriter

    writer = Neo4jGraphWriter()
    try:
        writer.initialize()
        people = sum(writer.upsert_person(p) for p in store.people())
        links = sum(writer.upsert_connection(c) for c in store.connections())
    except (ServiceUnavailable, Neo4jError) as exc:
        console.print(f"[red]Neo4j write failed:[/red] {exc}")
        raise SystemExit(1)
    finally:
        writer.close()

    console.print(f"[green]✓[/green] Neo4j: {people} new people, {links} new connections")


if __name__ == "__main__":
    main()
