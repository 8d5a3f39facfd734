"""CLI interface for chunkroute.

Typer-based command-line interface with Rich output formatting.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from chunkroute import __version__
from chunkroute.config import (
    CONFIG_FILE,
    ChunkrouteConfig,
    default_config,
    load_config,
    save_config,
)
from chunkroute.corpus import load_corpus
from chunkroute.exceptions import ChunkrouteError
from chunkroute.generator import (
    QueryPatternsGenerator,
    analysis_to_dict,
    load_patterns,
    result_to_dict,
    save_patterns,
)

__all__ = ["app"]

app = typer.Typer(
    name="chunkroute",
    help="Pattern-based query routing for chunked documentation.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

InputOption = Annotated[
    str | None,
    typer.Option("--input", "-i", help="Chunk corpus directory"),
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _resolve_config(config_path: Path | None) -> ChunkrouteConfig:
    if config_path is not None:
        return load_config(config_path)
    local = Path(CONFIG_FILE)
    if local.exists():
        return load_config(local)
    return default_config()


def _config(ctx: typer.Context) -> ChunkrouteConfig:
    return ctx.obj if isinstance(ctx.obj, ChunkrouteConfig) else default_config()


def _fail(message: str, error: ChunkrouteError) -> typer.Exit:
    console.print(f"[red]{message}:[/red] {error}")
    return typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help=f"Config file (default: ./{CONFIG_FILE} if present)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Route documentation queries to chunks without embeddings."""
    _configure_logging(verbose)
    try:
        ctx.obj = _resolve_config(config_path)
    except ChunkrouteError as e:
        raise _fail("Failed to load config", e) from e


@app.command()
def version() -> None:
    """Show chunkroute version."""
    console.print(f"chunkroute {__version__}")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file"),
    ] = False,
) -> None:
    """Write a default config file in the current directory."""
    path = Path(CONFIG_FILE)
    if path.exists() and not force:
        console.print(f"[yellow]{path} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(code=0)

    try:
        save_config(default_config(), path)
    except ChunkrouteError as e:
        raise _fail("Failed to write config", e) from e
    console.print(f"[green]Wrote default config[/green] to {path}")


@app.command()
def generate(
    ctx: typer.Context,
    input_dir: InputOption = None,
    output_dir: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Directory for the pattern database"),
    ] = None,
) -> None:
    """Build the query pattern database from a chunk corpus."""
    config = _config(ctx)
    chunks_dir = Path(input_dir or config.corpus.input_dir)
    out_dir = Path(output_dir or config.output.output_dir)

    generator = QueryPatternsGenerator(config)
    try:
        db = generator.generate_patterns(chunks_dir)
        output_file = save_patterns(db, out_dir, config.output.filename, config.output.indent)
    except ChunkrouteError as e:
        raise _fail("Failed to generate query patterns", e) from e

    stats = db.statistics
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("metric", style="dim")
    table.add_column("value", style="bold")
    table.add_row("Categories", str(len(db.categories)))
    table.add_row("Query mappings", str(len(db.mappings)))
    table.add_row("Concept mappings", str(len(db.concept_mappings)))
    table.add_row("Chunks", str(stats.get("total_chunks", 0)))
    table.add_row("Skipped chunks", str(stats.get("skipped_chunks", 0)))
    console.print(table)
    console.print(f"\n[green]Query patterns saved[/green] to {output_file}")


@app.command(name="test")
def test_cmd(
    ctx: typer.Context,
    input_dir: InputOption = None,
) -> None:
    """Run the sample query battery and show classification + top result."""
    config = _config(ctx)
    chunks_dir = Path(input_dir or config.corpus.input_dir)
    patterns_path = Path(config.output.output_dir) / config.output.filename

    generator = QueryPatternsGenerator(config)
    try:
        records = load_corpus(chunks_dir, config.corpus.exclude)
        if patterns_path.exists():
            db = load_patterns(patterns_path)
            generator.router.index_chunks(records)
        else:
            db = generator.generate_from_chunks(records)
    except ChunkrouteError as e:
        raise _fail("Failed to load query patterns", e) from e

    for query in config.test.queries:
        result = generator.test_query(query, db)
        analysis = result.analysis
        console.print(f'\n[bold]--- Testing: "{query}" ---[/bold]')
        console.print(f"Category: {analysis.category}")
        console.print(f"Intent: {analysis.intent}")
        console.print(f"Concepts: {', '.join(analysis.concepts)}")
        console.print(f"Results: {len(result.results)} chunks found")
        if result.results:
            top = result.results[0]
            console.print(f"Top result: {top.chunk_id}")
            console.print(f"Score: {top.score:g}")


@app.command()
def query(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help="Question to route")],
    input_dir: InputOption = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print machine-readable JSON"),
    ] = False,
) -> None:
    """Classify one query and list the chunks it routes to."""
    config = _config(ctx)
    chunks_dir = Path(input_dir or config.corpus.input_dir)

    generator = QueryPatternsGenerator(config)
    try:
        generator.router.index_chunks(load_corpus(chunks_dir, config.corpus.exclude))
    except ChunkrouteError as e:
        raise _fail("Failed to load chunks", e) from e

    result = generator.test_query(text)

    if as_json:
        payload = {
            "analysis": analysis_to_dict(result.analysis),
            "results": [result_to_dict(r) for r in result.results],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    analysis = result.analysis
    console.print(f"[bold]Category:[/bold] {analysis.category} ({analysis.confidence:.1f})")
    console.print(f"[bold]Intent:[/bold] {analysis.intent}")
    console.print(f"[bold]Concepts:[/bold] {', '.join(analysis.concepts) or '-'}")

    if not result.results:
        console.print("\n[dim]No chunks matched.[/dim]")
        return

    table = Table(title=f"{len(result.results)} result(s)")
    table.add_column("Chunk")
    table.add_column("Match")
    table.add_column("Score", justify="right")
    table.add_column("Confidence", justify="right")
    for r in result.results:
        table.add_row(r.chunk_id, r.match_type.value, f"{r.score:.2f}", f"{r.confidence:.2f}")
    console.print(table)
