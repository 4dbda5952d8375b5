"""Command line interface for DocSite."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from docsite.config import DEFAULT_PORT, AppConfig
from docsite.index.search import DocumentIndex
from docsite.web.app import create_app


console = Console()
app = typer.Typer(help="DocSite - documentation site server with built-in search")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    root: Path = typer.Option(None, "--root", help="Site root directory"),
    docs: Path = typer.Option(None, "--docs", help="Document collection JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Run a query against the document collection."""
    _setup_logging(verbose)
    config = AppConfig(root_dir=root)
    if docs is not None:
        config.docs_path = docs
    resolved_docs = config.resolved_docs_path

    if not resolved_docs.exists():
        raise typer.BadParameter(f"Document collection not found: {resolved_docs}")

    index = DocumentIndex()
    index.load(resolved_docs)

    matches = index.query(query)
    if not matches:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Id")
    table.add_column("Title")
    table.add_column("Path")
    table.add_column("Snippet")

    for match in matches:
        snippet = match.snippet.replace("\n", " ")
        table.add_row(
            str(match.score),
            str(match.document.id),
            match.document.title,
            match.document.path,
            snippet,
        )

    console.print(table)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(DEFAULT_PORT, envvar="PORT", help="Server port"),
    root: Path = typer.Option(None, "--root", help="Site root directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Start the documentation site server."""
    _setup_logging(verbose)
    config = AppConfig(root_dir=root, host=host, port=port)
    if not config.resolved_docs_path.exists():
        console.print("[yellow]Warning: document collection not found, search will be empty.[/yellow]")

    console.print(f"Server listening on http://{config.host}:{config.port} (root: {config.root_dir})")
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        reload=False,
        log_level="debug" if verbose else "info",
    )
