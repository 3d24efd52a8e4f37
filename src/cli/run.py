"""CLI commands."""
from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from app.main import VERSION
from src.config.logs import configure_logging
from src.config.settings import settings
from src.errors import ResourceServerError
from src.server.lifecycle import ResourceServer

app = typer.Typer(
    add_completion=False,
    help="Resource server - localized device and extension catalogs",
)
console = Console()


@app.command()
def serve(
    user_data: Path = typer.Argument(..., help="User data directory"),
    port: int | None = typer.Option(
        None,
        "--port",
        "-p",
        help=f"Port to listen on (default {settings.server.port})",
    ),
    host: str | None = typer.Option(
        None,
        "--host",
        help=f"Interface to bind (default {settings.server.host})",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every catalog cell and request",
    ),
) -> None:
    """Build the catalog index and serve it until interrupted.

    Examples:
        resource-server serve ~/.openblock/resources
        resource-server serve ./user-data -p 8080
    """
    configure_logging(verbose, console)

    try:
        with console.status("[bold blue]Building catalog index...", spinner="dots"):
            server = ResourceServer(user_data)
    except ResourceServerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    result = server.listen(port, host)
    if not result.ok:
        console.print(f"[red]Error:[/red] {result.error}")
        raise typer.Exit(1)

    console.print(Panel.fit(
        f"[bold green]Resource server started[/bold green]\n"
        f"[dim]Listening:[/dim] http://{host or settings.server.host}:{result.port}",
        border_style="green",
    ))

    try:
        server.wait()
    except KeyboardInterrupt:
        console.print("\n[dim]Shutting down...[/dim]")
    finally:
        server.close()


@app.command()
def check(
    user_data: Path = typer.Argument(..., help="User data directory"),
) -> None:
    """Build the catalog index without serving it and list every cell.

    Example:
        resource-server check ./user-data
    """
    try:
        with console.status("[bold blue]Building catalog index...", spinner="dots"):
            server = ResourceServer(user_data)
    except ResourceServerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Catalog index")
    table.add_column("Catalog", style="cyan")
    table.add_column("Locale")
    table.add_column("URL", style="dim")
    table.add_column("Bytes", justify="right")

    for (catalog_type, locale), text in server.index.items():
        table.add_row(
            catalog_type,
            locale,
            f"/{catalog_type}/{locale}.json",
            f"{len(text.encode('utf-8')):,}",
        )

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Resource Server[/bold] v{VERSION}")
    console.print("[dim]Localized device and extension catalogs[/dim]")


if __name__ == "__main__":
    app()
