"""Root CLI application with init, status, serve and sanitize commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from adslot.cli.ads import ads_app
from adslot.cli.security import security_app
from adslot.cli.settings import settings_app
from adslot.core.config import build_policy, load_config
from adslot.core.database import get_schema_version, init_database, seed_settings
from adslot.core.models import POSITION_LABELS
from adslot.db.repository import Repository
from adslot.sanitizer import MarkupSanitizer

console = Console()
app = typer.Typer(
    name="adslot",
    help="adslot: sanitized HTML ad slots with an admin dashboard.",
    no_args_is_help=True,
)

# Register sub-command groups
app.add_typer(ads_app)
app.add_typer(settings_app)
app.add_typer(security_app)


@app.command()
def init() -> None:
    """Initialize the database and seed default site settings."""
    cfg = load_config()
    db_path = cfg.db_path

    console.print("[bold]Initializing adslot...[/bold]")

    init_database(db_path)
    console.print(f"  Database created at [cyan]{db_path}[/cyan]")

    count = seed_settings(db_path)
    if count > 0:
        console.print(f"  Seeded [green]{count}[/green] default settings")
    else:
        console.print("  Settings already exist")

    ver = get_schema_version(db_path)
    console.print(f"  Schema version: [cyan]{ver}[/cyan]")

    console.print("\n[bold green]Ready![/bold green] Run [cyan]adslot status[/cyan] to see the dashboard.")


@app.command()
def status() -> None:
    """Show ad counts per position."""
    cfg = load_config()

    if not Path(cfg.db_path).exists():
        console.print("[red]Database not found.[/red] Run [cyan]adslot init[/cyan] first.")
        raise typer.Exit(1)

    repo = Repository(cfg.db_path)
    console.print(f"\n[bold]{cfg.site.name} Dashboard[/bold] [dim]{cfg.site.base_url}[/dim]")
    console.print(f"Schema version: [cyan]{get_schema_version(cfg.db_path)}[/cyan]")
    enabled = repo.get_setting("ads_enabled", "1") == "1"
    console.print(f"Ads: {'[green]enabled[/green]' if enabled else '[red]disabled[/red]'}\n")

    by_position = repo.get_ad_counts_by_position()
    table = Table(title="Ads by Position")
    table.add_column("Position", style="cyan")
    table.add_column("Label", style="white")
    table.add_column("Ads", justify="right")
    for position in cfg.ads.positions:
        table.add_row(position, POSITION_LABELS.get(position, position), str(by_position.get(position, 0)))
    console.print(table)

    counts = repo.get_table_counts()
    console.print(f"\n[dim]Ads: {counts['ads']} | Settings: {counts['site_settings']}[/dim]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind to"),
    port: int = typer.Option(8000, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Enable auto-reload for development"),
) -> None:
    """Start the web dashboard."""
    import uvicorn

    console.print("\n[bold]adslot Dashboard[/bold]")
    console.print(f"Starting at [cyan]http://{host}:{port}[/cyan]\n")
    uvicorn.run(
        "adslot.web.app:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command()
def sanitize(
    path: Optional[Path] = typer.Argument(None, help="HTML file to sanitize (reads stdin when omitted)"),
) -> None:
    """Sanitize ad markup and print the result."""
    cfg = load_config()
    if path is None:
        raw = sys.stdin.read()
    else:
        if not path.exists():
            console.print(f"[red]File not found:[/red] {path}")
            raise typer.Exit(1)
        raw = path.read_text(encoding="utf-8")

    if len(raw) > cfg.sanitizer.max_content_length:
        console.print("[red]Content is too long.[/red]")
        raise typer.Exit(1)

    sanitizer = MarkupSanitizer(build_policy(cfg.sanitizer), max_passes=cfg.sanitizer.max_passes)
    typer.echo(sanitizer.sanitize(raw))
