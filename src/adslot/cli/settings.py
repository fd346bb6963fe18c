"""Site settings CLI commands."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adslot.core.config import load_config
from adslot.db.repository import Repository

console = Console()
settings_app = typer.Typer(name="settings", help="Site settings management.")


@settings_app.command("list")
def list_settings() -> None:
    """List all site settings."""
    cfg = load_config()
    repo = Repository(cfg.db_path)

    table = Table(title="Site Settings")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    table.add_column("Updated", style="dim")

    for s in repo.get_settings():
        table.add_row(s["setting_key"], s["setting_value"], str(s["updated_at"] or ""))

    console.print(table)


@settings_app.command("get")
def get_setting(key: str = typer.Argument(..., help="Setting key")) -> None:
    """Print a single setting value."""
    cfg = load_config()
    repo = Repository(cfg.db_path)
    typer.echo(repo.get_setting(key))


@settings_app.command("set")
def set_setting(
    key: str = typer.Argument(..., help="Setting key"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Create or update a site setting."""
    cfg = load_config()
    repo = Repository(cfg.db_path)
    repo.set_setting(key, value)
    console.print(f"[green]Set[/green] {key} = {value}")
