"""Ad management CLI commands."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from adslot.ads.service import AdForm, AdValidationError, create_ad, resanitize_ads
from adslot.core.config import load_config
from adslot.db.repository import Repository

console = Console()
ads_app = typer.Typer(name="ads", help="Advertisement management.")


@ads_app.command("list")
def list_ads(
    position: Optional[str] = typer.Option(None, "--position", "-p", help="Filter by position"),
) -> None:
    """List advertisements."""
    cfg = load_config()
    repo = Repository(cfg.db_path)
    ads = repo.get_ads(position=position, limit=-1)

    if not ads:
        console.print("[dim]No advertisements found.[/dim]")
        return

    table = Table(title="Advertisements")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Position", style="white")
    table.add_column("Active", justify="center")
    table.add_column("Window", style="white")
    table.add_column("Clicks", justify="right")

    for ad in ads:
        active = "[green]Yes[/green]" if ad["is_active"] else "[red]No[/red]"
        window = f"{ad['start_date'] or '...'} to {ad['end_date'] or '...'}"
        table.add_row(str(ad["id"]), ad["title"], ad["position"], active, window, str(ad["click_count"]))

    console.print(table)


@ads_app.command("show")
def show_ad(ad_id: int = typer.Argument(..., help="Ad ID")) -> None:
    """Show one advertisement, including its stored markup."""
    cfg = load_config()
    repo = Repository(cfg.db_path)
    ad = repo.get_ad(ad_id)
    if not ad:
        console.print(f"[red]Advertisement {ad_id} not found.[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]#{ad['id']} {ad['title']}[/bold]")
    console.print(f"Position: [cyan]{ad['position']}[/cyan]")
    console.print(f"Active: {'yes' if ad['is_active'] else 'no'}")
    console.print(f"Link: {ad['link_url'] or '-'}", markup=False)
    console.print(f"Image: {ad['image_url'] or '-'}", markup=False)
    console.print(f"Clicks: {ad['click_count']}")
    console.print("\n[bold]Content:[/bold]")
    console.print(ad["content"] or "", markup=False, highlight=False)


@ads_app.command("add")
def add_ad(
    title: str = typer.Option(..., help="Ad title"),
    position: str = typer.Option(..., help="Display position"),
    content: str = typer.Option("", help="HTML content (sanitized before storing)"),
    image_url: str = typer.Option("", help="Image URL"),
    link_url: str = typer.Option("", help="Click-through URL"),
    start_date: str = typer.Option("", help="First day shown (YYYY-MM-DD)"),
    end_date: str = typer.Option("", help="Last day shown (YYYY-MM-DD)"),
    inactive: bool = typer.Option(False, "--inactive", help="Create the ad disabled"),
) -> None:
    """Create a new advertisement."""
    cfg = load_config()
    repo = Repository(cfg.db_path)
    form = AdForm(
        title=title,
        position=position,
        content=content,
        image_url=image_url,
        link_url=link_url,
        start_date=start_date,
        end_date=end_date,
        is_active=not inactive,
    )
    try:
        ad_id = create_ad(repo, form, cfg)
    except AdValidationError as exc:
        for err in exc.errors:
            console.print(f"[red]{err}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Created advertisement[/green] #{ad_id}")


@ads_app.command("deactivate")
def deactivate_ad(ad_id: int = typer.Argument(..., help="Ad ID")) -> None:
    """Disable an advertisement without deleting it."""
    cfg = load_config()
    repo = Repository(cfg.db_path)
    if not repo.get_ad(ad_id):
        console.print(f"[red]Advertisement {ad_id} not found.[/red]")
        raise typer.Exit(1)
    repo.update_ad(ad_id, is_active=False)
    console.print(f"[yellow]Deactivated[/yellow] advertisement #{ad_id}")


@ads_app.command("resanitize")
def resanitize() -> None:
    """Re-run stored ad content through the current sanitizer policy."""
    cfg = load_config()
    repo = Repository(cfg.db_path)
    changed = resanitize_ads(repo, cfg)
    console.print(f"Re-sanitized [cyan]{changed}[/cyan] ad(s)")
