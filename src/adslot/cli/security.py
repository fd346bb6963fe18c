"""Security CLI commands: set-password, check-auth."""

from __future__ import annotations

import os

import typer
from rich.console import Console

from adslot.web.security import hash_password

console = Console()
security_app = typer.Typer(name="security", help="Security and authentication management.")


@security_app.command("set-password")
def set_password() -> None:
    """Generate a bcrypt hash for a password."""
    password = typer.prompt("Password", hide_input=True, confirmation_prompt=True)
    hashed = hash_password(password)
    console.print(f"\n[bold]Bcrypt hash:[/bold]\n  {hashed}")
    console.print("\n[dim]Set this as ADSLOT_ADMIN_HASH in your environment,[/dim]")
    console.print("[dim]or use ADSLOT_ADMIN_PASSWORD for automatic runtime hashing.[/dim]")


@security_app.command("check-auth")
def check_auth() -> None:
    """Verify auth env vars are configured."""
    console.print("\n[bold]Auth Configuration Check[/bold]\n")

    secret_key = os.environ.get("ADSLOT_SECRET_KEY", "")
    admin_hash = os.environ.get("ADSLOT_ADMIN_HASH", "")
    admin_password = os.environ.get("ADSLOT_ADMIN_PASSWORD", "")

    if secret_key:
        console.print("  ADSLOT_SECRET_KEY     [green]set[/green]")
    else:
        console.print("  ADSLOT_SECRET_KEY     [red]not set[/red] (random key used per restart)")

    if admin_hash:
        console.print("  ADSLOT_ADMIN_HASH     [green]set[/green]")
    elif admin_password:
        console.print("  ADSLOT_ADMIN_HASH     [yellow]not set[/yellow] (using ADMIN_PASSWORD fallback)")
    else:
        console.print("  ADSLOT_ADMIN_HASH     [red]not set[/red]")

    if not admin_hash and not admin_password:
        console.print("\n  [red]Auth is disabled![/red] Set ADSLOT_ADMIN_HASH or ADSLOT_ADMIN_PASSWORD.")
    else:
        console.print("\n  [green]Auth is enabled.[/green]")
