"""User commands for the Orka CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from . import get_client, reporting_errors

app = typer.Typer(help="Inspect users (needs a license key)")
console = Console()


@app.command("list")
def list_users() -> None:
    """List users and their groups."""
    client = get_client()

    try:
        with reporting_errors():
            users = client.users.list().to_list()

        if not users:
            console.print("[yellow]No users found.[/yellow]")
            return

        table = Table(title="Users")
        table.add_column("Email", style="cyan", no_wrap=True)
        table.add_column("Group")

        for user in users:
            table.add_row(user.email, user.group or "")

        console.print(table)
    finally:
        client.close()
