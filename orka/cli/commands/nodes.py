"""Node commands for the Orka CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from . import get_client, reporting_errors

app = typer.Typer(help="Inspect nodes")
console = Console()


@app.command("list")
def list_nodes(
    admin: bool = typer.Option(False, "--admin", help="Include nodes dedicated to other users (needs a license key)"),
) -> None:
    """List nodes and their free resources."""
    client = get_client()

    try:
        with reporting_errors():
            nodes = client.nodes.list(admin=admin).to_list()

        if not nodes:
            console.print("[yellow]No nodes found.[/yellow]")
            return

        table = Table(title="Nodes")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Address")
        table.add_column("State", style="green")
        table.add_column("CPU (free/total)")
        table.add_column("Memory (free/total)")
        table.add_column("Group")

        for node in nodes:
            table.add_row(
                node.name,
                node.address or "",
                node.state or "",
                f"{node.available_cpu_cores}/{node.total_cpu_cores}",
                f"{node.available_memory}/{node.total_memory}",
                node.orka_group or "",
            )

        console.print(table)
    finally:
        client.close()
