"""VM commands for the Orka CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from . import get_client, reporting_errors

app = typer.Typer(help="Inspect VMs")
console = Console()


@app.command("list")
def list_vms(
    user: str = typer.Option(None, help="List another user's VMs, or 'all' (needs a license key)"),
) -> None:
    """List VM resources and their deployed instances."""
    client = get_client()

    try:
        with reporting_errors():
            resources = client.vm_resources.list(user=user).to_list()

        if not resources:
            console.print("[yellow]No VMs found.[/yellow]")
            return

        table = Table(title="VMs")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Instance")
        table.add_column("Node")
        table.add_column("IP")
        table.add_column("SSH")
        table.add_column("Status", style="green")

        for resource in resources:
            if not resource.deployed:
                table.add_row(resource.name, "", "", "", "", "Not deployed")
                continue
            for instance in resource.instances:
                table.add_row(
                    resource.name,
                    instance.id,
                    instance.node.name,
                    instance.ip or "",
                    "" if instance.ssh_port is None else str(instance.ssh_port),
                    instance.status or "",
                )

        console.print(table)
    finally:
        client.close()
