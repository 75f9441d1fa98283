"""Image commands for the Orka CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from . import get_client, reporting_errors

app = typer.Typer(help="Inspect images")
console = Console()


@app.command("list")
def list_images(
    remote: bool = typer.Option(False, "--remote", help="List images in the remote repo instead"),
) -> None:
    """List base images and empty disks."""
    client = get_client()

    try:
        if remote:
            with reporting_errors():
                names = [image.name for image in client.images.list_remote()]
            if not names:
                console.print("[yellow]No remote images found.[/yellow]")
                return
            for name in names:
                console.print(name)
            return

        with reporting_errors():
            images = client.images.list().to_list()

        if not images:
            console.print("[yellow]No images found.[/yellow]")
            return

        table = Table(title="Images")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Size")
        table.add_column("Modified")
        table.add_column("Owner")

        for image in images:
            table.add_row(
                image.name,
                image.size or "",
                image.modification_time.strftime("%Y-%m-%d %H:%M"),
                image.owner or "",
            )

        console.print(table)
    finally:
        client.close()
