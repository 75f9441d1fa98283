"""Main entry point for the Orka CLI."""

from __future__ import annotations

try:
    import typer
except ImportError:
    import sys

    print("Orka CLI requires extras: pip install orka[cli]")
    sys.exit(1)

from .commands import auth, images, nodes, users, vms

app = typer.Typer(
    name="orka",
    help="Orka CLI - Inspect nodes, VMs and images in an Orka environment",
    no_args_is_help=True,
)

for _name, _module in (("auth", auth), ("images", images), ("nodes", nodes), ("users", users), ("vms", vms)):
    app.add_typer(_module.app, name=_name)


def _echo_version() -> None:
    from orka import __version__

    typer.echo(f"orka {__version__}")


def _version_callback(value: bool) -> None:
    if value:
        _echo_version()
        raise typer.Exit()


@app.callback()
def main(
    show_version: bool = typer.Option(
        False,
        "--version",
        help="Show the CLI version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Work with an Orka environment from the command line.

    Credentials come from ``orka auth login``, or ORKA_API_URL, ORKA_TOKEN and
    ORKA_LICENSE_KEY.
    """


@app.command()
def version() -> None:
    """Show the CLI version."""
    _echo_version()


if __name__ == "__main__":
    app()
