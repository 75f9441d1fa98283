"""Authentication commands for the Orka CLI."""

from __future__ import annotations

import typer
from rich.console import Console

from orka.auth.credentials import clear_config, load_config, resolve_base_url, resolve_credentials, save_config
from orka.exceptions import OrkaSDKError

from . import get_client, reporting_errors

app = typer.Typer(help="Manage authentication")
console = Console()


def _mask(secret: str) -> str:
    return f"{secret[:4]}...{secret[-4:]}" if len(secret) > 11 else "***"


@app.command()
def login(
    url: str = typer.Option(None, "--url", help="Orka API URL (defaults to ORKA_API_URL or saved config)"),
    email: str = typer.Option(..., prompt=True, help="Your Orka user email"),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Your Orka password"),
    license_key: str = typer.Option(None, "--license-key", help="License key to save for admin commands"),
) -> None:
    """Create a token with your email and password and save it."""
    from orka.client import OrkaClient

    base_url = resolve_base_url(url)
    if not base_url:
        console.print("[red]No API URL. Pass --url or set ORKA_API_URL.[/red]")
        raise typer.Exit(1)

    with reporting_errors(), OrkaClient(base_url) as client:
        token = client.tokens.create(email, password)

    save_config(base_url=base_url, token=token, license_key=license_key)
    console.print("\n[green]Successfully authenticated![/green]")
    console.print(f"Token saved for {base_url}.")


@app.command()
def logout() -> None:
    """Revoke the saved token and remove stored credentials."""
    config = load_config() or {}
    if config.get("token") and config.get("base_url"):
        client = get_client()
        try:
            client.tokens.revoke()
        except OrkaSDKError as e:
            console.print(f"[yellow]Warning: Could not revoke token: {e}[/yellow]")
        finally:
            client.close()

    if clear_config():
        console.print("[green]Successfully logged out.[/green]")
    else:
        console.print("[yellow]No credentials found.[/yellow]")


@app.command()
def status() -> None:
    """Show current authentication status."""
    base_url = resolve_base_url()
    credentials = resolve_credentials()

    if not base_url or not credentials.token:
        console.print("[yellow]Not authenticated.[/yellow]")
        console.print("Run [bold]orka auth login[/bold] to authenticate.")
        raise typer.Exit(1)

    console.print("[green]Authenticated[/green]")
    console.print(f"  API URL: {base_url}")
    console.print(f"  Token: {_mask(credentials.token)}")
    if credentials.license_key:
        console.print(f"  License key: {_mask(credentials.license_key)}")

    client = get_client()
    try:
        info = client.tokens.info()
        console.print(f"  User: {info.user.email}")
        if info.token_revoked:
            console.print("\n[red]Token has been revoked.[/red]")
            raise typer.Exit(1)
        console.print("\n[green]Token is valid.[/green]")
    except OrkaSDKError as e:
        console.print(f"\n[yellow]Warning: Could not verify token: {e}[/yellow]")
    finally:
        client.close()
