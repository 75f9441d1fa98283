"""CLI command modules."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import httpx
import typer
from rich.console import Console

from orka.exceptions import ConfigurationError, OrkaSDKError

_console = Console()


def get_client() -> Any:
    """Get an OrkaClient from the saved config and environment, or exit with an error message."""
    from orka.client import OrkaClient

    try:
        return OrkaClient()
    except ConfigurationError as e:
        _console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Turn SDK and network errors into a red message and a non-zero exit code."""
    try:
        yield
    except (OrkaSDKError, httpx.HTTPError) as e:
        _console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
