"""Shared helpers for usercache CLI commands."""

from __future__ import annotations

import typer
from rich.console import Console

from usercache.config import settings
from usercache.errors import UserCacheError
from usercache.runtime import Runtime

console = Console()


def open_runtime() -> Runtime:
    """Open a runtime from the current settings."""
    return Runtime.from_settings(settings)


def fail(error: UserCacheError) -> typer.Exit:
    """Print a usercache error and build the exit to raise."""
    console.print(f"[red]Error ({error.code}):[/red] {error.text}")
    return typer.Exit(code=1)
