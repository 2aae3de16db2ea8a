"""CLI commands for schema bootstrap and health checks.

Usage:
    usercache init-db
    usercache init-db --seed
    usercache health
"""

from __future__ import annotations

import asyncio

import typer

from usercache.cli import common
from usercache.errors import ConflictError, UserCacheError

# Reference users inserted by --seed
SEED_USERS = [
    ("alice@example.com", "Alice Smith"),
    ("bob@example.com", "Bob Johnson"),
]

init_app = typer.Typer(help="Create the users schema")
health_app = typer.Typer(help="Check database and cache connectivity")


@init_app.callback(invoke_without_command=True)
def init_db(
    seed: bool = typer.Option(
        False,
        "--seed",
        "-s",
        help="Insert the reference users if they are missing",
    ),
) -> None:
    """Create tables if they do not exist."""
    try:
        asyncio.run(_init_db(seed))
    except UserCacheError as e:
        raise common.fail(e) from e


async def _init_db(seed: bool) -> None:
    async with common.open_runtime() as runtime:
        await runtime.database.create_all()
        common.console.print("[green]Schema ready[/green]")
        if not seed:
            return

        for email, name in SEED_USERS:
            try:
                user = await runtime.store.create(email, name)
            except ConflictError:
                common.console.print(f"[yellow]Already present:[/yellow] {email}")
                continue
            common.console.print(f"[green]Seeded[/green] {user.id} ({email})")


@health_app.callback(invoke_without_command=True)
def health() -> None:
    """Report database and cache connectivity."""
    status = asyncio.run(_health())
    for name, ok in status.items():
        mark = "[green]ok[/green]" if ok else "[red]unavailable[/red]"
        common.console.print(f"{name}: {mark}")
    if not all(status.values()):
        raise typer.Exit(code=1)


async def _health() -> dict[str, bool]:
    async with common.open_runtime() as runtime:
        return await runtime.health()
