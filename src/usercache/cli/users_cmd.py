"""CLI commands for cached user records.

Usage:
    usercache users get 1
    usercache users create alice@example.com "Alice Smith"
    usercache users update 1 alice@example.com "Alice Jones"
    usercache users delete 1
    usercache users list --recent 7
    usercache users count
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from rich.table import Table

from usercache.cli import common
from usercache.coordinator import CachedUserRepository
from usercache.errors import UserCacheError
from usercache.models import User

T = TypeVar("T")

app = typer.Typer(help="Read and write user records through the cache")


def _run(action: Callable[[CachedUserRepository], Awaitable[T]]) -> T:
    """Run an action against a freshly opened runtime."""

    async def runner() -> T:
        async with common.open_runtime() as runtime:
            return await action(runtime.users)

    try:
        return asyncio.run(runner())
    except UserCacheError as e:
        raise common.fail(e) from e


def _print_users(users: list[User], title: str) -> None:
    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Email", style="green", no_wrap=True)
    table.add_column("Name")
    table.add_column("Created", style="yellow")

    for user in users:
        created = user.created_at.strftime("%Y-%m-%d %H:%M:%S")
        table.add_row(str(user.id), user.email, user.name, created)

    common.console.print(table)


@app.command("get")
def get_user(user_id: int = typer.Argument(..., help="User identifier")) -> None:
    """Fetch a user, from cache when warm."""
    user = _run(lambda users: users.fetch_by_id(user_id))
    _print_users([user], title=f"User {user_id}")


@app.command("create")
def create_user(
    email: str = typer.Argument(..., help="Unique email address"),
    name: str = typer.Argument(..., help="Display name"),
) -> None:
    """Create a user and cache it."""
    user = _run(lambda users: users.create_cached(email, name))
    common.console.print(f"[green]Created user[/green] {user.id} ({user.email})")


@app.command("update")
def update_user(
    user_id: int = typer.Argument(..., help="User identifier"),
    email: str = typer.Argument(..., help="New email address"),
    name: str = typer.Argument(..., help="New display name"),
) -> None:
    """Update a user and invalidate its cache entry."""
    _run(lambda users: users.update_cached(user_id, email, name))
    common.console.print(f"[green]Updated user[/green] {user_id}")


@app.command("delete")
def delete_user(user_id: int = typer.Argument(..., help="User identifier")) -> None:
    """Delete a user and invalidate its cache entry."""
    _run(lambda users: users.delete_cached(user_id))
    common.console.print(f"[green]Deleted user[/green] {user_id}")


@app.command("list")
def list_users(
    recent: int | None = typer.Option(
        None,
        "--recent",
        "-r",
        min=0,
        help="Only users created within this many days, newest first",
    ),
) -> None:
    """List users (not cached)."""
    if recent is None:
        users = _run(lambda repo: repo.list_users())
        _print_users(users, title="Users")
    else:
        users = _run(lambda repo: repo.list_recent(recent))
        _print_users(users, title=f"Users created in the last {recent} days")


@app.command("count")
def count_users() -> None:
    """Count users (not cached)."""
    total = _run(lambda users: users.count_users())
    common.console.print(f"[bold]Users:[/bold] {total}")
