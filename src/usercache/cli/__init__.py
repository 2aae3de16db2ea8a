"""CLI commands for usercache.

Provides command-line interface using Typer:
- usercache init-db: Create the users schema
- usercache health: Check database and Redis connectivity
- usercache users: Read and write user records through the cache

Usage:
    usercache --help
    usercache init-db --seed
    usercache users get 1
"""

import typer

from usercache.cli.db_cmd import health_app, init_app
from usercache.cli.users_cmd import app as users_app
from usercache.config import settings
from usercache.observability.logging import configure_logging

# Main CLI application
app = typer.Typer(
    name="usercache",
    help="usercache: cache-aside user records on PostgreSQL and Redis",
    no_args_is_help=True,
)

# Add subcommands
app.add_typer(init_app, name="init-db")
app.add_typer(health_app, name="health")
app.add_typer(users_app, name="users")


@app.callback()
def callback() -> None:
    """usercache: cache-aside user records on PostgreSQL and Redis."""
    configure_logging(json_format=settings.log_format == "json", level=settings.log_level)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
