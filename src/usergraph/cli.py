#!/usr/bin/env python3
"""
Main CLI entry point for the usergraph server.
"""

import asyncio
import os
import sys
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click
import uvicorn

from usergraph import __version__
from usergraph.config import get_database_url, settings
from usergraph.graphql.resolvers.user import BIG_RED_BUTTON_MESSAGE
from usergraph.logging import configure_logging, get_logger
from usergraph.store import UserGraphError, UserStore

logger = get_logger(__name__)

T = TypeVar("T")


def run_with_store(action: Callable[[UserStore], Awaitable[T]]) -> T:
    """Open the configured store, ensure its tables, run ``action`` and close it."""

    async def runner() -> T:
        store = UserStore.from_url(get_database_url(), echo=settings.sql_echo)
        try:
            await store.init()
            return await action(store)
        finally:
            await store.close()

    return asyncio.run(runner())


@click.group()
@click.version_option(version=__version__, prog_name="usergraph")
def cli() -> None:
    """usergraph CLI - run the server and manage users."""
    pass


@cli.command()
@click.option(
    "--host",
    default=lambda: settings.api_host,
    help="Host to bind to (default: USERGRAPH_API_HOST or 0.0.0.0)",
)
@click.option(
    "--port",
    default=lambda: settings.api_port,
    type=int,
    help="Port to bind to (default: USERGRAPH_API_PORT or 4000)",
)
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option("--workers", default=1, type=int, help="Number of worker processes (default: 1)")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, workers: int, log_level: str) -> None:
    """Start the usergraph API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting usergraph API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # The app reads these at import time when started from an import string
    if log_level == "debug":
        os.environ["USERGRAPH_DEBUG"] = "true"
        os.environ["USERGRAPH_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("USERGRAPH_DEBUG", "false")
        os.environ.setdefault("USERGRAPH_LOG_LEVEL", log_level)

    try:
        if reload or workers > 1:
            uvicorn.run(
                "usergraph.api.app:app",
                host=host,
                port=port,
                reload=reload,
                workers=(workers if not reload else 1),  # reload doesn't work with multiple workers
                log_level=log_level,
                access_log=True,
            )
        else:
            from usergraph.api.app import app

            uvicorn.run(app, host=host, port=port, log_level=log_level, access_log=True)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("init-db")
def init_db() -> None:
    """Create the database tables."""
    configure_logging()

    count = run_with_store(lambda store: store.count())
    click.echo(f"✓ Database ready ({count} user(s))")


@cli.command()
@click.argument("names", nargs=-1, required=True)
def seed(names: tuple[str, ...]) -> None:
    """Create one user per NAME."""
    configure_logging()

    async def do_seed(store: UserStore) -> list:
        return [await store.create(name=name) for name in names]

    try:
        users = run_with_store(do_seed)
    except UserGraphError as e:
        logger.error("Failed to seed users", error=str(e))
        click.echo(f"✗ Error seeding users: {e}", err=True)
        sys.exit(1)

    for user in users:
        click.echo(f"✓ Created user {user.id}: {user.name}")


@cli.command("list-users")
def list_users() -> None:
    """List all users."""
    configure_logging()

    users = run_with_store(lambda store: store.find_many())

    if not users:
        click.echo("No users found.")
        return
    click.echo(f"Found {len(users)} user(s):")
    for user in users:
        click.echo(f"  {user.id}  {user.name}")


@cli.command()
@click.confirmation_option(prompt="Delete every user?")
def destroy() -> None:
    """Delete every user."""
    configure_logging()

    count = run_with_store(lambda store: store.delete_many())
    click.echo(BIG_RED_BUTTON_MESSAGE.format(count=count))


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
