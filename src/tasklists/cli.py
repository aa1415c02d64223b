#!/usr/bin/env python3
"""
Command line entry point: run the API server and manage the database schema.
"""

from pathlib import Path

import click
import uvicorn
from alembic import command
from alembic.config import Config

from tasklists import __version__
from tasklists.config import settings
from tasklists.logging import configure_logging, get_logger

logger = get_logger(__name__)

LOG_LEVELS = click.Choice(["debug", "info", "warning", "error"])


@click.group()
@click.version_option(version=__version__, prog_name="tasklists")
def cli() -> None:
    """Tasklists backend."""


@cli.command()
@click.option("--host", default=settings.api_host, show_default=True, help="Host to bind to")
@click.option("--port", default=settings.api_port, show_default=True, type=int)
@click.option(
    "--reload/--no-reload",
    default=settings.api_reload,
    show_default=True,
    help="Restart on code changes",
)
@click.option("--workers", default=1, show_default=True, type=int)
@click.option("--log-level", default=settings.log_level.lower(), type=LOG_LEVELS)
def serve(host: str, port: int, reload: bool, workers: int, log_level: str) -> None:
    """Start the GraphQL API server."""
    configure_logging(debug=settings.debug, log_level=log_level)
    logger.info("Starting Tasklists API server", host=host, port=port, reload=reload)

    try:
        if reload or workers > 1:
            # Reload and multiple workers need an import string, not an app object
            uvicorn.run(
                "tasklists.api.app:app",
                host=host,
                port=port,
                reload=reload,
                workers=1 if reload else workers,
                log_level=log_level,
            )
        else:
            from tasklists.api.app import app

            uvicorn.run(app, host=host, port=port, log_level=log_level)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")


def alembic_config(database_url: str | None = None) -> Config:
    """Load alembic.ini from the project root, optionally pointing it at another database."""
    alembic_ini = Path(__file__).resolve().parents[2] / "alembic.ini"
    if not alembic_ini.exists():
        raise click.ClickException(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    if database_url:
        config.set_main_option("sqlalchemy.url", database_url)
    return config


@cli.group()
@click.option("--database-url", envvar="TASKLISTS_DATABASE_URL", help="Database to migrate")
@click.pass_context
def db(ctx: click.Context, database_url: str | None) -> None:
    """Manage the users, task list and to-do tables."""
    configure_logging(debug=settings.debug)
    ctx.obj = alembic_config(database_url)


def _run_migration(action: str, fn, *args) -> None:
    try:
        fn(*args)
    except Exception as e:
        logger.error("Migration command failed", action=action, error=str(e))
        raise click.ClickException(f"{action} failed: {e}") from e


@db.command()
@click.argument("revision", default="head")
@click.pass_obj
def upgrade(config: Config, revision: str) -> None:
    """Apply migrations up to REVISION."""
    logger.info("Upgrading schema", revision=revision)
    _run_migration("upgrade", command.upgrade, config, revision)


@db.command()
@click.argument("revision", default="-1")
@click.pass_obj
def downgrade(config: Config, revision: str) -> None:
    """Revert migrations down to REVISION."""
    logger.info("Downgrading schema", revision=revision)
    _run_migration("downgrade", command.downgrade, config, revision)


@db.command()
@click.pass_obj
def current(config: Config) -> None:
    """Show the revision the database is at."""
    _run_migration("current", command.current, config)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
