"""Command-line interface for WrappedUp.

This module provides the CLI commands for running and managing
the WrappedUp authentication service.
"""

import asyncio
from typing import NoReturn

import click

from wrappedup import __version__
from wrappedup.core.config import get_settings
from wrappedup.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="WrappedUp")
def cli() -> None:
    """WrappedUp - authentication and token service.

    Settings are read from WRAPPEDUP_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the WrappedUp server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting WrappedUp server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "wrappedup.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command("init-db")
@click.option("--force", is_flag=True, default=False, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create the database tables.

    Use this only in development. In production, run the Alembic migrations.
    """
    from wrappedup.infrastructure.persistence.database import get_db_manager

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        from wrappedup.infrastructure.persistence.database import init_database

        db = get_db_manager()
        try:
            await init_database()
            if settings.is_production:
                await db.create_tables()
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


async def _set_enabled(username: str, enabled: bool) -> bool:
    from wrappedup.domain.entities.user import Username
    from wrappedup.infrastructure.persistence.database import get_db_manager
    from wrappedup.infrastructure.persistence.repositories import SQLAlchemyUserDirectory

    db = get_db_manager()
    try:
        async with db.session() as session:
            directory = SQLAlchemyUserDirectory(session)
            user = await directory.find_by_username(Username(username))
            if user is None:
                return False
            if enabled:
                user.enable()
            else:
                user.disable()
            await directory.save(user)
            return True
    finally:
        await db.disconnect()


@cli.command("disable-user")
@click.argument("username")
def disable_user(username: str) -> None:
    """Disable a user; they can no longer log in or refresh tokens."""
    configure_logging(get_settings())
    if not asyncio.run(_set_enabled(username, enabled=False)):
        click.echo(f"ERROR: User '{username}' not found.", err=True)
        raise SystemExit(1)
    click.echo(f"User '{username}' disabled.")


@cli.command("enable-user")
@click.argument("username")
def enable_user(username: str) -> None:
    """Re-enable a previously disabled user."""
    configure_logging(get_settings())
    if not asyncio.run(_set_enabled(username, enabled=True)):
        click.echo(f"ERROR: User '{username}' not found.", err=True)
        raise SystemExit(1)
    click.echo(f"User '{username}' enabled.")


@cli.command()
def info() -> None:
    """Display WrappedUp configuration."""
    settings = get_settings()

    click.echo(f"""
WrappedUp v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}
  Echo:         {settings.db_echo}

Security:
  Issuer:       {settings.jwt_issuer}
  Token Expire: {settings.access_token_expire_minutes} minutes
  Refresh Exp:  {settings.refresh_token_expire_days} days
  Min Password: {settings.password_min_length} characters

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    Called by the `wrappedup` command and by `python -m wrappedup`.
    """
    cli()


if __name__ == "__main__":
    main()
