"""Command that runs the HTTP API."""

import os
from dataclasses import replace

import click
import uvicorn

from tokobook.api.app import create_app
from tokobook.config import Settings


@click.command("serve")
@click.option("--host", help="Bind address (defaults to TOKOBOOK_HOST or 127.0.0.1)")
@click.option("--port", type=int, help="Bind port (defaults to TOKOBOOK_PORT or 8000)")
@click.option("--reload", is_flag=True, help="Restart the server when source files change")
@click.pass_context
def serve(ctx, host: str | None, port: int | None, reload: bool) -> None:
    """Serve the JSON API and uploaded receipt photos.

    Examples:
        tokobook serve
        tokobook --db-path ./shop.db serve --port 9000
    """
    settings = Settings.from_env()
    settings = replace(
        settings,
        database_path=ctx.obj["db_path"],
        host=host or settings.host,
        port=port or settings.port,
    )

    if reload:
        # The reloader imports the app factory itself, so hand the database over by env
        os.environ["TOKOBOOK_DB_PATH"] = settings.database_path
        uvicorn.run(
            "tokobook.api.app:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            reload=True,
        )
        return

    app = create_app(db=ctx.obj["db"], settings=settings)
    uvicorn.run(app, host=settings.host, port=settings.port)


def register_commands(cli: click.Group) -> None:
    """Register serve command with main CLI."""
    cli.add_command(serve)
