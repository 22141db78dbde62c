"""Store commands."""

import click

from tokobook.domain.abbreviation import AbbreviationRegistry
from tokobook.domain.resolver import EntityResolver
from tokobook.domain.store import StoreService


@click.group()
def store_group():
    """Look up stores."""
    pass


@store_group.command("list")
@click.option("--name", default="", help="Only stores whose name contains this text")
@click.option("--limit", type=int, default=10, show_default=True, help="Maximum number of stores")
@click.pass_context
def list_stores(ctx, name: str, limit: int) -> None:
    """List stores by name."""
    db = ctx.obj["db"]
    abbreviations = AbbreviationRegistry(db)
    service = StoreService(db, EntityResolver(db, abbreviations), abbreviations)

    stores = service.search_stores(name, limit=limit)
    if not stores:
        click.echo("No stores found.")
        return

    click.echo("\nStores:")
    click.echo("-" * 60)
    for store in stores:
        click.echo(f"ID: {store.id:3d} | {store.name}")


def register_commands(cli: click.Group) -> None:
    """Register store commands with main CLI."""
    cli.add_command(store_group, name="store")
