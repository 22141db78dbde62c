"""Main CLI entry point."""

import click

from tokobook.database.factories import create_sqlite_database

from tokobook.cli.commands import abbreviation, expense, serve, store


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides TOKOBOOK_DB_PATH environment variable)",
    envvar="TOKOBOOK_DB_PATH",
)
@click.pass_context
def cli(ctx, db_path: str | None):
    """Tokobook - store purchase and order book.

    Records purchases per store, keeps a product list for every store and
    serves the JSON API used by the web client.
    """
    ctx.ensure_object(dict)

    # Only open the database when a command actually runs (not for --help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["db_path"] = db.database_path


abbreviation.register_commands(cli)
expense.register_commands(cli)
serve.register_commands(cli)
store.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
