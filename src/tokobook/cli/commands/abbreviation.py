"""Abbreviation management commands."""

import click

from tokobook.cli.error_handling import handle_domain_error
from tokobook.domain.abbreviation import AbbreviationRegistry
from tokobook.domain.errors import DomainError


@click.group()
def abbreviation_group():
    """Manage abbreviations kept upper-case in display names."""
    pass


@abbreviation_group.command("add")
@click.argument("name", metavar="ABBREVIATION")
@click.pass_context
def add_abbreviation(ctx, name: str) -> None:
    """Add an abbreviation.

    Examples:
        tokobook abbreviation add TKI
        tokobook abbreviation add bdg   # stored as BDG
    """
    registry = AbbreviationRegistry(ctx.obj["db"])
    try:
        created = registry.register(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    stored = name.strip().upper()
    if created:
        click.echo(f"Added abbreviation '{stored}'")
    else:
        click.echo(f"Abbreviation '{stored}' already exists")


@abbreviation_group.command("list")
@click.pass_context
def list_abbreviations(ctx) -> None:
    """List all abbreviations."""
    names = AbbreviationRegistry(ctx.obj["db"]).list_abbreviations()
    if not names:
        click.echo("No abbreviations found.")
        return

    for name in names:
        click.echo(name)


def register_commands(cli: click.Group) -> None:
    """Register abbreviation commands with main CLI."""
    cli.add_command(abbreviation_group, name="abbreviation")
