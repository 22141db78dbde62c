"""Expense commands."""

import click

from tokobook.config import Settings
from tokobook.cli.date_filters import resolve_cli_date_range
from tokobook.cli.error_handling import handle_domain_error
from tokobook.domain.abbreviation import AbbreviationRegistry
from tokobook.domain.errors import DomainError
from tokobook.domain.expense import ExpenseService
from tokobook.domain.listing import ExpenseQueryService, group_by_day
from tokobook.domain.resolver import EntityResolver
from tokobook.storage.attachments import AttachmentStore


def _money(amount) -> str:
    return f"Rp{amount:,.0f}" if amount == amount.to_integral_value() else f"Rp{amount:,.2f}"


@click.group()
def expense_group():
    """View and delete expenses."""
    pass


@expense_group.command("list")
@click.option("--search", help="Text contained in the store name or an item name")
@click.option("--store-id", type=int, help="Only expenses of this store")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--this-month", is_flag=True, help="Expenses of the current month")
@click.option("--this-year", is_flag=True, help="Expenses of the current year")
@click.option("--this-week", is_flag=True, help="Expenses of the current week")
@click.option("--last-month", is_flag=True, help="Expenses of last month")
@click.option("--last-year", is_flag=True, help="Expenses of last year")
@click.option("--last-week", is_flag=True, help="Expenses of last week")
@click.option("--items/--no-items", default=True, help="Show line items under each expense")
@click.pass_context
def list_expenses(
    ctx,
    search: str | None,
    store_id: int | None,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_year: bool,
    this_week: bool,
    last_month: bool,
    last_year: bool,
    last_week: bool,
    items: bool,
) -> None:
    """List expenses grouped by day, newest first.

    Examples:
        tokobook expense list --this-month
        tokobook expense list --search "minyak"
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "this-year": this_year,
            "this-week": this_week,
            "last-month": last_month,
            "last-year": last_year,
            "last-week": last_week,
        },
    )

    db = ctx.obj["db"]
    service = ExpenseQueryService(db, AbbreviationRegistry(db))
    views = service.list_expenses(search=search, start_date=start, end_date=end, store_id=store_id)

    if not views:
        click.echo("No expenses found.")
        return

    for day, day_views in group_by_day(views):
        day_total = sum(v.total for v in day_views)
        click.echo(f"\n{day:%A, %d %B %Y}  ({_money(day_total)})")
        click.echo("-" * 60)
        for view in day_views:
            click.echo(f"{view.id:<6} {view.store.name:<36} {_money(view.total):>16}")
            if items:
                for item in view.items:
                    click.echo(f"         {item.quantity.normalize():f} x {item.name} @ {_money(item.price)}")

    click.echo("-" * 60)
    click.echo(f"Count: {len(views)} | Total: {_money(sum(v.total for v in views))}")


@expense_group.command("delete")
@click.argument("expense_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_expense(ctx, expense_id: int, yes: bool) -> None:
    """Delete an expense and its uploaded photos.

    Examples:
        tokobook expense delete 12
    """
    db = ctx.obj["db"]
    settings = Settings.from_env()
    service = ExpenseService(
        db, EntityResolver(db, AbbreviationRegistry(db)), AttachmentStore(settings.upload_dir)
    )

    if service.get_expense(expense_id) is None:
        click.echo(f"Error: Expense {expense_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete expense {expense_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_expense(expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted expense {expense_id}")


def register_commands(cli: click.Group) -> None:
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
