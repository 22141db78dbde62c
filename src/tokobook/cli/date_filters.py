"""CLI helpers for date range resolution."""

from datetime import date

import click

from tokobook.utils.date_parser import get_date_range, parse_date

PERIOD_OPTIONS = ", ".join(
    f"--{period}" for period in ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")
)


def _parse_bound(ctx: click.Context, value: str | None, label: str) -> date | None:
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label} date: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[date | None, date | None]:
    """Resolve a date range from one period flag or explicit bounds.

    Exits with an error when several period flags are set, or when a period
    flag is combined with --start-date/--end-date.
    """
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        click.echo(f"Error: Only one period option ({PERIOD_OPTIONS}) can be specified at a time.", err=True)
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if selected:
        return get_date_range(selected[0])

    return _parse_bound(ctx, start_date, "start"), _parse_bound(ctx, end_date, "end")
