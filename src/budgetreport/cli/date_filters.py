"""CLI helpers for budget period resolution."""

from datetime import date

import click

from budgetreport.utils.date_parser import get_period, parse_date


def resolve_cli_period(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
) -> tuple[date, date]:
    """Resolve a budget period from --period or explicit --start/--end dates."""
    if period and (start_date or end_date):
        click.echo(
            "Error: --period cannot be combined with --start or --end.",
            err=True,
        )
        ctx.exit(1)

    if period:
        try:
            return get_period(period)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

    if not start_date or not end_date:
        click.echo("Error: Either --period or both --start and --end are required.", err=True)
        ctx.exit(1)

    try:
        start = parse_date(start_date)
    except ValueError as e:
        click.echo(f"Error: Invalid start date: {e}", err=True)
        ctx.exit(1)

    try:
        end = parse_date(end_date)
    except ValueError as e:
        click.echo(f"Error: Invalid end date: {e}", err=True)
        ctx.exit(1)

    return start, end
