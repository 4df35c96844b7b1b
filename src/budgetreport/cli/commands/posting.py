"""Posting commands."""

from datetime import date

import click
from budgetreport.cli.entity_resolution import resolve_or_exit
from budgetreport.cli.error_handling import HANDLED_ERRORS, handle_domain_error
from budgetreport.domain.account import AccountService
from budgetreport.domain.posting import PostingService
from budgetreport.rendering.formatting import format_date
from budgetreport.utils.amount_parser import parse_amount
from budgetreport.utils.date_parser import parse_date


@click.group()
def posting_group():
    """Record and list postings."""
    pass


@posting_group.command("add")
@click.argument("account", metavar="ACCOUNT")
@click.argument("amount", metavar="AMOUNT")
@click.option("--date", "posting_date", help="Posting date (defaults to today)")
@click.option("--description", help="Posting description")
@click.pass_context
def add_posting(ctx, account: str, amount: str, posting_date: str | None, description: str | None):
    """Record a posting of AMOUNT against ACCOUNT.

    Examples:
        budgetreport posting add "Rent" 1000.00 --date 2024-01-31
        budgetreport posting add 3 "(12.50)" --description "Refund"
    """
    db = ctx.obj["db"]
    accounts = AccountService(db)
    service = PostingService(db)

    account_id = resolve_or_exit(
        ctx, account, accounts.get_account, accounts.list_accounts, "Account"
    )

    when = date.today()
    if posting_date:
        try:
            when = parse_date(posting_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)

    try:
        value = parse_amount(amount)
        posting_id = service.record_posting(account_id, when, value, description=description)
        click.echo(f"Recorded posting {value.to_text()} on {format_date(when)} (ID: {posting_id})")
    except HANDLED_ERRORS as e:
        handle_domain_error(ctx, e)


@posting_group.command("list")
@click.option("--account", "account_ref", help="Only list postings of this account")
@click.pass_context
def list_postings(ctx, account_ref: str | None):
    """List postings, oldest first."""
    db = ctx.obj["db"]
    accounts = AccountService(db)
    service = PostingService(db)

    account_id = None
    if account_ref is not None:
        account_id = resolve_or_exit(
            ctx, account_ref, accounts.get_account, accounts.list_accounts, "Account"
        )

    postings = service.list_postings(account_id=account_id)
    if not postings:
        click.echo("No postings found.")
        return

    for p in postings:
        click.echo(
            f"ID: {p.id:4d} | {format_date(p.date)} | {p.amount.to_text():>14} | {p.description or ''}"
        )


def register_commands(cli):
    """Register posting commands with main CLI."""
    cli.add_command(posting_group, name="posting")
