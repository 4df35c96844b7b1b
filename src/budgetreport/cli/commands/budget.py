"""Budget management commands."""

import click
from budgetreport.cli.date_filters import resolve_cli_period
from budgetreport.cli.entity_resolution import resolve_or_exit
from budgetreport.cli.error_handling import HANDLED_ERRORS, handle_domain_error
from budgetreport.domain.account import AccountService
from budgetreport.domain.budget import BudgetService
from budgetreport.rendering.formatting import format_date
from budgetreport.utils.amount_parser import parse_amount


@click.group()
def budget_group():
    """Manage budgets and their targets."""
    pass


@budget_group.command("create")
@click.argument("name", metavar="BUDGET_NAME")
@click.option("--start", "start_date", help="First day of the period (YYYY-MM-DD or DD.MM.YYYY)")
@click.option("--end", "end_date", help="Last day of the period (inclusive)")
@click.option("--period", help="Whole period, e.g. 'this-year', '2024', '2024-03', '2024-Q2'")
@click.option("--description", default="", help="Budget description")
@click.pass_context
def create_budget(
    ctx, name: str, start_date: str | None, end_date: str | None, period: str | None, description: str
):
    """Create a budget over a period.

    Examples:
        budgetreport budget create "Budget 2024" --period 2024
        budgetreport budget create "Q1" --start 2024-01-01 --end 2024-03-31
    """
    service = BudgetService(ctx.obj["db"])
    start, end = resolve_cli_period(ctx, start_date=start_date, end_date=end_date, period=period)

    try:
        budget_id = service.create_budget(
            name=name, start_date=start, end_date=end, description=description
        )
        click.echo(
            f"Created budget '{name}' (ID: {budget_id}) for {format_date(start)} - {format_date(end)}"
        )
    except HANDLED_ERRORS as e:
        handle_domain_error(ctx, e)


@budget_group.command("list")
@click.pass_context
def list_budgets(ctx):
    """List all budgets."""
    service = BudgetService(ctx.obj["db"])

    budgets = service.list_budgets()
    if not budgets:
        click.echo("No budgets found.")
        return

    click.echo("\nBudgets:")
    click.echo("-" * 70)
    for b in budgets:
        click.echo(
            f"ID: {b.id:3d} | {b.name:20s} | {format_date(b.start_date)} - {format_date(b.end_date)}"
        )


@budget_group.command("set-target")
@click.argument("budget", metavar="BUDGET")
@click.argument("account", metavar="ACCOUNT")
@click.argument("amount", metavar="AMOUNT")
@click.pass_context
def set_target(ctx, budget: str, account: str, amount: str):
    """Set the target of BUDGET for ACCOUNT.

    BUDGET and ACCOUNT can be names or IDs.

    Examples:
        budgetreport budget set-target "Budget 2024" "Rent" 12000.00
    """
    db = ctx.obj["db"]
    service = BudgetService(db)
    accounts = AccountService(db)

    budget_id = resolve_or_exit(ctx, budget, service.get_budget, service.list_budgets, "Budget")
    account_id = resolve_or_exit(
        ctx, account, accounts.get_account, accounts.list_accounts, "Account"
    )

    try:
        target = parse_amount(amount)
        service.set_target(budget_id, account_id, target)
        click.echo(f"Set target {target.to_text()} for account {account_id} in budget {budget_id}")
    except HANDLED_ERRORS as e:
        handle_domain_error(ctx, e)


@budget_group.command("targets")
@click.argument("budget", metavar="BUDGET")
@click.pass_context
def list_targets(ctx, budget: str):
    """List the targets of BUDGET."""
    db = ctx.obj["db"]
    service = BudgetService(db)
    accounts = AccountService(db)

    budget_id = resolve_or_exit(ctx, budget, service.get_budget, service.list_budgets, "Budget")
    targets = service.list_targets(budget_id)
    if not targets:
        click.echo("No targets set.")
        return

    click.echo(f"\n{'Account':<40} {'Target':>20}")
    click.echo("-" * 61)
    for t in targets:
        account_obj = accounts.get_account(t.account_id)
        name = account_obj.name if account_obj else f"#{t.account_id}"
        click.echo(f"{name:<40} {t.target.to_text():>20}")


@budget_group.command("delete")
@click.argument("budget", metavar="BUDGET")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_budget(ctx, budget: str, yes: bool):
    """Delete BUDGET and its targets. Postings are kept."""
    service = BudgetService(ctx.obj["db"])
    budget_id = resolve_or_exit(ctx, budget, service.get_budget, service.list_budgets, "Budget")
    budget_obj = service.get_budget(budget_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete budget '{budget_obj.name}' (ID: {budget_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_budget(budget_id)
        click.echo(f"Deleted budget '{budget_obj.name}'")
    except HANDLED_ERRORS as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
