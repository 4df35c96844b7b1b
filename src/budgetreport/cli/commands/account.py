"""Account management commands."""

import click
from budgetreport.cli.entity_resolution import resolve_or_exit
from budgetreport.cli.error_handling import HANDLED_ERRORS, handle_domain_error
from budgetreport.domain.account import AccountService


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--group", "group_ref", required=True, help="Account group name or ID")
@click.option("--description", help="Account description")
@click.option("--code", help="Display code, e.g. '4100'")
@click.pass_context
def create_account(ctx, name: str, group_ref: str, description: str | None, code: str | None):
    """Create a new account in an account group.

    Examples:
        budgetreport account create "Salaries" --group "Personnel"
        budgetreport account create "Rent" --group 2 --code 4210
    """
    service = AccountService(ctx.obj["db"])
    group_id = resolve_or_exit(
        ctx, group_ref, service.get_account_group, service.list_account_groups, "Account group"
    )

    try:
        account_id = service.create_account(
            name=name, group_id=group_id, description=description, code=code
        )
        click.echo(f"Created account '{name}' (ID: {account_id})")
    except HANDLED_ERRORS as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option("--group", "group_ref", help="Only list accounts of this group")
@click.pass_context
def list_accounts(ctx, group_ref: str | None):
    """List accounts."""
    service = AccountService(ctx.obj["db"])

    group_id = None
    if group_ref is not None:
        group_id = resolve_or_exit(
            ctx, group_ref, service.get_account_group, service.list_account_groups, "Account group"
        )

    accounts = service.list_accounts(group_id=group_id)
    if not accounts:
        click.echo("No accounts found.")
        return

    group_names = service.group_names()
    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for acc in accounts:
        code = acc.code or ""
        click.echo(
            f"ID: {acc.id:3d} | {code:6s} | {acc.name:20s} | Group: {group_names.get(acc.group_id, '')}"
        )


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--force", is_flag=True, help="Also delete the account's postings and budget targets")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, force: bool, yes: bool):
    """Delete an account.

    ACCOUNT can be an account name or ID. An account with postings or budget
    targets is only deleted with --force, which removes those as well.

    Examples:
        budgetreport account delete "Rent"
        budgetreport account delete 3 --force --yes
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_or_exit(
        ctx, account, service.get_account, service.list_accounts, "Account"
    )
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id, force=force)
        click.echo(f"Deleted account '{account_obj.name}'")
    except HANDLED_ERRORS as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
