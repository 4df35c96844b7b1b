"""Account group management commands."""

import click
from budgetreport.cli.entity_resolution import resolve_or_exit
from budgetreport.cli.error_handling import HANDLED_ERRORS, handle_domain_error
from budgetreport.domain.account import AccountService


@click.group()
def account_group_group():
    """Manage account groups."""
    pass


@account_group_group.command("create")
@click.argument("name", metavar="GROUP_NAME")
@click.option("--description", default="", help="Group description")
@click.pass_context
def create_group(ctx, name: str, description: str):
    """Create a new account group.

    Examples:
        budgetreport group create "Personnel"
        budgetreport group create "Travel" --description "Trips and events"
    """
    service = AccountService(ctx.obj["db"])

    try:
        group_id = service.create_account_group(name=name, description=description)
        click.echo(f"Created account group '{name}' (ID: {group_id})")
    except HANDLED_ERRORS as e:
        handle_domain_error(ctx, e)


@account_group_group.command("list")
@click.pass_context
def list_groups(ctx):
    """List all account groups."""
    service = AccountService(ctx.obj["db"])

    groups = service.list_account_groups()
    if not groups:
        click.echo("No account groups found.")
        return

    click.echo("\nAccount Groups:")
    click.echo("-" * 60)
    for grp in groups:
        accounts = service.list_accounts(group_id=grp.id)
        click.echo(f"ID: {grp.id:3d} | {grp.name:20s} | Accounts: {len(accounts)}")


@account_group_group.command("delete")
@click.argument("group", metavar="GROUP")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_group(ctx, group: str, yes: bool):
    """Delete an account group that has no accounts.

    GROUP can be a group name or ID.
    """
    service = AccountService(ctx.obj["db"])
    group_id = resolve_or_exit(
        ctx, group, service.get_account_group, service.list_account_groups, "Account group"
    )
    group_obj = service.get_account_group(group_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account group '{group_obj.name}' (ID: {group_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account_group(group_id)
        click.echo(f"Deleted account group '{group_obj.name}'")
    except HANDLED_ERRORS as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account group commands with main CLI."""
    cli.add_command(account_group_group, name="group")
