"""Report generation commands."""

import click
from budgetreport.cli.entity_resolution import resolve_or_exit
from budgetreport.cli.error_handling import HANDLED_ERRORS, handle_domain_error
from budgetreport.domain.account import AccountService
from budgetreport.domain.budget import BudgetService
from budgetreport.domain.entities import VISIBILITY_OPTION_NAMES, VisibilityOptions
from budgetreport.domain.report import ReportService
from budgetreport.domain.report_template import ReportTemplateService
from budgetreport.rendering.dispatcher import HtmlDocument, RenderDispatcher


@click.group()
def report_group():
    """Generate and export budget reports."""
    pass


def _report_service(ctx) -> ReportService:
    dispatcher = RenderDispatcher.create(ctx.obj["renderer_url"], ctx.obj["render_timeout"])
    return ReportService(ctx.obj["db"], dispatcher=dispatcher)


def _resolve_selection(ctx, template_ref: str, budget_refs, account_refs):
    db = ctx.obj["db"]
    templates = ReportTemplateService(db)
    budgets = BudgetService(db)
    accounts = AccountService(db)

    template_id = resolve_or_exit(
        ctx,
        template_ref,
        templates.get_template,
        templates.list_templates,
        "Report template",
        check_exists=False,
    )
    budget_ids = [
        resolve_or_exit(ctx, ref, budgets.get_budget, budgets.list_budgets, "Budget")
        for ref in budget_refs
    ]
    # Numeric account IDs pass through unchecked; stale ones are skipped and reported
    account_ids = [
        resolve_or_exit(
            ctx, ref, accounts.get_account, accounts.list_accounts, "Account", check_exists=False
        )
        for ref in account_refs
    ]
    return template_id, budget_ids, account_ids


def _options_from_cli(show: tuple[str, ...], plain: bool):
    if plain:
        return VisibilityOptions()
    if show:
        return VisibilityOptions.from_names(show)
    return None


_show_option = click.option(
    "--show",
    multiple=True,
    type=click.Choice(list(VISIBILITY_OPTION_NAMES)),
    help="Field to show, overriding the template defaults (repeatable)",
)


@report_group.command("generate")
@click.option("--template", "template_ref", required=True, help="Report template name or ID")
@click.option("--budget", "budget_refs", multiple=True, help="Budget name or ID (repeatable)")
@click.option("--account", "account_refs", multiple=True, help="Account name or ID (repeatable)")
@_show_option
@click.option("--plain", is_flag=True, help="Show account names only")
@click.option("--type", "export_type", default="html", show_default=True, help="html or pdf")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the report to a file instead of stdout",
)
@click.pass_context
def generate_report(
    ctx,
    template_ref: str,
    budget_refs: tuple[str, ...],
    account_refs: tuple[str, ...],
    show: tuple[str, ...],
    plain: bool,
    export_type: str,
    output: str | None,
):
    """Generate a report for the selected budgets and accounts.

    Examples:
        budgetreport report generate --template Overview --budget "Budget 2024" --account Rent
        budgetreport report generate --template 1 --budget 1 --budget 2 --account 3 \\
            --show actual --show difference --type pdf -o report.pdf
    """
    if plain and show:
        click.echo("Error: --plain cannot be combined with --show.", err=True)
        ctx.exit(1)

    template_id, budget_ids, account_ids = _resolve_selection(
        ctx, template_ref, budget_refs, account_refs
    )
    service = _report_service(ctx)

    try:
        rendered = service.generate_report(
            template_id,
            budget_ids,
            account_ids,
            options=_options_from_cli(show, plain),
            export_type=export_type,
        )
    except HANDLED_ERRORS as e:
        handle_domain_error(ctx, e)
        return

    if output:
        with open(output, "wb") as f:
            f.write(rendered.content)
        click.echo(f"Wrote {rendered.export_type.value} report to {output}")
    elif isinstance(rendered, HtmlDocument):
        click.echo(rendered.html)
    else:
        click.get_binary_stream("stdout").write(rendered.content)


@report_group.command("export")
@click.option("--template", "template_ref", required=True, help="Report template name or ID")
@click.option("--budget", "budget_refs", multiple=True, help="Budget name or ID (repeatable)")
@click.option("--account", "account_refs", multiple=True, help="Account name or ID (repeatable)")
@_show_option
@click.pass_context
def export_report(
    ctx,
    template_ref: str,
    budget_refs: tuple[str, ...],
    account_refs: tuple[str, ...],
    show: tuple[str, ...],
):
    """Render a PDF report and store it in the database."""
    template_id, budget_ids, account_ids = _resolve_selection(
        ctx, template_ref, budget_refs, account_refs
    )
    service = _report_service(ctx)

    try:
        report_id = service.export_report(
            template_id, budget_ids, account_ids, options=_options_from_cli(show, False)
        )
        click.echo(f"Stored report (ID: {report_id})")
    except HANDLED_ERRORS as e:
        handle_domain_error(ctx, e)


@report_group.command("show")
@click.argument("report_id", type=int)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False, writable=True),
    help="File to write the stored PDF to",
)
@click.pass_context
def show_report(ctx, report_id: int, output: str):
    """Write a stored report to a file."""
    service = ReportService(ctx.obj["db"])

    try:
        report = service.get_report(report_id)
    except HANDLED_ERRORS as e:
        handle_domain_error(ctx, e)
        return

    with open(output, "wb") as f:
        f.write(report.data)
    click.echo(f"Wrote report {report_id} ({len(report.data)} bytes) to {output}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
