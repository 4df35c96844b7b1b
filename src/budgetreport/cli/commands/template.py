"""Report template commands."""

import click
from budgetreport.cli.error_handling import HANDLED_ERRORS, handle_domain_error
from budgetreport.domain.entities import VISIBILITY_OPTION_NAMES, VisibilityOptions
from budgetreport.domain.report_template import ReportTemplateService


@click.group()
def template_group():
    """Manage report templates."""
    pass


@template_group.command("create")
@click.argument("name", metavar="TEMPLATE_NAME")
@click.option(
    "--show",
    multiple=True,
    type=click.Choice(list(VISIBILITY_OPTION_NAMES)),
    help="Field shown by default (repeatable)",
)
@click.option(
    "--body-file",
    type=click.File("r", encoding="utf-8"),
    help="Jinja2 layout file (defaults to the built-in layout)",
)
@click.pass_context
def create_template(ctx, name: str, show: tuple[str, ...], body_file):
    """Create a report template.

    Examples:
        budgetreport template create "Overview" --show actual --show target
        budgetreport template create "Board" --show difference --body-file board.html.j2
    """
    service = ReportTemplateService(ctx.obj["db"])
    body = body_file.read() if body_file is not None else None

    try:
        template_id = service.create_template(
            name=name, options=VisibilityOptions.from_names(show), body=body
        )
        click.echo(f"Created report template '{name}' (ID: {template_id})")
    except HANDLED_ERRORS as e:
        handle_domain_error(ctx, e)


@template_group.command("list")
@click.pass_context
def list_templates(ctx):
    """List all report templates."""
    service = ReportTemplateService(ctx.obj["db"])

    templates = service.list_templates()
    if not templates:
        click.echo("No report templates found.")
        return

    click.echo("\nReport Templates:")
    click.echo("-" * 70)
    for t in templates:
        shown = ", ".join(t.options.enabled_names()) or "-"
        layout = "custom" if t.body else "built-in"
        click.echo(f"ID: {t.id:3d} | {t.name:20s} | Layout: {layout:8s} | Shows: {shown}")


def register_commands(cli):
    """Register report template commands with main CLI."""
    cli.add_command(template_group, name="template")
