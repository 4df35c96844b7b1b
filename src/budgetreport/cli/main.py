"""Main CLI entry point."""

import logging

import click
from budgetreport.database.factories import create_sqlite_database
from budgetreport.rendering.pdf import DEFAULT_TIMEOUT

# Import and register all commands at module level
from budgetreport.cli.commands import (
    account,
    budget,
    group,
    import_cmd,
    posting,
    report,
    template,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BUDGETREPORT_DB_PATH environment variable)",
    envvar="BUDGETREPORT_DB_PATH",
)
@click.option(
    "--html2pdf-url",
    help="Base URL of the HTML-to-PDF rendering service",
    envvar="HTML2PDF_URL",
)
@click.option(
    "--render-timeout",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Seconds to wait for the rendering service",
    envvar="BUDGETREPORT_RENDER_TIMEOUT",
)
@click.option("--verbose", "-v", is_flag=True, help="Log progress information")
@click.pass_context
def cli(ctx, db_path: str | None, html2pdf_url: str | None, render_timeout: float, verbose: bool):
    """Budgetreport - Budget administration and reporting.

    Group accounts, define budgets over time periods and generate reports
    comparing actual and target values as HTML or PDF.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.obj["renderer_url"] = html2pdf_url
    ctx.obj["render_timeout"] = render_timeout

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
group.register_commands(cli)
account.register_commands(cli)
budget.register_commands(cli)
posting.register_commands(cli)
import_cmd.register_commands(cli)
template.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
