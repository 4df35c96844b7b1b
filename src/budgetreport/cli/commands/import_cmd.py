"""DATEV posting import command."""

import click
from budgetreport.cli.error_handling import HANDLED_ERRORS, handle_domain_error
from budgetreport.domain.posting_import import PostingImportService


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--encoding",
    default="utf-8-sig",
    show_default=True,
    help="Text encoding of the export (DATEV desktop exports are often cp1252)",
)
@click.pass_context
def import_postings(ctx, csv_file: str, encoding: str):
    """Import postings from a DATEV CSV export.

    Accounts are matched by their code (see 'account create --code').

    Examples:
        budgetreport import EXTF_Buchungsstapel.csv
        budgetreport import export.csv --encoding cp1252
    """
    service = PostingImportService(ctx.obj["db"])

    try:
        result = service.import_datev(csv_file, encoding=encoding)
    except HANDLED_ERRORS as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result['imported']} postings")
    click.echo(f"  Skipped: {result['skipped']} rows without a known account")
    for detail in result["skipped_details"]:
        click.echo(f"    {detail}")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_postings)
