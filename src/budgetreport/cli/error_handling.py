"""CLI error handling helpers."""

import logging

import click

from budgetreport.domain.errors import DomainError, RenderServiceFailure

logger = logging.getLogger(__name__)

# Errors rendered as "Error: ..." at the command boundary
HANDLED_ERRORS = (DomainError, RenderServiceFailure)


def handle_domain_error(ctx: click.Context, error: DomainError | RenderServiceFailure) -> None:
    """Print the error for the user and exit with status 1.

    ``status_code`` of the error is logged so ``--verbose`` shows its category
    (400 input, 404 missing, 502/503 renderer, ...).
    """
    logger.info("Command failed with %s (%s)", type(error).__name__, error.status_code)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
