"""CLI helpers for resolving entity references."""

from __future__ import annotations

import click

from budgetreport.cli.error_handling import handle_domain_error
from budgetreport.domain.errors import NotFoundError
from budgetreport.utils.entity_resolver import resolve_entity


def resolve_or_exit(ctx: click.Context, reference: str, get, list_all, kind: str, **kwargs) -> int:
    """Resolve an entity name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_entity(reference, get, list_all, kind, **kwargs)
    except NotFoundError as exc:
        handle_domain_error(ctx, exc)
