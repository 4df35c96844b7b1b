"""Utility for resolving entity names to IDs."""

from typing import Callable, Iterable, Optional, Protocol

from budgetreport.domain.errors import NotFoundError


class _Named(Protocol):
    id: int
    name: str


def resolve_entity(
    reference: str | int,
    get: Callable[[int], Optional[_Named]],
    list_all: Callable[[], Iterable[_Named]],
    kind: str,
    check_exists: bool = True,
) -> int:
    """Resolve an entity name or ID to its ID.

    Args:
        reference: Entity name (str) or ID (int or string representation of int)
        get: Lookup by ID
        list_all: Listing of all entities of this kind
        kind: Human-readable entity kind for error messages (e.g. "Account")
        check_exists: If False, numeric IDs are returned without a lookup

    Returns:
        Entity ID

    Raises:
        NotFoundError: If no entity matches
    """
    # Try to parse as integer (handles string IDs like "1")
    try:
        entity_id = int(reference)
    except (ValueError, TypeError):
        entity_id = None

    if entity_id is not None:
        if check_exists and get(entity_id) is None:
            raise NotFoundError(f"{kind} ID {entity_id} not found")
        return entity_id

    for entity in list_all():
        if entity.name == reference:
            return entity.id

    raise NotFoundError(f"{kind} '{reference}' not found")
