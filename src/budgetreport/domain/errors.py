"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``status_code`` gives the
    HTTP-equivalent category of the error.
    """

    status_code = 400


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""

    status_code = 409


class EmptySelection(ValidationError):
    """No budgets or no accounts were selected for a report."""


class UnsupportedExportType(ValidationError):
    """Requested export type is not one of the recognized types."""


class TemplateNotFound(NotFoundError):
    """Requested report template does not exist."""


class InvalidDecimalFormat(DomainError):
    """Text could not be read as an exact decimal value.

    Raised for malformed stored amounts, so it indicates a data integrity
    problem rather than a user error.
    """

    status_code = 500


class RenderServiceFailure(RuntimeError):
    """Base class for failures of the external HTML-to-PDF service."""

    status_code = 502


class RenderServiceUnavailable(RenderServiceFailure):
    """Render service is not configured, unreachable or timed out."""

    status_code = 503


class RenderServiceError(RenderServiceFailure):
    """Render service answered with a non-success response."""

    def __init__(self, message: str, response_status: int | None = None):
        super().__init__(message)
        self.response_status = response_status


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def account_group_not_found(group_id: int) -> str:
    """Return message for missing account group."""
    return f"Account group {group_id} not found"


def budget_not_found(budget_id: int) -> str:
    """Return message for missing budget."""
    return f"Budget {budget_id} not found"


def template_not_found(template_id: int) -> str:
    """Return message for missing report template."""
    return f"Report template {template_id} not found"


def report_not_found(report_id: int) -> str:
    """Return message for missing stored report."""
    return f"Report {report_id} not found"


def duplicate_name(kind: str, name: str) -> str:
    """Return message for a name that is already taken."""
    return f"{kind} with name '{name}' already exists"


def invalid_period(start_date, end_date) -> str:
    """Return message for a budget period that ends before it starts."""
    return f"Budget period start {start_date} is after end {end_date}"


def empty_selection(kind: str) -> str:
    """Return message when no items of a kind were selected."""
    return f"At least one {kind} must be selected"


def unsupported_export_type(export_type: object) -> str:
    """Return message for an unknown export type."""
    return f"Unsupported export type '{export_type}'. Must be 'html' or 'pdf'"


def still_in_use(kind: str, entity_id: int, dependents: dict[str, int]) -> str:
    """Return message for a delete blocked by dependent records."""
    parts = [
        f"{count} {name}{'s' if count != 1 else ''}"
        for name, count in dependents.items()
        if count > 0
    ]
    return f"Cannot delete {kind.lower()} {entity_id}: it has {', '.join(parts)}"
