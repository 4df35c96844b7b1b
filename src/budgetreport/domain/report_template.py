"""Report template domain service."""

from typing import Optional

from jinja2 import Environment, TemplateSyntaxError

from budgetreport.database.base import Database
from budgetreport.domain.entities import ReportTemplate as ReportTemplateEntity, VisibilityOptions
from budgetreport.domain.errors import (
    ConflictError,
    TemplateNotFound,
    ValidationError,
    duplicate_name,
    template_not_found,
)


class ReportTemplateService:
    """Service for managing report templates."""

    def __init__(self, db: Database):
        """Initialize report template service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_template(
        self,
        name: str,
        options: Optional[VisibilityOptions] = None,
        body: Optional[str] = None,
    ) -> int:
        """Create a report template.

        Args:
            name: Template name
            options: Default visibility options (all disabled when None)
            body: Optional Jinja2 layout; the built-in layout is used when empty

        Returns:
            Template ID

        Raises:
            ValidationError: If name is empty or the body is not valid Jinja2
            ConflictError: If a template with the same name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Report template name must not be empty")

        if body:
            try:
                Environment().parse(body)
            except TemplateSyntaxError as e:
                raise ValidationError(f"Invalid report template body: {e}") from e

        for template in self.db.list_report_templates():
            if template.name == name:
                raise ConflictError(duplicate_name("Report template", name))

        return self.db.create_report_template(
            name=name, options=options or VisibilityOptions(), body=body or None
        )

    def get_template(self, template_id: int) -> ReportTemplateEntity:
        """Get report template by ID.

        Raises:
            TemplateNotFound: If the template does not exist
        """
        template = self.db.get_report_template(template_id)
        if template is None:
            raise TemplateNotFound(template_not_found(template_id))
        return template

    def list_templates(self) -> list[ReportTemplateEntity]:
        """List all report templates."""
        return self.db.list_report_templates()
