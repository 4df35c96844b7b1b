"""HTML rendering of report documents with Jinja2."""

import logging
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from budgetreport.domain.assembly import FIELD_LABELS, ReportDocument
from budgetreport.domain.errors import ValidationError
from budgetreport.domain.value import DecimalValue
from budgetreport.rendering.formatting import format_currency, format_date

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = "report.html.j2"


class HtmlRenderer:
    """Renders a ReportDocument into a self-contained HTML page."""

    def __init__(self, templates_dir: Optional[Path] = None):
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
            autoescape=select_autoescape(["html", "htm", "xml", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.jinja_env.filters["currency"] = format_currency
        self.jinja_env.filters["date"] = format_date

    def render(self, document: ReportDocument, template_body: Optional[str] = None) -> str:
        """Render the document.

        Args:
            document: Assembled report document
            template_body: Optional Jinja2 source from a report template; the
                packaged default layout is used when empty

        Returns:
            HTML string

        Raises:
            ValidationError: If a custom template body cannot be compiled or rendered
        """
        context = {
            "document": document,
            "title": document.title,
            "options": document.options,
            "sections": document.sections,
            "columns": document.value_columns,
            "warnings": document.warnings,
            "generated_at": document.generated_at,
            "labels": FIELD_LABELS,
            "zero": DecimalValue.zero(),
        }

        if not template_body:
            return self.jinja_env.get_template(DEFAULT_TEMPLATE).render(**context)

        try:
            template = self.jinja_env.from_string(template_body)
            return template.render(**context)
        except (TemplateError, TypeError, ValueError) as e:
            logger.error("Failed to render report template: %s", e)
            raise ValidationError(f"Invalid report template: {e}") from e
