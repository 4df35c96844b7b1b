"""Report generation service.

Runs one report request through the pipeline:
resolve selection -> aggregate values -> assemble document -> render.
"""

import logging
from typing import Iterable, Optional, Union

from budgetreport.database.base import Database
from budgetreport.domain.account import AccountService
from budgetreport.domain.aggregation import ValueAggregator
from budgetreport.domain.assembly import ReportAssembler, ReportDocument
from budgetreport.domain.entities import ExportType, Report, ReportTemplate, VisibilityOptions
from budgetreport.domain.errors import NotFoundError, report_not_found
from budgetreport.domain.report_template import ReportTemplateService
from budgetreport.domain.selection import SelectionPair, SelectionResolver
from budgetreport.rendering.dispatcher import RenderDispatcher, RenderedReport

logger = logging.getLogger(__name__)


class ReportService:
    """Service for generating, exporting and retrieving reports."""

    def __init__(self, db: Database, dispatcher: Optional[RenderDispatcher] = None):
        """Initialize report service.

        Args:
            db: Database instance
            dispatcher: Render dispatcher; without one, PDF output fails with
                RenderServiceUnavailable while HTML output still works
        """
        self.db = db
        self.dispatcher = dispatcher or RenderDispatcher()
        self.resolver = SelectionResolver()
        self.aggregator = ValueAggregator(db)
        self.assembler = ReportAssembler()
        self.templates = ReportTemplateService(db)
        self.accounts = AccountService(db)

    def build_document(
        self,
        template_id: int,
        budget_ids: Iterable[int],
        account_ids: Iterable[int],
        options: Optional[VisibilityOptions] = None,
    ) -> ReportDocument:
        """Build the document model for a report request.

        Args:
            template_id: Report template ID
            budget_ids: Selected budget IDs, in display order
            account_ids: Selected account IDs, in display order
            options: Visibility options; the template's defaults when None

        Raises:
            EmptySelection: If no budgets or no accounts are selected
            TemplateNotFound: If the template does not exist
            NotFoundError: If a selected budget does not exist
        """
        pairs = self.resolver.resolve(budget_ids, account_ids)
        template = self.templates.get_template(template_id)
        return self._assemble(template, pairs, options)

    def _assemble(
        self,
        template: ReportTemplate,
        pairs: list[SelectionPair],
        options: Optional[VisibilityOptions],
    ) -> ReportDocument:
        effective_options = options if options is not None else template.options
        aggregation = self.aggregator.aggregate(pairs)
        return self.assembler.assemble(
            aggregation,
            effective_options,
            title=template.name,
            group_names=self.accounts.group_names(),
        )

    def generate_report(
        self,
        template_id: int,
        budget_ids: Iterable[int],
        account_ids: Iterable[int],
        options: Optional[VisibilityOptions] = None,
        export_type: Union[ExportType, str] = ExportType.HTML,
    ) -> RenderedReport:
        """Generate a report as HTML or PDF.

        Args:
            template_id: Report template ID
            budget_ids: Selected budget IDs, in display order
            account_ids: Selected account IDs, in display order
            options: Visibility options; the template's defaults when None
            export_type: ``"html"`` or ``"pdf"``

        Returns:
            HtmlDocument or PdfDocument

        Raises:
            UnsupportedExportType: If export_type is not html or pdf
            EmptySelection: If no budgets or no accounts are selected
            TemplateNotFound: If the template does not exist
            RenderServiceUnavailable: If PDF rendering cannot reach the service
            RenderServiceError: If the render service fails
        """
        export_type = ExportType.parse(export_type)
        pairs = self.resolver.resolve(budget_ids, account_ids)
        template = self.templates.get_template(template_id)
        document = self._assemble(template, pairs, options)
        logger.info(
            "Generating %s report from template %s: %d sections, %d rows",
            export_type.value,
            template_id,
            len(document.sections),
            document.row_count,
        )
        return self.dispatcher.dispatch(document, export_type, template_body=template.body)

    def export_report(
        self,
        template_id: int,
        budget_ids: Iterable[int],
        account_ids: Iterable[int],
        options: Optional[VisibilityOptions] = None,
    ) -> int:
        """Generate a PDF report and store it.

        Returns:
            ID of the stored report
        """
        rendered = self.generate_report(
            template_id, budget_ids, account_ids, options, export_type=ExportType.PDF
        )
        report_id = self.db.create_report(template_id=template_id, data=rendered.content)
        logger.info("Stored report %s (%d bytes)", report_id, len(rendered.content))
        return report_id

    def get_report(self, report_id: int) -> Report:
        """Get a stored report.

        Raises:
            NotFoundError: If the report does not exist
        """
        report = self.db.get_report(report_id)
        if report is None:
            raise NotFoundError(report_not_found(report_id))
        return report
