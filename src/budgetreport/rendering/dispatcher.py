"""Dispatch of report documents to HTML or PDF output."""

import logging
from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from budgetreport.domain.assembly import ReportDocument
from budgetreport.domain.entities import ExportType
from budgetreport.rendering.html import HtmlRenderer
from budgetreport.rendering.pdf import DEFAULT_TIMEOUT, Html2PdfClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HtmlDocument:
    """Rendered HTML report."""

    html: str

    export_type: ClassVar[ExportType] = ExportType.HTML
    content_type: ClassVar[str] = "text/html; charset=utf-8"

    @property
    def content(self) -> bytes:
        return self.html.encode("utf-8")


@dataclass(frozen=True)
class PdfDocument:
    """Rendered PDF report."""

    data: bytes

    export_type: ClassVar[ExportType] = ExportType.PDF
    content_type: ClassVar[str] = "application/pdf"

    @property
    def content(self) -> bytes:
        return self.data


RenderedReport = Union[HtmlDocument, PdfDocument]


class RenderDispatcher:
    """Turns a document into HTML locally, or into PDF via the render service."""

    def __init__(
        self,
        html_renderer: Optional[HtmlRenderer] = None,
        pdf_client: Optional[Html2PdfClient] = None,
    ):
        self.html_renderer = html_renderer or HtmlRenderer()
        self.pdf_client = pdf_client or Html2PdfClient(None)

    @classmethod
    def create(
        cls, renderer_url: Optional[str], timeout: float = DEFAULT_TIMEOUT
    ) -> "RenderDispatcher":
        """Create a dispatcher for the given render service address."""
        return cls(pdf_client=Html2PdfClient(renderer_url, timeout=timeout))

    def dispatch(
        self,
        document: ReportDocument,
        export_type: Union[ExportType, str],
        template_body: Optional[str] = None,
    ) -> RenderedReport:
        """Render the document in the requested format.

        Raises:
            UnsupportedExportType: If export_type is not html or pdf
            RenderServiceUnavailable: PDF requested and the service is unreachable
            RenderServiceError: PDF requested and the service failed
        """
        export_type = ExportType.parse(export_type)
        html = self.html_renderer.render(document, template_body)

        if export_type is ExportType.HTML:
            return HtmlDocument(html=html)

        logger.info("Requesting PDF for report '%s'", document.title)
        return PdfDocument(data=self.pdf_client.render(html))
