"""Rendering of report documents to HTML and PDF."""

from budgetreport.rendering.dispatcher import (
    HtmlDocument,
    PdfDocument,
    RenderDispatcher,
    RenderedReport,
)
from budgetreport.rendering.html import HtmlRenderer
from budgetreport.rendering.pdf import Html2PdfClient

__all__ = [
    "HtmlDocument",
    "PdfDocument",
    "RenderDispatcher",
    "RenderedReport",
    "HtmlRenderer",
    "Html2PdfClient",
]
