"""Client for the external HTML-to-PDF rendering service.

The service accepts an HTML document at ``POST <base_url>/render`` and
answers with the PDF bytes.
"""

import logging
import time
from typing import Optional

import httpx

from budgetreport.domain.errors import RenderServiceError, RenderServiceUnavailable

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class Html2PdfClient:
    """Synchronous client for the HTML-to-PDF service.

    ``timeout`` bounds the whole request, from connecting until the last body
    byte, not only each network step.
    """

    def __init__(
        self,
        base_url: Optional[str],
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = timeout
        self._transport = transport

    def render(self, html: str) -> bytes:
        """Convert HTML to PDF.

        Raises:
            RenderServiceUnavailable: No service configured, connection failed
                or the request ran past its deadline.
            RenderServiceError: The service answered with a non-success status
                or an empty body.
        """
        if not self.base_url:
            raise RenderServiceUnavailable("HTML-to-PDF service URL is not configured")

        url = f"{self.base_url}/render"
        deadline = time.monotonic() + self.timeout
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                with client.stream(
                    "POST",
                    url,
                    content=html.encode("utf-8"),
                    headers={
                        "Content-Type": "text/html; charset=utf-8",
                        "Accept": "application/pdf",
                    },
                ) as response:
                    if response.is_error:
                        response.read()
                        response.raise_for_status()
                    content = self._read_body(response, deadline, url)
        except httpx.TimeoutException as e:
            logger.error("HTML-to-PDF service timeout after %ss: %s", self.timeout, url)
            raise RenderServiceUnavailable(f"HTML-to-PDF service timed out: {url}") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            body = e.response.text[:200]
            logger.error("HTML-to-PDF service HTTP %s: %s - %s", status, url, body)
            raise RenderServiceError(
                f"HTML-to-PDF service rejected request ({status})", response_status=status
            ) from e
        except (httpx.TransportError, httpx.InvalidURL) as e:
            logger.error("HTML-to-PDF service unreachable: %s - %s", url, e)
            raise RenderServiceUnavailable(f"HTML-to-PDF service unreachable: {url}") from e

        if not content:
            raise RenderServiceError(
                "HTML-to-PDF service returned an empty document",
                response_status=response.status_code,
            )

        logger.info("Rendered PDF (%d bytes) via %s", len(content), url)
        return content

    def _read_body(self, response: httpx.Response, deadline: float, url: str) -> bytes:
        """Collect the streamed body, giving up once ``deadline`` has passed."""
        if time.monotonic() > deadline:
            raise self._deadline_exceeded(url)
        chunks = []
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            if time.monotonic() > deadline:
                raise self._deadline_exceeded(url)
        return b"".join(chunks)

    def _deadline_exceeded(self, url: str) -> RenderServiceUnavailable:
        logger.error("HTML-to-PDF service exceeded %ss deadline: %s", self.timeout, url)
        return RenderServiceUnavailable(f"HTML-to-PDF service timed out: {url}")
