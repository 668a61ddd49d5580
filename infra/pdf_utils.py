"""
PDF Utilities

Renders individual pages of a source PDF to PIL Images for the vision
endpoints. Pages are rendered one at a time so a large document never
needs to be held in memory at once.
"""

from pathlib import Path
import logging

from PIL import Image
from pdf2image import convert_from_path
from pdf2image.exceptions import (
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFPopplerTimeoutError,
    PDFSyntaxError,
)
from pdf2image.pdf2image import pdfinfo_from_path

from infra.errors import RenderingFailed

logger = logging.getLogger(__name__)

DEFAULT_DPI = 150

_PDF2IMAGE_ERRORS = (PDFInfoNotInstalledError, PDFPageCountError, PDFPopplerTimeoutError, PDFSyntaxError)


class PdfRenderer:
    """
    Page-at-a-time PDF rasterizer (poppler via pdf2image).

    Example:
        renderer = PdfRenderer(dpi=150)
        total = renderer.page_count(Path("paper.pdf"))
        image = renderer.render(Path("paper.pdf"), 1)
    """

    def __init__(self, dpi: int = DEFAULT_DPI):
        if dpi <= 0:
            raise ValueError(f"dpi must be positive, got {dpi}")
        self.dpi = dpi

    def page_count(self, pdf_path: Path) -> int:
        """
        Count pages in a PDF.

        Raises:
            FileNotFoundError: If the PDF doesn't exist
            RenderingFailed: If the file can't be read as a PDF
        """
        pdf_path = Path(pdf_path)
        if not pdf_path.exists():
            raise FileNotFoundError(f"PDF not found: {pdf_path}")

        try:
            info = pdfinfo_from_path(str(pdf_path))
        except _PDF2IMAGE_ERRORS as e:
            raise RenderingFailed(None, f"could not read PDF: {e}") from e

        try:
            return int(info['Pages'])
        except (KeyError, TypeError, ValueError) as e:
            raise RenderingFailed(None, f"could not read page count: {e!r}") from e

    def render(self, pdf_path: Path, page_number: int) -> Image.Image:
        """
        Render a single page (1-indexed).

        Raises:
            RenderingFailed: If poppler fails or returns no image
        """
        pdf_path = Path(pdf_path)
        logger.debug(f"Rendering page {page_number} of {pdf_path.name} at {self.dpi} DPI")

        try:
            images = convert_from_path(
                str(pdf_path),
                dpi=self.dpi,
                first_page=page_number,
                last_page=page_number
            )
        except _PDF2IMAGE_ERRORS as e:
            raise RenderingFailed(page_number, str(e)) from e
        except OSError as e:
            raise RenderingFailed(page_number, str(e)) from e

        if not images:
            raise RenderingFailed(page_number, "renderer returned no image")

        return images[0]
