"""
PDF text extraction using pypdf.

Turns uploaded PDF bytes into per-page normalized text and the content tree
stored on the document, so later reindexing can rebuild the same pages.

Dependencies: pypdf
System role: Upload-path parsing stage
"""

import io
import logging

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from second_brain.core.exceptions import ValidationError

from .models import TextSegment
from .text_extractor import PAGE_NUMBER_KEY, normalize_whitespace

logger = logging.getLogger(__name__)

PDF_SOURCE = "pdf-upload"


def extract_pdf_pages(data: bytes) -> list[TextSegment]:
    """
    Extract normalized text for every page with text.

    Args:
        data: Raw PDF bytes

    Returns:
        list[TextSegment]: One segment per non-empty page (1-based page numbers)

    Raises:
        ValidationError: When the bytes are not a readable PDF
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PdfReadError, ValueError, OSError) as e:
        logger.warning(f"{__name__}:extract_pdf_pages - Unreadable PDF: {type(e).__name__}: {e}")
        raise ValidationError("Unable to read PDF file", field="file") from e

    segments = []
    for number, raw in enumerate(pages, start=1):
        text = normalize_whitespace(raw)
        if text:
            segments.append(TextSegment(text=text, page_number=number))
    return segments


def build_pdf_content(filename: str, pages: list[TextSegment]) -> dict:
    """
    Build the stored content tree for an uploaded PDF.

    Args:
        filename: Original upload filename
        pages: Extracted page segments

    Returns:
        dict: Content tree with one block per page
    """
    return {
        "source": PDF_SOURCE,
        "filename": filename,
        "blocks": [
            {PAGE_NUMBER_KEY: page.page_number, "text": page.text}
            for page in pages
        ],
    }
