"""Build one PDF per print format and merge format PDFs into one document."""
import io
import logging
from typing import Optional, Sequence

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from printpack.exceptions import DocumentBuildError, DocumentMergeError
from printpack.formats import page_size_points

logger = logging.getLogger("printpack.pdf")

_JPEG_SOI = b"\xff\xd8\xff"


def build_format_pdf(
    images: Sequence[bytes],
    width: int,
    height: int,
    format_id: Optional[str] = None,
) -> bytes:
    """
    Create a PDF with one full-bleed page per JPEG, in the given order.

    All images must already be width x height pixels. The JPEG data is
    embedded as-is (DCT passthrough), so nothing is re-encoded.
    """
    if not images:
        raise DocumentBuildError("no images to place", format_id)
    page_w, page_h = page_size_points(width, height)

    buf = io.BytesIO()
    # invariant=1 drops creation dates and random ids so output is reproducible
    c = canvas.Canvas(buf, pagesize=(page_w, page_h), invariant=1)
    for index, data in enumerate(images, start=1):
        if not data.startswith(_JPEG_SOI):
            raise DocumentBuildError(f"page {index} is not a JPEG image", format_id)
        try:
            c.setPageSize((page_w, page_h))
            c.drawImage(ImageReader(io.BytesIO(data)), 0, 0, width=page_w, height=page_h)
            c.showPage()
        except Exception as e:
            logger.exception("Could not embed page %s for %s", index, format_id or "document")
            raise DocumentBuildError(f"could not embed page {index}: {e}", format_id) from e
    c.save()
    logger.info("Created %s-page PDF for %s (%s bytes)", len(images), format_id or "document", len(buf.getvalue()))
    return buf.getvalue()


def merge_pdfs(documents: Sequence[bytes]) -> bytes:
    """Concatenate the pages of each document, in order, into one PDF."""
    if not documents:
        raise DocumentMergeError("no documents to merge")
    writer = PdfWriter()
    for index, doc in enumerate(documents, start=1):
        try:
            reader = PdfReader(io.BytesIO(doc))
            for page in reader.pages:
                writer.add_page(page)
        except (PyPdfError, ValueError, KeyError) as e:
            logger.error("Document %s could not be read for merge: %s", index, e)
            raise DocumentMergeError(f"document {index} is not a valid PDF") from e
    out = io.BytesIO()
    writer.write(out)
    logger.info("Merged %s documents into %s pages", len(documents), len(writer.pages))
    return out.getvalue()
