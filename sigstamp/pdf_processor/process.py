from typing import Optional

import pypdfium2 as pdfium
from aws_lambda_powertools.logging import Logger

from ..middleware.exceptions import PDFValidationError
from ..models.domain import Document, Page
from .document import content_id, read_info
from .page import read_pages

logger = Logger()


def load_pdf(data: bytes, name: Optional[str] = None) -> Document:
    """
    Validate PDF bytes and describe the document they contain.

    Extract PDF related document meta-data and the point geometry of all pages.

    Args:
        data (bytes): The raw PDF document.
        name (Optional[str]): The user-provided file name.

    Returns:
        Document: The loaded document description.

    Raises:
        PDFValidationError: If the bytes are empty, unparsable or hold no pages.
    """

    if not data:
        raise PDFValidationError(
            "Uploaded PDF is empty or invalid.", details={"name": name}
        )
    if name and not name.lower().endswith(".pdf"):
        logger.warning("File name does not look like a PDF", extra={"file_name": name})

    pdf = None
    try:
        pdf = pdfium.PdfDocument(data)
        meta = read_info(pdf)
        pages: list[Page] = read_pages(pdf)
    except pdfium.PdfiumError as e:
        raise PDFValidationError(
            "Failed to load PDF. Please upload a valid PDF file.",
            details={"name": name, "error": str(e)},
        ) from e
    finally:
        if pdf:
            pdf.close()

    if not pages:
        raise PDFValidationError("PDF has no pages.", details={"name": name})

    document = Document(
        id=content_id(data),
        name=name,
        size_in_bytes=len(data),
        page_count=len(pages),
        info=meta,
        pages=pages,
    )
    logger.info(
        "PDF loaded",
        extra={
            "document_id": document.id,
            "file_name": name,
            "page_count": document.page_count,
        },
    )
    return document
