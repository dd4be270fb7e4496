"""Module to render PDF pages to images"""

import pypdfium2 as pdfium
from PIL.Image import Image

from ..middleware.exceptions import InvalidPageError, PDFValidationError


def render_page(data: bytes, page: int, scale: float) -> Image:
    """
    Renders a PDF page to an image.

    Args:
        data (bytes): The raw PDF document.
        page (int): The index of the page to render.
        scale (float): The scale factor for rendering, 1 pixel per point at 1.0.

    Returns:
        Image: The rendered PIL image of the page.

    Raises:
        InvalidPageError: If the page index is outside the document.
        PDFValidationError: If the document cannot be opened.
    """

    try:
        temp_doc = pdfium.PdfDocument(data)
    except pdfium.PdfiumError as e:
        raise PDFValidationError(
            "Failed to open PDF for rendering", details={"error": str(e)}
        ) from e

    try:
        if not 0 <= page < len(temp_doc):
            raise InvalidPageError(
                f"Page index {page} outside document",
                details={"page_index": page, "page_count": len(temp_doc)},
            )

        bitmap = temp_doc[page].render(
            scale=scale,
            draw_annots=True,
            prefer_bgrx=True,
        )
        return bitmap.to_pil().convert("RGBA")
    finally:
        temp_doc.close()
