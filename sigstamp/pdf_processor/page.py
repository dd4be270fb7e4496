"""Module to read the point geometry of PDF pages"""

import pypdfium2 as pdfium

from ..models.domain import Page


def read_pages(pdf: pdfium.PdfDocument) -> list[Page]:
    """
    Describe every page of an open document, in page order.

    Args:
        pdf (pdfium.PdfDocument): The open document.

    Returns:
        list[Page]: One Page per PDF page, numbered from 1.
    """
    return [read_page(number, pdf[number - 1]) for number in range(1, len(pdf) + 1)]


def page_geometry(page: pdfium.PdfPage) -> dict:
    """
    Size of a page as it is displayed, with its rotation.

    pdfium reports the size of the crop box with the page rotation applied,
    which is exactly the box a viewer renders.
    """
    width, height = page.get_size()
    return dict(
        width=width,
        height=height,
        rotation=page.get_rotation(),
    )


def read_page(number: int, page: pdfium.PdfPage) -> Page:
    """Build the Page model and release the pdfium page handle."""
    try:
        return Page(number=number, **page_geometry(page))
    finally:
        page.close()
