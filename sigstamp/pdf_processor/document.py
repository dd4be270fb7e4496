"""Document level information: metadata and content-derived identifiers"""

import hashlib

import pypdfium2 as pdfium


def read_info(pdf: pdfium.PdfDocument) -> dict:
    """
    Collect the document information shown alongside a loaded PDF.

    Args:
        pdf (pdfium.PdfDocument): The open document.

    Returns:
        dict: PDF version, non-empty page labels and the Info dictionary.
    """
    labels = [label for label in map(pdf.get_page_label, range(len(pdf))) if label]
    return {
        "version": pdf.get_version(),
        "page_labels": labels or None,
        "meta": pdf.get_metadata_dict(skip_empty=True),
    }


def content_id(content: bytes) -> str:
    """Identifier that stays the same for byte-identical uploads."""
    return "doc_" + hashlib.sha256(content).hexdigest()[:16]
