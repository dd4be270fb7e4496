"""Sample documents and images built on the fly for tests."""

import base64
import io
from typing import Sequence, Tuple

import pypdfium2 as pdfium
from pypdf import PdfWriter
from pypdf.generic import RectangleObject
from PIL import Image
from reportlab.pdfgen import canvas

RED = (255, 0, 0, 255)


def make_pdf(sizes: Sequence[Tuple[float, float]] = ((300, 400),), rotation: int = 0) -> bytes:
    """Build a blank PDF with one page per (width, height) in points."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=sizes[0], invariant=1)
    for width, height in sizes:
        c.setPageSize((width, height))
        if rotation:
            c.setPageRotation(rotation)
        c.showPage()
    c.save()
    return buf.getvalue()


def make_png(width: int = 100, height: int = 50, color=RED) -> bytes:
    """Build a solid PNG image."""
    buf = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def render_rgb(data: bytes, page_index: int = 0, scale: float = 1.0) -> Image.Image:
    """Render a page of a PDF as an RGB image."""
    pdf = pdfium.PdfDocument(data)
    try:
        return pdf[page_index].render(scale=scale).to_pil().convert("RGB")
    finally:
        pdf.close()


def is_red(pixel) -> bool:
    r, g, b = pixel[:3]
    return r > 200 and g < 60 and b < 60


def is_white(pixel) -> bool:
    return all(v > 240 for v in pixel[:3])


def make_boxed_pdf(mediabox, cropbox=None, rotation: int = 0) -> bytes:
    """Build a blank one page PDF with explicit page boxes."""
    left, bottom, right, top = mediabox
    writer = PdfWriter()
    page = writer.add_blank_page(width=right - left, height=top - bottom)
    page.mediabox = RectangleObject(mediabox)
    if cropbox is not None:
        page.cropbox = RectangleObject(cropbox)
    if rotation:
        page.rotate(rotation)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


def make_data_url(data: bytes) -> str:
    """Wrap PNG bytes the way a drawing pad hands them over."""
    return "data:image/png;base64," + base64.b64encode(data).decode("ascii")
