"""PDF loading, rendering, coordinate transforms and compositing."""

from .compose import export
from .process import load_pdf
from .render import render_page
from .transform import (
    current_display_rect,
    display_to_fraction,
    display_to_pdf,
    fraction_to_display,
    pdf_to_display,
    scale_factors,
)

__all__ = [
    "current_display_rect",
    "display_to_fraction",
    "display_to_pdf",
    "export",
    "fraction_to_display",
    "load_pdf",
    "pdf_to_display",
    "render_page",
    "scale_factors",
]
