"""Domain models for the signature compositing engine."""

from .document import Document
from .export import ExportResult, SkippedPlacement
from .geometry import Point, Rect
from .page import Page
from .placement import Placement
from .signature import SignatureImage
from .viewport import Viewport

__all__ = [
    "Document",
    "ExportResult",
    "Page",
    "Placement",
    "Point",
    "Rect",
    "SignatureImage",
    "SkippedPlacement",
    "Viewport",
]
