"""Module to composite signature overlays into PDF page content"""

from dataclasses import dataclass
from io import BytesIO
from itertools import groupby
from typing import Mapping, Sequence

from aws_lambda_powertools.logging import Logger
from PIL import Image, UnidentifiedImageError
from pypdf import PageObject, PdfReader, PdfWriter
from pypdf.generic import RectangleObject
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..middleware.exceptions import (
    DocumentEncodeError,
    ImageDecodeError,
    InvalidPageError,
    PDFValidationError,
    SigstampError,
    ViewportNotReadyError,
)
from ..models.domain import ExportResult, Placement, Rect, SkippedPlacement, Viewport
from .transform import current_display_rect, display_to_pdf

logger = Logger()


@dataclass
class Stamp:
    """A decoded signature ready to be drawn at a point-space rectangle."""

    placement_id: str
    rect: Rect
    image: Image.Image


def decode_image(data: bytes) -> Image.Image:
    """
    Decode raster bytes into an RGBA image.

    Args:
        data (bytes): Encoded image bytes, usually PNG.

    Returns:
        Image.Image: The decoded image with an alpha channel.

    Raises:
        ImageDecodeError: If the bytes are not a readable image.
    """
    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            return img.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageDecodeError(details={"error": str(e)}) from e


def open_writer(original: bytes) -> PdfWriter:
    """
    Parse the original bytes into a fresh writer.

    Args:
        original (bytes): The original PDF document.

    Returns:
        PdfWriter: A writer holding a clone of every page.

    Raises:
        PDFValidationError: If the bytes cannot be decoded as a PDF.
    """
    if not original:
        raise PDFValidationError("Source document is empty")

    try:
        reader = PdfReader(BytesIO(original))
        if reader.is_encrypted and not reader.decrypt(""):
            raise PDFValidationError("Source document is password protected")
        return PdfWriter(clone_from=reader)
    except PDFValidationError:
        raise
    except Exception as e:
        raise PDFValidationError(
            "Failed to decode source document", details={"error": str(e)}
        ) from e


def prepare_stamp(
    placement: Placement, viewports: Mapping[int, Viewport], page_count: int
) -> Stamp:
    """
    Resolve the point-space rectangle of a placement and decode its image.

    Args:
        placement (Placement): The placed signature.
        viewports (Mapping[int, Viewport]): Viewport entries by page number.
        page_count (int): Number of pages in the document.

    Returns:
        Stamp: The signature ready to be drawn.

    Raises:
        InvalidPageError: If the page is outside the document.
        ViewportNotReadyError: If the page has no viewport entry.
        DegeneratePageError: If the viewport has a degenerate scale.
        ImageDecodeError: If the signature image cannot be decoded.
    """
    if not 1 <= placement.page <= page_count:
        raise InvalidPageError(
            f"Page {placement.page} outside document",
            details={"page": placement.page, "page_count": page_count},
        )

    viewport = viewports.get(placement.page)
    if viewport is None:
        raise ViewportNotReadyError(
            f"No viewport for signature on page {placement.page}",
            code="MISSING_VIEWPORT",
            details={"page": placement.page},
        )

    rect = display_to_pdf(current_display_rect(placement, viewport), viewport)
    return Stamp(
        placement_id=placement.id,
        rect=rect,
        image=decode_image(placement.image.data),
    )


def as_rect(box: RectangleObject) -> Rect:
    # PDF boxes may list their corners in any order
    left, right = sorted((float(box.left), float(box.right)))
    bottom, top = sorted((float(box.bottom), float(box.top)))
    return Rect(x=left, y=bottom, width=right - left, height=top - bottom)


def visible_box(page: PageObject) -> Rect:
    """
    The area of the page a viewer shows: the crop box clipped to the media box.

    This is the box pdfium measures and renders, so it is the box point-space
    rectangles are relative to.
    """
    media = as_rect(page.mediabox)
    return as_rect(page.cropbox).intersect(media) or media


def make_overlay(media: Rect, visible: Rect, stamps: Sequence[Stamp]) -> PageObject:
    """
    Draw the stamps onto an overlay page the size of the target media box.

    The overlay has its origin at the lower-left corner of the media box;
    it is translated back to the media box origin when merged.

    Args:
        media (Rect): Media box of the target page.
        visible (Rect): Visible box of the target page.
        stamps (Sequence[Stamp]): The signatures to draw, relative to the visible box.

    Returns:
        PageObject: The overlay page.
    """
    dx, dy = visible.x - media.x, visible.y - media.y

    buf = BytesIO()
    c = canvas.Canvas(
        buf,
        pagesize=(max(media.width, 1.0), max(media.height, 1.0)),
        invariant=1,
    )
    for stamp in stamps:
        c.drawImage(
            ImageReader(stamp.image),
            dx + stamp.rect.x,
            dy + stamp.rect.y,
            width=stamp.rect.width,
            height=stamp.rect.height,
            mask="auto",
        )
    c.showPage()
    c.save()
    return PdfReader(BytesIO(buf.getvalue())).pages[0]


def stamp_page(page: PageObject, stamps: Sequence[Stamp]) -> None:
    """
    Permanently merge the stamps into the page content.

    Rotated pages get their rotation moved into the content first, so the
    unrotated point space of the page matches what was displayed.

    Args:
        page (PageObject): The target page, modified in place.
        stamps (Sequence[Stamp]): The signatures to draw.
    """
    if page.rotation % 360:
        page.transfer_rotation_to_content()

    media = as_rect(page.mediabox)
    overlay = make_overlay(media, visible_box(page), stamps)
    page.merge_translated_page(overlay, media.x, media.y)


def export(
    original: bytes,
    placements: Sequence[Placement],
    viewports: Mapping[int, Viewport],
) -> ExportResult:
    """
    Produce a new PDF with every resolvable placement drawn into its page.

    The original bytes are parsed afresh on every call and are never
    modified. A placement that cannot be resolved is skipped and reported;
    the others are still composited.

    Args:
        original (bytes): The original PDF document.
        placements (Sequence[Placement]): Snapshot of the placement model.
        viewports (Mapping[int, Viewport]): Snapshot of the viewport registry.

    Returns:
        ExportResult: The signed document and the per-placement report.

    Raises:
        PDFValidationError: If the original bytes cannot be decoded.
        DocumentEncodeError: If the signed document cannot be serialized.
    """
    writer = open_writer(original)
    page_count = len(writer.pages)

    applied: list[str] = []
    skipped: list[SkippedPlacement] = []

    # stable sort keeps placement order within a page
    ordered = sorted(placements, key=lambda p: p.page)
    for page_number, group in groupby(ordered, key=lambda p: p.page):
        stamps: list[Stamp] = []
        for placement in group:
            try:
                stamps.append(prepare_stamp(placement, viewports, page_count))
            except SigstampError as e:
                logger.warning(
                    "Skipping signature placement",
                    extra={
                        "placement_id": placement.id,
                        "page": page_number,
                        "code": e.code,
                        "details": e.details,
                    },
                )
                skipped.append(
                    SkippedPlacement(
                        id=placement.id, page=page_number, code=e.code, reason=e.message
                    )
                )

        if not stamps:
            continue

        try:
            stamp_page(writer.pages[page_number - 1], stamps)
        except Exception as e:
            logger.exception(
                "Failed to composite page", extra={"page": page_number}
            )
            skipped.extend(
                SkippedPlacement(
                    id=s.placement_id,
                    page=page_number,
                    code="COMPOSITE_ERROR",
                    reason=str(e),
                )
                for s in stamps
            )
            continue

        applied.extend(s.placement_id for s in stamps)

    buf = BytesIO()
    try:
        writer.write(buf)
    except Exception as e:
        raise DocumentEncodeError(details={"error": str(e)}) from e

    logger.info(
        "Document exported",
        extra={
            "page_count": page_count,
            "applied": len(applied),
            "skipped": len(skipped),
            "size_in_bytes": buf.tell(),
        },
    )
    return ExportResult(data=buf.getvalue(), applied=applied, skipped=skipped)
