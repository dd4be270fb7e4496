"""Service for one interactive signing session."""

import math
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from aws_lambda_powertools.logging import Logger
from PIL.Image import Image
from pydantic import ValidationError

from ..config.app import AppConfig
from ..middleware.exceptions import (
    DocumentNotLoadedError,
    ExportInProgressError,
    InvalidGeometryError,
    InvalidPageError,
)
from ..models.domain import (
    Document,
    ExportResult,
    Page,
    Placement,
    Point,
    SignatureImage,
    Viewport,
)
from ..pdf_processor import export, load_pdf, render_page
from ..repositories.placements import PlacementStore
from ..repositories.viewports import ViewportRegistry
from .signature_pad import (
    Stroke,
    fit_image_to_pad,
    load_signature_image,
    render_strokes_png,
)

logger = Logger()

type ExportJob = Tuple[bytes, List[Placement], Mapping[int, Viewport]]


class SigningSession:
    """Owns the document, its viewports and its placements for one user session.

    All mutations happen synchronously on discrete user events. Only the
    export may run on a background worker, and never twice at the same time.
    """

    def __init__(self, config: AppConfig) -> None:
        """Initialize an empty session.

        Args:
            config: Application configuration
        """
        self.config = config
        self.viewports = ViewportRegistry()
        self.placements = PlacementStore(
            self.viewports, width_fraction=config.signature_width_fraction
        )
        self.zoom = config.default_zoom
        self.document: Optional[Document] = None
        self._source: Optional[bytes] = None
        self._export_lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

    # --- Document lifecycle ---

    @property
    def is_loaded(self) -> bool:
        return self.document is not None

    @property
    def export_in_progress(self) -> bool:
        return self._export_lock.locked()

    def load_document(self, data: bytes, name: Optional[str] = None) -> Document:
        """Load a PDF, replacing any previous document and its placements.

        Raises:
            PDFValidationError: If the bytes are not a usable PDF; the
                previous document stays loaded
        """
        document = load_pdf(data, name)

        self.viewports.clear()
        self.placements.clear()
        self._source = bytes(data)
        self.document = document
        return document

    def reset(self) -> None:
        """Drop the document, its viewports and all placements."""
        self.viewports.clear()
        self.placements.clear()
        self._source = None
        self.document = None
        self.zoom = self.config.default_zoom
        logger.info("Session reset")

    # --- Rendering ---

    def set_zoom(self, scale: float) -> float:
        """Set the preview zoom, clamped to the configured range.

        Existing viewports stay valid until their pages are re-rendered.

        Returns:
            The zoom actually applied
        """
        if not math.isfinite(scale) or scale <= 0:
            raise InvalidGeometryError(
                "Zoom must be a positive number", details={"zoom": scale}
            )
        self.zoom = min(max(scale, self.config.min_zoom), self.config.max_zoom)
        logger.debug("Zoom changed", extra={"requested": scale, "zoom": self.zoom})
        return self.zoom

    def page_rendered(
        self, page: int, display_width: float, display_height: float
    ) -> Viewport:
        """Record the pixel size a page was rendered at.

        Raises:
            DocumentNotLoadedError: If no document is loaded
            InvalidPageError: If the page is outside the document
            InvalidGeometryError: If the pixel size is not positive; the
                previous viewport of the page is kept
        """
        pg = self._require_page(page)
        entry = self.viewports.update(
            page, display_width, display_height, pg.width, pg.height
        )
        if entry is None:
            raise InvalidGeometryError(
                f"Rejected rendered size for page {page}",
                details={
                    "page": page,
                    "display_width": display_width,
                    "display_height": display_height,
                },
            )

        rebased = self.placements.rebase(page)
        if rebased:
            logger.info(
                "Placements re-derived for new viewport",
                extra={"page": page, "count": rebased, "generation": entry.generation},
            )
        return entry

    def render_page(self, page: int) -> Image:
        """Render a page at the current zoom and record its viewport."""
        self._require_page(page)
        img = render_page(self._source, page - 1, self.zoom)
        self.page_rendered(page, img.width, img.height)
        return img

    # --- Placements ---

    def place(
        self, page: int, x: float, y: float, image: Union[SignatureImage, bytes]
    ) -> str:
        """Place a signature centered on a click point.

        Returns:
            The new placement id

        Raises:
            DocumentNotLoadedError: If no document is loaded
            InvalidPageError: If the page is outside the document
            ViewportNotReadyError: If the page has not been rendered yet
            ImageDecodeError: If the image bytes cannot be decoded
        """
        self._require_page(page)
        if not isinstance(image, SignatureImage):
            image = load_signature_image(image)
        try:
            click = Point(x=x, y=y)
        except ValidationError as e:
            raise InvalidGeometryError(
                "Click position must be finite", details={"x": x, "y": y}
            ) from e

        return self.placements.place(page, click, image).id

    def move(self, placement_id: str, x: float, y: float) -> Placement:
        return self.placements.move(placement_id, x, y)

    def resize(
        self, placement_id: str, width: float, height: float, x: float, y: float
    ) -> Placement:
        return self.placements.resize(placement_id, width, height, x, y)

    def remove(self, placement_id: str) -> Placement:
        return self.placements.remove(placement_id)

    def list(self, page: int) -> List[Placement]:
        return self.placements.list(page)

    def list_all(self) -> List[Placement]:
        return self.placements.list_all()

    # --- Signature pad ---

    @property
    def pad_size(self) -> Tuple[int, int]:
        return self.config.pad_width, self.config.pad_height

    def draw_signature(self, strokes: Sequence[Stroke]) -> bytes:
        """Turn pad strokes into signature PNG bytes ready to place."""
        return render_strokes_png(strokes, self.pad_size, self.config.pad_stroke_width)

    def upload_signature(self, data: bytes) -> bytes:
        """Fit an uploaded picture into the pad and return it as PNG bytes."""
        return fit_image_to_pad(data, self.pad_size)

    # --- Export ---

    def export(self) -> ExportResult:
        """Composite all placements into a new copy of the document.

        Raises:
            DocumentNotLoadedError: If no document is loaded
            ExportInProgressError: If another export is running
            PDFValidationError: If the source document cannot be decoded
            DocumentEncodeError: If the signed document cannot be written
        """
        return self._run_export(*self._begin_export())

    def submit_export(self) -> "Future[ExportResult]":
        """Start an export on the background worker.

        The placement and viewport snapshots are taken before returning, so
        edits made while the export runs do not affect its output.

        Raises:
            DocumentNotLoadedError: If no document is loaded
            ExportInProgressError: If another export is running
        """
        job = self._begin_export()
        try:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix="sigstamp-export"
                )
            return self._executor.submit(self._run_export, *job)
        except Exception:
            self._export_lock.release()
            raise

    def close(self) -> None:
        """Wait for a running export and stop the background worker."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "SigningSession":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _begin_export(self) -> ExportJob:
        if not self._export_lock.acquire(blocking=False):
            raise ExportInProgressError()
        try:
            source = self._require_source()
            return source, self.placements.snapshot(), self.viewports.snapshot()
        except Exception:
            self._export_lock.release()
            raise

    def _run_export(
        self,
        source: bytes,
        placements: Sequence[Placement],
        viewports: Mapping[int, Viewport],
    ) -> ExportResult:
        try:
            logger.info(
                "Export started",
                extra={"placements": len(placements), "viewports": len(viewports)},
            )
            return export(source, placements, viewports)
        finally:
            self._export_lock.release()

    # --- Helpers ---

    def _require_source(self) -> bytes:
        if self._source is None:
            raise DocumentNotLoadedError()
        return self._source

    def _require_page(self, page: int) -> Page:
        if self.document is None:
            raise DocumentNotLoadedError()
        pg = self.document.get_page(page)
        if pg is None:
            raise InvalidPageError(
                f"Page {page} outside document",
                details={"page": page, "page_count": self.document.page_count},
            )
        return pg
