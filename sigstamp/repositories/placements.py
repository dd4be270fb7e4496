"""In-memory store of placed signatures for one signing session."""

import uuid
from typing import Dict, List

from aws_lambda_powertools.logging import Logger

from ..middleware.exceptions import InvalidGeometryError, PlacementNotFoundError
from ..models.domain import Placement, Point, Rect, SignatureImage, Viewport
from ..pdf_processor.transform import (
    current_display_rect,
    display_to_fraction,
    display_to_pdf,
    finite_rect,
)
from .viewports import ViewportRegistry

logger = Logger()

DEFAULT_WIDTH_FRACTION = 0.3


def generate_placement_id() -> str:
    """Generate a unique placement ID.

    Returns:
        A unique placement ID string
    """
    return f"sig_{uuid.uuid4().hex[:12]}"


class PlacementStore:
    """CRUD over placed signatures, keyed by id.

    Display geometry is always interpreted against the viewport registry the
    store was created with; the registry entry is looked up at use time and
    never copied into the placement.
    """

    def __init__(
        self,
        viewports: ViewportRegistry,
        width_fraction: float = DEFAULT_WIDTH_FRACTION,
    ) -> None:
        """Initialize the store.

        Args:
            viewports: Registry holding the current viewport of each page
            width_fraction: Width of a new signature relative to the page display width
        """
        self.viewports = viewports
        self.width_fraction = width_fraction
        self._placements: Dict[str, Placement] = {}

    def place(self, page: int, click: Point, image: SignatureImage) -> Placement:
        """Place a signature centered on a click point.

        The signature gets a fixed share of the page display width and keeps
        the aspect ratio of its image.

        Args:
            page: Page number (1-based)
            click: Click position in display pixels
            image: Signature image

        Returns:
            The new placement

        Raises:
            ViewportNotReadyError: If the page has not been rendered yet
        """
        viewport = self.viewports.require(page)

        width = viewport.display_width * self.width_fraction
        height = width * image.aspect
        rect = finite_rect(click.x - width / 2, click.y - height / 2, width, height)
        display_to_pdf(rect, viewport)

        placement_id = generate_placement_id()
        while placement_id in self._placements:
            placement_id = generate_placement_id()

        placement = Placement(
            id=placement_id,
            page=page,
            image=image,
            display_x=rect.x,
            display_y=rect.y,
            display_w=rect.width,
            display_h=rect.height,
            generation=viewport.generation,
            fraction=display_to_fraction(rect, viewport),
        )
        self._placements[placement.id] = placement
        logger.info(
            "Signature placed",
            extra={"placement_id": placement.id, "page": page, "rect": rect.model_dump()},
        )
        return placement

    def get(self, placement_id: str) -> Placement:
        """Get a placement by id.

        Raises:
            PlacementNotFoundError: If no placement has the id
        """
        placement = self._placements.get(placement_id)
        if placement is None:
            raise PlacementNotFoundError(
                f"No signature placement with ID {placement_id}",
                details={"placement_id": placement_id},
            )
        return placement

    def move(self, placement_id: str, x: float, y: float) -> Placement:
        """Translate a placement to a new top-left display position.

        Raises:
            InvalidGeometryError: If the new position overflows point space
        """
        placement = self.get(placement_id)
        viewport = self.viewports.require(placement.page)
        size = current_display_rect(placement, viewport)

        rect = finite_rect(x, y, size.width, size.height)
        self._apply(placement, rect, viewport)
        return placement

    def resize(
        self, placement_id: str, width: float, height: float, x: float, y: float
    ) -> Placement:
        """Set a new display size and top-left position.

        Raises:
            InvalidGeometryError: If width or height is not positive, or the
                rectangle overflows point space
        """
        placement = self.get(placement_id)
        rect = finite_rect(x, y, width, height)
        if not rect.has_area:
            raise InvalidGeometryError(
                "Signature width and height must be positive",
                details={"placement_id": placement_id, "width": width, "height": height},
            )

        viewport = self.viewports.require(placement.page)
        self._apply(placement, rect, viewport)
        return placement

    def rebase(self, page: int) -> int:
        """Re-derive display geometry of a page's placements after a re-render.

        Returns:
            Number of placements whose geometry was re-derived
        """
        viewport = self.viewports.get(page)
        if viewport is None:
            return 0

        count = 0
        for placement in self.list(page):
            if placement.generation == viewport.generation:
                continue
            rect = current_display_rect(placement, viewport)
            placement.set_geometry(rect, placement.fraction, viewport.generation)
            count += 1
        return count

    def remove(self, placement_id: str) -> Placement:
        """Remove a placement.

        Raises:
            PlacementNotFoundError: If no placement has the id
        """
        placement = self.get(placement_id)
        del self._placements[placement_id]
        logger.info("Signature removed", extra={"placement_id": placement_id})
        return placement

    def list(self, page: int) -> List[Placement]:
        """List placements on a page in placement order."""
        return [p for p in self._placements.values() if p.page == page]

    def list_all(self) -> List[Placement]:
        """List all placements in placement order."""
        return list(self._placements.values())

    def snapshot(self) -> List[Placement]:
        """Deep copy of all placements, safe to read while edits continue."""
        return [p.model_copy(deep=True) for p in self._placements.values()]

    def clear(self) -> None:
        self._placements.clear()

    def __len__(self) -> int:
        return len(self._placements)

    def _apply(self, placement: Placement, rect: Rect, viewport: Viewport) -> None:
        # point-space form must be finite too
        display_to_pdf(rect, viewport)
        placement.set_geometry(
            rect, display_to_fraction(rect, viewport), viewport.generation
        )
        logger.debug(
            "Signature geometry updated",
            extra={"placement_id": placement.id, "rect": rect.model_dump()},
        )
