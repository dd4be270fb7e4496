"""In-memory registry of page viewports for one signing session."""

from typing import Dict, Optional

from aws_lambda_powertools.logging import Logger
from pydantic import ValidationError

from ..middleware.exceptions import ViewportNotReadyError
from ..models.domain import Viewport

logger = Logger()


class ViewportRegistry:
    """Single source of truth for the pixel to point mapping of each page.

    Every accepted update stamps the entry with the next generation number,
    so placements can tell whether their display geometry was measured
    against the current render of the page.
    """

    def __init__(self) -> None:
        self._entries: Dict[int, Viewport] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        """Last generation handed out."""
        return self._generation

    def update(
        self,
        page: int,
        display_width: float,
        display_height: float,
        pdf_width: float,
        pdf_height: float,
    ) -> Optional[Viewport]:
        """Record the viewport of a freshly rendered page.

        Malformed dimensions are rejected and the previous entry is kept.

        Args:
            page: Page number (1-based)
            display_width: Rendered width in pixels
            display_height: Rendered height in pixels
            pdf_width: Page width in points
            pdf_height: Page height in points

        Returns:
            The new entry, or None if the update was rejected
        """
        try:
            entry = Viewport(
                page=page,
                display_width=display_width,
                display_height=display_height,
                pdf_width=pdf_width,
                pdf_height=pdf_height,
                generation=self._generation + 1,
            )
        except ValidationError as e:
            logger.warning(
                "Rejected viewport update",
                extra={
                    "page": page,
                    "display": [display_width, display_height],
                    "pdf": [pdf_width, pdf_height],
                    "errors": str(e),
                },
            )
            return None

        self._generation = entry.generation
        self._entries[page] = entry
        logger.debug(
            "Viewport updated",
            extra={"page": page, "generation": entry.generation},
        )
        return entry

    def get(self, page: int) -> Optional[Viewport]:
        """Get the current viewport of a page, if it has been rendered."""
        return self._entries.get(page)

    def require(self, page: int) -> Viewport:
        """Get the current viewport of a page.

        Raises:
            ViewportNotReadyError: If the page has not been rendered yet
        """
        entry = self._entries.get(page)
        if entry is None:
            raise ViewportNotReadyError(
                f"No viewport data for page {page}", details={"page": page}
            )
        return entry

    def snapshot(self) -> Dict[int, Viewport]:
        """Copy of the current entries; entries themselves are immutable."""
        return dict(self._entries)

    def clear(self) -> None:
        """Forget all entries. Generations keep increasing across clears."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

