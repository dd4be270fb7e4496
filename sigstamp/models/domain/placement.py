"""Placed signature domain model."""

from pydantic import BaseModel, Field

from .geometry import Rect
from .signature import SignatureImage


class Placement(BaseModel):
    """A signature overlay placed on a rendered page.

    The display geometry is only meaningful against the viewport generation
    it was recorded in. The fractional copy of the same rectangle, relative
    to the page's display box, does not depend on the zoom level and is used
    to re-derive the display geometry once the page has been re-rendered.

    Attributes:
        id: Unique placement identifier
        page: Page number (1-based)
        image: Signature image
        display_x: Left edge in display pixels
        display_y: Top edge in display pixels
        display_w: Width in display pixels
        display_h: Height in display pixels
        generation: Viewport generation the display geometry belongs to
        fraction: Rectangle relative to the page display box
    """

    id: str = Field(..., description="Unique placement identifier")
    page: int = Field(..., gt=0, description="Page number (1-based)")
    image: SignatureImage = Field(..., description="Signature image")
    display_x: float = Field(..., allow_inf_nan=False)
    display_y: float = Field(..., allow_inf_nan=False)
    display_w: float = Field(..., gt=0, allow_inf_nan=False)
    display_h: float = Field(..., gt=0, allow_inf_nan=False)
    generation: int = Field(..., ge=0)
    fraction: Rect = Field(..., description="Rectangle relative to the display box")

    @property
    def display_rect(self) -> Rect:
        """Get the display-space rectangle."""
        return Rect(
            x=self.display_x,
            y=self.display_y,
            width=self.display_w,
            height=self.display_h,
        )

    def set_geometry(self, rect: Rect, fraction: Rect, generation: int) -> None:
        """Replace the display geometry and its fractional form together.

        Args:
            rect: New display-space rectangle
            fraction: Same rectangle relative to the display box
            generation: Viewport generation the rectangle was measured in
        """
        self.display_x = rect.x
        self.display_y = rect.y
        self.display_w = rect.width
        self.display_h = rect.height
        self.fraction = fraction
        self.generation = generation
