"""Page domain model."""

from pydantic import BaseModel, Field


class Page(BaseModel):
    """A single page from a PDF document.

    Width and height are the size the page is displayed at, i.e. the crop
    box clipped to the media box, with the page rotation already applied.

    Attributes:
        number: Page number (1-based)
        width: Page width in points
        height: Page height in points
        rotation: Page rotation in degrees
    """

    number: int = Field(..., gt=0, description="Page number (1-based)")
    width: float = Field(..., gt=0, description="Page width in points")
    height: float = Field(..., gt=0, description="Page height in points")
    rotation: int = Field(0, description="Page rotation in degrees (0, 90, 180, 270)")
