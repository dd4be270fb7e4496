"""Viewport domain model."""

from pydantic import BaseModel, ConfigDict, Field


class Viewport(BaseModel):
    """Mapping between a rendered page's pixel box and its PDF point box.

    The point size is intrinsic to the page, the pixel size changes with the
    zoom level the page was last rendered at.

    Attributes:
        page: Page number (1-based)
        display_width: Rendered width in pixels
        display_height: Rendered height in pixels
        pdf_width: Page width in points
        pdf_height: Page height in points
        generation: Registry generation the entry was recorded in
    """

    model_config = ConfigDict(frozen=True)

    page: int = Field(..., gt=0, description="Page number (1-based)")
    display_width: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Rendered width in pixels"
    )
    display_height: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Rendered height in pixels"
    )
    pdf_width: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Page width in points"
    )
    pdf_height: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Page height in points"
    )
    generation: int = Field(
        default=0, ge=0, description="Registry generation the entry was recorded in"
    )
