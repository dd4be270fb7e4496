"""Geometry primitives shared by display and point space."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Point(BaseModel):
    """A point, e.g. the position of a click on a rendered page."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(..., allow_inf_nan=False, description="Horizontal coordinate")
    y: float = Field(..., allow_inf_nan=False, description="Vertical coordinate")


class Rect(BaseModel):
    """An axis-aligned rectangle.

    In display space (x, y) is the top-left corner, in point space it is the
    lower-left corner. Which one applies is decided by the caller.

    Attributes:
        x: Horizontal origin
        y: Vertical origin
        width: Width, in the units of the space
        height: Height, in the units of the space
    """

    model_config = ConfigDict(frozen=True)

    x: float = Field(..., allow_inf_nan=False, description="Horizontal origin")
    y: float = Field(..., allow_inf_nan=False, description="Vertical origin")
    width: float = Field(..., allow_inf_nan=False, description="Width")
    height: float = Field(..., allow_inf_nan=False, description="Height")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def has_area(self) -> bool:
        """Check if both sides are strictly positive."""
        return self.width > 0 and self.height > 0

    def intersect(self, other: "Rect") -> Optional["Rect"]:
        """Overlap of two rectangles in the same space, None if they do not overlap."""
        x, y = max(self.x, other.x), max(self.y, other.y)
        right, bottom = min(self.right, other.right), min(self.bottom, other.bottom)
        if right <= x or bottom <= y:
            return None
        return Rect(x=x, y=y, width=right - x, height=bottom - y)

    def is_close(self, other: "Rect", tolerance: float = 1e-6) -> bool:
        """Compare two rectangles within floating point tolerance."""
        return all(
            abs(a - b) <= tolerance
            for a, b in (
                (self.x, other.x),
                (self.y, other.y),
                (self.width, other.width),
                (self.height, other.height),
            )
        )
