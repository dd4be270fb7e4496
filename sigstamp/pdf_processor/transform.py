"""Conversion between display pixel space and PDF point space.

Display space has its origin at the top-left corner of the rendered page
with y growing downwards. Point space has its origin at the lower-left
corner of the page with y growing upwards.
"""

import math

from pydantic import ValidationError

from ..middleware.exceptions import DegeneratePageError, InvalidGeometryError
from ..models.domain import Placement, Rect, Viewport


def _positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def finite_rect(x: float, y: float, width: float, height: float) -> Rect:
    """
    Build a Rect, reporting overflowed or NaN coordinates as a geometry error.

    Raises:
        InvalidGeometryError: If any coordinate is not finite.
    """
    try:
        return Rect(x=x, y=y, width=width, height=height)
    except ValidationError as e:
        raise InvalidGeometryError(
            "Signature geometry must be finite",
            details={"x": x, "y": y, "width": width, "height": height},
        ) from e


def scale_factors(viewport: Viewport) -> tuple[float, float]:
    """
    Pixels per point along each axis.

    Args:
        viewport (Viewport): The viewport entry of the page.

    Returns:
        tuple[float, float]: Horizontal and vertical scale factors.

    Raises:
        DegeneratePageError: If any dimension is zero, negative or not finite.
    """
    dims = (
        viewport.display_width,
        viewport.display_height,
        viewport.pdf_width,
        viewport.pdf_height,
    )
    if not all(_positive(d) for d in dims):
        raise DegeneratePageError(
            f"Page {viewport.page} has a degenerate viewport",
            details={"page": viewport.page, "dimensions": list(dims)},
        )

    return (
        viewport.display_width / viewport.pdf_width,
        viewport.display_height / viewport.pdf_height,
    )


def display_to_pdf(rect: Rect, viewport: Viewport) -> Rect:
    """
    Convert a display-space rectangle to the point-space rectangle used for drawing.

    Args:
        rect (Rect): Rectangle in display pixels, anchored at its top-left corner.
        viewport (Viewport): The viewport entry of the page.

    Returns:
        Rect: Rectangle in points, anchored at its lower-left corner.
    """
    sx, sy = scale_factors(viewport)
    return finite_rect(
        x=rect.x / sx,
        y=(viewport.display_height - (rect.y + rect.height)) / sy,
        width=rect.width / sx,
        height=rect.height / sy,
    )


def pdf_to_display(rect: Rect, viewport: Viewport) -> Rect:
    """
    Convert a point-space rectangle back to display space.

    Args:
        rect (Rect): Rectangle in points, anchored at its lower-left corner.
        viewport (Viewport): The viewport entry of the page.

    Returns:
        Rect: Rectangle in display pixels, anchored at its top-left corner.
    """
    sx, sy = scale_factors(viewport)
    height = rect.height * sy
    return finite_rect(
        x=rect.x * sx,
        y=viewport.display_height - rect.y * sy - height,
        width=rect.width * sx,
        height=height,
    )


def display_to_fraction(rect: Rect, viewport: Viewport) -> Rect:
    """Express a display-space rectangle relative to the page display box."""
    scale_factors(viewport)
    return finite_rect(
        x=rect.x / viewport.display_width,
        y=rect.y / viewport.display_height,
        width=rect.width / viewport.display_width,
        height=rect.height / viewport.display_height,
    )


def fraction_to_display(fraction: Rect, viewport: Viewport) -> Rect:
    """Scale a fractional rectangle to the page display box of a viewport."""
    scale_factors(viewport)
    return finite_rect(
        x=fraction.x * viewport.display_width,
        y=fraction.y * viewport.display_height,
        width=fraction.width * viewport.display_width,
        height=fraction.height * viewport.display_height,
    )


def current_display_rect(placement: Placement, viewport: Viewport) -> Rect:
    """
    Display-space rectangle of a placement against the given viewport.

    The stored pixels are trusted only when they were recorded in the same
    viewport generation; otherwise the rectangle is re-derived from its
    fractional form.

    Args:
        placement (Placement): The placed signature.
        viewport (Viewport): The current viewport entry of its page.

    Returns:
        Rect: Rectangle in display pixels of the given viewport.
    """
    if placement.generation == viewport.generation:
        return placement.display_rect
    return fraction_to_display(placement.fraction, viewport)
