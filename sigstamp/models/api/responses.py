"""Response models for session commands."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..domain import Document, ExportResult, Placement, Viewport


class APIErrorResponse(BaseModel):
    """Standardized error response for session commands.

    Attributes:
        message: Human-readable error message
        code: Error code string
        details: Additional error context or details
    """

    message: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Error code string")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class CommandResponse(BaseModel):
    """Envelope returned for every command."""

    ok: bool = Field(True, description="Whether the command succeeded")
    result: Optional[Any] = Field(None, description="Command specific payload")
    error: Optional[APIErrorResponse] = Field(None, description="Error, if any")


class PageSize(BaseModel):
    """Page dimensions in DocumentSummary."""

    page: int = Field(..., ge=1, description="Page number (1-based)")
    width: float = Field(..., gt=0, description="Page width in points")
    height: float = Field(..., gt=0, description="Page height in points")
    rotation: int = Field(0, description="Page rotation in degrees")


class DocumentSummary(BaseModel):
    """Response for load_document."""

    document_id: str = Field(..., description="Document identifier")
    name: Optional[str] = Field(None, description="Original file name")
    page_count: int = Field(..., ge=0, description="Total number of pages")
    pages: List[PageSize] = Field(..., description="List of pages with their size")

    @classmethod
    def from_document(cls, document: Document) -> "DocumentSummary":
        return cls(
            document_id=document.id,
            name=document.name,
            page_count=document.page_count,
            pages=[
                PageSize(
                    page=p.number, width=p.width, height=p.height, rotation=p.rotation
                )
                for p in document.pages
            ],
        )


class ViewportResponse(BaseModel):
    """Response for page_rendered."""

    page: int = Field(..., ge=1, description="Page number (1-based)")
    display_width: float = Field(..., description="Rendered width in pixels")
    display_height: float = Field(..., description="Rendered height in pixels")
    pdf_width: float = Field(..., description="Page width in points")
    pdf_height: float = Field(..., description="Page height in points")
    generation: int = Field(..., description="Viewport generation")

    @classmethod
    def from_viewport(cls, viewport: Viewport) -> "ViewportResponse":
        return cls(**viewport.model_dump())


class RenderedPageResponse(BaseModel):
    """Response for render_page."""

    viewport: ViewportResponse = Field(..., description="Recorded viewport")
    image: bytes = Field(..., description="PNG rendering of the page")


class ZoomResponse(BaseModel):
    """Response for set_zoom."""

    zoom: float = Field(..., description="Zoom actually applied")


class PlacementResponse(BaseModel):
    """A placed signature in display space."""

    id: str = Field(..., description="Placement identifier")
    page: int = Field(..., ge=1, description="Page number (1-based)")
    display_x: float = Field(..., description="Left edge in display pixels")
    display_y: float = Field(..., description="Top edge in display pixels")
    display_w: float = Field(..., description="Width in display pixels")
    display_h: float = Field(..., description="Height in display pixels")

    @classmethod
    def from_placement(cls, placement: Placement) -> "PlacementResponse":
        return cls(
            id=placement.id,
            page=placement.page,
            display_x=placement.display_x,
            display_y=placement.display_y,
            display_w=placement.display_w,
            display_h=placement.display_h,
        )


class PlacementListResponse(BaseModel):
    """Response for list."""

    placements: List[PlacementResponse] = Field(..., description="Placements")


class SkippedItem(BaseModel):
    """Placement left out of an export."""

    id: str = Field(..., description="Placement identifier")
    page: int = Field(..., description="Page number (1-based)")
    code: str = Field(..., description="Error code")
    reason: str = Field(..., description="Human-readable reason")


class ExportResponse(BaseModel):
    """Response for export."""

    file_name: str = Field(..., description="Suggested file name")
    document: bytes = Field(..., description="Signed PDF bytes")
    applied: List[str] = Field(..., description="IDs of composited placements")
    skipped: List[SkippedItem] = Field(..., description="Placements left out")

    @classmethod
    def from_result(cls, result: ExportResult, file_name: str) -> "ExportResponse":
        return cls(
            file_name=file_name,
            document=result.data,
            applied=result.applied,
            skipped=[SkippedItem(**s.model_dump()) for s in result.skipped],
        )
