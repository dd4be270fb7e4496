"""Export result domain models."""

from typing import List

from pydantic import BaseModel, Field


class SkippedPlacement(BaseModel):
    """A placement that could not be composited.

    Attributes:
        id: Placement identifier
        page: Page number (1-based) the placement refers to
        code: Error code of the failure
        reason: Human-readable reason
    """

    id: str = Field(..., description="Placement identifier")
    page: int = Field(..., description="Page number (1-based)")
    code: str = Field(..., description="Error code of the failure")
    reason: str = Field(..., description="Human-readable reason")


class ExportResult(BaseModel):
    """Signed document bytes together with a per-placement report."""

    data: bytes = Field(..., description="Signed PDF document")
    applied: List[str] = Field(
        default_factory=list, description="IDs of composited placements"
    )
    skipped: List[SkippedPlacement] = Field(
        default_factory=list, description="Placements left out of the document"
    )

    @property
    def is_complete(self) -> bool:
        """Check if every placement was composited."""
        return not self.skipped
