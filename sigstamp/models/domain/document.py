"""Document domain model."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .page import Page


class Document(BaseModel):
    """A PDF document loaded into a signing session.

    Attributes:
        id: Document identifier derived from the content hash
        name: User-provided file name
        loaded: Load timestamp
        size_in_bytes: Size of the document in bytes
        page_count: Total number of pages
        info: Dictionary of document meta-data
        pages: List of pages, ordered by page number
    """

    id: str = Field(..., description="Document identifier derived from content")
    name: Optional[str] = Field(None, description="User-provided file name")
    loaded: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Load timestamp",
    )
    size_in_bytes: int = Field(default=0, description="Size of the document in bytes")
    page_count: int = Field(default=0, ge=0, description="Total number of pages")
    info: Optional[Dict[str, Any]] = Field(
        default=None, description="Dictionary of document meta-data"
    )
    pages: List[Page] = Field(default_factory=list, description="List of pages")

    def has_page(self, number: int) -> bool:
        """Check if a 1-based page number exists in the document."""
        return 1 <= number <= self.page_count

    def get_page(self, number: int) -> Optional[Page]:
        """Get page by 1-based number."""
        return self.pages[number - 1] if self.has_page(number) else None
