"""Exception handling for the signature compositing engine."""

from typing import Any, Dict, Optional


class SigstampError(Exception):
    """Base exception for all signature compositing errors.

    Every error is recoverable: it is reported to the user-facing layer and
    the operation that raised it leaves the session state unchanged.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
        log_level: str = "warning",
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.log_level = log_level


from .business import (
    DegeneratePageError,
    DocumentEncodeError,
    ImageDecodeError,
    InvalidGeometryError,
    InvalidPageError,
    PDFValidationError,
)
from .session import (
    DocumentNotLoadedError,
    ExportInProgressError,
    NotReadyError,
    PlacementNotFoundError,
    ViewportNotReadyError,
)

__all__ = [
    # Base
    "SigstampError",
    # Session Errors
    "NotReadyError",
    "DocumentNotLoadedError",
    "ViewportNotReadyError",
    "PlacementNotFoundError",
    "ExportInProgressError",
    # Business Errors
    "InvalidGeometryError",
    "InvalidPageError",
    "DegeneratePageError",
    "PDFValidationError",
    "ImageDecodeError",
    "DocumentEncodeError",
]
