"""Input validation and codec exceptions."""

from typing import Any, Dict, Optional

from . import SigstampError


class BusinessError(SigstampError):
    """Base class for invalid-input and codec errors."""

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
        log_level: str = "warning",
    ):
        super().__init__(
            message=message, code=code, details=details, log_level=log_level
        )


class InvalidGeometryError(BusinessError):
    """Non-positive or non-finite rectangle or viewport dimensions."""

    def __init__(
        self,
        message: str = "Invalid geometry",
        code: str = "INVALID_GEOMETRY",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class InvalidPageError(BusinessError):
    """Page number outside the loaded document."""

    def __init__(
        self,
        message: str = "Invalid page",
        code: str = "INVALID_PAGE",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class DegeneratePageError(InvalidPageError):
    """Page whose display/point scale factor is zero or not finite."""

    def __init__(
        self,
        message: str = "Page has a degenerate scale",
        code: str = "DEGENERATE_PAGE",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class PDFValidationError(BusinessError):
    """Source document bytes that cannot be decoded as a PDF."""

    def __init__(
        self,
        message: str = "Invalid PDF file",
        code: str = "INVALID_PDF",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class ImageDecodeError(BusinessError):
    """Signature image bytes that cannot be decoded."""

    def __init__(
        self,
        message: str = "Failed to decode signature image",
        code: str = "IMAGE_DECODE_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details, log_level="error")


class DocumentEncodeError(BusinessError):
    """Failure while serializing the signed document."""

    def __init__(
        self,
        message: str = "Failed to write signed document",
        code: str = "DOCUMENT_ENCODE_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details, log_level="error")
