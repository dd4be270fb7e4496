from enum import Enum
from typing import Any, Dict, Optional

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.middleware_factory import lambda_handler_decorator
from pydantic import BaseModel, ValidationError

from ..models.api import APIErrorResponse, CommandResponse
from .exceptions import SigstampError

logger = Logger()


class ErrorCode(Enum):
    # Validation errors
    VALIDATION_INVALID_INPUT = "VALIDATION_INVALID_INPUT"

    # Not-ready errors
    NOT_READY = "NOT_READY"
    DOCUMENT_NOT_LOADED = "DOCUMENT_NOT_LOADED"
    VIEWPORT_NOT_READY = "VIEWPORT_NOT_READY"
    MISSING_VIEWPORT = "MISSING_VIEWPORT"

    # Session errors
    PLACEMENT_NOT_FOUND = "PLACEMENT_NOT_FOUND"
    EXPORT_IN_PROGRESS = "EXPORT_IN_PROGRESS"

    # Invalid-input errors
    INVALID_GEOMETRY = "INVALID_GEOMETRY"
    INVALID_PAGE = "INVALID_PAGE"
    DEGENERATE_PAGE = "DEGENERATE_PAGE"
    INVALID_PDF = "INVALID_PDF"

    # Codec errors
    IMAGE_DECODE_ERROR = "IMAGE_DECODE_ERROR"
    DOCUMENT_ENCODE_ERROR = "DOCUMENT_ENCODE_ERROR"

    # System errors
    SYSTEM_INTERNAL_ERROR = "SYSTEM_INTERNAL_ERROR"

    @property
    def default_message(self) -> str:
        messages: Dict["ErrorCode", str] = {
            ErrorCode.VALIDATION_INVALID_INPUT: "Invalid input",
            ErrorCode.NOT_READY: "Not ready",
            ErrorCode.DOCUMENT_NOT_LOADED: "Load a PDF first",
            ErrorCode.VIEWPORT_NOT_READY: "Page has not been rendered yet",
            ErrorCode.MISSING_VIEWPORT: "No viewport for page",
            ErrorCode.PLACEMENT_NOT_FOUND: "Signature placement not found",
            ErrorCode.EXPORT_IN_PROGRESS: "An export is already in progress",
            ErrorCode.INVALID_GEOMETRY: "Invalid geometry",
            ErrorCode.INVALID_PAGE: "Invalid page",
            ErrorCode.DEGENERATE_PAGE: "Page has a degenerate scale",
            ErrorCode.INVALID_PDF: "Invalid PDF file",
            ErrorCode.IMAGE_DECODE_ERROR: "Failed to decode signature image",
            ErrorCode.DOCUMENT_ENCODE_ERROR: "Failed to write signed document",
            ErrorCode.SYSTEM_INTERNAL_ERROR: "An unexpected error occurred",
        }
        return messages[self]

    @classmethod
    def from_exception(cls, e: Exception) -> "ErrorCode":
        """Map exceptions to error codes."""
        if isinstance(e, ValidationError):
            return ErrorCode.VALIDATION_INVALID_INPUT
        if isinstance(e, SigstampError):
            try:
                return cls(e.code)
            except ValueError:
                return ErrorCode.SYSTEM_INTERNAL_ERROR
        return ErrorCode.SYSTEM_INTERNAL_ERROR


class ErrorResponse(BaseModel):
    message: str
    code: ErrorCode
    details: Optional[Dict[str, Any]] = None

    @classmethod
    def from_code(
        cls, code: ErrorCode, details: Optional[Dict[str, Any]] = None
    ) -> "ErrorResponse":
        return cls(message=code.default_message, code=code, details=details)

    @classmethod
    def from_exception(cls, e: Exception) -> "ErrorResponse":
        """Create an ErrorResponse from an exception."""
        code = ErrorCode.from_exception(e)
        message = str(e) if str(e) else code.default_message
        details = getattr(e, "details", None)

        return cls(message=message, code=code, details=details)


def create_error_response(error_response: ErrorResponse) -> CommandResponse:
    """Helper to create standardized error responses with error codes."""
    api_error = APIErrorResponse(
        message=error_response.message,
        code=error_response.code.value,
        details=error_response.details,
    )
    return CommandResponse(ok=False, error=api_error)


@lambda_handler_decorator
def error_handler_middleware(handler, event, context):
    """Middleware to turn exceptions into error responses the user can be shown."""
    try:
        return handler(event, context)

    # --- SigstampError exceptions (our custom exceptions) ---
    except SigstampError as e:
        getattr(logger, e.log_level)(
            f"{e.__class__.__name__}: {str(e)}",
            extra={"code": e.code, "details": e.details},
        )
        return create_error_response(ErrorResponse.from_exception(e))

    # --- Input Validation Errors ---
    except ValidationError as e:
        logger.warning(f"Command validation failed: {e}")
        error_response = ErrorResponse.from_code(
            ErrorCode.VALIDATION_INVALID_INPUT, details={"errors": str(e)}
        )
        return create_error_response(error_response)

    # --- Generic Fallback Error ---
    except Exception as e:
        logger.exception(f"Unhandled error: {e.__class__.__name__}: {str(e)}")
        error_response = ErrorResponse.from_code(
            ErrorCode.SYSTEM_INTERNAL_ERROR, details={"error": str(e)}
        )
        return create_error_response(error_response)
