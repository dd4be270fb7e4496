"""Session state exceptions."""

from typing import Any, Dict, Optional

from . import SigstampError


class SessionError(SigstampError):
    """Base class for errors about the editing session state."""


class NotReadyError(SessionError):
    """Operation requested before its prerequisite state exists."""

    def __init__(
        self,
        message: str = "Not ready",
        code: str = "NOT_READY",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code=code, details=details)


class DocumentNotLoadedError(NotReadyError):
    """No document has been loaded into the session."""

    def __init__(
        self,
        message: str = "Load a PDF first",
        code: str = "DOCUMENT_NOT_LOADED",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code=code, details=details)


class ViewportNotReadyError(NotReadyError):
    """The page has not been rendered yet, so its viewport is unknown."""

    def __init__(
        self,
        message: str = "Page has not been rendered yet",
        code: str = "VIEWPORT_NOT_READY",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code=code, details=details)


class PlacementNotFoundError(SessionError):
    """No placed signature with the requested id."""

    def __init__(
        self,
        message: str = "Signature placement not found",
        code: str = "PLACEMENT_NOT_FOUND",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code=code, details=details)


class ExportInProgressError(SessionError):
    """A second export was requested while one is still running."""

    def __init__(
        self,
        message: str = "An export is already in progress",
        code: str = "EXPORT_IN_PROGRESS",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code=code, details=details)
