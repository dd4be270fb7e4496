"""API models for command handling."""

from .requests import (
    Command,
    ExportCommand,
    ListCommand,
    LoadDocumentCommand,
    MoveCommand,
    PageRenderedCommand,
    PlaceCommand,
    RemoveCommand,
    RenderPageCommand,
    ResetCommand,
    ResizeCommand,
    SetZoomCommand,
    command_adapter,
)
from .responses import (
    APIErrorResponse,
    CommandResponse,
    DocumentSummary,
    ExportResponse,
    PageSize,
    PlacementListResponse,
    PlacementResponse,
    RenderedPageResponse,
    SkippedItem,
    ViewportResponse,
    ZoomResponse,
)

__all__ = [
    # Requests
    'Command',
    'ExportCommand',
    'ListCommand',
    'LoadDocumentCommand',
    'MoveCommand',
    'PageRenderedCommand',
    'PlaceCommand',
    'RemoveCommand',
    'RenderPageCommand',
    'ResetCommand',
    'ResizeCommand',
    'SetZoomCommand',
    'command_adapter',

    # Responses
    'APIErrorResponse',
    'CommandResponse',
    'DocumentSummary',
    'ExportResponse',
    'PageSize',
    'PlacementListResponse',
    'PlacementResponse',
    'RenderedPageResponse',
    'SkippedItem',
    'ViewportResponse',
    'ZoomResponse',
]
