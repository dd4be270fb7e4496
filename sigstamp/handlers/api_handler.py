"""Entry point routing session events to their handlers."""

from typing import Any, Callable, Dict, Union

from aws_lambda_powertools.logging import Logger

from ..middleware.error_handler import error_handler_middleware
from ..middleware.logging import logging_middleware
from ..models.api import (
    Command,
    CommandResponse,
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
from ..services.session import SigningSession
from . import (
    handle_export,
    handle_list,
    handle_load_document,
    handle_move,
    handle_page_rendered,
    handle_place,
    handle_remove,
    handle_render_page,
    handle_reset,
    handle_resize,
    handle_set_zoom,
)

# --- Constants and Setup ---
logger = Logger()

ROUTES: Dict[type, Callable[[SigningSession, Any, Logger], Any]] = {
    LoadDocumentCommand: handle_load_document,
    PageRenderedCommand: handle_page_rendered,
    RenderPageCommand: handle_render_page,
    SetZoomCommand: handle_set_zoom,
    PlaceCommand: handle_place,
    MoveCommand: handle_move,
    ResizeCommand: handle_resize,
    RemoveCommand: handle_remove,
    ListCommand: handle_list,
    ExportCommand: handle_export,
    ResetCommand: handle_reset,
}


# --- Main Entry Point ---
@error_handler_middleware
@logging_middleware
def command_handler(
    event: Union[dict, Command], context: SigningSession
) -> CommandResponse:
    """Main command handler function.

    Args:
        event: Command as a dict (validated here) or as a command model
        context: The signing session the command applies to

    Returns:
        CommandResponse carrying the command result, or the error the user
        should be shown
    """
    command = command_adapter.validate_python(event)
    handler = ROUTES[type(command)]
    return CommandResponse(ok=True, result=handler(context, command, logger))
