"""Handlers for signature placement commands."""

from aws_lambda_powertools.logging import Logger

from ..middleware.exceptions import ImageDecodeError
from ..models.api import (
    ListCommand,
    MoveCommand,
    PlaceCommand,
    PlacementListResponse,
    PlacementResponse,
    RemoveCommand,
    ResizeCommand,
)
from ..services.session import SigningSession
from ..utils.data_url import decode_data_url


def handle_place(
    session: SigningSession, command: PlaceCommand, logger: Logger
) -> PlacementResponse:
    """Handle place commands.

    Args:
        session: The signing session
        command: The validated command
        logger: Logger instance

    Returns:
        PlacementResponse with the default geometry of the new signature

    Raises:
        ViewportNotReadyError: If the page has not been rendered yet
        ImageDecodeError: If the signature image cannot be decoded
    """
    image = command.image
    if image is None:
        try:
            image = decode_data_url(command.image_data_url)
        except ValueError as e:
            raise ImageDecodeError(
                "Signature data URL is malformed", details={"error": str(e)}
            ) from e

    placement_id = session.place(command.page, command.x, command.y, image)
    logger.info(
        "Signature placed, drag/resize to adjust.",
        extra={"placement_id": placement_id, "page": command.page},
    )
    return PlacementResponse.from_placement(session.placements.get(placement_id))


def handle_move(
    session: SigningSession, command: MoveCommand, logger: Logger
) -> PlacementResponse:
    """Handle move commands (drag stop)."""
    placement = session.move(command.placement_id, command.x, command.y)
    return PlacementResponse.from_placement(placement)


def handle_resize(
    session: SigningSession, command: ResizeCommand, logger: Logger
) -> PlacementResponse:
    """Handle resize commands (resize stop)."""
    placement = session.resize(
        command.placement_id, command.width, command.height, command.x, command.y
    )
    return PlacementResponse.from_placement(placement)


def handle_remove(
    session: SigningSession, command: RemoveCommand, logger: Logger
) -> PlacementResponse:
    """Handle remove commands."""
    placement = session.remove(command.placement_id)
    return PlacementResponse.from_placement(placement)


def handle_list(
    session: SigningSession, command: ListCommand, logger: Logger
) -> PlacementListResponse:
    """Handle list commands for one page or, without a page, all pages."""
    if command.page is None:
        placements = session.list_all()
    else:
        placements = session.list(command.page)
    return PlacementListResponse(
        placements=[PlacementResponse.from_placement(p) for p in placements]
    )
