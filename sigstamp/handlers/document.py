"""Handlers for document and rendering commands.

This module wires document loading, zoom changes and page render events
into the signing session.
"""

import io

from aws_lambda_powertools.logging import Logger

from ..models.api import (
    DocumentSummary,
    LoadDocumentCommand,
    PageRenderedCommand,
    RenderedPageResponse,
    RenderPageCommand,
    ResetCommand,
    SetZoomCommand,
    ViewportResponse,
    ZoomResponse,
)
from ..services.session import SigningSession


def handle_load_document(
    session: SigningSession, command: LoadDocumentCommand, logger: Logger
) -> DocumentSummary:
    """Handle load_document commands.

    Args:
        session: The signing session
        command: The validated command
        logger: Logger instance

    Returns:
        DocumentSummary with page count and page sizes

    Raises:
        PDFValidationError: If the bytes are not a usable PDF
    """
    logger.info(
        f"Loading PDF '{command.name}'", extra={"size_in_bytes": len(command.data)}
    )
    document = session.load_document(command.data, command.name)
    return DocumentSummary.from_document(document)


def handle_page_rendered(
    session: SigningSession, command: PageRenderedCommand, logger: Logger
) -> ViewportResponse:
    """Handle page_rendered commands from an external renderer.

    Raises:
        DocumentNotLoadedError: If no document is loaded
        InvalidPageError: If the page is outside the document
        InvalidGeometryError: If the rendered size is not positive
    """
    viewport = session.page_rendered(
        command.page, command.display_width, command.display_height
    )
    logger.debug(f"Page {command.page} viewport", extra=viewport.model_dump())
    return ViewportResponse.from_viewport(viewport)


def handle_render_page(
    session: SigningSession, command: RenderPageCommand, logger: Logger
) -> RenderedPageResponse:
    """Handle render_page commands.

    Renders the page at the current zoom, records its viewport and returns
    the rendering as PNG.
    """
    img = session.render_page(command.page)
    buf = io.BytesIO()
    img.save(buf, format="PNG")

    viewport = session.viewports.require(command.page)
    logger.debug(
        f"Rendered page {command.page}",
        extra={"zoom": session.zoom, "size": [img.width, img.height]},
    )
    return RenderedPageResponse(
        viewport=ViewportResponse.from_viewport(viewport), image=buf.getvalue()
    )


def handle_set_zoom(
    session: SigningSession, command: SetZoomCommand, logger: Logger
) -> ZoomResponse:
    """Handle set_zoom commands."""
    zoom = session.set_zoom(command.zoom)
    if zoom != command.zoom:
        logger.info(
            "Zoom clamped", extra={"requested": command.zoom, "applied": zoom}
        )
    return ZoomResponse(zoom=zoom)


def handle_reset(
    session: SigningSession, command: ResetCommand, logger: Logger
) -> None:
    """Handle reset commands."""
    session.reset()
