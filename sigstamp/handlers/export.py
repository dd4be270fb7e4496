"""Handler for the export command."""

from aws_lambda_powertools.logging import Logger

from ..models.api import ExportCommand, ExportResponse
from ..services.session import SigningSession


def handle_export(
    session: SigningSession, command: ExportCommand, logger: Logger
) -> ExportResponse:
    """Handle export commands.

    Composites every placement into a fresh copy of the loaded document.
    Placements that cannot be composited are reported, not fatal.

    Args:
        session: The signing session
        command: The validated command
        logger: Logger instance

    Returns:
        ExportResponse with the signed document and the per-placement report

    Raises:
        DocumentNotLoadedError: If no document is loaded
        ExportInProgressError: If another export is running
        PDFValidationError: If the source document cannot be decoded
        DocumentEncodeError: If the signed document cannot be written
    """
    result = session.export()
    if result.skipped:
        logger.warning(
            f"{len(result.skipped)} signature(s) skipped during export",
            extra={"skipped": [s.model_dump() for s in result.skipped]},
        )
    else:
        logger.info("Signed PDF ready", extra={"applied": len(result.applied)})

    return ExportResponse.from_result(result, session.config.output_file_name)
