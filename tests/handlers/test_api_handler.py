"""Unit tests for the command entry point."""

import unittest
from unittest.mock import patch

from sigstamp.config.app import AppConfig
from sigstamp.handlers.api_handler import command_handler
from sigstamp.models.api import (
    DocumentSummary,
    ExportResponse,
    PlacementListResponse,
    PlacementResponse,
    RenderedPageResponse,
)
from sigstamp.services.session import SigningSession
from tests.samples import is_red, make_data_url, make_pdf, make_png, render_rgb


class TestCommandHandler(unittest.TestCase):
    """Test cases for command routing and error responses."""

    def setUp(self):
        """Set up test fixtures."""
        self.session = SigningSession(
            AppConfig(app_env="test", version="test", commit_hash="test")
        )
        self.pdf = make_pdf([(300, 400), (300, 400)])
        self.png = make_png(100, 50)

    def tearDown(self):
        """Tear down test fixtures."""
        self.session.close()

    def _send(self, **event):
        return command_handler(event, self.session)

    def _ready(self):
        self._send(type="load_document", data=self.pdf, name="contract.pdf")
        self._send(type="page_rendered", page=1, display_width=600, display_height=800)

    def test_load_document(self):
        """Test that load_document returns a document summary."""
        # Act
        response = self._send(type="load_document", data=self.pdf, name="contract.pdf")

        # Assert
        self.assertTrue(response.ok)
        self.assertIsInstance(response.result, DocumentSummary)
        self.assertEqual(response.result.page_count, 2)
        self.assertAlmostEqual(response.result.pages[0].width, 300)

    def test_full_signing_flow(self):
        """Test place, edit, list and export through the entry point."""
        # Arrange
        self._ready()

        # Act
        placed = self._send(
            type="place", page=1, x=300, y=400, image_data_url=make_data_url(self.png)
        )
        placement_id = placed.result.id
        resized = self._send(
            type="resize", placement_id=placement_id, width=60, height=40, x=100, y=100
        )
        listed = self._send(type="list", page=1)
        exported = self._send(type="export")

        # Assert
        self.assertTrue(placed.ok)
        self.assertIsInstance(placed.result, PlacementResponse)
        self.assertAlmostEqual(placed.result.display_w, 180)
        self.assertAlmostEqual(placed.result.display_h, 90)
        self.assertAlmostEqual(resized.result.display_x, 100)
        self.assertIsInstance(listed.result, PlacementListResponse)
        self.assertEqual([p.id for p in listed.result.placements], [placement_id])

        self.assertTrue(exported.ok)
        self.assertIsInstance(exported.result, ExportResponse)
        self.assertEqual(exported.result.file_name, "signed.pdf")
        self.assertEqual(exported.result.applied, [placement_id])
        self.assertEqual(exported.result.skipped, [])
        self.assertTrue(is_red(render_rgb(exported.result.document, 0).getpixel((65, 60))))

    def test_move_and_remove(self):
        """Test drag and delete commands."""
        # Arrange
        self._ready()
        placement_id = self._send(
            type="place", page=1, x=300, y=400, image=self.png
        ).result.id

        # Act
        moved = self._send(type="move", placement_id=placement_id, x=5, y=6)
        removed = self._send(type="remove", placement_id=placement_id)
        listed = self._send(type="list")

        # Assert
        self.assertEqual((moved.result.display_x, moved.result.display_y), (5, 6))
        self.assertAlmostEqual(moved.result.display_w, 180)
        self.assertTrue(removed.ok)
        self.assertEqual(listed.result.placements, [])

    def test_render_page_and_zoom(self):
        """Test rendering at a clamped zoom."""
        # Arrange
        self._send(type="load_document", data=self.pdf)

        # Act
        zoom = self._send(type="set_zoom", zoom=10)
        rendered = self._send(type="render_page", page=1)

        # Assert
        self.assertEqual(zoom.result.zoom, 2.0)
        self.assertIsInstance(rendered.result, RenderedPageResponse)
        self.assertEqual(rendered.result.viewport.display_width, 600)
        self.assertTrue(rendered.result.image.startswith(b"\x89PNG"))

    def test_reset(self):
        """Test that reset unloads the document."""
        self._ready()
        response = self._send(type="reset")
        self.assertTrue(response.ok)
        self.assertFalse(self.session.is_loaded)

    def test_place_before_load(self):
        """Test the not-ready error for placing without a document."""
        # Act
        response = self._send(type="place", page=1, x=10, y=10, image=self.png)

        # Assert
        self.assertFalse(response.ok)
        self.assertEqual(response.error.code, "DOCUMENT_NOT_LOADED")
        self.assertEqual(response.error.message, "Load a PDF first")

    def test_place_before_render(self):
        """Test the not-ready error for placing on an unrendered page."""
        # Arrange
        self._ready()

        # Act
        response = self._send(type="place", page=2, x=10, y=10, image=self.png)

        # Assert
        self.assertEqual(response.error.code, "VIEWPORT_NOT_READY")
        self.assertEqual(response.error.details, {"page": 2})

    def test_invalid_pdf(self):
        """Test the error for an invalid upload."""
        response = self._send(type="load_document", data=b"", name="empty.pdf")
        self.assertEqual(response.error.code, "INVALID_PDF")
        self.assertEqual(response.error.message, "Uploaded PDF is empty or invalid.")

    def test_malformed_data_url(self):
        """Test the error for a signature data URL that cannot be decoded."""
        self._ready()
        response = self._send(
            type="place", page=1, x=10, y=10, image_data_url="data:image/png;base64,@@"
        )
        self.assertEqual(response.error.code, "IMAGE_DECODE_ERROR")

    def test_unknown_placement(self):
        """Test the error for editing a placement that does not exist."""
        self._ready()
        response = self._send(type="move", placement_id="sig_missing", x=0, y=0)
        self.assertEqual(response.error.code, "PLACEMENT_NOT_FOUND")

    def test_invalid_commands(self):
        """Test that malformed commands are reported as validation errors."""
        for event in [
            {"type": "shred"},
            {"type": "place", "page": 1, "x": 0, "y": 0},
            {
                "type": "place",
                "page": 1,
                "x": 0,
                "y": 0,
                "image": self.png,
                "image_data_url": make_data_url(self.png),
            },
            {"type": "list", "page": 0},
        ]:
            response = command_handler(event, self.session)
            self.assertFalse(response.ok)
            self.assertEqual(response.error.code, "VALIDATION_INVALID_INPUT")

    def test_unexpected_error(self):
        """Test that an unexpected exception becomes an internal error response."""
        # Arrange
        self._ready()

        # Act
        with patch.object(self.session, "export", side_effect=RuntimeError("boom")):
            response = self._send(type="export")

        # Assert
        self.assertFalse(response.ok)
        self.assertEqual(response.error.code, "SYSTEM_INTERNAL_ERROR")
        self.assertEqual(response.error.details, {"error": "boom"})


if __name__ == "__main__":
    unittest.main()
