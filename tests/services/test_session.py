"""Unit tests for the signing session service."""

import threading
import unittest
from unittest.mock import patch

from sigstamp.config.app import AppConfig
from sigstamp.middleware.exceptions import (
    DocumentNotLoadedError,
    ExportInProgressError,
    ImageDecodeError,
    InvalidGeometryError,
    InvalidPageError,
    PDFValidationError,
    ViewportNotReadyError,
)
from sigstamp.models.domain import ExportResult, Rect
from sigstamp.services.session import SigningSession
from sigstamp.services.signature_pad import load_signature_image
from tests.samples import is_red, make_pdf, make_png, render_rgb


def make_config(**overrides) -> AppConfig:
    return AppConfig(app_env="test", version="test", commit_hash="test", **overrides)


class TestSigningSession(unittest.TestCase):
    """Test cases for SigningSession."""

    def setUp(self):
        """Set up test fixtures."""
        self.session = SigningSession(make_config())
        self.pdf = make_pdf([(300, 400), (300, 400)])
        self.png = make_png(100, 50)

    def tearDown(self):
        """Tear down test fixtures."""
        self.session.close()

    def _loaded(self):
        self.session.load_document(self.pdf, "contract.pdf")
        self.session.page_rendered(1, 600, 800)

    def test_initial_state(self):
        """Test a fresh session."""
        self.assertFalse(self.session.is_loaded)
        self.assertEqual(self.session.zoom, 1.2)
        self.assertFalse(self.session.export_in_progress)

    def test_operations_before_load(self):
        """Test that operations needing a document fail with DocumentNotLoadedError."""
        with self.assertRaises(DocumentNotLoadedError) as ctx:
            self.session.place(1, 10, 10, self.png)
        self.assertEqual(ctx.exception.message, "Load a PDF first")
        with self.assertRaises(DocumentNotLoadedError):
            self.session.page_rendered(1, 600, 800)
        with self.assertRaises(DocumentNotLoadedError):
            self.session.export()
        self.assertFalse(self.session.export_in_progress)

    def test_load_document(self):
        """Test loading a document."""
        # Act
        document = self.session.load_document(self.pdf, "contract.pdf")

        # Assert
        self.assertTrue(self.session.is_loaded)
        self.assertEqual(document.page_count, 2)

    def test_load_document_clears_previous_state(self):
        """Test that a new document drops placements and viewports."""
        # Arrange
        self._loaded()
        self.session.place(1, 300, 400, self.png)

        # Act
        self.session.load_document(make_pdf(), "other.pdf")

        # Assert
        self.assertEqual(self.session.list_all(), [])
        self.assertIsNone(self.session.viewports.get(1))
        self.assertEqual(self.session.document.page_count, 1)

    def test_failed_load_keeps_previous_document(self):
        """Test that an invalid upload leaves the session unchanged."""
        # Arrange
        self._loaded()
        placement_id = self.session.place(1, 300, 400, self.png)
        document = self.session.document

        # Act
        with self.assertRaises(PDFValidationError):
            self.session.load_document(b"not a pdf", "broken.pdf")

        # Assert
        self.assertIs(self.session.document, document)
        self.assertEqual([p.id for p in self.session.list(1)], [placement_id])

    def test_page_rendered_validation(self):
        """Test rejected render events."""
        # Arrange
        self.session.load_document(self.pdf)

        # Act & Assert
        with self.assertRaises(InvalidPageError):
            self.session.page_rendered(3, 600, 800)
        with self.assertRaises(InvalidGeometryError):
            self.session.page_rendered(1, 0, 800)
        self.assertIsNone(self.session.viewports.get(1))

    def test_place_requires_render(self):
        """Test that a page must be rendered before placing on it."""
        # Arrange
        self._loaded()

        # Act & Assert
        with self.assertRaises(ViewportNotReadyError):
            self.session.place(2, 10, 10, self.png)
        with self.assertRaises(InvalidPageError):
            self.session.place(5, 10, 10, self.png)

    def test_place_with_bad_image(self):
        """Test that undecodable image bytes are rejected."""
        self._loaded()
        with self.assertRaises(ImageDecodeError):
            self.session.place(1, 10, 10, b"garbage")
        self.assertEqual(self.session.list_all(), [])

    def test_place_edit_and_export(self):
        """Test the whole edit flow ending in a signed document."""
        # Arrange
        self._loaded()
        placement_id = self.session.place(1, 300, 400, self.png)
        self.session.resize(placement_id, 60, 40, 100, 100)

        # Act
        result = self.session.export()

        # Assert
        self.assertEqual(result.applied, [placement_id])
        self.assertTrue(is_red(render_rgb(result.data, 0).getpixel((65, 60))))
        self.assertFalse(self.session.export_in_progress)

    def test_zoom_change_keeps_page_position(self):
        """Test that a re-render at another zoom keeps the signature in place."""
        # Arrange
        self._loaded()
        placement_id = self.session.place(1, 300, 400, self.png)
        self.session.resize(placement_id, 60, 40, 100, 100)

        # Act
        self.session.set_zoom(1.0)
        self.session.page_rendered(1, 300, 400)
        result = self.session.export()

        # Assert
        placement = self.session.placements.get(placement_id)
        self.assertTrue(placement.display_rect.is_close(Rect(x=50, y=50, width=30, height=20)))
        self.assertTrue(is_red(render_rgb(result.data, 0).getpixel((65, 60))))

    def test_set_zoom_clamps(self):
        """Test that zoom is kept within the configured range."""
        self.assertEqual(self.session.set_zoom(5), 2.0)
        self.assertEqual(self.session.set_zoom(0.1), 0.6)
        self.assertEqual(self.session.set_zoom(1.5), 1.5)
        with self.assertRaises(InvalidGeometryError):
            self.session.set_zoom(0)
        self.assertEqual(self.session.zoom, 1.5)

    def test_render_page_records_viewport(self):
        """Test that rendering records the rendered size."""
        # Arrange
        self.session.load_document(self.pdf)
        self.session.set_zoom(2.0)

        # Act
        img = self.session.render_page(2)

        # Assert
        viewport = self.session.viewports.require(2)
        self.assertEqual(img.size, (600, 800))
        self.assertEqual((viewport.display_width, viewport.display_height), (600, 800))

    def test_reset(self):
        """Test that reset returns the session to its initial state."""
        # Arrange
        self._loaded()
        self.session.place(1, 300, 400, self.png)
        self.session.set_zoom(2.0)

        # Act
        self.session.reset()

        # Assert
        self.assertFalse(self.session.is_loaded)
        self.assertEqual(self.session.list_all(), [])
        self.assertEqual(len(self.session.viewports), 0)
        self.assertEqual(self.session.zoom, 1.2)

    def test_drawn_signature_can_be_placed(self):
        """Test that pad strokes give a pad sized image usable as a signature."""
        # Arrange
        self._loaded()

        # Act
        png = self.session.draw_signature([[(20, 100), (580, 100)]])
        placement_id = self.session.place(1, 300, 400, png)

        # Assert
        placement = self.session.placements.get(placement_id)
        self.assertEqual((placement.image.width, placement.image.height), (600, 200))
        self.assertAlmostEqual(placement.display_h, 60)

    def test_uploaded_signature_fits_pad(self):
        """Test that uploads are fitted to the configured pad size."""
        png = self.session.upload_signature(make_png(1200, 400))
        image = load_signature_image(png)
        self.assertEqual((image.width, image.height), (600, 200))

    @patch("sigstamp.services.session.export")
    def test_second_export_while_running(self, mock_export):
        """Test that a concurrent export is refused."""
        # Arrange
        self._loaded()
        started = threading.Event()
        release = threading.Event()

        def slow_export(source, placements, viewports):
            started.set()
            release.wait(5)
            return ExportResult(data=b"%PDF", applied=[p.id for p in placements])

        mock_export.side_effect = slow_export
        future = self.session.submit_export()
        self.assertTrue(started.wait(5))

        # Act & Assert
        self.assertTrue(self.session.export_in_progress)
        with self.assertRaises(ExportInProgressError):
            self.session.export()
        with self.assertRaises(ExportInProgressError):
            self.session.submit_export()

        release.set()
        future.result(timeout=5)
        self.assertFalse(self.session.export_in_progress)
        self.assertEqual(mock_export.call_count, 1)

    @patch("sigstamp.services.session.export")
    def test_export_uses_snapshot(self, mock_export):
        """Test that edits made during an export do not reach it."""
        # Arrange
        self._loaded()
        placement_id = self.session.place(1, 300, 400, self.png)
        release = threading.Event()
        seen = {}

        def slow_export(source, placements, viewports):
            release.wait(5)
            seen["x"] = placements[0].display_x
            seen["count"] = len(placements)
            return ExportResult(data=b"%PDF")

        mock_export.side_effect = slow_export

        # Act
        future = self.session.submit_export()
        self.session.move(placement_id, 0, 0)
        self.session.place(1, 10, 10, self.png)
        release.set()
        future.result(timeout=5)

        # Assert
        self.assertAlmostEqual(seen["x"], 210)
        self.assertEqual(seen["count"], 1)

    @patch("sigstamp.services.session.export")
    def test_failed_export_releases_guard(self, mock_export):
        """Test that a failing export can be retried."""
        # Arrange
        self._loaded()
        mock_export.side_effect = RuntimeError("boom")

        # Act
        with self.assertRaises(RuntimeError):
            self.session.export()

        # Assert
        self.assertFalse(self.session.export_in_progress)


if __name__ == "__main__":
    unittest.main()
