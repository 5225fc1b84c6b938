#!/usr/bin/env python3
"""
Tests for the web UI handlers (the Gradio app is built but not launched).

Run with: python tests/test_web_ui.py
"""

import json
import sys
import tempfile
import unittest
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from web_ui import clear_form, run_export, validate_file


DOCUMENT = {"data": {"electionName": "Board Election", "resultsSummary": []}}


class TestWebUi(unittest.TestCase):
    """Tests for upload validation and export handlers."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.upload = Path(self.tmp.name) / "results.json"
        self.upload.write_text(json.dumps(DOCUMENT), encoding="utf-8")

    def test_validate_file(self):
        """Test upload validation."""
        self.assertEqual(validate_file(str(self.upload)), (True, "OK"))
        self.assertFalse(validate_file(None)[0])
        self.assertFalse(validate_file(str(Path(self.tmp.name) / "missing.json"))[0])

        image = Path(self.tmp.name) / "ballot.png"
        image.write_bytes(b"\x89PNG")
        valid, message = validate_file(str(image))
        self.assertFalse(valid)
        self.assertIn("Invalid file type", message)

        empty = Path(self.tmp.name) / "empty.json"
        empty.write_text("", encoding="utf-8")
        self.assertEqual(validate_file(str(empty)), (False, "File is empty"))

    def test_run_export(self):
        """Test a successful export from an upload."""
        path, status = run_export(str(self.upload), "creator", "csv", "en", "auto")
        self.assertIsNotNone(path)
        self.assertTrue(Path(path).name.startswith("creator_Board_Election_"))
        self.assertTrue(Path(path).read_bytes().startswith(b"\xef\xbb\xbf"))
        self.assertIn("Exported", status)

    def test_run_export_localized_error(self):
        """Test that export errors surface their localized message."""
        self.upload.write_text('{"data": 5}', encoding="utf-8")
        path, status = run_export(str(self.upload), "viewer", "excel", "ar", "election")
        self.assertIsNone(path)
        self.assertTrue(status.startswith("مستند المصدر غير صالح"))

    def test_rejected_upload(self):
        """Test that invalid uploads are reported in the status box."""
        path, status = run_export(None, "viewer", "excel", "en", "auto")
        self.assertIsNone(path)
        self.assertTrue(status.startswith("Error:"))

    def test_clear_form(self):
        """Test form reset values."""
        self.assertEqual(clear_form(), (None, None, ""))


if __name__ == "__main__":
    unittest.main(verbosity=2)
