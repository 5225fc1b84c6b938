#!/usr/bin/env python3
"""
Unit tests for document_analyzer.py.

Run with: python tests/test_document_analyzer.py
"""

import sys
import unittest
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from document_analyzer import DocumentAnalyzer, as_double, as_int, as_text
from export_types import ReportVariant


class TestScalarCoercion(unittest.TestCase):
    """Tests for as_text, as_int and as_double."""

    def test_as_text(self):
        """Test text rendering of JSON scalars."""
        self.assertEqual(as_text("abc"), "abc")
        self.assertEqual(as_text(None), "")
        self.assertEqual(as_text(None, "N/A"), "N/A")
        self.assertEqual(as_text(True), "true")
        self.assertEqual(as_text(False), "false")
        self.assertEqual(as_text(42), "42")
        self.assertEqual(as_text(2.5), "2.5")
        self.assertEqual(as_text({"a": 1}), "")
        self.assertEqual(as_text([1, 2]), "")

    def test_as_int(self):
        """Test integer coercion with defaults."""
        self.assertEqual(as_int(7), 7)
        self.assertEqual(as_int("12"), 12)
        self.assertEqual(as_int("3.9"), 3)
        self.assertEqual(as_int(4.7), 4)
        self.assertEqual(as_int(None), 0)
        self.assertEqual(as_int("abc"), 0)
        self.assertEqual(as_int("abc", 5), 5)
        self.assertEqual(as_int(float("nan")), 0)

    def test_as_double(self):
        """Test float coercion with defaults."""
        self.assertEqual(as_double(1), 1.0)
        self.assertEqual(as_double("66.5"), 66.5)
        self.assertEqual(as_double(None), 0.0)
        self.assertEqual(as_double("n/a"), 0.0)


class TestDocumentAnalyzer(unittest.TestCase):
    """Tests for shape probing."""

    def test_missing_data_node(self):
        """Test that a document without data behaves as empty."""
        analyzer = DocumentAnalyzer({})
        self.assertEqual(analyzer.data, {})
        self.assertFalse(analyzer.has("electionName"))
        self.assertEqual(analyzer.list_field("resultsSummary"), None)

    def test_optional_columns(self):
        """Test optional column detection keeps fixed order."""
        analyzer = DocumentAnalyzer({"data": {"endDate": "2024-02-01", "startDate": "2024-01-01"}})
        self.assertEqual(analyzer.optional_columns(), ["startDate", "endDate"])

        analyzer = DocumentAnalyzer({"data": {"startDate": "2024-01-01"}})
        self.assertEqual(analyzer.optional_columns(), ["startDate"])

    def test_null_field_still_present(self):
        """Test that a present-but-null field counts as present."""
        analyzer = DocumentAnalyzer({"data": {"endDate": None}})
        self.assertEqual(analyzer.optional_columns(), ["endDate"])
        self.assertEqual(analyzer.field_text("endDate", missing="N/A"), "")

    def test_main_data_columns(self):
        """Test main data columns with and without optional dates."""
        analyzer = DocumentAnalyzer({"data": {"startDate": "x", "endDate": "y"}})
        self.assertEqual(
            analyzer.main_data_columns(),
            ["electionId", "electionName", "electionDescription", "startDate", "endDate", "exportType"],
        )
        analyzer = DocumentAnalyzer({"data": {"startDate": "x"}})
        self.assertEqual(len(analyzer.main_data_columns()), 5)

    def test_field_text_missing(self):
        """Test missing field default."""
        analyzer = DocumentAnalyzer({"data": {"electionName": "X"}})
        self.assertEqual(analyzer.field_text("electionName"), "X")
        self.assertEqual(analyzer.field_text("electionId", missing="N/A"), "N/A")
        self.assertEqual(analyzer.field_text("electionId"), "")

    def test_distribution(self):
        """Test analytics distribution extraction."""
        analyzer = DocumentAnalyzer({"data": {"analytics": {"candidateGender": {"male": 3, "female": "1"}}}})
        self.assertEqual(analyzer.distribution("candidateGender"), {"male": 3, "female": 1})
        self.assertEqual(list(analyzer.distribution("candidateGender")), ["male", "female"])
        self.assertEqual(analyzer.distribution("candidateAgeRange"), {})

    def test_distribution_wrong_shape(self):
        """Test that non-object analytics yield an empty distribution."""
        analyzer = DocumentAnalyzer({"data": {"analytics": [1, 2, 3]}})
        self.assertEqual(analyzer.distribution("candidateGender"), {})

    def test_detect_variant(self):
        """Test variant detection."""
        self.assertEqual(DocumentAnalyzer({"data": {"electionName": "X"}}).detect_variant(), ReportVariant.ELECTION)
        self.assertEqual(DocumentAnalyzer({"data": {"questionResults": []}}).detect_variant(), ReportVariant.SURVEY)
        self.assertEqual(DocumentAnalyzer({"data": {"voteTitle": "Poll"}}).detect_variant(), ReportVariant.SURVEY)

    def test_title(self):
        """Test title lookup per variant."""
        analyzer = DocumentAnalyzer({"data": {"electionName": " Board Vote ", "voteTitle": "Poll"}})
        self.assertEqual(analyzer.title(ReportVariant.ELECTION), "Board Vote")
        self.assertEqual(analyzer.title(ReportVariant.SURVEY), "Poll")


if __name__ == "__main__":
    unittest.main(verbosity=2)
