#!/usr/bin/env python3
"""
Unit tests for export_renderers.py.

Workbooks are read back with openpyxl.

Run with: python tests/test_export_renderers.py
"""

import csv
import io
import sys
import unittest
from datetime import datetime
from pathlib import Path

import openpyxl

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from export_renderers import (
    CSV_CONTENT_TYPE,
    XLSX_CONTENT_TYPE,
    DelimitedTextRenderer,
    SpreadsheetRenderer,
    StyleConfig,
    get_renderer,
    safe_sheet_name,
)
from export_types import ExportFormat, Language, Role, Section, SectionModel
from section_builder import build_section_model


def _trim(cells: list[str]) -> list[str]:
    cells = list(cells)
    while cells and cells[-1] == "":
        cells.pop()
    return cells


def _trim_rows(rows: list[list[str]]) -> list[list[str]]:
    rows = [_trim(row) for row in rows]
    while rows and not rows[-1]:
        rows.pop()
    return rows


def read_workbook(content: bytes):
    """Load the single sheet of a rendered workbook."""
    workbook = openpyxl.load_workbook(io.BytesIO(content))
    return workbook.active


def sheet_rows(worksheet) -> list[list[str]]:
    rows = []
    for values in worksheet.iter_rows(values_only=True):
        rows.append(["" if value is None else str(value) for value in values])
    return _trim_rows(rows)


def csv_rows(content: bytes) -> list[list[str]]:
    text = content.decode("utf-8-sig")
    return _trim_rows(list(csv.reader(io.StringIO(text))))


def sample_model() -> SectionModel:
    model = SectionModel(sheet_name="Main Data")
    main = Section(key="MAIN_DATA", title="Main Data", header=["Id", "Name", "Type"], merge_title_columns=3)
    main.add_row(["1", "Board, 2024", "Creator"])
    model.add(main)
    notes = Section(key="NOTES", title="Notes", header=["Note"])
    notes.add_row(['She said "yes"'])
    notes.add_row(["line one\nline two"])
    model.add(notes)
    return model


DOCUMENT = {
    "data": {
        "electionId": "e-1",
        "electionName": "انتخابات المجلس",
        "analytics": {"candidateGender": {"male": 3, "female": 1}},
        "resultsSummary": [
            {"candidateName": "Alice", "numberOfVoters": 3, "voters": ["Sam", "Lea"]},
            {"candidateName": "Bob", "numberOfVoters": 1},
        ],
        "insights": {"totalCandidates": 2, "completionRate": 50},
    }
}


class TestDelimitedTextRenderer(unittest.TestCase):
    """Tests for CSV output."""

    def test_bom_and_encoding(self):
        """Test that output starts with a UTF-8 byte-order mark."""
        content = DelimitedTextRenderer().render(sample_model())
        self.assertTrue(content.startswith(b"\xef\xbb\xbf"))
        content.decode("utf-8")

    def test_quoting(self):
        """Test minimal quoting of delimiters, quotes and line breaks."""
        text = DelimitedTextRenderer().render(sample_model()).decode("utf-8-sig")
        self.assertIn('1,"Board, 2024",Creator\r\n', text)
        self.assertIn('"She said ""yes"""\r\n', text)
        self.assertIn('"line one\nline two"', text)

    def test_rows(self):
        """Test title, header, data and blank rows."""
        text = DelimitedTextRenderer().render(sample_model()).decode("utf-8-sig")
        lines = text.split("\r\n")
        self.assertEqual(lines[0], "Main Data")
        self.assertEqual(lines[1], "Id,Name,Type")
        self.assertEqual(lines[3], "")
        self.assertEqual(lines[4], "Notes")

    def test_arabic_text(self):
        """Test that Arabic text survives the round trip."""
        model = build_section_model(DOCUMENT, Role.VIEWER, Language.AR)
        rows = csv_rows(DelimitedTextRenderer().render(model))
        self.assertEqual(rows[0], ["البيانات الرئيسية"])
        self.assertIn("انتخابات المجلس", rows[2])

    def test_content_type(self):
        """Test the CSV MIME type."""
        self.assertEqual(DelimitedTextRenderer.content_type, CSV_CONTENT_TYPE)


class TestSpreadsheetRenderer(unittest.TestCase):
    """Tests for xlsx output."""

    def test_cell_values(self):
        """Test that cell values are written unchanged."""
        worksheet = read_workbook(SpreadsheetRenderer().render(sample_model()))
        self.assertEqual(worksheet.title, "Main Data")
        self.assertEqual(worksheet.cell(row=1, column=1).value, "Main Data")
        self.assertEqual(worksheet.cell(row=2, column=2).value, "Name")
        self.assertEqual(worksheet.cell(row=3, column=2).value, "Board, 2024")
        self.assertEqual(worksheet.cell(row=8, column=1).value, "line one\nline two")

    def test_title_merge(self):
        """Test that multi-column titles are merged and single-column titles are not."""
        worksheet = read_workbook(SpreadsheetRenderer().render(sample_model()))
        merged = [str(cell_range) for cell_range in worksheet.merged_cells.ranges]
        self.assertEqual(merged, ["A1:C1"])

    def test_styles(self):
        """Test title, header and data styling."""
        worksheet = read_workbook(SpreadsheetRenderer().render(sample_model()))
        title = worksheet.cell(row=1, column=1)
        header = worksheet.cell(row=2, column=1)
        data = worksheet.cell(row=3, column=1)

        self.assertTrue(title.font.bold)
        self.assertEqual(title.font.sz, 14)
        self.assertEqual(title.alignment.horizontal, "center")
        self.assertTrue(title.fill.fgColor.rgb.endswith("808080"))

        self.assertTrue(header.font.bold)
        self.assertTrue(header.fill.fgColor.rgb.endswith("C0C0C0"))

        self.assertFalse(data.font.bold)
        self.assertEqual(data.alignment.horizontal, "left")
        self.assertEqual(data.border.left.style, "thin")

    def test_column_widths(self):
        """Test that columns are sized to their content."""
        worksheet = read_workbook(SpreadsheetRenderer().render(sample_model()))
        widths = {letter: worksheet.column_dimensions[letter].width for letter in "ABC"}
        self.assertGreater(widths["B"], widths["C"])
        self.assertAlmostEqual(StyleConfig().column_width(10), 15.0)
        self.assertEqual(StyleConfig().column_width(1000), 255.0)

    def test_created_property(self):
        """Test that the creation time is stored in the workbook."""
        created = datetime(2024, 3, 4, 5, 6, 7)
        content = SpreadsheetRenderer(created=created).render(sample_model())
        workbook = openpyxl.load_workbook(io.BytesIO(content))
        self.assertEqual(workbook.properties.created.replace(tzinfo=None), created)

    def test_without_constant_memory(self):
        """Test that in-memory mode produces the same cells."""
        streamed = sheet_rows(read_workbook(SpreadsheetRenderer().render(sample_model())))
        buffered = sheet_rows(read_workbook(SpreadsheetRenderer(constant_memory=False).render(sample_model())))
        self.assertEqual(streamed, buffered)

    def test_many_rows(self):
        """Test a section larger than any in-memory row window."""
        model = SectionModel(sheet_name="Results")
        section = Section(key="RESULTS_SUMMARY", title="Results", header=["Name", "Votes"], merge_title_columns=2)
        for i in range(2500):
            section.add_row([f"Candidate {i}", str(i)])
        model.add(section)
        worksheet = read_workbook(SpreadsheetRenderer().render(model))
        self.assertEqual(worksheet.cell(row=2502, column=1).value, "Candidate 2499")

    def test_oversized_string_rejected(self):
        """Test that a string over 32,767 characters raises instead of being cut."""
        model = SectionModel(sheet_name="Results")
        section = Section(key="RESULTS_SUMMARY", title="Results", header=["Voters"])
        section.add_row(["x" * 40000])
        model.add(section)
        with self.assertRaises(ValueError) as ctx:
            SpreadsheetRenderer().render(model)
        self.assertIn("cell 2,0", str(ctx.exception))

        # CSV keeps the full value
        self.assertIn(b"x" * 40000, DelimitedTextRenderer().render(model))

    def test_string_at_limit_accepted(self):
        """Test that a string of exactly 32,767 characters is written whole."""
        model = SectionModel(sheet_name="Results")
        section = Section(key="RESULTS_SUMMARY", title=None, header=["Voters"])
        section.add_row(["y" * 32767])
        model.add(section)
        worksheet = read_workbook(SpreadsheetRenderer().render(model))
        self.assertEqual(len(worksheet.cell(row=2, column=1).value), 32767)

    def test_safe_sheet_name(self):
        """Test sheet name cleanup."""
        self.assertEqual(safe_sheet_name("Survey Data - Creator"), "Survey Data - Creator")
        self.assertEqual(safe_sheet_name("a/b:c"), "a_b_c")
        self.assertEqual(len(safe_sheet_name("x" * 50)), 31)
        self.assertEqual(safe_sheet_name(""), "Sheet1")


class TestRendererEquivalence(unittest.TestCase):
    """Both renderers must carry the same cells."""

    def test_same_rows(self):
        """Test identical cell values across formats for every role and language."""
        for role in Role:
            for language in Language:
                with self.subTest(role=role, language=language):
                    model = build_section_model(DOCUMENT, role, language)
                    from_xlsx = sheet_rows(read_workbook(SpreadsheetRenderer().render(model)))
                    from_csv = csv_rows(DelimitedTextRenderer().render(model))
                    self.assertEqual(from_xlsx, from_csv)

    def test_get_renderer(self):
        """Test renderer dispatch by format."""
        self.assertIsInstance(get_renderer(ExportFormat.EXCEL), SpreadsheetRenderer)
        self.assertIsInstance(get_renderer(ExportFormat.CSV), DelimitedTextRenderer)
        self.assertEqual(get_renderer(ExportFormat.EXCEL).content_type, XLSX_CONTENT_TYPE)


if __name__ == "__main__":
    unittest.main(verbosity=2)
