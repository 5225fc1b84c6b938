#!/usr/bin/env python3
"""
Renderers that turn a SectionModel into file bytes.

Contains: CellStyle, StyleConfig, SpreadsheetRenderer (XlsxWriter, constant
memory), DelimitedTextRenderer (csv with UTF-8 BOM), get_renderer.

Both renderers walk SectionModel.iter_rows() once, in order, and write every
cell value unchanged; they only differ in encoding and styling.
"""

import csv
import io
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import xlsxwriter

from export_types import ExportFormat, Row, RowKind, SectionModel

logger = logging.getLogger(__name__)


XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_CONTENT_TYPE = "text/csv"
UTF8_BOM = "\ufeff"

# Excel worksheet name constraints
SHEET_NAME_MAX_LENGTH = 31
INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")

# Negative return codes of xlsxwriter's worksheet write methods
WRITE_ERRORS = {
    -1: "row or column out of worksheet range",
    -2: "string longer than 32,767 characters",
}


@dataclass(frozen=True)
class CellStyle:
    """Font and fill for one kind of row."""
    bold: bool
    font_color: str
    bg_color: str
    font_size: int = 14
    align: str = "left"

    def to_format(self, border_color: str) -> dict:
        """Format properties for xlsxwriter's Workbook.add_format()."""
        return {
            "bold": self.bold,
            "font_color": self.font_color,
            "bg_color": self.bg_color,
            "pattern": 1,  # solid fill
            "font_size": self.font_size,
            "align": self.align,
            "valign": "vcenter",
            "border": 1,  # thin
            "border_color": border_color,
        }


@dataclass(frozen=True)
class StyleConfig:
    """
    Spreadsheet styling, passed explicitly to each render.

    Attributes:
        title: Section title rows
        header: Column header rows
        data: Data rows
        border_color: Thin border color for every styled cell
        char_width: Column width units per character (at the configured font size)
        width_padding: Extra width added to every auto-sized column
        max_column_width: Upper bound for auto-sized columns (Excel's limit is 255)
    """
    title: CellStyle = field(default_factory=lambda: CellStyle(
        bold=True, font_color="#FFFFFF", bg_color="#808080", align="center"))
    header: CellStyle = field(default_factory=lambda: CellStyle(
        bold=True, font_color="#FFFFFF", bg_color="#C0C0C0", align="center"))
    data: CellStyle = field(default_factory=lambda: CellStyle(
        bold=False, font_color="#000000", bg_color="#FFFFFF", align="left"))
    border_color: str = "#C0C0C0"
    char_width: float = 1.3
    width_padding: float = 2.0
    max_column_width: float = 255.0

    def column_width(self, chars: int) -> float:
        return min(chars * self.char_width + self.width_padding, self.max_column_width)


DEFAULT_STYLE = StyleConfig()


def safe_sheet_name(name: str) -> str:
    """Make a worksheet name acceptable to Excel."""
    cleaned = INVALID_SHEET_CHARS.sub("_", name or "").strip("'")
    return cleaned[:SHEET_NAME_MAX_LENGTH] or "Sheet1"


def _display_length(value: str) -> int:
    """Width of the widest line of a cell value, in characters."""
    return max((len(line) for line in value.splitlines()), default=0)


def _check_write(code: int, row_index: int, col: int) -> None:
    """Raise when xlsxwriter rejected a cell or truncated its string."""
    if code is not None and code < 0:
        reason = WRITE_ERRORS.get(code, "write failed")
        raise ValueError(f"cell {row_index},{col} rejected by xlsxwriter ({code}: {reason})")


class SpreadsheetRenderer:
    """
    Render a SectionModel to an .xlsx workbook with a single sheet.

    Rows are streamed with XlsxWriter's constant_memory mode, so only the
    current row is held in memory; column widths are tracked as rows are
    written and applied once at the end. Merged title cells do not count
    towards column widths.
    """

    export_format = ExportFormat.EXCEL
    content_type = XLSX_CONTENT_TYPE

    def __init__(
        self,
        style: Optional[StyleConfig] = None,
        constant_memory: bool = True,
        created: Optional[datetime] = None,
    ):
        self.style = style or DEFAULT_STYLE
        self.constant_memory = constant_memory
        self.created = created

    def render(self, model: SectionModel) -> bytes:
        output = io.BytesIO()
        with xlsxwriter.Workbook(output, {"constant_memory": self.constant_memory}) as workbook:
            if self.created is not None:
                workbook.set_properties({"created": self.created})
            worksheet = workbook.add_worksheet(safe_sheet_name(model.sheet_name))
            formats = {
                RowKind.TITLE: workbook.add_format(self.style.title.to_format(self.style.border_color)),
                RowKind.HEADER: workbook.add_format(self.style.header.to_format(self.style.border_color)),
                RowKind.DATA: workbook.add_format(self.style.data.to_format(self.style.border_color)),
            }

            widths: dict[int, int] = {}
            row_count = 0
            for row_index, row in enumerate(model.iter_rows()):
                self._write_row(worksheet, row_index, row, formats, widths)
                row_count = row_index + 1

            for col, chars in widths.items():
                worksheet.set_column(col, col, self.style.column_width(chars))

        logger.debug(f"Rendered spreadsheet: {row_count} rows, {len(widths)} columns")
        return output.getvalue()

    def _write_row(self, worksheet, row_index: int, row: Row, formats: dict, widths: dict[int, int]) -> None:
        if row.kind is RowKind.BLANK:
            return

        cell_format = formats[row.kind]
        if row.kind is RowKind.TITLE and row.merge_columns > 1:
            code = worksheet.merge_range(row_index, 0, row_index, row.merge_columns - 1, row.cells[0], cell_format)
            _check_write(code, row_index, 0)
            return

        for col, value in enumerate(row.cells):
            _check_write(worksheet.write_string(row_index, col, value, cell_format), row_index, col)
            widths[col] = max(widths.get(col, 0), _display_length(value))


class DelimitedTextRenderer:
    """
    Render a SectionModel to CSV text.

    Output is UTF-8 with a leading byte-order mark so spreadsheet applications
    detect the encoding. Values are quoted only when they contain the
    delimiter, the quote character or a line break. Blank rows become empty
    lines, mirroring the blank rows of the spreadsheet output.
    """

    export_format = ExportFormat.CSV
    content_type = CSV_CONTENT_TYPE

    def __init__(self, delimiter: str = ",", lineterminator: str = "\r\n"):
        self.delimiter = delimiter
        self.lineterminator = lineterminator

    def render(self, model: SectionModel) -> bytes:
        buffer = io.StringIO()
        buffer.write(UTF8_BOM)
        writer = csv.writer(
            buffer,
            delimiter=self.delimiter,
            quoting=csv.QUOTE_MINIMAL,
            lineterminator=self.lineterminator,
        )
        for row in model.iter_rows():
            writer.writerow(row.cells)
        return buffer.getvalue().encode("utf-8")


RENDERERS = {
    ExportFormat.EXCEL: SpreadsheetRenderer,
    ExportFormat.CSV: DelimitedTextRenderer,
}


def get_renderer(
    export_format: ExportFormat,
    style: Optional[StyleConfig] = None,
    constant_memory: bool = True,
    created: Optional[datetime] = None,
):
    """
    Create the renderer for a format.

    Spreadsheet options (style, constant_memory, created) are ignored for CSV.
    """
    if export_format is ExportFormat.EXCEL:
        return SpreadsheetRenderer(style=style, constant_memory=constant_memory, created=created)
    return RENDERERS[export_format]()
