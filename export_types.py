#!/usr/bin/env python3
"""
Data types for result exports.

Contains: Role, Language, ExportFormat, ReportVariant and QuestionType enums,
RowKind, Row, Section and SectionModel dataclasses, and distribution
percentage helpers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional


class Role(Enum):
    """Requester role. Governs which columns and sections are visible."""
    CREATOR = "creator"
    VIEWER = "viewer"

    @classmethod
    def from_token(cls, token: Optional[str]) -> "Role":
        """Parse a role token. Anything other than 'creator' is a viewer."""
        if token and token.strip().lower() == cls.CREATOR.value:
            return cls.CREATOR
        return cls.VIEWER

    @property
    def is_creator(self) -> bool:
        return self is Role.CREATOR


class Language(Enum):
    """Output language."""
    EN = "en"
    AR = "ar"

    @classmethod
    def from_code(cls, code: Optional[str]) -> "Language":
        """Parse a language code, defaulting to English for unknown values."""
        if code:
            normalized = code.strip().lower()
            for language in cls:
                if language.value == normalized:
                    return language
        return cls.EN

    @property
    def script_range(self) -> str:
        """Regex character-class fragment for the language's native script."""
        return NATIVE_SCRIPT_RANGES.get(self, "")


# Native script ranges, used when sanitizing filenames
NATIVE_SCRIPT_RANGES = {
    Language.AR: "\u0600-\u06FF",
}


class ExportFormat(Enum):
    """Tabular output formats."""
    EXCEL = "excel"
    CSV = "csv"

    @classmethod
    def from_token(cls, token: str) -> "ExportFormat":
        """Parse a format token ('excel', 'xlsx' or 'csv', case-insensitive)."""
        normalized = (token or "").strip().lower()
        if normalized in ("excel", "xlsx"):
            return cls.EXCEL
        if normalized == "csv":
            return cls.CSV
        raise ValueError(f"Unsupported export format: {token!r}")

    @property
    def extension(self) -> str:
        return ".xlsx" if self is ExportFormat.EXCEL else ".csv"


class ReportVariant(Enum):
    """Report shapes with their own label catalogs and section layouts."""
    ELECTION = "election"
    SURVEY = "survey"

    @classmethod
    def from_token(cls, token: str) -> "ReportVariant":
        """Parse a variant token ('election' or 'survey', case-insensitive)."""
        normalized = (token or "").strip().lower()
        for variant in cls:
            if variant.value == normalized:
                return variant
        raise ValueError(f"Unsupported report variant: {token!r}")


class QuestionType(Enum):
    """Survey question type tags."""
    TEXT_SINGLE_LINE = "TEXT_SINGLE_LINE"
    TEXT_MULTI_LINE = "TEXT_MULTI_LINE"
    TEXT_URL = "TEXT_URL"
    TEXT_NUMBER = "TEXT_NUMBER"
    TEXT_DATE = "TEXT_DATE"
    TEXT_DATETIME = "TEXT_DATETIME"
    RANKING = "RANKING"
    MULTI_SELECTION = "MULTI_SELECTION"
    MULTI_CHOICE = "MULTI_CHOICE"
    RATING_RANGE = "RATING_RANGE"
    RATING_STARS = "RATING_STARS"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "QuestionType":
        """Classify a raw type tag. Unrecognized tags are UNKNOWN."""
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_text_type(self) -> bool:
        """Single scalar answer."""
        return self in TEXT_TYPES

    @property
    def is_multi_answer_type(self) -> bool:
        """One row per answer entry."""
        return self in MULTI_ANSWER_TYPES


TEXT_TYPES = frozenset({
    QuestionType.TEXT_SINGLE_LINE,
    QuestionType.TEXT_MULTI_LINE,
    QuestionType.TEXT_URL,
    QuestionType.TEXT_NUMBER,
    QuestionType.TEXT_DATE,
    QuestionType.TEXT_DATETIME,
})

MULTI_ANSWER_TYPES = frozenset({
    QuestionType.RANKING,
    QuestionType.MULTI_SELECTION,
    QuestionType.MULTI_CHOICE,
    QuestionType.RATING_RANGE,
    QuestionType.RATING_STARS,
})


def distribution_percentages(distribution: dict[str, int]) -> list[tuple[str, float]]:
    """
    Compute category percentages for a distribution.

    Source order is preserved. All percentages are 0.0 when the total is 0.

    Args:
        distribution: Ordered mapping of category -> count

    Returns:
        List of (category, percentage) pairs
    """
    total = sum(distribution.values())
    if total == 0:
        return [(category, 0.0) for category in distribution]
    return [(category, count / total * 100) for category, count in distribution.items()]


def format_percentage(value: float) -> str:
    """Format a percentage with two decimals and a trailing '%'."""
    return f"{value:.2f}%"


class RowKind(Enum):
    """Kind of a flattened row, which selects its rendering style."""
    TITLE = "title"
    HEADER = "header"
    DATA = "data"
    BLANK = "blank"


@dataclass
class Row:
    """A flattened row as seen by renderers."""
    kind: RowKind
    cells: list[str] = field(default_factory=list)
    merge_columns: int = 0  # Only meaningful for TITLE rows


@dataclass
class Section:
    """
    A titled block of rows with a fixed column count.

    The column count is fixed by the header; every data row added later must
    have exactly that many cells.

    Attributes:
        key: Semantic key of the section (e.g. "RESULTS_SUMMARY")
        title: Resolved title text, or None for an untitled section
        header: Header row cells
        rows: Data rows
        merge_title_columns: Number of columns the title spans (0 = no merge)
    """
    key: str
    title: Optional[str]
    header: list[str]
    rows: list[list[str]] = field(default_factory=list)
    merge_title_columns: int = 0

    @property
    def column_count(self) -> int:
        return len(self.header)

    def add_row(self, cells: list[str]) -> None:
        """Append a data row, enforcing the section's column count."""
        if len(cells) != self.column_count:
            raise ValueError(
                f"Row has {len(cells)} cells, section {self.key!r} expects {self.column_count}"
            )
        self.rows.append(list(cells))

    def iter_rows(self) -> Iterator[Row]:
        """Yield title, header and data rows in output order."""
        if self.title is not None:
            yield Row(RowKind.TITLE, [self.title], merge_columns=self.merge_title_columns)
        yield Row(RowKind.HEADER, list(self.header))
        for cells in self.rows:
            yield Row(RowKind.DATA, list(cells))


@dataclass
class SectionModel:
    """Renderer-agnostic export document: a sheet name and ordered sections."""
    sheet_name: str
    sections: list[Section] = field(default_factory=list)

    def add(self, section: Optional[Section]) -> None:
        """Append a section; None (an omitted section) is ignored."""
        if section is not None:
            self.sections.append(section)

    def get(self, key: str) -> Optional[Section]:
        """Return the first section with the given key, if present."""
        for section in self.sections:
            if section.key == key:
                return section
        return None

    def iter_rows(self) -> Iterator[Row]:
        """Yield every row of every section, with a blank row after each section."""
        for section in self.sections:
            yield from section.iter_rows()
            yield Row(RowKind.BLANK)
