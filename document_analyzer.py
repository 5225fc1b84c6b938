#!/usr/bin/env python3
"""
Shape probing and tolerant field access for source documents.

Source documents are JSON-like trees with no enforced schema. Every accessor
here tolerates absent or oddly-typed fields and returns a default instead of
raising; only the coordinator decides that a document is unusable.

Contains: as_text, as_int, as_double, DocumentAnalyzer.
"""

import math
from typing import Any, Optional

from export_types import ReportVariant


def as_text(value: Any, default: str = "") -> str:
    """
    Render a scalar JSON value as text.

    None renders as `default`; objects and arrays render as empty text.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return repr(value)
    return ""


def as_int(value: Any, default: int = 0) -> int:
    """Coerce a JSON value to int (numbers, numeric strings, booleans)."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return default
        return int(number) if math.isfinite(number) else default
    return default


def as_double(value: Any, default: float = 0.0) -> float:
    """Coerce a JSON value to float (numbers, numeric strings, booleans)."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return default
    return default


class DocumentAnalyzer:
    """
    Read-only view over the `data` node of a source document.

    Presence checks are key-existence checks: a field that is present with a
    null or empty value still counts as present.
    """

    # Optional main-data columns, in output order
    OPTIONAL_COLUMNS = ("startDate", "endDate")

    def __init__(self, document: dict):
        self.document = document if isinstance(document, dict) else {}
        data = self.document.get("data")
        self.data = data if isinstance(data, dict) else {}

    def has(self, key: str) -> bool:
        return key in self.data

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def optional_columns(self) -> list[str]:
        """Optional column identifiers present in the source, in fixed order."""
        return [column for column in self.OPTIONAL_COLUMNS if self.has(column)]

    def main_data_columns(self) -> list[str]:
        """Column identifiers of the election Main Data section."""
        return [
            "electionId",
            "electionName",
            "electionDescription",
            *self.optional_columns(),
            "exportType",
        ]

    def field_text(self, key: str, default: str = "", missing: Optional[str] = None) -> str:
        """
        Text of a top-level data field.

        Args:
            key: Field name under `data`
            default: Value for a null field (and for an absent one, unless `missing` is set)
            missing: Value for an absent field
        """
        if key not in self.data:
            return default if missing is None else missing
        return as_text(self.data[key], default)

    def list_field(self, key: str) -> Optional[list]:
        """The field as a list, or None when absent or not an array."""
        value = self.data.get(key)
        return value if isinstance(value, list) else None

    def distribution(self, key: str) -> dict[str, int]:
        """
        Category counts from `data.analytics.<key>`, in source order.

        Returns an empty dict when analytics or the distribution is absent or
        not an object.
        """
        analytics = self.data.get("analytics")
        if not isinstance(analytics, dict):
            return {}
        distribution = analytics.get(key)
        if not isinstance(distribution, dict):
            return {}
        return {str(category): as_int(count) for category, count in distribution.items()}

    def detect_variant(self) -> ReportVariant:
        """Guess the report variant from the fields the document carries."""
        if self.has("questionResults") or self.has("voteTitle"):
            return ReportVariant.SURVEY
        return ReportVariant.ELECTION

    def title(self, variant: ReportVariant) -> str:
        """Human-readable title used to name the export file."""
        key = "voteTitle" if variant is ReportVariant.SURVEY else "electionName"
        return self.field_text(key).strip()
