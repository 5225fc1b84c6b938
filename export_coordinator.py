#!/usr/bin/env python3
"""
Export coordination: role x language x format -> file bytes.

Contains: ExportResult, sanitize_title, build_filename, ExportCoordinator,
export_document.

Usage:
    from export_coordinator import export_document

    result = export_document(document, role="creator", language="ar", export_format="excel")
    Path(result.filename).write_bytes(result.content)
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Union

from document_analyzer import DocumentAnalyzer
from document_source import parse_document
from export_errors import ExportError, InvalidOptionError, MalformedInputError, RenderError
from export_renderers import StyleConfig, get_renderer
from export_types import ExportFormat, Language, ReportVariant, Role
from logging_config import LogContext
from section_builder import build_section_model

logger = logging.getLogger(__name__)


TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

# Filename stem when the document has no usable title
DEFAULT_TITLES = {
    ReportVariant.ELECTION: "unnamed_election",
    ReportVariant.SURVEY: "export",
}


@dataclass
class ExportResult:
    """A finished export, ready to hand to a transport layer."""
    content: bytes
    filename: str
    content_type: str
    export_format: ExportFormat
    role: Role
    language: Language
    variant: ReportVariant

    @property
    def size(self) -> int:
        return len(self.content)


def sanitize_title(title: str) -> str:
    """
    Make a document title safe for use in a filename.

    Whitespace runs become a single underscore; anything other than ASCII
    letters and digits, the native scripts of the supported languages,
    underscore, dot and hyphen becomes an underscore.
    """
    scripts = "".join(language.script_range for language in Language)
    collapsed = re.sub(r"\s+", "_", title.strip())
    return re.sub(rf"[^A-Za-z0-9_.\-{scripts}]", "_", collapsed)


def build_filename(
    role: Role,
    title: str,
    timestamp: datetime,
    export_format: ExportFormat,
    variant: ReportVariant = ReportVariant.ELECTION,
) -> str:
    """Suggested filename: {role}_{title}_{YYYYMMDD_HHMMSS}{extension}."""
    safe_title = sanitize_title(title) or DEFAULT_TITLES[variant]
    return f"{role.value}_{safe_title}_{timestamp.strftime(TIMESTAMP_FORMAT)}{export_format.extension}"


def _coerce(value, enum_type, parse):
    return value if isinstance(value, enum_type) else parse(value)


class ExportCoordinator:
    """
    Builds and renders one export per call.

    Holds no per-call state: the style config is frozen and the clock is only
    read. A failed call raises; it never returns partial output.

    Example:
        coordinator = ExportCoordinator()
        result = coordinator.export(document, Role.VIEWER, Language.EN, ExportFormat.CSV)
        print(result.filename, result.size)
    """

    def __init__(
        self,
        style: Optional[StyleConfig] = None,
        constant_memory: bool = True,
        now: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            style: Spreadsheet styling (default StyleConfig())
            constant_memory: Stream spreadsheet rows instead of holding the sheet in memory
            now: Clock used for filenames and workbook metadata (default datetime.now)
        """
        self.style = style or StyleConfig()
        self.constant_memory = constant_memory
        self.now = now or datetime.now

    def export(
        self,
        document: Union[dict, str, bytes],
        role: Union[Role, str],
        language: Union[Language, str, None],
        export_format: Union[ExportFormat, str],
        variant: Union[ReportVariant, str, None] = None,
    ) -> ExportResult:
        """
        Export a document.

        Args:
            document: Parsed document, or its JSON text
            role: Role or role token ('creator' / 'viewer')
            language: Language or language code ('en' / 'ar'; unknown -> en)
            export_format: ExportFormat or format token ('excel' / 'csv')
            variant: ReportVariant or variant token ('election' / 'survey');
                detected from the document when None

        Returns:
            ExportResult with content bytes, filename and content type

        Raises:
            InvalidOptionError: Unsupported format or variant token (also a ValueError)
            MalformedInputError: Document is not a JSON object tree
            ExportError: Section building failed
            RenderError: Writing the output failed
        """
        role = _coerce(role, Role, Role.from_token)
        language = _coerce(language, Language, Language.from_code)
        try:
            export_format = _coerce(export_format, ExportFormat, ExportFormat.from_token)
            if variant is not None:
                variant = _coerce(variant, ReportVariant, ReportVariant.from_token)
        except ValueError as e:
            raise InvalidOptionError.localized(language, e) from e

        if isinstance(document, (str, bytes, bytearray)):
            document = parse_document(document, language)
        self._check_shape(document, language)

        analyzer = DocumentAnalyzer(document)
        if variant is None:
            variant = analyzer.detect_variant()
        timestamp = self.now()

        logger.info(
            f"Starting export: variant={variant.value}, type={role.value}, "
            f"format={export_format.value}, language={language.value}"
        )

        try:
            with LogContext(logger, "Building sections", variant=variant.value, role=role.value):
                model = build_section_model(document, role, language, variant)
        except Exception as e:
            logger.exception(f"Section building failed: {e}")
            raise ExportError.localized(language, e) from e

        renderer = get_renderer(
            export_format,
            style=self.style,
            constant_memory=self.constant_memory,
            created=timestamp,
        )
        try:
            with LogContext(logger, "Rendering", export_format=export_format.value, sections=len(model.sections)):
                content = renderer.render(model)
        except Exception as e:
            logger.exception(f"Rendering failed: {e}")
            raise RenderError.localized(language, e) from e

        filename = build_filename(role, analyzer.title(variant), timestamp, export_format, variant)
        logger.info(f"Export completed successfully: fileName={filename} ({len(content)} bytes)")

        return ExportResult(
            content=content,
            filename=filename,
            content_type=renderer.content_type,
            export_format=export_format,
            role=role,
            language=language,
            variant=variant,
        )

    def _check_shape(self, document, language: Language) -> None:
        if not isinstance(document, dict):
            raise MalformedInputError.localized(
                language, f"expected a JSON object, got {type(document).__name__}"
            )
        data = document.get("data")
        if data is not None and not isinstance(data, dict):
            raise MalformedInputError.localized(
                language, f"'data' must be a JSON object, got {type(data).__name__}"
            )


def export_document(
    document: Union[dict, str, bytes],
    role: Union[Role, str],
    language: Union[Language, str, None],
    export_format: Union[ExportFormat, str],
    variant: Union[ReportVariant, str, None] = None,
) -> ExportResult:
    """Export with a default ExportCoordinator."""
    return ExportCoordinator().export(document, role, language, export_format, variant)
