#!/usr/bin/env python3
"""
Export error types with localized messages.

Contains: ExportError, MalformedInputError, RenderError, InvalidOptionError,
localized_message.
"""

from export_types import Language


ERROR_MESSAGES = {
    Language.EN: {
        "export_failed": "An error occurred during export: {detail}",
        "malformed_input": "The source document is not valid: {detail}",
        "render_failed": "The export file could not be generated: {detail}",
        "invalid_option": "Unsupported export option: {detail}",
    },
    Language.AR: {
        "export_failed": "حدث خطأ أثناء التصدير: {detail}",
        "malformed_input": "مستند المصدر غير صالح: {detail}",
        "render_failed": "تعذر إنشاء ملف التصدير: {detail}",
        "invalid_option": "خيار تصدير غير مدعوم: {detail}",
    },
}


def localized_message(kind: str, language: Language, detail: object = "") -> str:
    """
    Build an error message in the requested language.

    Falls back to English when the language has no table, and to the bare
    detail when the kind is unknown.
    """
    messages = ERROR_MESSAGES.get(language) or ERROR_MESSAGES[Language.EN]
    template = messages.get(kind)
    if template is None:
        return str(detail)
    return template.format(detail=detail)


class ExportError(Exception):
    """An export call failed. The message is localized to `language`."""

    kind = "export_failed"

    def __init__(self, message: str, language: Language = Language.EN):
        super().__init__(message)
        self.message = message
        self.language = language

    @classmethod
    def localized(cls, language: Language, detail: object = "") -> "ExportError":
        """Create the error with its message template filled in for `language`."""
        return cls(localized_message(cls.kind, language, detail), language)


class MalformedInputError(ExportError):
    """The source document is not a usable tree (unparsable or wrong shape)."""

    kind = "malformed_input"


class RenderError(ExportError):
    """Writing to the output backend failed."""

    kind = "render_failed"


class InvalidOptionError(ExportError, ValueError):
    """An export option token (format or report variant) is not supported."""

    kind = "invalid_option"
