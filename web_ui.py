"""
Gradio Web UI for the result export tool.

Upload an election or survey results document, choose role, format and
language, and download the generated spreadsheet.

Usage:
    python web_ui.py

Then open http://localhost:7860 in your browser.

Features:
- JSON upload (file size capped by SOURCE_MAX_BYTES)
- Excel and CSV output, English and Arabic labels
- Creator/viewer role switch
- Localized error messages in the status box
"""

import gradio as gr
from typing import Optional
import tempfile
import os
import logging
from pathlib import Path

from config import get_config
from document_source import load_document
from export_coordinator import ExportCoordinator
from export_errors import ExportError
from export_types import Language, ReportVariant, Role
from logging_config import setup_logging

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".json"}
AUTO_VARIANT = "auto"


def validate_file(file_path: Optional[str]) -> tuple[bool, str]:
    """
    Validate an uploaded file for type and size constraints.

    Args:
        file_path: Path to the uploaded file

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not file_path:
        return False, "No file uploaded"

    if not os.path.isfile(file_path):
        return False, "File not found"

    ext = Path(file_path).suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        return False, f"Invalid file type: {ext}. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"

    max_bytes = get_config().source_max_bytes
    try:
        size = os.path.getsize(file_path)
        if size > max_bytes:
            return False, f"File too large: {size // (1024*1024)}MB (max {max_bytes // (1024*1024)}MB)"
        if size == 0:
            return False, "File is empty"
    except OSError as e:
        return False, f"Cannot read file: {e}"

    return True, "OK"


def run_export(file_path: Optional[str], role: str, export_format: str, language: str, variant: str) -> tuple[Optional[str], str]:
    """
    Export an uploaded document.

    Args:
        file_path: Uploaded JSON file path from gr.File
        role: 'creator' or 'viewer'
        export_format: 'excel' or 'csv'
        language: 'en' or 'ar'
        variant: 'election', 'survey' or 'auto'

    Returns:
        Tuple of (path to the export file or None, status message)
    """
    is_valid, message = validate_file(file_path)
    if not is_valid:
        logger.warning(f"Rejected upload: {message}")
        return None, f"Error: {message}"

    settings = get_config()
    lang = Language.from_code(language)
    report_variant = None if variant == AUTO_VARIANT else ReportVariant(variant)

    try:
        document = load_document(file_path, lang, max_bytes=settings.source_max_bytes)
        coordinator = ExportCoordinator(constant_memory=settings.excel_constant_memory)
        result = coordinator.export(document, role, lang, export_format, report_variant)
    except ExportError as e:
        logger.error(f"Export failed for upload {Path(file_path).name}: {e.message}")
        return None, e.message

    output_dir = Path(tempfile.mkdtemp(prefix="result_export_"))
    output_path = output_dir / result.filename
    output_path.write_bytes(result.content)
    logger.info(f"Export ready: {output_path} ({result.size} bytes)")

    return str(output_path), f"Exported {result.filename} ({result.size:,} bytes)"


def clear_form():
    """Reset the upload, output and status."""
    return None, None, ""


with gr.Blocks(title="Result Export") as demo:
    gr.Markdown("# Result Export / تصدير النتائج")
    gr.Markdown("""
Upload an election or survey results document (JSON) and download it as an
Excel workbook or CSV file.

**Creator** exports include voter names, demographic distributions and
participation insights. **Viewer** exports contain the results only.
""")

    with gr.Row():
        file_input = gr.File(
            label="Results document (JSON)",
            file_types=sorted(ALLOWED_EXTENSIONS),
            type="filepath",
        )

    with gr.Row():
        role_input = gr.Radio(
            choices=[role.value for role in Role],
            value=Role.VIEWER.value,
            label="Role",
        )
        format_input = gr.Radio(
            choices=["excel", "csv"],
            value="excel",
            label="Format",
        )
        language_input = gr.Radio(
            choices=[language.value for language in Language],
            value=Language.from_code(get_config().default_language).value,
            label="Language / اللغة",
        )
        variant_input = gr.Radio(
            choices=[AUTO_VARIANT] + [variant.value for variant in ReportVariant],
            value=AUTO_VARIANT,
            label="Report",
        )

    with gr.Row():
        export_btn = gr.Button("Export / تصدير", variant="primary", size="lg")
        clear_btn = gr.Button("Clear / مسح", variant="secondary", size="lg")

    with gr.Row():
        output_file = gr.File(label="Export file", visible=True)

    with gr.Row():
        status_output = gr.Textbox(label="Status / الحالة", lines=2, placeholder="Export status will appear here...")

    export_btn.click(
        fn=run_export,
        inputs=[file_input, role_input, format_input, language_input, variant_input],
        outputs=[output_file, status_output]
    )

    clear_btn.click(
        fn=clear_form,
        inputs=[],
        outputs=[file_input, output_file, status_output]
    )


if __name__ == "__main__":
    settings = get_config()
    setup_logging(level=settings.log_level)

    # Default to localhost. Set WEB_UI_HOST=0.0.0.0 to allow external access.
    server_name = settings.web_ui_host
    server_port = settings.web_ui_port

    if server_name == "0.0.0.0":
        logger.warning("Web UI binding to all network interfaces. This may expose the application.")
        logger.warning("Set WEB_UI_HOST=127.0.0.1 for local-only access.")

    logger.info(f"Starting web UI on http://{server_name}:{server_port}")
    demo.launch(server_name=server_name, server_port=server_port)
