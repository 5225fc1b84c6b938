#!/usr/bin/env python3
"""
Command-line interface for the result export tool.

Usage:
    python cli.py --help
    python cli.py export <input> [options]
    python cli.py --version
"""

import argparse
import logging
import sys
from pathlib import Path

from config import get_config
from document_source import load_document
from export_coordinator import ExportCoordinator
from export_errors import ExportError
from export_types import ExportFormat, Language, ReportVariant, Role
from logging_config import level_for_verbosity, setup_logging
from version import __version__

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_EXPORT_FAILED = 1
EXIT_USAGE = 2


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="result-export",
        description="""
Result Export - Turn election and survey result documents into spreadsheets.

Reads a results JSON document and writes a styled Excel workbook or a CSV
file, in English or Arabic, with creator-only sections included or left out
depending on the requesting role.

Examples:
  %(prog)s export results.json                           # Viewer Excel, English
  %(prog)s export results.json --role creator --lang ar  # Creator Excel, Arabic
  %(prog)s export https://host/api/results --format csv  # Fetch and export CSV
  cat survey.json | %(prog)s export - --variant survey   # Read from stdin
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Export command
    export_parser = subparsers.add_parser(
        "export",
        help="Export a results document",
        description="Build the export file for one document, role, language and format."
    )
    export_parser.add_argument(
        "input",
        help="JSON file, http(s) URL, or - for stdin"
    )
    export_parser.add_argument(
        "--role", "-r",
        choices=[role.value for role in Role],
        default=Role.VIEWER.value,
        help="Requesting role (default: viewer)"
    )
    export_parser.add_argument(
        "--format", "-f",
        dest="export_format",
        choices=["excel", "xlsx", "csv"],
        default=ExportFormat.EXCEL.value,
        help="Output format (default: excel)"
    )
    export_parser.add_argument(
        "--lang", "-l",
        choices=[language.value for language in Language],
        default=None,
        help="Label language (default: EXPORT_DEFAULT_LANGUAGE or en)"
    )
    export_parser.add_argument(
        "--variant",
        choices=[variant.value for variant in ReportVariant],
        default=None,
        help="Report variant (default: detected from the document)"
    )
    export_parser.add_argument(
        "--output-dir", "-o",
        default=None,
        help="Directory to write the export to (default: EXPORT_OUTPUT_DIR or exports)"
    )
    export_parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase verbosity (-v, -vv)"
    )

    return parser


def run_export(args: argparse.Namespace) -> int:
    """
    Run the export command.

    Returns:
        Process exit code
    """
    settings = get_config()
    language = Language.from_code(args.lang or settings.default_language)
    variant = ReportVariant(args.variant) if args.variant else None

    try:
        document = load_document(
            args.input,
            language,
            timeout=settings.source_fetch_timeout,
            max_bytes=settings.source_max_bytes,
        )
    except ExportError as e:
        logger.error(f"Could not read {args.input}: {e.message}")
        print(e.message, file=sys.stderr)
        return EXIT_EXPORT_FAILED
    except (OSError, ValueError) as e:
        logger.error(f"Could not read {args.input}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    coordinator = ExportCoordinator(constant_memory=settings.excel_constant_memory)
    try:
        result = coordinator.export(document, args.role, language, args.export_format, variant)
    except ExportError as e:
        logger.error(f"Export of {args.input} failed: {e.message}")
        print(e.message, file=sys.stderr)
        return EXIT_EXPORT_FAILED

    output_dir = Path(args.output_dir or settings.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / result.filename
    output_path.write_bytes(result.content)
    logger.info(f"Wrote {output_path} ({result.size} bytes, {result.content_type})")

    print(output_path)
    return EXIT_OK


def main(argv=None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_USAGE

    setup_logging(level=level_for_verbosity(args.verbose))

    issues = get_config().validate()
    for issue in issues:
        logger.warning(f"Config: {issue}")

    if args.command == "export":
        return run_export(args)

    parser.print_help()
    return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
