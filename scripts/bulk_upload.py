"""
Run a bulk upload or fetch an import template from CLI.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from bulk_import.config import configure_logging, get_bulk_upload_settings
from bulk_import.connectors.bulk_upload_client import BulkUploadClient
from bulk_import.domain.entity_kind import EntityKind
from bulk_import.services.import_report import render_report_text
from bulk_import.services.template_service import TemplateFormat
from bulk_import.services.upload_orchestrator import UploadOrchestrator, UploadState


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bulk import records into the listings backend.")
    parser.add_argument(
        "--entity",
        dest="entity",
        required=True,
        choices=[kind.value for kind in EntityKind],
        help="Entity kind to import.",
    )
    parser.add_argument(
        "--file",
        dest="file",
        default=None,
        help="JSON (.json) or Excel (.xlsx, .xls) file to upload.",
    )
    parser.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Decode and print the records without uploading.",
    )
    parser.add_argument(
        "--template",
        dest="template",
        choices=[TemplateFormat.JSON, TemplateFormat.EXCEL],
        default=None,
        help="Download the example file instead of uploading.",
    )
    parser.add_argument(
        "--output-dir",
        dest="output_dir",
        default=".",
        help="Directory for downloaded templates.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.template is None and args.file is None:
        parser.error("one of --file or --template is required")

    configure_logging()
    settings = get_bulk_upload_settings()
    orchestrator = UploadOrchestrator(
        EntityKind.parse(args.entity),
        client=BulkUploadClient(settings=settings),
        settings=settings,
    )

    if args.template is not None:
        path = orchestrator.download_template(args.template, args.output_dir)
        if path is None:
            return 1
        print(path)
        return 0

    file_path = Path(args.file)
    orchestrator.select_file(file_path.name, file_path.read_bytes())
    if orchestrator.state is not UploadState.PREVIEWING:
        print(orchestrator.error_message or "Failed to process file")
        return 1

    if args.dry_run:
        print(json.dumps(orchestrator.records, indent=2, ensure_ascii=False, default=str))
        return 0

    if orchestrator.record_count == 0:
        print("No records to upload")
        return 1

    orchestrator.submit()
    report = orchestrator.report
    if report is None:
        print(orchestrator.error_message or "Upload failed")
        return 1

    print(render_report_text(report))
    return 0 if report.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
