"""
bulk_import/services/import_report.py

Display model for an import result: counts, truncated error and advisory
lists, and a plain-text rendering for terminals.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bulk_import.schemas.import_result import ImportResult


@dataclass(frozen=True)
class ReportRecordError:
    record_number: int
    messages: list[str]


@dataclass(frozen=True)
class ImportReport:
    """
    What the operator sees after an upload.
    """

    success: bool
    message: str
    counts: dict[str, int]
    record_errors: list[ReportRecordError] = field(default_factory=list)
    hidden_error_count: int = 0
    skipped_reasons: list[str] = field(default_factory=list)
    hidden_skipped_count: int = 0
    image_warnings: list[str] = field(default_factory=list)
    hidden_warning_count: int = 0

    @property
    def status(self) -> str:
        return "success" if self.success else "failure"


def build_import_report(
    result: ImportResult,
    *,
    error_limit: int = 10,
    advisory_limit: int = 5,
) -> ImportReport:
    """
    Build the display model; skipped/failed counts appear only when non-zero.
    """

    summary = result.summary
    counts = {"total": summary.total, "imported": summary.imported}
    if summary.skipped > 0:
        counts["skipped"] = summary.skipped
    if summary.failed > 0:
        counts["failed"] = summary.failed

    visible_errors = result.errors[:error_limit]
    visible_skipped = result.skipped_records[:advisory_limit]
    visible_warnings = result.image_warnings[:advisory_limit]

    return ImportReport(
        success=result.success,
        message=result.message,
        counts=counts,
        record_errors=[
            ReportRecordError(record_number=error.record_number, messages=list(error.errors))
            for error in visible_errors
        ],
        hidden_error_count=len(result.errors) - len(visible_errors),
        skipped_reasons=[skip.reason for skip in visible_skipped],
        hidden_skipped_count=len(result.skipped_records) - len(visible_skipped),
        image_warnings=[warning.reason for warning in visible_warnings],
        hidden_warning_count=len(result.image_warnings) - len(visible_warnings),
    )


def render_report_text(report: ImportReport) -> str:
    lines = [f"[{report.status.upper()}] {report.message}".rstrip()]
    lines.append("  ".join(f"{name.title()}: {value}" for name, value in report.counts.items()))

    if report.record_errors:
        lines.append("")
        lines.append("Validation Errors")
        for error in report.record_errors:
            lines.append(f"  Record {error.record_number}:")
            lines.extend(f"    - {message}" for message in error.messages)
        if report.hidden_error_count:
            lines.append(f"  ... and {report.hidden_error_count} more errors")

    if report.skipped_reasons:
        lines.append("")
        lines.append("Skipped Records")
        lines.extend(f"  - {reason}" for reason in report.skipped_reasons)
        if report.hidden_skipped_count:
            lines.append(f"  ... and {report.hidden_skipped_count} more skipped")

    if report.image_warnings:
        lines.append("")
        lines.append("Image Warnings")
        lines.extend(f"  - {reason}" for reason in report.image_warnings)
        if report.hidden_warning_count:
            lines.append(f"  ... and {report.hidden_warning_count} more warnings")

    return "\n".join(lines)
