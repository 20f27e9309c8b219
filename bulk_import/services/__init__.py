"""
bulk_import/services package marker.
"""

from bulk_import.services.import_report import ImportReport, build_import_report, render_report_text
from bulk_import.services.notifier import LoggingNotifier, Notice, Notifier, RecordingNotifier
from bulk_import.services.template_service import TemplateFormat, TemplateService
from bulk_import.services.upload_orchestrator import (
    InvalidTransitionError,
    UploadOrchestrator,
    UploadState,
)

__all__ = [
    "ImportReport",
    "build_import_report",
    "render_report_text",
    "LoggingNotifier",
    "Notice",
    "Notifier",
    "RecordingNotifier",
    "TemplateFormat",
    "TemplateService",
    "InvalidTransitionError",
    "UploadOrchestrator",
    "UploadState",
]
