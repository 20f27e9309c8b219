"""
bulk_import/services/upload_orchestrator.py

State machine for one bulk upload session:

    IDLE -> FILE_SELECTED -> DECODING -> PREVIEWING -> UPLOADING -> COMPLETED | FAILED

Input-format errors send the session back to IDLE without partial state.
Transport failures end in FAILED while the decoded records are kept, so the
operator can resubmit without choosing the file again. ``cancel``/``close``
return to IDLE from anywhere. Template downloads do not touch the state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Any

from bulk_import import failure_codes
from bulk_import.config import BulkUploadSettings, get_bulk_upload_settings
from bulk_import.connectors.bulk_upload_client import (
    BulkUploadClient,
    BulkUploadError,
    BulkUploadTimeoutError,
)
from bulk_import.decoders.errors import DecodeError
from bulk_import.decoders.file_types import FileFormat, detect_file_format
from bulk_import.decoders.json_decoder import JSONDecoder
from bulk_import.decoders.tabular_decoder import TabularDecoder
from bulk_import.domain.entity_kind import EntityKind
from bulk_import.domain.records import TemplateArtifact
from bulk_import.logging_utils import log_event
from bulk_import.schemas.import_result import ImportResult
from bulk_import.services.import_report import ImportReport, build_import_report
from bulk_import.services.notifier import LoggingNotifier, Notifier
from bulk_import.services.template_service import TemplateFormat, TemplateService

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = (
    "Upload timeout - please try with smaller batches (200-300 records) "
    "or check server logs for progress"
)
TIMEOUT_NOTICE = "Upload timed out. For large datasets, consider splitting into smaller batches."
TRANSPORT_FAILURE_MESSAGE = "Failed to upload. Please try again."
DECODE_FAILURE_MESSAGE = "Failed to process file"
TEMPLATE_FAILURE_MESSAGE = "Failed to download template"


class UploadState(str, Enum):
    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    DECODING = "decoding"
    PREVIEWING = "previewing"
    UPLOADING = "uploading"
    COMPLETED = "completed"
    FAILED = "failed"


_FILE_SELECTABLE_STATES = frozenset(
    {
        UploadState.IDLE,
        UploadState.FILE_SELECTED,
        UploadState.PREVIEWING,
        UploadState.COMPLETED,
        UploadState.FAILED,
    }
)
_SUBMITTABLE_STATES = frozenset({UploadState.PREVIEWING, UploadState.FAILED})


class InvalidTransitionError(RuntimeError):
    """
    Raised when an action is not allowed in the current upload state.
    """

    def __init__(self, *, action: str, state: UploadState) -> None:
        super().__init__(f"Cannot {action} while upload is {state.value}.")
        self.action = action
        self.state = state


class UploadOrchestrator:
    """
    Coordinates file selection, decoding, preview, submission and results.
    """

    def __init__(
        self,
        entity_kind: EntityKind,
        *,
        client: BulkUploadClient,
        notifier: Notifier | None = None,
        on_success: Callable[[], None] | None = None,
        settings: BulkUploadSettings | None = None,
        templates: TemplateService | None = None,
        tabular_decoder: TabularDecoder | None = None,
        json_decoder: JSONDecoder | None = None,
    ) -> None:
        self.entity_kind = entity_kind
        self._client = client
        self._notifier: Notifier = notifier or LoggingNotifier()
        self._on_success = on_success
        self._settings = settings or get_bulk_upload_settings()
        self._templates = templates or TemplateService(client=client)
        self._tabular_decoder = tabular_decoder or TabularDecoder(
            max_rows=self._settings.max_rows,
            log_fallbacks=self._settings.log_coercion_fallbacks,
        )
        self._json_decoder = json_decoder or JSONDecoder(max_rows=self._settings.max_rows)

        self._state = UploadState.IDLE
        self._filename: str | None = None
        self._records: list[Any] | None = None
        self._result: ImportResult | None = None
        self._error_message: str | None = None

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def state(self) -> UploadState:
        return self._state

    @property
    def filename(self) -> str | None:
        return self._filename

    @property
    def records(self) -> list[Any]:
        return list(self._records or [])

    @property
    def record_count(self) -> int:
        return len(self._records or [])

    @property
    def preview(self) -> list[Any]:
        return list((self._records or [])[: self._settings.preview_size])

    @property
    def result(self) -> ImportResult | None:
        return self._result

    @property
    def report(self) -> ImportReport | None:
        if self._result is None:
            return None
        return build_import_report(
            self._result,
            error_limit=self._settings.error_display_limit,
            advisory_limit=self._settings.advisory_display_limit,
        )

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @property
    def can_submit(self) -> bool:
        return self._state in _SUBMITTABLE_STATES and bool(self._records)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def select_file(self, filename: str, content: bytes) -> UploadState:
        """
        Accept a file and decode it straight away into a previewable batch.
        """

        if self._state not in _FILE_SELECTABLE_STATES:
            raise InvalidTransitionError(action="select a file", state=self._state)

        self._discard()
        if self._state is not UploadState.IDLE:
            self._transition(UploadState.IDLE)

        try:
            file_format = detect_file_format(filename)
        except DecodeError as exc:
            self._reject_input(exc.message, code=exc.code, filename=filename)
            return self._state

        self._filename = filename
        self._transition(UploadState.FILE_SELECTED, filename=filename, bytes=len(content))
        self._transition(UploadState.DECODING, format=file_format.value)

        if file_format is FileFormat.EXCEL:
            self._notifier.info("Parsing Excel file...", "Processing")

        try:
            records = self._decode(file_format, content)
        except DecodeError as exc:
            self._reject_input(exc.message, code=exc.code, filename=filename)
            return self._state
        except Exception:  # noqa: BLE001
            logger.exception(
                "Unexpected failure decoding upload entity_kind=%s filename=%s",
                self.entity_kind.value,
                filename,
            )
            self._reject_input(DECODE_FAILURE_MESSAGE, code="decode_error", filename=filename)
            return self._state

        self._records = records
        self._transition(UploadState.PREVIEWING, records=len(records))
        if file_format is FileFormat.EXCEL:
            self._notifier.success(f"Successfully parsed {len(records)} records from Excel file")
        return self._state

    def submit(self) -> ImportResult | None:
        """
        Send the decoded batch; only ever triggered by the operator.

        Returns the import result, or ``None`` when no structured result
        was received.
        """

        if self._state not in _SUBMITTABLE_STATES or self._records is None:
            raise InvalidTransitionError(action="upload", state=self._state)

        if not self._records:
            self._notifier.error("No records to upload")
            return None

        record_count = len(self._records)
        self._result = None
        self._error_message = None
        self._transition(UploadState.UPLOADING, records=record_count)

        if record_count > self._settings.large_batch_threshold:
            self._notifier.info(
                f"Uploading {record_count} records - this may take several minutes...",
                "Large Upload",
            )

        try:
            result = self._client.import_batch(self.entity_kind, self._records)
        except BulkUploadTimeoutError as exc:
            self._error_message = TIMEOUT_MESSAGE
            self._transition(UploadState.FAILED, code=exc.code)
            self._notifier.error(TIMEOUT_NOTICE)
            return None
        except BulkUploadError as exc:
            self._error_message = TRANSPORT_FAILURE_MESSAGE
            self._transition(UploadState.FAILED, code=exc.code, status_code=exc.status_code)
            self._notifier.error(TRANSPORT_FAILURE_MESSAGE)
            return None
        except Exception:  # noqa: BLE001
            logger.exception(
                "Unexpected failure uploading batch entity_kind=%s records=%s",
                self.entity_kind.value,
                record_count,
            )
            self._error_message = TRANSPORT_FAILURE_MESSAGE
            self._transition(UploadState.FAILED, code=failure_codes.UPLOAD_ERROR)
            self._notifier.error(TRANSPORT_FAILURE_MESSAGE)
            return None

        self._result = result
        self._transition(
            UploadState.COMPLETED,
            success=result.success,
            imported=result.summary.imported,
            failed=result.summary.failed,
        )

        if result.success:
            self._notifier.success(f"{result.message} ({result.summary.imported} records imported)")
            self._run_success_callback()
        else:
            self._notifier.error(result.message or "Upload failed")
        return result

    def cancel(self) -> None:
        """
        Drop the file, records and result and go back to IDLE.
        """

        self._discard()
        if self._state is not UploadState.IDLE:
            self._transition(UploadState.IDLE)

    close = cancel

    def fetch_template(self, template_format: str) -> TemplateArtifact | None:
        """
        Fetch an example file; independent of the upload state.
        """

        try:
            artifact = self._templates.template(self.entity_kind, template_format)
        except BulkUploadError as exc:
            logger.error(
                "Template fetch failed entity_kind=%s format=%s error=%s",
                self.entity_kind.value,
                template_format,
                exc,
            )
            self._notifier.error(TEMPLATE_FAILURE_MESSAGE)
            return None
        return artifact

    def download_template(self, template_format: str, directory: str | Path) -> Path | None:
        artifact = self.fetch_template(template_format)
        if artifact is None:
            return None
        try:
            path = self._templates.save(artifact, directory)
        except OSError as exc:
            logger.error("Template save failed directory=%s error=%s", directory, exc)
            self._notifier.error(TEMPLATE_FAILURE_MESSAGE)
            return None

        label = "Excel" if template_format == TemplateFormat.EXCEL else "JSON"
        self._notifier.success(f"{label} template downloaded successfully")
        return path

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _decode(self, file_format: FileFormat, content: bytes) -> list[Any]:
        if file_format is FileFormat.JSON:
            return self._json_decoder.decode(content)
        return self._tabular_decoder.decode(content, self.entity_kind)

    def _reject_input(self, message: str, *, code: str, filename: str) -> None:
        self._discard()
        self._error_message = message
        if self._state is not UploadState.IDLE:
            self._transition(UploadState.IDLE, code=code, filename=filename)
        else:
            log_event(
                logger,
                logging.INFO,
                "upload_input_rejected",
                entity_kind=self.entity_kind.value,
                code=code,
                filename=filename,
            )
        self._notifier.error(message)

    def _run_success_callback(self) -> None:
        if self._on_success is None:
            return
        try:
            self._on_success()
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Post-upload refresh callback failed entity_kind=%s: %s",
                self.entity_kind.value,
                exc,
            )

    def _discard(self) -> None:
        self._filename = None
        self._records = None
        self._result = None
        self._error_message = None

    def _transition(self, target: UploadState, **fields: Any) -> None:
        log_event(
            logger,
            logging.INFO,
            "upload_state_transition",
            entity_kind=self.entity_kind.value,
            from_state=self._state.value,
            to_state=target.value,
            **fields,
        )
        self._state = target
