"""
bulk_import/connectors/bulk_upload_client.py

HTTP client for the batch-import and template endpoints.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Sequence

import requests
from pydantic import ValidationError

from bulk_import import failure_codes
from bulk_import.config import BulkUploadSettings
from bulk_import.domain.entity_kind import EntityKind
from bulk_import.domain.records import JSON_MEDIA_TYPE, XLSX_MEDIA_TYPE
from bulk_import.schemas.import_result import ImportResult

logger = logging.getLogger(__name__)


class BulkUploadError(RuntimeError):
    """
    Base error for remote bulk upload failures.
    """

    code = failure_codes.UPLOAD_TRANSPORT

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BulkUploadTimeoutError(BulkUploadError):
    """
    Raised when the batch-import call exceeds the upload timeout.
    """

    code = failure_codes.UPLOAD_TIMEOUT


class BulkUploadTransportError(BulkUploadError):
    """
    Raised when no structured import result could be obtained.
    """


class TemplateDownloadError(BulkUploadError):
    """
    Raised when a template cannot be fetched.
    """

    code = failure_codes.TEMPLATE_DOWNLOAD


class BulkUploadClient:
    """
    Thin wrapper around the ``/bulk-uploads`` REST endpoints.

    Uploads are never retried: a batch may have been partly imported before
    the connection dropped, so resubmission is left to the operator.
    """

    def __init__(
        self,
        *,
        settings: BulkUploadSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = settings.api_base_url.rstrip("/")
        self._api_token = settings.api_token
        self._upload_timeout_seconds = settings.upload_timeout_seconds
        self._template_timeout_seconds = settings.template_timeout_seconds
        self._session = session or requests.Session()

    def import_batch(self, entity_kind: EntityKind, records: Sequence[Any]) -> ImportResult:
        """
        Submit one batch and return the server's import result.

        Non-2xx responses that still carry an import result are returned,
        not raised.
        """

        url = self._url("bulk-uploads", entity_kind.path_segment)
        started = time.monotonic()
        try:
            response = self._session.post(
                url,
                json=list(records),
                headers=self._headers(),
                timeout=self._upload_timeout_seconds,
            )
        except requests.Timeout as exc:
            logger.error(
                "Bulk upload timed out entity_kind=%s records=%s timeout_seconds=%s",
                entity_kind.value,
                len(records),
                self._upload_timeout_seconds,
            )
            raise BulkUploadTimeoutError(
                f"Bulk upload timed out after {self._upload_timeout_seconds:.0f} seconds."
            ) from exc
        except requests.RequestException as exc:
            logger.error(
                "Bulk upload request failed entity_kind=%s url=%s error=%s",
                entity_kind.value,
                url,
                exc,
            )
            raise BulkUploadTransportError(f"Bulk upload request failed: {exc}") from exc

        result = self._parse_import_result(response)
        logger.info(
            "Bulk upload finished entity_kind=%s status=%s success=%s imported=%s "
            "skipped=%s failed=%s elapsed_seconds=%.2f",
            entity_kind.value,
            response.status_code,
            result.success,
            result.summary.imported,
            result.summary.skipped,
            result.summary.failed,
            time.monotonic() - started,
        )
        return result

    def fetch_json_template(self, entity_kind: EntityKind) -> Any:
        response = self._get_template(self._url("bulk-uploads", "template", entity_kind.path_segment))
        try:
            return response.json()
        except ValueError as exc:
            raise TemplateDownloadError(
                f"{entity_kind.value}: template response was not valid JSON.",
                status_code=response.status_code,
            ) from exc

    def fetch_excel_template(self, entity_kind: EntityKind) -> bytes:
        response = self._get_template(
            self._url("bulk-uploads", "template", entity_kind.path_segment, "excel"),
            accept=XLSX_MEDIA_TYPE,
        )
        return response.content

    def _get_template(self, url: str, *, accept: str = JSON_MEDIA_TYPE) -> requests.Response:
        try:
            response = self._session.get(
                url,
                headers=self._headers(accept),
                timeout=self._template_timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            logger.error("Template download failed url=%s status=%s error=%s", url, status_code, exc)
            raise TemplateDownloadError(
                "Failed to download template",
                status_code=status_code,
            ) from exc
        return response

    @staticmethod
    def _parse_import_result(response: requests.Response) -> ImportResult:
        try:
            payload = response.json()
        except ValueError as exc:
            raise BulkUploadTransportError(
                f"Bulk upload response was not valid JSON (HTTP {response.status_code}).",
                status_code=response.status_code,
            ) from exc

        try:
            return ImportResult.model_validate(payload)
        except ValidationError as exc:
            raise BulkUploadTransportError(
                f"Bulk upload response was not an import result (HTTP {response.status_code}).",
                status_code=response.status_code,
            ) from exc

    def _headers(self, accept: str = JSON_MEDIA_TYPE) -> dict[str, str]:
        headers = {"Accept": accept}
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"
        return headers

    def _url(self, *segments: str) -> str:
        return "/".join([self._base_url, *segments])
