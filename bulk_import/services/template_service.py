"""
bulk_import/services/template_service.py

Example-file downloads per entity kind. The content comes from the server;
this module only frames it as a file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from bulk_import.connectors.bulk_upload_client import BulkUploadClient
from bulk_import.domain.entity_kind import EntityKind
from bulk_import.domain.records import JSON_MEDIA_TYPE, XLSX_MEDIA_TYPE, TemplateArtifact

logger = logging.getLogger(__name__)


class TemplateFormat:
    JSON = "json"
    EXCEL = "excel"


def template_filename(entity_kind: EntityKind, extension: str) -> str:
    return f"{entity_kind.value}-template.{extension}"


class TemplateService:
    def __init__(self, *, client: BulkUploadClient) -> None:
        self._client = client

    def json_template(self, entity_kind: EntityKind) -> TemplateArtifact:
        payload = self._client.fetch_json_template(entity_kind)
        content = json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")
        return TemplateArtifact(
            filename=template_filename(entity_kind, "json"),
            media_type=JSON_MEDIA_TYPE,
            content=content,
        )

    def excel_template(self, entity_kind: EntityKind) -> TemplateArtifact:
        return TemplateArtifact(
            filename=template_filename(entity_kind, "xlsx"),
            media_type=XLSX_MEDIA_TYPE,
            content=self._client.fetch_excel_template(entity_kind),
        )

    def template(self, entity_kind: EntityKind, template_format: str) -> TemplateArtifact:
        if template_format == TemplateFormat.EXCEL:
            return self.excel_template(entity_kind)
        if template_format == TemplateFormat.JSON:
            return self.json_template(entity_kind)
        raise ValueError(f"Unknown template format '{template_format}'. Allowed values: json, excel.")

    @staticmethod
    def save(artifact: TemplateArtifact, directory: str | Path) -> Path:
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / artifact.filename
        target.write_bytes(artifact.content)
        logger.info("Template saved path=%s bytes=%s", target, len(artifact.content))
        return target
