from __future__ import annotations

import json
from pathlib import Path

import pytest

from bulk_import.config import BulkUploadSettings
from bulk_import.connectors.bulk_upload_client import BulkUploadClient
from bulk_import.domain.entity_kind import EntityKind
from bulk_import.domain.records import JSON_MEDIA_TYPE, XLSX_MEDIA_TYPE
from bulk_import.services.template_service import TemplateFormat, TemplateService
from tests.fakes import FakeResponse, FakeSession


def _service(session: FakeSession) -> TemplateService:
    client = BulkUploadClient(settings=BulkUploadSettings(api_base_url="http://api.test/api"), session=session)
    return TemplateService(client=client)


def test_json_template_is_pretty_printed() -> None:
    service = _service(FakeSession(FakeResponse(200, [{"title": "Villa", "city": "القاهرة"}])))

    artifact = service.template(EntityKind.PROPERTIES, TemplateFormat.JSON)

    assert artifact.filename == "properties-template.json"
    assert artifact.media_type == JSON_MEDIA_TYPE
    text = artifact.content.decode("utf-8")
    assert text.startswith("[\n  {")
    assert "القاهرة" in text
    assert json.loads(text) == [{"title": "Villa", "city": "القاهرة"}]


def test_excel_template_keeps_server_bytes() -> None:
    service = _service(FakeSession(FakeResponse(200, content=b"PK\x03\x04binary")))

    artifact = service.template(EntityKind.DEVELOPERS, TemplateFormat.EXCEL)

    assert artifact.filename == "developers-template.xlsx"
    assert artifact.media_type == XLSX_MEDIA_TYPE
    assert artifact.content == b"PK\x03\x04binary"


def test_unknown_format_is_rejected() -> None:
    service = _service(FakeSession())

    with pytest.raises(ValueError):
        service.template(EntityKind.CITIES, "csv")


def test_save_writes_file(tmp_path: Path) -> None:
    service = _service(FakeSession(FakeResponse(200, {"name": "Cairo"})))
    artifact = service.json_template(EntityKind.GOVERNORATES)

    saved = TemplateService.save(artifact, tmp_path / "downloads")

    assert saved == tmp_path / "downloads" / "governorates-template.json"
    assert json.loads(saved.read_text(encoding="utf-8")) == {"name": "Cairo"}
