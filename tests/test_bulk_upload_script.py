from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests

from bulk_import.config import BulkUploadSettings
from scripts import bulk_upload
from tests.fakes import FakeResponse, FakeSession


@pytest.fixture
def session(monkeypatch: pytest.MonkeyPatch) -> FakeSession:
    fake = FakeSession()
    real_client = bulk_upload.BulkUploadClient

    def build_client(*, settings: BulkUploadSettings):
        return real_client(settings=settings, session=fake)

    monkeypatch.setattr(bulk_upload, "BulkUploadClient", build_client)
    monkeypatch.setattr(bulk_upload, "configure_logging", lambda: None)
    return fake


def test_dry_run_prints_records_without_uploading(
    tmp_path: Path,
    session: FakeSession,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = tmp_path / "cities.json"
    source.write_text(json.dumps([{"name": "Cairo"}]), encoding="utf-8")

    exit_code = bulk_upload.main(["--entity", "cities", "--file", str(source), "--dry-run"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == [{"name": "Cairo"}]
    assert session.calls == []


def test_upload_prints_report(tmp_path: Path, session: FakeSession, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "cities.json"
    source.write_text(json.dumps([{"name": "Cairo"}, {"name": "Giza"}]), encoding="utf-8")
    session.queue(
        FakeResponse(
            200,
            {"success": True, "message": "Imported", "summary": {"total": 2, "imported": 2}},
        )
    )

    exit_code = bulk_upload.main(["--entity", "cities", "--file", str(source)])

    assert exit_code == 0
    output = capsys.readouterr().out
    assert "[SUCCESS] Imported" in output
    assert "Imported: 2" in output


def test_rejected_file_exits_non_zero(tmp_path: Path, session: FakeSession, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "cities.csv"
    source.write_text("name\nCairo\n", encoding="utf-8")

    exit_code = bulk_upload.main(["--entity", "cities", "--file", str(source)])

    assert exit_code == 1
    assert "valid JSON or Excel file" in capsys.readouterr().out


def test_template_download(tmp_path: Path, session: FakeSession) -> None:
    session.queue(FakeResponse(200, [{"name": "Example"}]))

    exit_code = bulk_upload.main(["--entity", "areas", "--template", "json", "--output-dir", str(tmp_path)])

    assert exit_code == 0
    assert (tmp_path / "areas-template.json").exists()


def test_timeout_exits_non_zero(tmp_path: Path, session: FakeSession, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "leads.json"
    source.write_text(json.dumps([{"name": "Mona"}]), encoding="utf-8")
    session.queue(requests.Timeout("read timed out"))

    exit_code = bulk_upload.main(["--entity", "leads", "--file", str(source)])

    assert exit_code == 1
    assert "smaller batches" in capsys.readouterr().out
