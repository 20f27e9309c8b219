from __future__ import annotations

import json
import unittest
from pathlib import Path

import requests
from streamlit.testing.v1 import AppTest

from bulk_import.config import BulkUploadSettings
from bulk_import.connectors.bulk_upload_client import BulkUploadClient
from bulk_import.domain.entity_kind import EntityKind
from bulk_import.services.notifier import RecordingNotifier
from bulk_import.services.upload_orchestrator import (
    TRANSPORT_FAILURE_MESSAGE,
    UploadOrchestrator,
    UploadState,
)
from tests.fakes import FakeSession

APP_PATH = Path(__file__).resolve().parent.parent / "streamlit_app.py"


class TestStreamlitApp(unittest.TestCase):
    def setUp(self) -> None:
        self.session = FakeSession()
        self.notifier = RecordingNotifier()
        settings = BulkUploadSettings(api_base_url="http://api.test/api")
        self.orchestrator = UploadOrchestrator(
            EntityKind.PROPERTIES,
            client=BulkUploadClient(settings=settings, session=self.session),
            notifier=self.notifier,
            settings=settings,
        )
        self.app = AppTest.from_file(str(APP_PATH), default_timeout=30)
        self.app.session_state["orchestrators"] = {EntityKind.PROPERTIES.value: self.orchestrator}
        self.app.session_state["notifier"] = self.notifier

    def _errors(self) -> list[str]:
        return [element.value for element in self.app.error]

    def test_cancel_gives_the_file_picker_a_fresh_key(self) -> None:
        self.orchestrator.select_file("batch.json", json.dumps([{"title": "Villa"}]).encode("utf-8"))
        self.app.session_state["last_file_token"] = ("properties", "batch.json", 19)
        self.app.run()
        self.assertEqual(self.app.session_state["uploader_generation"], 0)

        self.app.button(key="cancel_upload").click().run()

        self.assertIs(self.orchestrator.state, UploadState.IDLE)
        self.assertIsNone(self.app.session_state["last_file_token"])
        self.assertEqual(self.app.session_state["uploader_generation"], 1)

    def test_close_gives_the_file_picker_a_fresh_key(self) -> None:
        self.app.run()

        self.app.button(key="close_upload").click().run()
        self.app.button(key="close_upload").click().run()

        self.assertEqual(self.app.session_state["uploader_generation"], 2)

    def test_rejected_file_error_is_shown_once(self) -> None:
        self.orchestrator.select_file("listings.csv", b"name\nCairo\n")

        self.app.run()

        self.assertEqual(self._errors(), [self.orchestrator.error_message])

    def test_transport_failure_error_is_shown_once(self) -> None:
        self.session.queue(requests.ConnectionError("refused"))
        self.orchestrator.select_file("batch.json", b'[{"title": "Villa"}]')
        self.orchestrator.submit()

        self.app.run()
        self.assertEqual(self._errors(), [TRANSPORT_FAILURE_MESSAGE])

        self.app.run()
        self.assertEqual(self._errors(), [TRANSPORT_FAILURE_MESSAGE])


if __name__ == "__main__":
    unittest.main()
