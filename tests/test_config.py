from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from bulk_import.config import DEFAULT_API_BASE_URL, DEFAULT_MAX_ROWS, get_bulk_upload_settings


class TestBulkUploadSettings(unittest.TestCase):
    def setUp(self) -> None:
        get_bulk_upload_settings.cache_clear()
        self.addCleanup(get_bulk_upload_settings.cache_clear)

    def test_defaults(self) -> None:
        cleared = {key: value for key, value in os.environ.items() if not key.startswith("BULK_UPLOAD_")}
        with patch.dict(os.environ, cleared, clear=True):
            settings = get_bulk_upload_settings()

        self.assertEqual(settings.api_base_url, DEFAULT_API_BASE_URL)
        self.assertIsNone(settings.api_token)
        self.assertEqual(settings.upload_timeout_seconds, 900.0)
        self.assertEqual(settings.large_batch_threshold, 100)
        self.assertEqual(settings.max_rows, DEFAULT_MAX_ROWS)
        self.assertEqual(settings.preview_size, 3)
        self.assertEqual(settings.error_display_limit, 10)
        self.assertEqual(settings.advisory_display_limit, 5)
        self.assertTrue(settings.log_coercion_fallbacks)

    def test_environment_overrides(self) -> None:
        overrides = {
            "BULK_UPLOAD_API_BASE_URL": "https://admin.example.com/api/",
            "BULK_UPLOAD_API_TOKEN": "  token-123  ",
            "BULK_UPLOAD_TIMEOUT_SECONDS": "60",
            "BULK_UPLOAD_LARGE_BATCH_THRESHOLD": "250",
            "BULK_UPLOAD_LOG_COERCION_FALLBACKS": "false",
        }
        with patch.dict(os.environ, overrides):
            settings = get_bulk_upload_settings()

        self.assertEqual(settings.api_base_url, "https://admin.example.com/api")
        self.assertEqual(settings.api_token, "token-123")
        self.assertEqual(settings.upload_timeout_seconds, 60.0)
        self.assertEqual(settings.large_batch_threshold, 250)
        self.assertFalse(settings.log_coercion_fallbacks)

    def test_invalid_numbers_fall_back_to_defaults(self) -> None:
        overrides = {
            "BULK_UPLOAD_MAX_ROWS": "lots",
            "BULK_UPLOAD_PREVIEW_SIZE": "0",
        }
        with patch.dict(os.environ, overrides):
            settings = get_bulk_upload_settings()

        self.assertEqual(settings.max_rows, DEFAULT_MAX_ROWS)
        self.assertEqual(settings.preview_size, 1)


if __name__ == "__main__":
    unittest.main()
