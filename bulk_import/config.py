"""
bulk_import/config.py

Environment-driven settings for the bulk import client.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_API_BASE_URL = "http://localhost:5001/api"

# Server-side per-request maximum; the client refuses larger files up front.
DEFAULT_MAX_ROWS = 1000


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class BulkUploadSettings:
    """
    Runtime settings for bulk uploads and template downloads.
    """

    api_base_url: str = DEFAULT_API_BASE_URL
    api_token: str | None = None
    upload_timeout_seconds: float = 15 * 60.0
    template_timeout_seconds: float = 30.0
    large_batch_threshold: int = 100
    max_rows: int = DEFAULT_MAX_ROWS
    preview_size: int = 3
    error_display_limit: int = 10
    advisory_display_limit: int = 5
    log_coercion_fallbacks: bool = True


@lru_cache(maxsize=1)
def get_bulk_upload_settings() -> BulkUploadSettings:
    """
    Return cached bulk upload settings from environment variables.
    """

    return BulkUploadSettings(
        api_base_url=_get_str_env("BULK_UPLOAD_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        api_token=_get_optional_str_env("BULK_UPLOAD_API_TOKEN"),
        upload_timeout_seconds=max(1.0, _get_float_env("BULK_UPLOAD_TIMEOUT_SECONDS", 15 * 60.0)),
        template_timeout_seconds=max(1.0, _get_float_env("BULK_UPLOAD_TEMPLATE_TIMEOUT_SECONDS", 30.0)),
        large_batch_threshold=max(1, _get_int_env("BULK_UPLOAD_LARGE_BATCH_THRESHOLD", 100)),
        max_rows=max(1, _get_int_env("BULK_UPLOAD_MAX_ROWS", DEFAULT_MAX_ROWS)),
        preview_size=max(1, _get_int_env("BULK_UPLOAD_PREVIEW_SIZE", 3)),
        error_display_limit=max(1, _get_int_env("BULK_UPLOAD_ERROR_DISPLAY_LIMIT", 10)),
        advisory_display_limit=max(1, _get_int_env("BULK_UPLOAD_ADVISORY_DISPLAY_LIMIT", 5)),
        log_coercion_fallbacks=_get_bool_env("BULK_UPLOAD_LOG_COERCION_FALLBACKS", True),
    )


def configure_logging() -> None:
    """
    Configure root logging once for a CLI or UI process.
    """

    _load_env_once()
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
