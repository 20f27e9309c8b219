"""
bulk_import/decoders/json_decoder.py

Decoder for JSON uploads that already hold nested records.
"""

from __future__ import annotations

import logging
from typing import Any

from bulk_import.decoders.errors import InvalidJSON, NotAnArray, ensure_row_ceiling
from bulk_import.mappers.row_normalizer import parse_json

logger = logging.getLogger(__name__)


class JSONDecoder:
    """
    Parses a JSON array of records; records are trusted as-is.
    """

    def __init__(self, *, max_rows: int | None = None) -> None:
        self._max_rows = max_rows

    def decode(self, content: bytes) -> list[Any]:
        try:
            text = content.decode("utf-8-sig")
            payload = parse_json(text)
        except UnicodeDecodeError as exc:
            raise InvalidJSON("JSON file must be UTF-8 encoded.") from exc
        except ValueError as exc:
            raise InvalidJSON(str(exc)) from exc

        if not isinstance(payload, list):
            raise NotAnArray()

        ensure_row_ceiling(len(payload), self._max_rows)
        logger.info("Decoded JSON upload records=%s", len(payload))
        return payload
