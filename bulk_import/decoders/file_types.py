"""
bulk_import/decoders/file_types.py

Upload format detection by file extension.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from bulk_import.decoders.errors import UnsupportedFileType


class FileFormat(str, Enum):
    JSON = "json"
    EXCEL = "excel"


_EXTENSION_FORMATS: dict[str, FileFormat] = {
    ".json": FileFormat.JSON,
    ".xlsx": FileFormat.EXCEL,
    ".xls": FileFormat.EXCEL,
}

ACCEPTED_EXTENSIONS: tuple[str, ...] = tuple(_EXTENSION_FORMATS)


def file_extension(filename: str) -> str:
    return Path(str(filename or "")).suffix.lower()


def detect_file_format(filename: str) -> FileFormat:
    """
    Return the decoder format for a file name or raise ``UnsupportedFileType``.
    """

    file_format = _EXTENSION_FORMATS.get(file_extension(filename))
    if file_format is None:
        raise UnsupportedFileType(filename)
    return file_format
