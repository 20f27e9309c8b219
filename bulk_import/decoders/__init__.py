"""
bulk_import/decoders package marker.
"""

from bulk_import.decoders.errors import (
    DecodeError,
    EmptyWorkbook,
    InvalidJSON,
    NoDataRows,
    NotAnArray,
    TooManyRows,
    UnsupportedFileType,
    WorkbookUnreadable,
)
from bulk_import.decoders.file_types import ACCEPTED_EXTENSIONS, FileFormat, detect_file_format
from bulk_import.decoders.json_decoder import JSONDecoder
from bulk_import.decoders.tabular_decoder import TabularDecoder

__all__ = [
    "ACCEPTED_EXTENSIONS",
    "DecodeError",
    "EmptyWorkbook",
    "FileFormat",
    "InvalidJSON",
    "JSONDecoder",
    "NoDataRows",
    "NotAnArray",
    "TabularDecoder",
    "TooManyRows",
    "UnsupportedFileType",
    "WorkbookUnreadable",
    "detect_file_format",
]
