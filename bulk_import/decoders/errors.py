"""
bulk_import/decoders/errors.py

Input-format errors raised before any remote call.
"""

from __future__ import annotations

from typing import Any

from bulk_import import failure_codes


class DecodeError(ValueError):
    """
    Raised when an uploaded file cannot be turned into a batch of records.
    """

    code = "decode_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


class UnsupportedFileType(DecodeError):
    code = failure_codes.UNSUPPORTED_FILE_TYPE

    def __init__(self, filename: str) -> None:
        super().__init__("Please select a valid JSON or Excel file (.json, .xlsx, .xls)")
        self.filename = filename


class InvalidJSON(DecodeError):
    code = failure_codes.INVALID_JSON

    def __init__(self, detail: str | None = None) -> None:
        super().__init__("Invalid JSON file format")
        self.detail = detail


class NotAnArray(DecodeError):
    code = failure_codes.NOT_AN_ARRAY

    def __init__(self) -> None:
        super().__init__("JSON file must contain an array of records")


class EmptyWorkbook(DecodeError):
    code = failure_codes.EMPTY_WORKBOOK

    def __init__(self) -> None:
        super().__init__("Excel file contains no sheets")


class NoDataRows(DecodeError):
    code = failure_codes.NO_DATA_ROWS

    def __init__(self) -> None:
        super().__init__("Excel file contains no data rows")


class WorkbookUnreadable(DecodeError):
    code = failure_codes.WORKBOOK_UNREADABLE

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to parse Excel file: {detail}")
        self.detail = detail


class TooManyRows(DecodeError):
    code = failure_codes.TOO_MANY_ROWS

    def __init__(self, *, row_count: int, max_rows: int) -> None:
        super().__init__(
            f"File contains {row_count} records; at most {max_rows} are allowed per upload. "
            "Split the file into smaller batches."
        )
        self.row_count = row_count
        self.max_rows = max_rows


def ensure_row_ceiling(row_count: int, max_rows: int | None) -> None:
    if max_rows is not None and row_count > max_rows:
        raise TooManyRows(row_count=row_count, max_rows=max_rows)
