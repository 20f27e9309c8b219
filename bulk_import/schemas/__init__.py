"""
bulk_import/schemas package marker.
"""

from bulk_import.schemas.import_result import (
    ImageWarning,
    ImportResult,
    ImportSummary,
    RecordError,
    SkippedRecord,
)

__all__ = [
    "ImageWarning",
    "ImportResult",
    "ImportSummary",
    "RecordError",
    "SkippedRecord",
]
