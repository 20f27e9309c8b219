"""
bulk_import/domain/records.py

Value types flowing through the import pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

# One cell value after decoding.
Scalar = Union[str, int, float, bool, None]

# One input row; keys may be dot-paths such as "location.city".
FlatRow = Mapping[str, Scalar]

# Nested, type-coerced record ready for submission.
NormalizedRecord = dict[str, Any]

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
JSON_MEDIA_TYPE = "application/json"


@dataclass(frozen=True)
class TemplateArtifact:
    """
    Downloadable example file for one entity kind.
    """

    filename: str
    media_type: str
    content: bytes
