"""
bulk_import/domain package marker.
"""

from bulk_import.domain.entity_kind import EntityKind
from bulk_import.domain.records import (
    JSON_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
    FlatRow,
    NormalizedRecord,
    Scalar,
    TemplateArtifact,
)

__all__ = [
    "EntityKind",
    "FlatRow",
    "JSON_MEDIA_TYPE",
    "NormalizedRecord",
    "Scalar",
    "TemplateArtifact",
    "XLSX_MEDIA_TYPE",
]
