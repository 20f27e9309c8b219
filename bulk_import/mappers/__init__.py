"""
bulk_import/mappers package marker.
"""

from bulk_import.mappers.field_classifier import (
    FIELD_TABLES,
    NUMERIC_SEGMENTS,
    FieldClass,
    FieldClassifier,
    FieldTable,
)
from bulk_import.mappers.path_tree import flatten, get_at_path, set_at_path
from bulk_import.mappers.row_normalizer import RowNormalizer, parse_array, parse_json, parse_number

__all__ = [
    "FIELD_TABLES",
    "NUMERIC_SEGMENTS",
    "FieldClass",
    "FieldClassifier",
    "FieldTable",
    "RowNormalizer",
    "flatten",
    "get_at_path",
    "parse_array",
    "parse_json",
    "parse_number",
    "set_at_path",
]
