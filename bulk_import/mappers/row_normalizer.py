"""
bulk_import/mappers/row_normalizer.py

Converts one flat spreadsheet row into a nested, type-coerced record.

Coercion is best-effort: a cell that cannot be parsed as JSON or as a
number keeps its original text and the row still normalizes. Each such
fallback is logged as a ``coercion_fallback`` event so it can be audited;
validation remains the batch-import endpoint's job.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any

from bulk_import.domain.entity_kind import EntityKind
from bulk_import.domain.records import FlatRow, NormalizedRecord
from bulk_import.logging_utils import log_event, preview_value
from bulk_import.mappers.field_classifier import FieldClass, FieldClassifier
from bulk_import.mappers.path_tree import get_at_path, set_at_path

logger = logging.getLogger(__name__)

_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

SPECIFICATION_NUMERIC_FIELDS: tuple[str, ...] = ("bedrooms", "bathrooms", "area", "floors", "parking")
COORDINATE_PATHS: tuple[str, ...] = (
    "location.coordinates.latitude",
    "location.coordinates.longitude",
)
_KINDS_WITH_LOCATION = frozenset({EntityKind.PROPERTIES, EntityKind.LAUNCHES})


def is_empty_value(value: Any) -> bool:
    if value is None or value == "":
        return True
    return isinstance(value, float) and math.isnan(value)


def parse_number(text: str) -> int | float | None:
    """
    Parse a whole-string decimal literal; ``None`` when not representable.
    """

    candidate = text.strip()
    if not _NUMBER_PATTERN.match(candidate):
        return None
    if _INTEGER_PATTERN.match(candidate):
        return int(candidate)
    number = float(candidate)
    return number if math.isfinite(number) else None


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def parse_json(text: str) -> Any:
    """
    Strict JSON parse: ``NaN`` and ``Infinity`` tokens are rejected.
    """

    return json.loads(text, parse_constant=_reject_constant)


def parse_array(value: Any) -> list[str]:
    """
    Split a comma-separated cell into trimmed, non-empty strings.
    """

    return [item.strip() for item in str(value).split(",") if item.strip()]


def _to_number(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        return parse_number(value)
    return None


class RowNormalizer:
    """
    Stateless flat-row to nested-record converter for one entity kind.
    """

    def __init__(
        self,
        entity_kind: EntityKind,
        *,
        classifier: FieldClassifier | None = None,
        log_fallbacks: bool = True,
    ) -> None:
        self.entity_kind = entity_kind
        self._classifier = classifier or FieldClassifier()
        self._fallback_level = logging.WARNING if log_fallbacks else logging.DEBUG

    def normalize(self, row: FlatRow) -> NormalizedRecord:
        """
        Normalize one row; never raises for cell content.
        """

        record: NormalizedRecord = {}
        for raw_key, value in row.items():
            if is_empty_value(value):
                continue

            key = str(raw_key)
            field_class = self._classifier.classify(self.entity_kind, key)

            if field_class is FieldClass.JSON and isinstance(value, str):
                try:
                    parsed = parse_json(value)
                except ValueError:
                    self._report_fallback(key, value, reason="invalid_json")
                else:
                    set_at_path(record, key, parsed)
                    continue

            if field_class is FieldClass.ARRAY and "." not in key:
                record[key] = parse_array(value)
                continue

            set_at_path(record, key, self._coerce_scalar(key, value, field_class))

        self._post_process(record)
        return record

    def _coerce_scalar(self, key: str, value: Any, field_class: FieldClass) -> Any:
        if not isinstance(value, str):
            return value

        if "." in key or field_class is FieldClass.NUMERIC:
            number = parse_number(value)
            if number is not None:
                return number
            if field_class is FieldClass.NUMERIC:
                self._report_fallback(key, value, reason="not_numeric")
            return value

        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        return value

    def _post_process(self, record: NormalizedRecord) -> None:
        if self.entity_kind is EntityKind.PROPERTIES:
            specifications = record.get("specifications")
            if isinstance(specifications, dict):
                for field in SPECIFICATION_NUMERIC_FIELDS:
                    if field not in specifications:
                        continue
                    number = _to_number(specifications[field])
                    if number is not None:
                        specifications[field] = number

        if self.entity_kind in _KINDS_WITH_LOCATION:
            for path in COORDINATE_PATHS:
                value = get_at_path(record, path)
                if value is None:
                    continue
                number = _to_number(value)
                if number is None:
                    self._report_fallback(path, value, reason="not_numeric")
                    continue
                set_at_path(record, path, number)

    def _report_fallback(self, key: str, value: Any, *, reason: str) -> None:
        log_event(
            logger,
            self._fallback_level,
            "coercion_fallback",
            entity_kind=self.entity_kind.value,
            key=key,
            reason=reason,
            value=preview_value(value),
        )
