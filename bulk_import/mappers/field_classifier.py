"""
bulk_import/mappers/field_classifier.py

Static per-entity field classification used by the row normalizer.

The tables mirror the schema the batch-import endpoints expect; there is no
runtime negotiation, so a field added server-side must be added here too.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from bulk_import.domain.entity_kind import EntityKind

NUMERIC_SEGMENTS: frozenset[str] = frozenset(
    {
        "price",
        "bedrooms",
        "bathrooms",
        "area",
        "floors",
        "parking",
        "startingPrice",
        "annualAppreciationRate",
    }
)


class FieldClass(str, Enum):
    ARRAY = "array"
    JSON = "json"
    NUMERIC = "numeric"
    PLAIN = "plain"


@dataclass(frozen=True)
class FieldTable:
    """
    Array-valued and JSON-valued field paths for one entity kind.
    """

    array_fields: frozenset[str] = frozenset()
    json_fields: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        overlap = self.array_fields & self.json_fields
        if overlap:
            raise ValueError(
                f"Field paths declared as both array and JSON: {sorted(overlap)}."
            )
        numeric_overlap = {
            path
            for path in self.array_fields | self.json_fields
            if path.rsplit(".", 1)[-1] in NUMERIC_SEGMENTS
        }
        if numeric_overlap:
            raise ValueError(
                f"Field paths declared as both structured and numeric: {sorted(numeric_overlap)}."
            )

    def is_json(self, path: str) -> bool:
        return any(path == field or path.startswith(field + ".") for field in self.json_fields)

    def is_array(self, path: str) -> bool:
        # Dotted children of an array field are never split.
        return path in self.array_fields


def _table(*, array: tuple[str, ...] = (), json: tuple[str, ...] = ()) -> FieldTable:
    return FieldTable(array_fields=frozenset(array), json_fields=frozenset(json))


FIELD_TABLES: Mapping[EntityKind, FieldTable] = MappingProxyType(
    {
        EntityKind.PROPERTIES: _table(
            array=("features", "amenities"),
            json=("images", "nearbyFacilities", "documents", "video", "virtualTour", "investment"),
        ),
        EntityKind.USERS: _table(
            array=("preferences.propertyTypes", "preferences.locations"),
            json=("preferences",),
        ),
        EntityKind.LEADS: _table(
            array=("preferredLocation",),
            json=("budget", "notes"),
        ),
        EntityKind.LAUNCHES: _table(
            array=("features", "amenities"),
            json=("coordinates", "nearbyFacilities", "paymentPlans", "contactInfo"),
        ),
        EntityKind.CITIES: _table(),
        EntityKind.DEVELOPERS: _table(),
        EntityKind.GOVERNORATES: _table(),
        EntityKind.AREAS: _table(),
    }
)

_missing = set(EntityKind) - set(FIELD_TABLES)
if _missing:
    raise RuntimeError(f"Field tables missing for entity kinds: {sorted(k.value for k in _missing)}.")


class FieldClassifier:
    """
    Classifies a field path for an entity kind.
    """

    def __init__(self, tables: Mapping[EntityKind, FieldTable] | None = None) -> None:
        self._tables = tables or FIELD_TABLES

    def table_for(self, entity_kind: EntityKind) -> FieldTable:
        return self._tables[entity_kind]

    def classify(self, entity_kind: EntityKind, path: str) -> FieldClass:
        """
        Return the field class; JSON wins over array, array over numeric.
        """

        table = self.table_for(entity_kind)
        if table.is_json(path):
            return FieldClass.JSON
        if table.is_array(path):
            return FieldClass.ARRAY
        if path.rsplit(".", 1)[-1] in NUMERIC_SEGMENTS:
            return FieldClass.NUMERIC
        return FieldClass.PLAIN
