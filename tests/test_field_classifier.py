from __future__ import annotations

import unittest

from bulk_import.domain.entity_kind import EntityKind
from bulk_import.mappers.field_classifier import (
    FIELD_TABLES,
    FieldClass,
    FieldClassifier,
    FieldTable,
)


class TestFieldClassifier(unittest.TestCase):
    def setUp(self) -> None:
        self.classifier = FieldClassifier()

    def test_every_entity_kind_has_a_table(self) -> None:
        self.assertEqual(set(FIELD_TABLES), set(EntityKind))

    def test_property_array_fields_match_exactly(self) -> None:
        self.assertEqual(self.classifier.classify(EntityKind.PROPERTIES, "features"), FieldClass.ARRAY)
        self.assertEqual(self.classifier.classify(EntityKind.PROPERTIES, "amenities"), FieldClass.ARRAY)
        self.assertEqual(
            self.classifier.classify(EntityKind.PROPERTIES, "features.primary"),
            FieldClass.PLAIN,
        )

    def test_json_fields_cover_dotted_children(self) -> None:
        self.assertEqual(self.classifier.classify(EntityKind.PROPERTIES, "images"), FieldClass.JSON)
        self.assertEqual(self.classifier.classify(EntityKind.PROPERTIES, "images.0.url"), FieldClass.JSON)
        self.assertEqual(self.classifier.classify(EntityKind.LEADS, "budget.max"), FieldClass.JSON)
        self.assertEqual(self.classifier.classify(EntityKind.PROPERTIES, "imagesCount"), FieldClass.PLAIN)

    def test_json_wins_over_array_for_user_preferences(self) -> None:
        self.assertEqual(
            self.classifier.classify(EntityKind.USERS, "preferences.propertyTypes"),
            FieldClass.JSON,
        )

    def test_numeric_uses_last_path_segment(self) -> None:
        self.assertEqual(self.classifier.classify(EntityKind.PROPERTIES, "price"), FieldClass.NUMERIC)
        self.assertEqual(
            self.classifier.classify(EntityKind.PROPERTIES, "specifications.bedrooms"),
            FieldClass.NUMERIC,
        )
        self.assertEqual(
            self.classifier.classify(EntityKind.LAUNCHES, "startingPrice"),
            FieldClass.NUMERIC,
        )
        self.assertEqual(self.classifier.classify(EntityKind.CITIES, "name"), FieldClass.PLAIN)

    def test_launch_coordinates_are_json(self) -> None:
        self.assertEqual(self.classifier.classify(EntityKind.LAUNCHES, "coordinates"), FieldClass.JSON)
        self.assertEqual(
            self.classifier.classify(EntityKind.PROPERTIES, "coordinates"),
            FieldClass.PLAIN,
        )

    def test_table_rejects_overlapping_array_and_json_paths(self) -> None:
        with self.assertRaises(ValueError):
            FieldTable(array_fields=frozenset({"tags"}), json_fields=frozenset({"tags"}))

    def test_table_rejects_structured_numeric_paths(self) -> None:
        with self.assertRaises(ValueError):
            FieldTable(array_fields=frozenset({"details.price"}))

    def test_custom_tables_are_used(self) -> None:
        tables = dict(FIELD_TABLES)
        tables[EntityKind.CITIES] = FieldTable(array_fields=frozenset({"aliases"}))
        classifier = FieldClassifier(tables)

        self.assertEqual(classifier.classify(EntityKind.CITIES, "aliases"), FieldClass.ARRAY)


if __name__ == "__main__":
    unittest.main()
