from __future__ import annotations

import unittest

from bulk_import.mappers.path_tree import flatten, get_at_path, set_at_path


class TestPathTree(unittest.TestCase):
    def test_set_creates_intermediate_mappings(self) -> None:
        tree: dict = {}
        set_at_path(tree, "a.b.c", 5)

        self.assertEqual(tree, {"a": {"b": {"c": 5}}})

    def test_set_keeps_sibling_values(self) -> None:
        tree: dict = {}
        set_at_path(tree, "location.city", "Cairo")
        set_at_path(tree, "location.coordinates.latitude", 30.04)

        self.assertEqual(
            tree,
            {"location": {"city": "Cairo", "coordinates": {"latitude": 30.04}}},
        )

    def test_set_replaces_scalar_intermediate(self) -> None:
        tree: dict = {"location": "Cairo"}
        set_at_path(tree, "location.city", "Giza")

        self.assertEqual(tree, {"location": {"city": "Giza"}})

    def test_get_returns_default_for_missing_path(self) -> None:
        tree = {"a": {"b": 1}}

        self.assertEqual(get_at_path(tree, "a.b"), 1)
        self.assertIsNone(get_at_path(tree, "a.c"))
        self.assertEqual(get_at_path(tree, "a.b.c", default="x"), "x")

    def test_flatten_treats_lists_as_leaves(self) -> None:
        tree = {"title": "Villa", "features": ["pool"], "specifications": {"bedrooms": 3}, "meta": {}}

        self.assertEqual(
            flatten(tree),
            {
                "title": "Villa",
                "features": ["pool"],
                "specifications.bedrooms": 3,
                "meta": {},
            },
        )

    def test_round_trip_through_set_and_flatten(self) -> None:
        flat = {"a.b.c": 5, "a.d": "x", "e": True}
        tree: dict = {}
        for key, value in flat.items():
            set_at_path(tree, key, value)

        self.assertEqual(tree["a"]["b"]["c"], 5)
        self.assertEqual(flatten(tree), flat)


if __name__ == "__main__":
    unittest.main()
