"""Unit tests for the element catalog."""

from __future__ import annotations

import json
import unittest

from sandbox.logic import BehaviorCategory
from sandbox.logic import ELEMENTS
from sandbox.logic import Element
from sandbox.logic import NOTHING
from sandbox.logic import SAND
from sandbox.logic import WATER
from sandbox.logic import element_by_name


class ElementCatalogTests(unittest.TestCase):
    def test_catalog_covers_every_category_once(self) -> None:
        categories = [element.category for element in ELEMENTS]
        self.assertEqual(sorted(categories), sorted(BehaviorCategory))
        self.assertEqual(len({element.name for element in ELEMENTS}), len(ELEMENTS))

    def test_only_background_lacks_a_display_color(self) -> None:
        self.assertIsNone(NOTHING.display_color)
        for element in ELEMENTS:
            if element is NOTHING:
                continue
            self.assertEqual(3, len(element.display_color))
            self.assertTrue(all(0 <= channel <= 255 for channel in element.display_color))

    def test_equality_is_catalog_identity(self) -> None:
        lookalike = Element("Sand", BehaviorCategory.MOVABLE_SOLID, SAND.display_color)
        self.assertEqual(SAND, SAND)
        self.assertNotEqual(SAND, lookalike)
        self.assertNotEqual(SAND, WATER)
        self.assertEqual(1, len({SAND, SAND}))

    def test_background_flag(self) -> None:
        self.assertTrue(NOTHING.is_background)
        self.assertFalse(WATER.is_background)

    def test_element_serializes_category_as_integer(self) -> None:
        payload = json.loads(SAND.to_json())
        self.assertEqual(
            {"name": "Sand", "category": 2, "display_color": [253, 203, 0]},
            payload,
        )


class ElementLookupTests(unittest.TestCase):
    def test_lookup_is_case_insensitive(self) -> None:
        self.assertIs(SAND, element_by_name(" sand "))
        self.assertIs(NOTHING, element_by_name("AIR"))

    def test_unknown_name_raises(self) -> None:
        with self.assertRaises(ValueError):
            element_by_name("Lava")

    def test_non_string_name_raises(self) -> None:
        with self.assertRaises(TypeError):
            element_by_name(3)  # type: ignore[arg-type]

    def test_element_validation(self) -> None:
        with self.assertRaises(ValueError):
            Element("", BehaviorCategory.LIQUID)
        with self.assertRaises(TypeError):
            Element("Oil", 3)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
