import json
import unittest

import pytest

from mealstretch.domain.GroceryItem import GroceryItem
from mealstretch.domain.MealTemplate import MealTemplate
from mealstretch.infra.Catalog_Repository import Catalog, get_catalog
from mealstretch.utilities.errors import CatalogError


def _item(id="rice", price=2.98, category="grains"):
    return GroceryItem(id=id, name=id.title(), price=price, category=category, stove_required=True)


def _template(name="Plain Rice", key="rice", base_servings=4, price=1.49):
    return MealTemplate.from_dict({
        "name": name,
        "baseServings": base_servings,
        "ingredients": [{"key": key, "quantity": "2 cups", "price": price}],
        "stoveRequired": True,
    })


class TestCatalog(unittest.TestCase):

    def test_shipped_catalog_loads(self):
        catalog = get_catalog()
        self.assertGreater(len(catalog.items), 10)
        self.assertGreater(len(catalog.templates), 10)
        names = {t.name for t in catalog.templates}
        for expected in ("Rice & Black Beans", "Chicken & Rice Bowl", "Tuna Salad Sandwiches",
                         "Cheese & Apple Snack Plate"):
            self.assertIn(expected, names)

    def test_every_ingredient_key_resolves(self):
        catalog = get_catalog()
        for tpl in catalog.templates:
            for ing in tpl.ingredients:
                self.assertIn(ing.key, catalog.inventory, f"{tpl.name} uses unknown key {ing.key}")

    def test_rice_and_black_beans_base_cost(self):
        catalog = get_catalog()
        tpl = next(t for t in catalog.templates if t.name == "Rice & Black Beans")
        self.assertEqual(tpl.base_servings, 4)
        self.assertAlmostEqual(tpl.base_cost(), 4.97, places=2)

    def test_stove_flags_match_known_meals(self):
        catalog = get_catalog()
        by_name = {t.name: t for t in catalog.templates}
        self.assertFalse(by_name["Tuna Salad Sandwiches"].stove_required)
        self.assertTrue(by_name["Chicken & Rice Bowl"].stove_required)
        self.assertIn("Dairy", by_name["Cheese & Apple Snack Plate"].allergens)

    def test_missing_ingredient_key_fails_fast(self):
        with self.assertRaises(CatalogError) as ctx:
            Catalog([_item()], [_template(key="ghost_pepper")])
        self.assertIn("ghost_pepper", str(ctx.exception))

    def test_duplicate_template_name_rejected(self):
        with self.assertRaises(CatalogError):
            Catalog([_item()], [_template(), _template()])

    def test_non_positive_servings_rejected(self):
        with self.assertRaises(CatalogError):
            Catalog([_item()], [_template(base_servings=0)])

    def test_unknown_category_rejected(self):
        with self.assertRaises(CatalogError):
            Catalog([_item(category="snacks")], [])

    def test_inventory_round_trips_to_api_shape(self):
        item = get_catalog().inventory["tuna"]
        data = item.to_dict()
        self.assertEqual(set(data), {"id", "name", "price", "category", "stoveRequired"})
        self.assertFalse(data["stoveRequired"])


def test_from_files_reports_unknown_key(tmp_path):
    inventory = tmp_path / "inventory.json"
    templates = tmp_path / "meal_templates.json"
    inventory.write_text(json.dumps([
        {"id": "rice", "name": "Rice", "price": 2.98, "category": "grains", "stoveRequired": True}
    ]), encoding="utf-8")
    templates.write_text(json.dumps([
        {"name": "Mystery Stew", "baseServings": 4,
         "ingredients": [{"key": "unicorn", "quantity": "1", "price": 1.0}]}
    ]), encoding="utf-8")
    with pytest.raises(CatalogError, match="unicorn"):
        Catalog.from_files(inventory, templates)


def test_from_files_rejects_malformed_record(tmp_path):
    inventory = tmp_path / "inventory.json"
    templates = tmp_path / "meal_templates.json"
    inventory.write_text(json.dumps([{"id": "rice"}]), encoding="utf-8")
    templates.write_text("[]", encoding="utf-8")
    with pytest.raises(CatalogError):
        Catalog.from_files(inventory, templates)


def test_from_files_missing_file(tmp_path):
    with pytest.raises(CatalogError):
        Catalog.from_files(tmp_path / "nope.json", tmp_path / "nope2.json")
