"""Read-only catalog of grocery items and meal templates.

Both tables are loaded from the package data files the first time they are
needed and cached for the life of the process. Loading validates the data
and raises CatalogError instead of serving a broken catalog.
"""
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Tuple

from mealstretch.domain.GroceryItem import GroceryItem
from mealstretch.domain.MealTemplate import MealTemplate
from mealstretch.infra.paths import INVENTORY_FILE, MEAL_TEMPLATES_FILE
from mealstretch.utilities.constants import GROCERY_CATEGORIES
from mealstretch.utilities.errors import CatalogError

logger = logging.getLogger(__name__)


class Catalog:
    def __init__(self, items: List[GroceryItem], templates: List[MealTemplate]):
        self.items: Tuple[GroceryItem, ...] = tuple(items)
        self.templates: Tuple[MealTemplate, ...] = tuple(templates)
        # INV: ingredient key -> grocery item
        self.inventory: Dict[str, GroceryItem] = {item.id: item for item in self.items}
        self.validate()

    def __repr__(self) -> str:
        return f"Catalog({len(self.items)} items, {len(self.templates)} templates)"

    def validate(self):
        """Fail fast on reference data the selector could not use safely."""
        if len(self.inventory) != len(self.items):
            raise CatalogError("Duplicate grocery item id in inventory")
        for item in self.items:
            if item.category not in GROCERY_CATEGORIES:
                raise CatalogError(f"Unknown category '{item.category}' for item '{item.id}'")
            if item.price < 0:
                raise CatalogError(f"Negative price for item '{item.id}'")

        seen = set()
        for tpl in self.templates:
            if tpl.name in seen:
                raise CatalogError(f"Duplicate meal template '{tpl.name}'")
            seen.add(tpl.name)
            if tpl.base_servings < 1:
                raise CatalogError(f"Meal template '{tpl.name}' must serve at least one person")
            if not tpl.ingredients:
                raise CatalogError(f"Meal template '{tpl.name}' has no ingredients")
            for ing in tpl.ingredients:
                if ing.key not in self.inventory:
                    raise CatalogError(f"Meal template '{tpl.name}' references unknown ingredient '{ing.key}'")
                if ing.price < 0:
                    raise CatalogError(f"Negative price for '{ing.key}' in '{tpl.name}'")

    @classmethod
    def from_files(cls, inventory_file: Path = INVENTORY_FILE, templates_file: Path = MEAL_TEMPLATES_FILE):
        try:
            with open(inventory_file, 'r', encoding='utf-8') as f:
                items_data = json.load(f)
            with open(templates_file, 'r', encoding='utf-8') as f:
                templates_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Cannot read catalog data: {e}") from e
        try:
            items = [GroceryItem.from_dict(entry) for entry in items_data]
            templates = [MealTemplate.from_dict(entry) for entry in templates_data]
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogError(f"Malformed catalog record: {e}") from e
        catalog = cls(items, templates)
        logger.info("Loaded %r", catalog)
        return catalog


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    """Process-wide catalog, loaded once."""
    return Catalog.from_files()
