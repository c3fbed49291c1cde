"""MealTemplate domain entity: a curated recipe with its cost breakdown.

Nutrition values are totals for the whole template at ``base_servings``,
not per serving; scaling a template multiplies them.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class TemplateIngredient:
    key: str
    quantity: str
    price: float

    @staticmethod
    def from_dict(data):
        return TemplateIngredient(
            key=str(data["key"]),
            quantity=str(data.get("quantity", "")),
            price=float(data["price"]),
        )


@dataclass(frozen=True)
class Nutrition:
    calories: float = 0
    protein_g: float = 0
    fat_g: float = 0
    carbs_g: float = 0

    def scaled(self, factor: int) -> "Nutrition":
        return Nutrition(
            calories=self.calories * factor,
            protein_g=self.protein_g * factor,
            fat_g=self.fat_g * factor,
            carbs_g=self.carbs_g * factor,
        )

    @staticmethod
    def from_dict(data):
        d = data or {}
        return Nutrition(
            calories=d.get("calories", 0) or 0,
            protein_g=d.get("protein_g", d.get("protein", 0)) or 0,
            fat_g=d.get("fat_g", d.get("fat", 0)) or 0,
            carbs_g=d.get("carbs_g", d.get("carbs", 0)) or 0,
        )

    def to_dict(self):
        return {
            "calories": self.calories,
            "protein_g": self.protein_g,
            "fat_g": self.fat_g,
            "carbs_g": self.carbs_g,
        }


@dataclass(frozen=True)
class MealTemplate:
    name: str
    base_servings: int
    ingredients: Tuple[TemplateIngredient, ...]
    instructions: Tuple[str, ...] = ()
    nutrition_notes: str = ""
    nutrition: Optional[Nutrition] = None
    allergens: Tuple[str, ...] = ()
    stove_required: bool = False
    region: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name} - serves {self.base_servings} - ${self.base_cost():.2f} - Region: {self.region or '-'}"

    __repr__ = __str__

    def base_cost(self) -> float:
        """Unscaled sum of ingredient prices."""
        return sum(ing.price for ing in self.ingredients)

    @staticmethod
    def from_dict(data):
        nutrition = data.get("nutrition")
        return MealTemplate(
            name=str(data["name"]),
            base_servings=int(data["baseServings"]),
            ingredients=tuple(TemplateIngredient.from_dict(i) for i in data.get("ingredients", [])),
            instructions=tuple(data.get("instructions", [])),
            nutrition_notes=data.get("nutritionNotes", ""),
            nutrition=Nutrition.from_dict(nutrition) if nutrition else None,
            allergens=tuple(data.get("allergens", [])),
            stove_required=bool(data.get("stoveRequired", False)),
            region=data.get("region"),
        )
