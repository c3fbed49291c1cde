"""MealPlan: a meal template scaled and priced for one request."""
from dataclasses import dataclass
from typing import List, Optional

from mealstretch.domain.MealTemplate import Nutrition


@dataclass(frozen=True)
class PlanIngredient:
    name: str
    quantity: str
    price: float

    def to_dict(self):
        return {"name": self.name, "quantity": self.quantity, "price": self.price}


@dataclass(frozen=True)
class MealPlan:
    meal_name: str
    region: Optional[str]
    servings: int
    scale: int
    total_cost: float
    nutrition: Optional[Nutrition]
    ingredients: List[PlanIngredient]
    instructions: List[str]
    nutrition_notes: str
    allergens: List[str]
    stove_required: bool

    @property
    def cost_per_person(self) -> float:
        return self.total_cost / self.servings if self.servings else self.total_cost

    def __str__(self) -> str:
        return f"{self.meal_name} x{self.scale} - feeds {self.servings} - ${self.total_cost:.2f}"

    def to_dict(self):
        return {
            "mealName": self.meal_name,
            "region": self.region,
            "servings": self.servings,
            "scale": self.scale,
            "totalCost": self.total_cost,
            "costPerPerson": round(self.cost_per_person, 2),
            "nutrition": self.nutrition.to_dict() if self.nutrition else None,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "instructions": list(self.instructions),
            "nutritionNotes": self.nutrition_notes,
            "allergens": list(self.allergens),
            "stoveRequired": self.stove_required,
        }
