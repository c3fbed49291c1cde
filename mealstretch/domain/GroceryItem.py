"""GroceryItem domain entity: one shelf item of the reference inventory."""
from dataclasses import dataclass


@dataclass(frozen=True)
class GroceryItem:
    id: str
    name: str
    price: float
    category: str
    stove_required: bool = False

    def __str__(self) -> str:
        return f"{self.name} - ${self.price:.2f} - {self.category}"

    @staticmethod
    def from_dict(data):
        '''Creates a GroceryItem from its JSON record (camelCase keys).'''
        return GroceryItem(
            id=str(data["id"]),
            name=str(data["name"]),
            price=round(float(data["price"]), 2),
            category=str(data["category"]),
            stove_required=bool(data.get("stoveRequired", False)),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "category": self.category,
            "stoveRequired": self.stove_required,
        }
