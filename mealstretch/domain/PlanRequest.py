"""PlanRequest: the per-call constraint set handed to the meal selector."""
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class PlanRequest:
    budget: float
    people: int = 1
    allergies: Tuple[str, ...] = field(default=())
    has_stove: bool = True
    lat: Optional[float] = None
    lng: Optional[float] = None

    def __post_init__(self):
        # headcounts below one still feed one person
        if self.people < 1:
            object.__setattr__(self, "people", 1)

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None

    @staticmethod
    def from_input(payload):
        '''Builds a request from a validated PlanMealInput.'''
        return PlanRequest(
            budget=payload.budget,
            people=payload.people,
            allergies=tuple(payload.allergies),
            has_stove=payload.has_stove,
            lat=payload.lat,
            lng=payload.lng,
        )
