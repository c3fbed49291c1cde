"""
Input validation schemas using Pydantic for request bodies.

Handlers call ``parse_input`` so that a bad body becomes a 400 with a readable
message instead of FastAPI's default 422.
"""
import math

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing import Any, List, Optional, Type, TypeVar, Union

from mealstretch.utilities.constants import MAX_NARRATION_CHARS
from mealstretch.utilities.errors import ClientInputError

M = TypeVar("M", bound=BaseModel)


def parse_input(model: Type[M], payload: Any) -> M:
    """Validate ``payload`` against ``model`` or raise ClientInputError."""
    if not isinstance(payload, dict):
        raise ClientInputError("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        msg = str(first.get("msg", "Invalid input")).removeprefix("Value error, ")
        loc = ".".join(str(p) for p in first.get("loc", ()))
        raise ClientInputError(f"{loc}: {msg}" if loc else msg) from e


class StoreInput(BaseModel):
    """A store as echoed back by the client (only the name is required)."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    address: str = ""
    distance: str = ""


class PlanMealInput(BaseModel):
    """Schema for POST /api/plan-meal."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    budget: Optional[float] = Field(default=None, validate_default=True, allow_inf_nan=False)
    people: int = Field(default=1, validate_default=True)
    allergies: List[str] = Field(default_factory=list)
    has_stove: bool = Field(default=True, alias="hasStove")
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)
    nearby_stores: Optional[List[Union[StoreInput, str]]] = Field(default=None, alias="nearbyStores")
    version: Optional[int] = None

    @field_validator('budget', mode='before')
    @classmethod
    def clean_budget(cls, v):
        """Accept "$15" or "15.00" as well as numbers."""
        if isinstance(v, str):
            v = v.replace('$', '').replace(',', '').strip() or None
        return v

    @field_validator('budget')
    @classmethod
    def validate_budget(cls, v):
        if v is None or not math.isfinite(v) or v <= 0:
            raise ValueError('Budget must be a positive number')
        return v

    @field_validator('people', mode='before')
    @classmethod
    def coerce_people(cls, v):
        """Non-numeric or sub-1 headcounts become 1."""
        try:
            n = int(float(v))
        except (TypeError, ValueError, OverflowError):
            return 1
        return max(1, n)

    @field_validator('allergies', mode='before')
    @classmethod
    def clean_allergies(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        return [str(a).strip() for a in v if a is not None and str(a).strip()]

    @field_validator('version')
    @classmethod
    def validate_version(cls, v):
        if v is not None and v not in (1, 2):
            raise ValueError('Unsupported protocol version (expected 1 or 2)')
        return v

    def store_names(self) -> List[str]:
        names = []
        for s in self.nearby_stores or []:
            name = s if isinstance(s, str) else s.name
            if name.strip():
                names.append(name.strip())
        return names


class NarrateInput(BaseModel):
    """Schema for POST /api/narrate."""
    text: str

    @field_validator('text', mode='before')
    @classmethod
    def validate_text(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError('Text must be a non-empty string')
        return v.strip()[:MAX_NARRATION_CHARS]
