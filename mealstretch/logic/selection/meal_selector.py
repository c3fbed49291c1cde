"""Meal selection: filter the catalog for a request, scale, then rank.

Filtering and scaling are shared; ranking is an explicit strategy:

* ``SelectionStrategy.TOP_N`` (protocol version 2) returns up to
  ``MAX_RANKED_MEALS`` plans, region-preferred templates first, then cheapest.
* ``SelectionStrategy.SINGLE_BEST`` (protocol version 1, legacy clients)
  returns the one plan maximising ``servings - cost_per_person * 0.01``.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence, Tuple

from mealstretch.domain.GroceryItem import GroceryItem
from mealstretch.domain.MealPlan import MealPlan, PlanIngredient
from mealstretch.domain.MealTemplate import MealTemplate
from mealstretch.domain.PlanRequest import PlanRequest
from mealstretch.utilities.constants import (
    COUNTRY_REGIONS,
    LEGACY_COST_WEIGHT,
    MAX_RANKED_MEALS,
    PREFERRED_REGIONS,
)
from mealstretch.utilities.errors import SelectionError

if TYPE_CHECKING:
    from mealstretch.infra.Catalog_Repository import Catalog

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")


class SelectionStrategy(Enum):
    """How candidates are ranked once filtered."""

    TOP_N = "top_n"  # ranked list, protocol version 2
    SINGLE_BEST = "single_best"  # one meal, protocol version 1

    @classmethod
    def for_version(cls, version: int) -> "SelectionStrategy":
        return cls.SINGLE_BEST if version == 1 else cls.TOP_N


@dataclass(frozen=True)
class RegionPolicy:
    """Hard restriction and/or soft preference derived from a region tag."""

    region: Optional[str] = None
    restrict_to: Optional[frozenset] = None
    prefer: Tuple[str, ...] = ()

    @classmethod
    def for_region(cls, region: Optional[str]) -> "RegionPolicy":
        if not region:
            return cls()
        preferred = tuple(PREFERRED_REGIONS.get(region, [region]))
        if region in COUNTRY_REGIONS.values():
            # country-level tags are a strong signal: restrict
            return cls(region=region, restrict_to=frozenset(preferred), prefer=preferred)
        return cls(region=region, prefer=preferred)

    def permits(self, template: MealTemplate) -> bool:
        return self.restrict_to is None or template.region in self.restrict_to

    def prefers(self, template: MealTemplate) -> bool:
        return template.region is not None and template.region in self.prefer


def round_currency(value) -> float:
    """Round half away from zero to cents."""
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def scale_factor(people: int, base_servings: int) -> int:
    return max(1, math.ceil(max(1, people) / base_servings))


def allergy_matches(allergen: str, allergy: str) -> bool:
    """Case-insensitive containment in either direction ("nut" ~ "Peanuts")."""
    a = allergen.strip().lower()
    b = allergy.strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


def has_allergy_conflict(template: MealTemplate, allergies: Iterable[str]) -> bool:
    allergies = list(allergies)
    return any(allergy_matches(allergen, allergy) for allergen in template.allergens for allergy in allergies)


def scale_template(template: MealTemplate, people: int, inventory: Dict[str, GroceryItem]) -> MealPlan:
    """Price and size ``template`` for ``people`` using the integer scale factor."""
    scale = scale_factor(people, template.base_servings)
    total = Decimal("0")
    ingredients = []
    for ing in template.ingredients:
        line = Decimal(str(ing.price)) * scale
        total += line
        ingredients.append(PlanIngredient(
            name=inventory[ing.key].name,
            quantity=ing.quantity if scale == 1 else f"{ing.quantity} (x{scale})",
            price=round_currency(line),
        ))
    return MealPlan(
        meal_name=template.name,
        region=template.region,
        servings=template.base_servings * scale,
        scale=scale,
        total_cost=round_currency(total),
        nutrition=template.nutrition.scaled(scale) if template.nutrition else None,
        ingredients=ingredients,
        instructions=list(template.instructions),
        nutrition_notes=template.nutrition_notes,
        allergens=list(template.allergens),
        stove_required=template.stove_required,
    )


def filter_candidates(request: PlanRequest, templates: Sequence[MealTemplate],
                      inventory: Dict[str, GroceryItem], policy: RegionPolicy) -> List[Tuple[MealTemplate, MealPlan]]:
    """Return (template, scaled plan) for every template passing the hard filters, in catalog order."""
    candidates = []
    for tpl in templates:
        if tpl.stove_required and not request.has_stove:
            continue
        if has_allergy_conflict(tpl, request.allergies):
            continue
        if not policy.permits(tpl):
            continue
        plan = scale_template(tpl, request.people, inventory)
        # scaling can push a large household over budget
        if plan.total_cost > request.budget:
            continue
        candidates.append((tpl, plan))
    return candidates


def rank_top_n(candidates: List[Tuple[MealTemplate, MealPlan]], policy: RegionPolicy,
               limit: int = MAX_RANKED_MEALS) -> List[MealPlan]:
    ranked = sorted(candidates, key=lambda c: (0 if policy.prefers(c[0]) else 1, c[1].total_cost))
    return [plan for _, plan in ranked[:limit]]


def legacy_score(plan: MealPlan) -> float:
    return plan.servings - plan.cost_per_person * LEGACY_COST_WEIGHT


def pick_single_best(candidates: List[Tuple[MealTemplate, MealPlan]]) -> MealPlan:
    best = None
    best_score = None
    for _, plan in candidates:
        score = legacy_score(plan)
        # strict comparison keeps the first template on ties
        if best_score is None or score > best_score:
            best, best_score = plan, score
    return best


def select_meals(request: PlanRequest, catalog: "Catalog",
                 region: Optional[str] = None,
                 strategy: SelectionStrategy = SelectionStrategy.TOP_N) -> List[MealPlan]:
    """Filter, scale and rank the catalog templates for ``request``.

    Raises SelectionError when nothing survives the filters. With
    ``SINGLE_BEST`` the returned list holds exactly one plan.
    """
    policy = RegionPolicy.for_region(region)
    candidates = filter_candidates(request, catalog.templates, catalog.inventory, policy)
    logger.debug("%d candidate(s) for budget=%.2f people=%d region=%s",
                 len(candidates), request.budget, request.people, region)
    if not candidates:
        raise SelectionError(request.budget)
    if strategy is SelectionStrategy.SINGLE_BEST:
        return [pick_single_best(candidates)]
    return rank_top_n(candidates, policy)
