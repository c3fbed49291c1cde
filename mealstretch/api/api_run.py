from fastapi import Body, Depends, FastAPI
from typing import Any
import logging

from mealstretch.api.handlers import register_error_handlers
from mealstretch.api.routes import inventory, narrate, stores
from mealstretch.domain.PlanRequest import PlanRequest
from mealstretch.infra.Catalog_Repository import Catalog, get_catalog
from mealstretch.infra.Region_Resolver import build_region_resolver
from mealstretch.logic.selection.meal_selector import SelectionStrategy, select_meals
from mealstretch.utilities import config
from mealstretch.utilities.validators import PlanMealInput, parse_input

# Logging
logger = logging.getLogger("mealstretch")

# Initialize FastAPI app
app = FastAPI(title="MealStretch API")
register_error_handlers(app)

# Include routers
app.include_router(inventory.router)
app.include_router(stores.router)
app.include_router(narrate.router)


@app.on_event("startup")
def _load_catalog():
    """Load and validate the catalog once; a bad catalog aborts startup."""
    catalog = get_catalog()
    logger.info("Serving %d meal templates, plan protocol v%d", len(catalog.templates), config.PLAN_API_VERSION)


def get_region_resolver():
    return build_region_resolver(config.GOOGLE_MAPS_API_KEY)


# -------------------- API --------------------
@app.get("/api")
def api_root():
    return {"ok": True, "message": "MealStretch API is running"}


@app.post("/api/plan-meal")
async def api_plan_meal(payload: Any = Body(default=None),
                        catalog: Catalog = Depends(get_catalog),
                        resolver=Depends(get_region_resolver)):
    """Recommend meals for a budget and household.

    Protocol version 2 answers with a ranked ``meals`` list, version 1 (legacy
    clients) with the single best ``meal``. The version comes from the body,
    falling back to PLAN_API_VERSION.
    """
    data = parse_input(PlanMealInput, payload)
    request = PlanRequest.from_input(data)

    region = None
    if request.has_coordinates:
        lookup = await resolver.resolve(request.lat, request.lng)
        if lookup.available:
            region = lookup.region

    strategy = SelectionStrategy.for_version(data.version or config.PLAN_API_VERSION)
    plans = select_meals(request, catalog, region=region, strategy=strategy)
    logger.info("Planned %d meal(s) budget=%.2f people=%d region=%s strategy=%s",
                len(plans), request.budget, request.people, region, strategy.value)

    result = {
        "budget": request.budget,
        "people": request.people,
        "region": region,
        "strategy": strategy.value,
    }
    if strategy is SelectionStrategy.SINGLE_BEST:
        result["meal"] = plans[0].to_dict()
    else:
        result["meals"] = [p.to_dict() for p in plans]

    store_names = data.store_names()
    if store_names:
        result["nearbyStores"] = store_names
        result["recommendedStore"] = store_names[0]
    return result
