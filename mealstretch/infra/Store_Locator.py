"""Nearby grocery stores, nearest first.

Without a places credential, or when the provider times out, a fixed list
of placeholder stores is returned instead of an error.
"""
import asyncio
import logging
import math
from typing import List, Optional

import httpx

from mealstretch.domain.Store import Store
from mealstretch.infra.Places_Client import PlacesClient
from mealstretch.logic.geo.distance import format_miles, haversine_miles
from mealstretch.utilities.config import STORE_SEARCH_RADIUS_M
from mealstretch.utilities.constants import FALLBACK_STORES, MAX_STORES, STORES_TO_ENRICH
from mealstretch.utilities.errors import ProviderError

logger = logging.getLogger(__name__)


def fallback_stores() -> List[Store]:
    return [Store.from_dict(s) for s in FALLBACK_STORES]


def store_from_place(place: dict, lat: float, lng: float) -> Optional[Store]:
    if not isinstance(place, dict):
        return None
    try:
        location = (place.get("geometry") or {}).get("location") or {}
        s_lat, s_lng = float(location["lat"]), float(location["lng"])
    except (AttributeError, KeyError, TypeError, ValueError):
        return None
    if not (math.isfinite(s_lat) and math.isfinite(s_lng)):
        return None
    miles = haversine_miles(lat, lng, s_lat, s_lng)
    return Store(
        id=place.get("place_id", ""),
        name=place.get("name", "Grocery store"),
        address=place.get("vicinity", ""),
        distance=format_miles(miles),
        lat=s_lat,
        lng=s_lng,
        miles=miles,
    )


async def _enrich_address(places: PlacesClient, store: Store):
    """Swap the vicinity for the full address; keep the vicinity on failure."""
    if not store.id:
        return
    try:
        address = await places.place_address(store.id)
    except (httpx.HTTPError, ProviderError, KeyError, TypeError, ValueError) as e:
        logger.warning("Address lookup failed for %s: %s", store.name, e)
        return
    if address:
        store.address = address


async def find_nearby_stores(lat: float, lng: float, api_key: Optional[str],
                             radius_m: int = STORE_SEARCH_RADIUS_M,
                             transport: Optional[httpx.AsyncBaseTransport] = None) -> List[Store]:
    if not api_key:
        logger.info("GOOGLE_MAPS_API_KEY not set, returning fallback stores")
        return fallback_stores()
    async with PlacesClient(api_key, transport=transport) as places:
        try:
            results = await places.nearby_supermarkets(lat, lng, radius_m)
        except httpx.TimeoutException:
            logger.warning("Nearby store search timed out, returning fallback stores")
            return fallback_stores()

        stores = [s for s in (store_from_place(p, lat, lng) for p in results) if s is not None]
        stores.sort(key=lambda s: s.miles if s.miles is not None else math.inf)
        stores = stores[:MAX_STORES]
        await asyncio.gather(*(_enrich_address(places, s) for s in stores[:STORES_TO_ENRICH]))
    return stores
