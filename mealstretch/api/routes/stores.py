import logging
from typing import Optional

from fastapi import APIRouter, Query

from mealstretch.infra.Geocoder import geocode_address
from mealstretch.infra.Store_Locator import fallback_stores, find_nearby_stores
from mealstretch.utilities import config
from mealstretch.utilities.errors import ClientInputError

router = APIRouter()
logger = logging.getLogger(__name__)


def _parse_coord(value: Optional[str], name: str, limit: float) -> Optional[float]:
    if value is None or not value.strip():
        return None
    try:
        coord = float(value)
    except ValueError:
        raise ClientInputError(f"'{name}' must be a number")
    if not -limit <= coord <= limit:
        raise ClientInputError(f"'{name}' out of range")
    return coord


@router.get("/api/nearby-stores")
async def api_nearby_stores(lat: Optional[str] = Query(default=None),
                            lng: Optional[str] = Query(default=None),
                            address: Optional[str] = Query(default=None)):
    """Grocery stores near the coordinates (or the geocoded address), nearest first."""
    lat_f = _parse_coord(lat, "lat", 90)
    lng_f = _parse_coord(lng, "lng", 180)
    if lat_f is None or lng_f is None:
        if not (address and address.strip()):
            raise ClientInputError("lat and lng are required")
        if not config.GOOGLE_MAPS_API_KEY:
            return [s.to_dict() for s in fallback_stores()]
        lat_f, lng_f = await geocode_address(address, config.GOOGLE_MAPS_API_KEY)

    stores = await find_nearby_stores(lat_f, lng_f, config.GOOGLE_MAPS_API_KEY)
    return [s.to_dict() for s in stores]


@router.get("/api/geocode")
async def api_geocode(address: Optional[str] = Query(default=None)):
    lat, lng = await geocode_address(address, config.GOOGLE_MAPS_API_KEY)
    return {"lat": lat, "lng": lng}
