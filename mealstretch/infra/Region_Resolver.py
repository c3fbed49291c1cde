"""Coordinates -> cuisine region tag.

The resolver is a capability: callers always get a RegionLookup back and
check ``available`` instead of catching exceptions. Lookup failures of any
kind are logged and reported as "no region"; they never fail a plan request.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from mealstretch.infra.Places_Client import PlacesClient
from mealstretch.utilities.constants import COUNTRY_REGIONS, STATE_REGIONS
from mealstretch.utilities.errors import ProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionLookup:
    available: bool
    region: Optional[str] = None


UNAVAILABLE = RegionLookup(available=False)


def region_from_components(components: List[Dict[str, Any]]) -> Optional[str]:
    """Map geocoder address components to the primary region tag."""
    country = state = None
    for comp in components:
        types = comp.get("types") or []
        if "country" in types:
            country = comp.get("short_name")
        elif "administrative_area_level_1" in types:
            state = comp.get("short_name")
    if country in COUNTRY_REGIONS:
        return COUNTRY_REGIONS[country]
    if country == "US" and state in STATE_REGIONS:
        return STATE_REGIONS[state][0]
    return None


class UnavailableRegionResolver:
    """Used when no geocoding credential is configured."""

    async def resolve(self, lat: float, lng: float) -> RegionLookup:
        return UNAVAILABLE


class FixedRegionResolver:
    def __init__(self, region: Optional[str]):
        self.region = region

    async def resolve(self, lat: float, lng: float) -> RegionLookup:
        return RegionLookup(available=True, region=self.region)


class GoogleRegionResolver:
    def __init__(self, api_key: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self._transport = transport

    async def resolve(self, lat: float, lng: float) -> RegionLookup:
        try:
            async with PlacesClient(self.api_key, transport=self._transport) as places:
                components = await places.reverse_geocode(lat, lng)
            region = region_from_components(components)
        except (httpx.HTTPError, ProviderError, AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Region lookup failed for (%s, %s): %s", lat, lng, e)
            return UNAVAILABLE
        logger.info("Resolved (%s, %s) to region %s", lat, lng, region)
        return RegionLookup(available=True, region=region)


def build_region_resolver(api_key: Optional[str]):
    if not api_key:
        return UnavailableRegionResolver()
    return GoogleRegionResolver(api_key)
