"""Thin async wrapper around the Google Geocoding and Places web services.

Callers use it as an async context manager so one HTTP connection pool
serves all lookups of a request:

    async with PlacesClient(api_key) as places:
        coords = await places.geocode("1600 Amphitheatre Pkwy")

Timeouts propagate as ``httpx.TimeoutException`` so each caller can decide
what "provider unavailable" means for its endpoint; every other failure is
raised as ProviderError.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from mealstretch.utilities.config import PROVIDER_TIMEOUT_SECONDS
from mealstretch.utilities.constants import GOOGLE_DETAILS_URL, GOOGLE_GEOCODE_URL, GOOGLE_NEARBY_URL
from mealstretch.utilities.errors import ProviderError

logger = logging.getLogger(__name__)

_OK_STATUSES = ("OK", "ZERO_RESULTS")


class PlacesClient:
    def __init__(self, api_key: str, timeout: float = PROVIDER_TIMEOUT_SECONDS,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._http = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if self._http is None:
            raise RuntimeError("PlacesClient must be used inside 'async with'")
        try:
            response = await self._http.get(url, params={**params, "key": self.api_key})
        except httpx.TimeoutException:
            raise
        except httpx.HTTPError as e:
            raise ProviderError(f"Places request failed: {e}") from e
        if response.status_code != 200:
            raise ProviderError(f"Places API returned HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError("Places API returned invalid JSON") from e
        if not isinstance(data, dict):
            raise ProviderError("Places API returned an unexpected payload")
        status = data.get("status")
        if status not in _OK_STATUSES:
            message = data.get("error_message") or status or "unknown status"
            raise ProviderError(f"Places API error: {message}")
        return data

    async def geocode(self, address: str) -> Optional[Tuple[float, float]]:
        """Return (lat, lng) for a free-text address, or None when unknown."""
        data = await self._get_json(GOOGLE_GEOCODE_URL, {"address": address})
        results = data.get("results") or []
        if not results:
            return None
        location = results[0]["geometry"]["location"]
        return float(location["lat"]), float(location["lng"])

    async def reverse_geocode(self, lat: float, lng: float) -> List[Dict[str, Any]]:
        """Address components of the best match for the coordinates."""
        data = await self._get_json(GOOGLE_GEOCODE_URL, {"latlng": f"{lat},{lng}"})
        results = data.get("results") or []
        if not results:
            return []
        return results[0].get("address_components") or []

    async def nearby_supermarkets(self, lat: float, lng: float, radius_m: int) -> List[Dict[str, Any]]:
        data = await self._get_json(GOOGLE_NEARBY_URL, {
            "location": f"{lat},{lng}",
            "radius": radius_m,
            "type": "supermarket",
        })
        return data.get("results") or []

    async def place_address(self, place_id: str) -> Optional[str]:
        data = await self._get_json(GOOGLE_DETAILS_URL, {"place_id": place_id, "fields": "formatted_address"})
        return (data.get("result") or {}).get("formatted_address")
