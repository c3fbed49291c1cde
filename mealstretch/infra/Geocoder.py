"""Free-text address -> coordinates."""
import logging
from typing import Optional, Tuple

import httpx

from mealstretch.infra.Places_Client import PlacesClient
from mealstretch.utilities.errors import ClientInputError, FeatureNotConfiguredError

logger = logging.getLogger(__name__)


async def geocode_address(address: Optional[str], api_key: Optional[str],
                          transport: Optional[httpx.AsyncBaseTransport] = None) -> Tuple[float, float]:
    address = (address or "").strip()
    if not address:
        raise ClientInputError("Address is required")
    if not api_key:
        raise FeatureNotConfiguredError("Geocoding is not configured: set GOOGLE_MAPS_API_KEY")
    try:
        async with PlacesClient(api_key, transport=transport) as places:
            coords = await places.geocode(address)
    except httpx.TimeoutException as e:
        logger.warning("Geocoding timed out for %r", address)
        raise FeatureNotConfiguredError("Geocoding provider is unavailable (timed out)") from e
    if coords is None:
        raise ClientInputError("Address not found")
    return coords
