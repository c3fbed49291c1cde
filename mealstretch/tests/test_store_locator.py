import httpx
import pytest

from mealstretch.infra.Geocoder import geocode_address
from mealstretch.infra.Store_Locator import find_nearby_stores
from mealstretch.logic.geo.distance import format_miles, haversine_miles
from mealstretch.utilities.errors import ClientInputError, FeatureNotConfiguredError, ProviderError

CENTER = (40.0, -75.0)


def _places(count):
    # listed farthest first so the locator has to sort
    return [
        {
            "place_id": f"p{i}",
            "name": f"Store {i}",
            "vicinity": f"{i} Vicinity Rd",
            "geometry": {"location": {"lat": CENTER[0] + 0.01 * i, "lng": CENTER[1]}},
        }
        for i in range(count, 0, -1)
    ]


def _transport(places=None, failing_details=(), seen=None):
    def handler(request: httpx.Request):
        if seen is not None:
            seen.append(request)
        assert request.url.params["key"] == "test-key"
        if request.url.path.endswith("/nearbysearch/json"):
            return httpx.Response(200, json={"status": "OK", "results": places or []})
        if request.url.path.endswith("/details/json"):
            place_id = request.url.params["place_id"]
            if place_id in failing_details:
                return httpx.Response(500)
            return httpx.Response(200, json={"status": "OK", "result": {"formatted_address": f"{place_id} Full Address, PA"}})
        if request.url.path.endswith("/geocode/json"):
            if request.url.params.get("address") == "nowhere":
                return httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []})
            return httpx.Response(200, json={"status": "OK", "results": [
                {"geometry": {"location": {"lat": 40.7484, "lng": -73.9857}}}
            ]})
        return httpx.Response(404)
    return httpx.MockTransport(handler)


def test_haversine_one_degree_of_longitude_at_equator():
    assert haversine_miles(0, 0, 0, 1) == pytest.approx(69.1, abs=0.05)
    assert format_miles(haversine_miles(0, 0, 0, 1)) == "69.1 mi"
    assert haversine_miles(40, -75, 40, -75) == 0


@pytest.mark.asyncio
async def test_no_key_returns_three_fallback_stores():
    stores = await find_nearby_stores(*CENTER, api_key=None)
    assert len(stores) == 3
    assert all(s.distance.endswith(" mi") for s in stores)


@pytest.mark.asyncio
async def test_stores_sorted_capped_and_enriched():
    stores = await find_nearby_stores(*CENTER, api_key="test-key", transport=_transport(_places(12)))
    assert len(stores) == 10
    assert [s.name for s in stores[:3]] == ["Store 1", "Store 2", "Store 3"]
    miles = [s.miles for s in stores]
    assert miles == sorted(miles)
    assert stores[0].distance == format_miles(haversine_miles(*CENTER, CENTER[0] + 0.01, CENTER[1]))
    for store in stores[:5]:
        assert store.address.endswith("Full Address, PA")
    for store in stores[5:]:
        assert store.address.endswith("Vicinity Rd")


@pytest.mark.asyncio
async def test_enrichment_failure_keeps_vicinity():
    stores = await find_nearby_stores(*CENTER, api_key="test-key",
                                      transport=_transport(_places(3), failing_details={"p2"}))
    by_id = {s.id: s for s in stores}
    assert by_id["p2"].address == "2 Vicinity Rd"
    assert by_id["p1"].address == "p1 Full Address, PA"


@pytest.mark.asyncio
async def test_places_without_location_are_skipped():
    places = _places(2) + [
        {"place_id": "nowhere", "name": "Ghost Mart"},
        {"place_id": "nulls", "name": "Null Mart", "geometry": {"location": {"lat": None, "lng": None}}},
        {"place_id": "words", "name": "Word Mart", "geometry": {"location": {"lat": "north", "lng": "west"}}},
        {"place_id": "flat", "name": "Flat Mart", "geometry": "somewhere"},
        "not-a-place",
    ]
    stores = await find_nearby_stores(*CENTER, api_key="test-key", transport=_transport(places))
    assert [s.id for s in stores] == ["p1", "p2"]


@pytest.mark.asyncio
async def test_timeout_falls_back():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)
    stores = await find_nearby_stores(*CENTER, api_key="test-key", transport=httpx.MockTransport(handler))
    assert len(stores) == 3


@pytest.mark.asyncio
async def test_provider_error_status_raises():
    def handler(request):
        return httpx.Response(200, json={"status": "REQUEST_DENIED", "error_message": "The provided API key is invalid."})
    with pytest.raises(ProviderError, match="invalid"):
        await find_nearby_stores(*CENTER, api_key="test-key", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_geocode_address():
    lat, lng = await geocode_address("350 5th Ave", "test-key", transport=_transport())
    assert (lat, lng) == (40.7484, -73.9857)


@pytest.mark.asyncio
async def test_geocode_unknown_address():
    with pytest.raises(ClientInputError, match="not found"):
        await geocode_address("nowhere", "test-key", transport=_transport())


@pytest.mark.asyncio
async def test_geocode_without_key():
    with pytest.raises(FeatureNotConfiguredError):
        await geocode_address("350 5th Ave", None)


@pytest.mark.asyncio
async def test_geocode_timeout_is_unavailable():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)
    with pytest.raises(FeatureNotConfiguredError):
        await geocode_address("350 5th Ave", "test-key", transport=httpx.MockTransport(handler))
