import httpx
import pytest

from mealstretch.infra.Region_Resolver import (
    UNAVAILABLE,
    FixedRegionResolver,
    GoogleRegionResolver,
    UnavailableRegionResolver,
    build_region_resolver,
    region_from_components,
)


def _components(state=None, country="US"):
    comps = [{"long_name": "x", "short_name": country, "types": ["country", "political"]}]
    if state:
        comps.insert(0, {"long_name": "y", "short_name": state, "types": ["administrative_area_level_1", "political"]})
    return comps


def _transport(components):
    def handler(request):
        assert "latlng" in request.url.params
        return httpx.Response(200, json={"status": "OK", "results": [{"address_components": components}]})
    return httpx.MockTransport(handler)


def test_state_maps_to_primary_region():
    assert region_from_components(_components("TX")) == "southwest"
    assert region_from_components(_components("MN")) == "midwest"
    assert region_from_components(_components("CA")) == "west_coast"


def test_special_countries():
    assert region_from_components(_components(country="JP")) == "japanese"
    assert region_from_components(_components("MH", country="IN")) == "indian"
    assert region_from_components(_components(country="CN")) == "chinese"
    assert region_from_components(_components("JAL", country="MX")) == "mexican"


def test_unknown_places_have_no_region():
    assert region_from_components(_components(country="FR")) is None
    assert region_from_components([]) is None


@pytest.mark.asyncio
async def test_google_resolver():
    lookup = await GoogleRegionResolver("test-key", transport=_transport(_components("GA"))).resolve(33.7, -84.4)
    assert lookup.available
    assert lookup.region == "southeast"


@pytest.mark.asyncio
async def test_failures_are_swallowed():
    def boom(request):
        raise httpx.ConnectError("unreachable", request=request)
    lookup = await GoogleRegionResolver("test-key", transport=httpx.MockTransport(boom)).resolve(0, 0)
    assert lookup == UNAVAILABLE

    def denied(request):
        return httpx.Response(200, json={"status": "REQUEST_DENIED"})
    lookup = await GoogleRegionResolver("test-key", transport=httpx.MockTransport(denied)).resolve(0, 0)
    assert not lookup.available

    def garbage(request):
        return httpx.Response(200, text="<html>")
    lookup = await GoogleRegionResolver("test-key", transport=httpx.MockTransport(garbage)).resolve(0, 0)
    assert not lookup.available

    def not_an_object(request):
        return httpx.Response(200, json=[])
    lookup = await GoogleRegionResolver("test-key", transport=httpx.MockTransport(not_an_object)).resolve(0, 0)
    assert lookup == UNAVAILABLE

    lookup = await GoogleRegionResolver("test-key", transport=_transport(["TX", None])).resolve(0, 0)
    assert lookup == UNAVAILABLE


@pytest.mark.asyncio
async def test_unconfigured_and_fixed_resolvers():
    assert isinstance(build_region_resolver(None), UnavailableRegionResolver)
    assert isinstance(build_region_resolver("k"), GoogleRegionResolver)
    assert (await UnavailableRegionResolver().resolve(1, 2)) == UNAVAILABLE
    assert (await FixedRegionResolver("mexican").resolve(1, 2)).region == "mexican"
