from __future__ import annotations

import asyncio

import httpx
import pytest

from src.adapters.maps.google_maps_adapter import GoogleMapsAdapter, strip_html_tags
from src.domain.exceptions import ConfigurationError, ProviderUnavailable
from src.domain.models import Coordinate

START = Coordinate(latitude=38.5, longitude=-120.2)
END = Coordinate(latitude=43.252, longitude=-126.453)

DIRECTIONS_OK = {
    "status": "OK",
    "routes": [
        {
            "overview_polyline": {"points": "_p~iF~ps|U_ulLnnqC_mqNvxq`@"},
            "legs": [
                {
                    "distance": {"value": 812000, "text": "812 km"},
                    "duration": {"value": 30600, "text": "8 hours 30 mins"},
                    "steps": [
                        {
                            "html_instructions": "Head <b>north</b> on <div>Main St</div>",
                            "distance": {"value": 500, "text": "0.5 km"},
                            "duration": {"value": 60, "text": "1 min"},
                            "start_location": {"lat": 38.5, "lng": -120.2},
                            "end_location": {"lat": 38.505, "lng": -120.2},
                        }
                    ],
                }
            ],
        }
    ],
}


def _adapter(handler, api_key: str | None = "test-key") -> GoogleMapsAdapter:
    return GoogleMapsAdapter(api_key=api_key, transport=httpx.MockTransport(handler))


def test_calculate_route_parses_directions_response() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=DIRECTIONS_OK)

    route = asyncio.run(
        _adapter(handler).calculate_route(START, END, avoid_tolls=True)
    )

    assert seen[0].url.path.endswith("/directions/json")
    params = seen[0].url.params
    assert params["origin"] == "38.5,-120.2"
    assert params["mode"] == "driving"
    assert params["avoid"] == "tolls"
    assert params["key"] == "test-key"

    assert route.distance_m == 812000
    assert route.duration_text == "8 hours 30 mins"
    assert len(route.polyline) == 3
    assert route.bounds.northeast.latitude == pytest.approx(43.252)
    assert route.steps[0].instruction == "Head north on Main St"
    assert route.steps[0].end == Coordinate(latitude=38.505, longitude=-120.2)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"status": "ZERO_RESULTS", "routes": []}),
        httpx.Response(500, text="upstream error"),
        httpx.Response(200, text="not json"),
        httpx.Response(
            200,
            json={"status": "OK", "routes": [{"overview_polyline": {"points": "_p~iF"}}]},
        ),
    ],
)
def test_calculate_route_failures_become_provider_unavailable(
    response: httpx.Response,
) -> None:
    adapter = _adapter(lambda request: response)
    with pytest.raises(ProviderUnavailable):
        asyncio.run(adapter.calculate_route(START, END))


def test_transport_error_becomes_provider_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route to host", request=request)

    with pytest.raises(ProviderUnavailable):
        asyncio.run(_adapter(handler).calculate_route(START, END))


def test_calculate_route_requires_api_key() -> None:
    adapter = _adapter(lambda r: httpx.Response(200), api_key="your_google_maps_api_key_here")
    with pytest.raises(ConfigurationError):
        asyncio.run(adapter.calculate_route(START, END))


def test_geocode_returns_first_result() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["address"] == "New York"
        return httpx.Response(
            200,
            json={
                "status": "OK",
                "results": [
                    {
                        "formatted_address": "New York, NY, USA",
                        "geometry": {"location": {"lat": 40.7128, "lng": -74.006}},
                    }
                ],
            },
        )

    adapter = _adapter(handler)

    assert asyncio.run(adapter.geocode("New York")) == Coordinate(
        latitude=40.7128, longitude=-74.006
    )


def test_geocode_no_results_and_unconfigured() -> None:
    adapter = _adapter(
        lambda r: httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []})
    )
    assert asyncio.run(adapter.geocode("nowhere")) is None
    assert asyncio.run(adapter.geocode("")) is None
    assert asyncio.run(_adapter(lambda r: httpx.Response(200), api_key="").geocode("x")) is None


def test_reverse_geocode_returns_formatted_address() -> None:
    adapter = _adapter(
        lambda r: httpx.Response(
            200,
            json={"status": "OK", "results": [{"formatted_address": "Main St 1"}]},
        )
    )
    assert asyncio.run(adapter.reverse_geocode(START)) == "Main St 1"


def test_strip_html_tags() -> None:
    assert strip_html_tags("Turn <b>left</b>") == "Turn left"
    assert strip_html_tags("") == ""
