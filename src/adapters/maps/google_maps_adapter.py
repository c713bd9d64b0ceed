from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from src.adapters.config import PLACEHOLDER_API_KEY
from src.app.ports.output import IDirectionsProvider
from src.domain.algorithms.geo_utils import bounding_box, decode_polyline
from src.domain.exceptions import ConfigurationError, DecodeError, ProviderUnavailable
from src.domain.models import Coordinate, RouteResult, RouteStep

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"

_TAG_RE = re.compile(r"<[^>]*>")


def strip_html_tags(text: str) -> str:
    return _TAG_RE.sub("", text or "")


def _coordinate(raw: Mapping[str, Any]) -> Coordinate:
    return Coordinate(latitude=float(raw["lat"]), longitude=float(raw["lng"]))


def parse_route(route: Mapping[str, Any]) -> RouteResult:
    """Build a `RouteResult` from one entry of a Directions API `routes` list."""

    leg = route["legs"][0]
    points = decode_polyline(route["overview_polyline"]["points"])

    steps = tuple(
        RouteStep(
            instruction=strip_html_tags(step.get("html_instructions", "")),
            distance_m=int(step["distance"]["value"]),
            duration_s=int(step["duration"]["value"]),
            distance_text=str(step["distance"]["text"]),
            duration_text=str(step["duration"]["text"]),
            start=_coordinate(step["start_location"]),
            end=_coordinate(step["end_location"]),
        )
        for step in leg.get("steps", ())
    )

    return RouteResult(
        polyline=points,
        distance_m=int(leg["distance"]["value"]),
        duration_s=int(leg["duration"]["value"]),
        distance_text=str(leg["distance"]["text"]),
        duration_text=str(leg["duration"]["text"]),
        bounds=bounding_box(points),
        steps=steps,
    )


@dataclass(slots=True)
class GoogleMapsAdapter(IDirectionsProvider):
    """Google Geocoding + Directions over HTTP.

    Env vars:
      - GOOGLE_MAPS_API_KEY
      - MAPS_TIMEOUT_S: geocoding timeout (default 10)
      - DIRECTIONS_TIMEOUT_S: directions timeout (default 15)
    """

    api_key: str | None = None
    geocode_timeout_s: float = 10.0
    directions_timeout_s: float = 15.0
    transport: httpx.AsyncBaseTransport | None = None

    def __post_init__(self) -> None:
        if self.api_key is None:
            self.api_key = os.getenv("GOOGLE_MAPS_API_KEY")
        if os.getenv("MAPS_TIMEOUT_S"):
            self.geocode_timeout_s = float(os.environ["MAPS_TIMEOUT_S"])
        if os.getenv("DIRECTIONS_TIMEOUT_S"):
            self.directions_timeout_s = float(os.environ["DIRECTIONS_TIMEOUT_S"])

    @property
    def is_configured(self) -> bool:
        key = (self.api_key or "").strip()
        return bool(key) and key != PLACEHOLDER_API_KEY

    async def _get_json(
        self, url: str, params: Mapping[str, str], timeout_s: float
    ) -> Mapping[str, Any]:
        query = {**params, "key": self.api_key or ""}
        try:
            async with httpx.AsyncClient(
                timeout=timeout_s, transport=self.transport
            ) as client:
                resp = await client.get(url, params=query)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as exc:
            raise ProviderUnavailable(
                f"HTTP {exc.response.status_code} from maps API"
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderUnavailable(f"Maps request failed: {exc}") from exc
        except ValueError as exc:
            raise ProviderUnavailable("Maps API returned invalid JSON") from exc

    async def geocode(self, address: str) -> Coordinate | None:
        if not address or not self.is_configured:
            return None

        data = await self._get_json(
            GEOCODE_URL, {"address": address}, self.geocode_timeout_s
        )
        results = data.get("results") or []
        if data.get("status") != "OK" or not results:
            return None
        return _coordinate(results[0]["geometry"]["location"])

    async def reverse_geocode(self, coordinate: Coordinate) -> str | None:
        if not self.is_configured:
            return None

        data = await self._get_json(
            GEOCODE_URL,
            {"latlng": f"{coordinate.latitude},{coordinate.longitude}"},
            self.geocode_timeout_s,
        )
        results = data.get("results") or []
        if data.get("status") != "OK" or not results:
            return None
        return results[0].get("formatted_address")

    async def calculate_route(
        self,
        start: Coordinate,
        end: Coordinate,
        *,
        travel_mode: str = "driving",
        avoid_tolls: bool = False,
        avoid_highways: bool = False,
    ) -> RouteResult:
        if not self.is_configured:
            raise ConfigurationError("Google Maps API key not configured")

        params = {
            "origin": f"{start.latitude},{start.longitude}",
            "destination": f"{end.latitude},{end.longitude}",
            "mode": travel_mode,
        }
        avoid = [
            name
            for name, flag in (("tolls", avoid_tolls), ("highways", avoid_highways))
            if flag
        ]
        if avoid:
            params["avoid"] = "|".join(avoid)

        data = await self._get_json(DIRECTIONS_URL, params, self.directions_timeout_s)
        routes = data.get("routes") or []
        if data.get("status") != "OK" or not routes:
            raise ProviderUnavailable(f"No route found: {data.get('status')}")

        try:
            return parse_route(routes[0])
        except (KeyError, IndexError, TypeError, DecodeError) as exc:
            raise ProviderUnavailable(f"Malformed directions response: {exc}") from exc
