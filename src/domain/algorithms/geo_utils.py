from __future__ import annotations

import math
from typing import Iterable

from src.domain.exceptions import DecodeError
from src.domain.models import BoundingBox, Coordinate

EARTH_RADIUS_M = 6371000.0
POLYLINE_PRECISION = 1e5


def haversine_distance_m(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in meters."""

    lat1 = math.radians(a.latitude)
    lon1 = math.radians(a.longitude)
    lat2 = math.radians(b.latitude)
    lon2 = math.radians(b.longitude)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    s = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    )
    return 2.0 * EARTH_RADIUS_M * math.atan2(math.sqrt(s), math.sqrt(1.0 - s))


def bearing_deg(a: Coordinate, b: Coordinate) -> float:
    """Initial bearing from a to b, degrees clockwise from north in [0, 360)."""

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(
        dlon
    )
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def _read_value(encoded: str, index: int) -> tuple[int, int]:
    # One zig-zag encoded varint: 5-bit groups, low bits first, 0x20 = continue.
    result = 0
    shift = 0
    while True:
        if index >= len(encoded):
            raise DecodeError(f"Truncated polyline at offset {index}")
        code = ord(encoded[index]) - 63
        if not (0 <= code < 64):
            raise DecodeError(
                f"Invalid polyline character {encoded[index]!r} at offset {index}"
            )
        index += 1
        result |= (code & 0x1F) << shift
        shift += 5
        if code < 0x20:
            break

    value = ~(result >> 1) if result & 1 else result >> 1
    return value, index


def decode_polyline(encoded: str) -> tuple[Coordinate, ...]:
    """Decode a Google encoded polyline (precision 1e5)."""

    points: list[Coordinate] = []
    index = 0
    lat = 0
    lng = 0

    while index < len(encoded):
        dlat, index = _read_value(encoded, index)
        if index >= len(encoded):
            raise DecodeError("Polyline ends after a latitude without a longitude")
        dlng, index = _read_value(encoded, index)
        lat += dlat
        lng += dlng
        try:
            points.append(
                Coordinate(
                    latitude=lat / POLYLINE_PRECISION,
                    longitude=lng / POLYLINE_PRECISION,
                )
            )
        except ValueError as exc:
            raise DecodeError(f"Polyline decodes to an invalid point: {exc}") from exc

    return tuple(points)


def bounding_box(points: Iterable[Coordinate]) -> BoundingBox:
    pts = list(points)
    if not pts:
        origin = Coordinate(latitude=0.0, longitude=0.0)
        return BoundingBox(southwest=origin, northeast=origin)

    lats = [p.latitude for p in pts]
    lons = [p.longitude for p in pts]
    return BoundingBox(
        southwest=Coordinate(latitude=min(lats), longitude=min(lons)),
        northeast=Coordinate(latitude=max(lats), longitude=max(lons)),
    )


def polyline_distance_m(points: tuple[Coordinate, ...]) -> float:
    if len(points) < 2:
        return 0.0
    total = 0.0
    for a, b in zip(points, points[1:]):
        total += float(haversine_distance_m(a, b))
    return float(total)
