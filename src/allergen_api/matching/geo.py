"""Great-circle distance helpers."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

EARTH_RADIUS_M = 6_371_000.0
KM_TO_MILES = 0.621371


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in degrees."""

    lat: float
    lng: float

    @classmethod
    def coerce(cls, value: Any) -> "GeoPoint":
        """
        Build a point from whatever the caller has.

        Accepts a GeoPoint, an object or mapping with ``lat``/``lng``, or a
        GeoJSON-style ``{"coordinates": [lng, lat]}``. Anything missing is 0.
        """
        if isinstance(value, GeoPoint):
            return value
        if value is None:
            return cls(0.0, 0.0)
        if isinstance(value, Mapping):
            coords = value.get("coordinates")
            lat, lng = value.get("lat"), value.get("lng")
        else:
            coords = getattr(value, "coordinates", None)
            lat, lng = getattr(value, "lat", None), getattr(value, "lng", None)

        if coords is not None:
            # GeoJSON order is [lng, lat]
            coords = list(coords)
            lng = coords[0] if len(coords) > 0 else None
            lat = coords[1] if len(coords) > 1 else None
        return cls(float(lat or 0.0), float(lng or 0.0))


def haversine_m(a: GeoPoint, b: GeoPoint) -> float:
    """Distance in meters between two points (haversine, spherical Earth)."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    if h > 1.0:  # float drift near antipodes; NaN falls through untouched
        h = 1.0
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Distance in kilometers. Used by list ranking."""
    return haversine_m(a, b) / 1000


def km_to_miles(km: float) -> float:
    return km * KM_TO_MILES
