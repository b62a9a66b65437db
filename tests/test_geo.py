"""Unit tests for distance helpers."""

import math

import pytest

from allergen_api.matching.geo import GeoPoint, haversine_km, haversine_m, km_to_miles
from allergen_api.models.common import LatLng
from allergen_api.models.restaurant import GeoJsonPoint


class TestHaversine:
    """Tests for great-circle distance."""

    def test_identical_points_are_zero(self):
        point = GeoPoint(37.7749, -122.4194)
        assert haversine_m(point, point) == 0.0

    def test_one_degree_of_longitude_at_equator(self):
        distance = haversine_km(GeoPoint(0, 0), GeoPoint(0, 1))
        assert distance == pytest.approx(111.19, abs=0.01)

    def test_meters_and_kilometers_agree(self):
        a, b = GeoPoint(37.7749, -122.4194), GeoPoint(34.0522, -118.2437)
        assert haversine_m(a, b) == pytest.approx(haversine_km(a, b) * 1000)

    def test_san_francisco_to_los_angeles(self):
        distance = haversine_km(GeoPoint(37.7749, -122.4194), GeoPoint(34.0522, -118.2437))
        assert distance == pytest.approx(559, abs=2)

    def test_antipodes_do_not_fail(self):
        distance = haversine_m(GeoPoint(0, 0), GeoPoint(0, 180))
        assert distance == pytest.approx(math.pi * 6_371_000)

    def test_nan_propagates(self):
        assert math.isnan(haversine_m(GeoPoint(float("nan"), 0), GeoPoint(0, 0)))

    def test_km_to_miles(self):
        assert km_to_miles(10) == pytest.approx(6.21371)


class TestGeoPointCoerce:
    """Tests for building points from stored records."""

    def test_geojson_mapping_is_lng_lat(self):
        point = GeoPoint.coerce({"type": "Point", "coordinates": [-122.4194, 37.7749]})
        assert point == GeoPoint(37.7749, -122.4194)

    def test_lat_lng_mapping(self):
        assert GeoPoint.coerce({"lat": 1.5, "lng": 2.5}) == GeoPoint(1.5, 2.5)

    def test_pydantic_models(self):
        assert GeoPoint.coerce(LatLng(lat=1, lng=2)) == GeoPoint(1, 2)
        assert GeoPoint.coerce(GeoJsonPoint(coordinates=[2, 1])) == GeoPoint(1, 2)

    def test_missing_values_default_to_origin(self):
        assert GeoPoint.coerce(None) == GeoPoint(0, 0)
        assert GeoPoint.coerce({"coordinates": []}) == GeoPoint(0, 0)
        assert GeoPoint.coerce({"lat": 3}) == GeoPoint(3, 0)
