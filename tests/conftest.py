"""Pytest configuration and fixtures."""

import base64
import json
from typing import Any, AsyncGenerator
from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from allergen_api.core.config import get_settings
from allergen_api.main import app
from allergen_api.models.common import LatLng
from allergen_api.models.restaurant import GooglePlace
from allergen_api.services.logo_lookup import LogoLookupService
from allergen_api.services.logo_lookup.factory import clear_service_cache as clear_logo_cache
from allergen_api.services.menu_recognition import MenuRecognitionService
from allergen_api.services.menu_recognition.factory import (
    clear_service_cache as clear_menu_recognition_cache,
)
from allergen_api.services.places import PlacesLookupService
from allergen_api.services.places.factory import clear_service_cache as clear_places_cache

# Sample test image (1x1 red pixel PNG)
TINY_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8DwHwAFBQIAX8jx0gAAAABJRU5ErkJggg=="
)
TINY_PNG_BYTES = base64.b64decode(TINY_PNG_BASE64)

SAN_FRANCISCO = LatLng(lat=37.7749, lng=-122.4194)


def mock_response(payload: Any, status_code: int = 200) -> MagicMock:
    """An httpx.Response stand-in returning ``payload`` as JSON."""
    return MagicMock(
        status_code=status_code,
        json=lambda: payload,
        text=json.dumps(payload),
        raise_for_status=lambda: None,
    )


@pytest.fixture(autouse=True)
def reset_app_state():
    """Drop dependency overrides and cached settings/services between tests."""
    yield
    app.dependency_overrides.clear()
    get_settings.cache_clear()
    clear_menu_recognition_cache()
    clear_places_cache()
    clear_logo_cache()


@pytest.fixture
def unconfigured(monkeypatch):
    """Run with no provider API keys set."""
    for var in ("GEMINI_API_KEY", "GOOGLE_MAPS_API_KEY", "LOGODEV_API_KEY"):
        monkeypatch.setenv(var, "")
    get_settings.cache_clear()
    clear_menu_recognition_cache()
    clear_places_cache()
    clear_logo_cache()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """
    Create async test client.

    Usage:
        async def test_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def places() -> MagicMock:
    """Place lookup provider double; set ``search_nearby.return_value`` per test."""
    service = MagicMock(spec=PlacesLookupService)
    service.provider_name = "google_places"
    service.search_nearby.return_value = []
    return service


@pytest.fixture
def logos() -> MagicMock:
    """Logo lookup provider double answering no logo."""
    service = MagicMock(spec=LogoLookupService)
    service.provider_name = "logo.dev"
    service.find_logo.return_value = None
    return service


@pytest.fixture
def recognizer() -> MagicMock:
    """Menu recognition provider double."""
    service = MagicMock(spec=MenuRecognitionService)
    service.provider_name = "gemini/test"
    return service


@pytest.fixture
def sample_places() -> list[GooglePlace]:
    """Google results around downtown San Francisco."""
    return [
        GooglePlace(
            name="Burger Barn",
            location=LatLng(lat=37.7751, lng=-122.4192),
        ),
        GooglePlace(
            name="Pizza Palace Downtown",
            location=LatLng(lat=37.7755, lng=-122.4190),
            icon="https://maps.gstatic.com/mapfiles/place_api/icons/restaurant-71.png",
        ),
    ]


@pytest.fixture
def sample_restaurants() -> list[dict]:
    """Saved restaurants as the app keeps them on the device."""
    sf = {"type": "Point", "coordinates": [-122.4194, 37.7749]}
    los_angeles = {"type": "Point", "coordinates": [-118.2437, 34.0522]}
    return [
        {"id": "1", "restaurantName": "Pizza Palace", "location": sf, "apimatch": "google"},
        {"id": "2", "restaurantName": "Burger Barn", "location": sf, "apimatch": "none"},
        {"id": "3", "restaurantName": "Palace Sushi", "location": los_angeles, "apimatch": "google"},
        {"id": "4", "restaurantName": "Pizza Hut", "location": sf, "apimatch": "google", "hidden": True},
    ]
