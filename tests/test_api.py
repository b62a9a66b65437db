"""Route tests against the ASGI app."""

from unittest.mock import patch

import pytest
from httpx import AsyncClient

from allergen_api.api.dependencies import (
    get_logo_service,
    get_menu_scan_service,
    get_restaurant_service,
)
from allergen_api.main import app
from allergen_api.models.menu import MenuItem
from allergen_api.services.menu_recognition import MenuRecognitionResult
from allergen_api.services.menu_scan import MenuScanService
from allergen_api.services.places import PlacesLookupError
from allergen_api.services.restaurant import RestaurantService

from conftest import TINY_PNG_BASE64


@pytest.fixture
def restaurant_service(places, logos) -> RestaurantService:
    """RestaurantService over provider doubles, injected into the app."""
    service = RestaurantService(places, logos)
    app.dependency_overrides[get_restaurant_service] = lambda: service
    return service


@pytest.fixture
def menu_scan_service(recognizer) -> MenuScanService:
    """MenuScanService over a recognizer double, injected into the app."""
    service = MenuScanService(recognizer)
    app.dependency_overrides[get_menu_scan_service] = lambda: service
    return service


class TestServiceInfo:
    """Tests for root and health endpoints."""

    async def test_root(self, client: AsyncClient):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    async def test_health_reports_providers(self, client: AsyncClient, unconfigured):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert "timestamp" in body
        assert body["providers"] == {"gemini": False, "googlePlaces": False, "logoDev": False}


class TestMapsRoutes:
    """Tests for /api/maps."""

    async def test_match_found(self, client: AsyncClient, restaurant_service, places, sample_places):
        places.search_nearby.return_value = sample_places

        response = await client.get(
            "/api/maps",
            params={"restaurantName": "Pizza Palace", "lat": 37.7749, "lng": -122.4194},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["restaurantName"] == "Pizza Palace Downtown"
        assert body["apimatch"] == "google"
        assert body["location"] == {"lat": 37.7755, "lng": -122.419}
        assert body["googlePlace"]["name"] == "Pizza Palace Downtown"

    async def test_match_not_found(self, client: AsyncClient, restaurant_service):
        response = await client.get(
            "/api/maps",
            params={"restaurantName": "Mom's Kitchen", "lat": 37.7749, "lng": -122.4194},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["apimatch"] == "none"
        assert body["restaurantName"] == "Mom's Kitchen"
        assert body["googlePlace"] is None

    @pytest.mark.parametrize(
        "params",
        [
            {"lat": 37.7749, "lng": -122.4194},
            {"restaurantName": "Pizza Palace", "lng": -122.4194},
            {"restaurantName": "  ", "lat": 37.7749, "lng": -122.4194},
        ],
    )
    async def test_missing_parameters(self, client: AsyncClient, restaurant_service, params):
        response = await client.get("/api/maps", params=params)

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required parameters"

    async def test_upstream_error_is_502(self, client: AsyncClient, restaurant_service, places):
        places.search_nearby.side_effect = PlacesLookupError(
            "Places API returned status REQUEST_DENIED",
            error_code="UPSTREAM_STATUS",
            provider="google_places",
        )

        response = await client.get(
            "/api/maps",
            params={"restaurantName": "Pizza Palace", "lat": 37.7749, "lng": -122.4194},
        )

        assert response.status_code == 502
        details = response.json()["details"]
        assert details["provider"] == "google_places"
        assert details["error_code"] == "UPSTREAM_STATUS"

    async def test_unconfigured_is_503(self, client: AsyncClient, unconfigured):
        response = await client.get(
            "/api/maps",
            params={"restaurantName": "Pizza Palace", "lat": 37.7749, "lng": -122.4194},
        )

        assert response.status_code == 503
        assert response.json()["details"]["setting"] == "google_maps_api_key"

    async def test_nearby(self, client: AsyncClient, restaurant_service, places, sample_places):
        places.search_nearby.return_value = sample_places

        response = await client.get("/api/maps/nearby", params={"lat": 37.7749, "lng": -122.4194})

        assert response.status_code == 200
        assert [r["name"] for r in response.json()] == ["Burger Barn", "Pizza Palace Downtown"]
        assert places.search_nearby.await_args.kwargs["radius_m"] == 500


class TestRestaurantRoutes:
    """Tests for /api/restaurants."""

    async def test_verify(self, client: AsyncClient, restaurant_service, places, logos, sample_places):
        places.search_nearby.return_value = sample_places
        logos.find_logo.return_value = "https://img.logo.dev/pizzapalace.com"

        response = await client.post(
            "/api/restaurants/verify",
            json={"restaurantName": "Pizza Palace", "location": {"lat": 37.7749, "lng": -122.4194}},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["restaurantName"] == "Pizza Palace"
        assert body["verifiedName"] == "Pizza Palace Downtown"
        assert body["apimatch"] == "google"
        assert body["brandLogo"] == "https://img.logo.dev/pizzapalace.com"

    async def test_verify_rejects_empty_name(self, client: AsyncClient, restaurant_service):
        response = await client.post("/api/restaurants/verify", json={"restaurantName": ""})

        assert response.status_code == 422

    async def test_rank_by_search(self, client: AsyncClient, sample_restaurants):
        sample_restaurants[0]["menuItems"] = [{"name": "Margherita"}]

        response = await client.post(
            "/api/restaurants/rank",
            json={
                "restaurants": sample_restaurants,
                "searchText": "pizza",
                "location": {"lat": 37.7749, "lng": -122.4194},
            },
        )

        assert response.status_code == 200
        ranked = response.json()
        assert [r["restaurant"]["id"] for r in ranked] == ["4", "1", "2"]
        assert [r["similarity"] for r in ranked] == [100, 100, 0]
        assert ranked[1]["restaurant"]["restaurantName"] == "Pizza Palace"
        assert ranked[1]["restaurant"]["menuItems"] == [{"name": "Margherita"}]
        assert "distanceKm" not in ranked[0]

    async def test_rank_accepts_null_hidden(self, client: AsyncClient, sample_restaurants):
        sample_restaurants[0]["hidden"] = None

        response = await client.post(
            "/api/restaurants/rank",
            json={"restaurants": sample_restaurants[:3]},
        )

        assert response.status_code == 200
        assert [r["restaurant"]["id"] for r in response.json()] == ["1", "2", "3"]

    async def test_rank_by_distance(self, client: AsyncClient, sample_restaurants):
        response = await client.post(
            "/api/restaurants/rank",
            json={"restaurants": sample_restaurants, "location": {"lat": 34.0522, "lng": -118.2437}},
        )

        assert response.status_code == 200
        ranked = response.json()
        assert ranked[0]["restaurant"]["id"] == "3"
        assert ranked[0]["distanceKm"] == 0.0
        assert "similarity" not in ranked[0]


class TestLogoRoute:
    """Tests for /api/logo."""

    async def test_logo_found(self, client: AsyncClient, logos):
        logos.find_logo.return_value = "https://img.logo.dev/starbucks.com"
        app.dependency_overrides[get_logo_service] = lambda: logos

        response = await client.get("/api/logo", params={"name": "Starbucks", "verifiedName": "Starbucks"})

        assert response.status_code == 200
        assert response.json() == {"logo": "https://img.logo.dev/starbucks.com"}
        logos.find_logo.assert_awaited_once_with("Starbucks", "Starbucks")

    async def test_logo_unconfigured_is_null(self, client: AsyncClient, unconfigured):
        response = await client.get("/api/logo", params={"name": "Starbucks"})

        assert response.status_code == 200
        assert response.json() == {"logo": None}


class TestMenuRoutes:
    """Tests for menu upload and matching."""

    async def test_upload_menu_success(self, client: AsyncClient, menu_scan_service, recognizer):
        recognizer.extract_menu.return_value = MenuRecognitionResult(
            menu_items=[MenuItem(name="Cheeseburger", allergen_ingredients={"dairy": ["cheese"]})],
            provider="gemini/test",
        )

        response = await client.post(
            "/api/upload-menu", json={"image": f"data:image/jpeg;base64,{TINY_PNG_BASE64}"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["gemini"] is True
        assert body["data"]["source"] == "camera"
        item = body["data"]["menuItems"][0]
        assert item == {
            "name": "Cheeseburger",
            "allergenIngredients": {"dairy": ["cheese"]},
            "allergens": ["dairy"],
        }

    async def test_upload_menu_no_menu(self, client: AsyncClient, menu_scan_service, recognizer):
        recognizer.extract_menu.return_value = MenuRecognitionResult(provider="gemini/test")

        response = await client.post("/api/upload-menu", json={"image": TINY_PNG_BASE64})

        assert response.status_code == 200
        assert response.json() == {"success": False, "reason": "no_menu"}

    async def test_upload_menu_bad_image(self, client: AsyncClient, menu_scan_service):
        response = await client.post("/api/upload-menu", json={"image": "not base64!!"})

        assert response.status_code == 400
        assert response.json()["error"] == "Image is not valid base64"

    async def test_upload_menu_unconfigured_is_503(self, client: AsyncClient, unconfigured):
        response = await client.post("/api/upload-menu", json={"image": TINY_PNG_BASE64})

        assert response.status_code == 503
        assert response.json()["details"]["setting"] == "gemini_api_key"

    async def test_menu_match(self, client: AsyncClient):
        response = await client.post(
            "/api/menu/match",
            json={
                "sourceItems": [
                    {"name": "Margherita Pizza", "allergenIngredients": {"dairy": [], "gluten": []}},
                    {"name": "Soup", "allergenIngredients": {}},
                ],
                "targetItems": [
                    {"name": "Pepperoni Pizza", "allergenIngredients": {"dairy": [], "gluten": []}},
                    {"name": "Steak", "allergenIngredients": {"dairy": []}},
                ],
            },
        )

        assert response.status_code == 200
        matches = response.json()["matches"]
        assert len(matches) == 1
        assert matches[0]["sourceItem"]["name"] == "Margherita Pizza"
        assert matches[0]["targetItem"]["name"] == "Pepperoni Pizza"
        assert matches[0]["similarity"] == pytest.approx(0.79)
        assert matches[0]["isMatch"] is False


class TestProviderHealth:
    """Tests for the per-provider health endpoints."""

    async def test_places_healthy(self, client: AsyncClient, places):
        places.health_check.return_value = True

        with patch("allergen_api.api.routes.maps.get_places_lookup_service", return_value=places):
            response = await client.get("/api/maps/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "provider": "google_places",
            "available": True,
        }
        places.health_check.assert_awaited_once()

    async def test_places_unconfigured_reports_error(self, client: AsyncClient, unconfigured):
        response = await client.get("/api/maps/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "error"
        assert body["available"] is False
        assert "GOOGLE_MAPS_API_KEY" in body["error"]

    async def test_logo_unhealthy(self, client: AsyncClient, logos):
        logos.health_check.return_value = False

        with patch("allergen_api.api.routes.logo.get_logo_lookup_service", return_value=logos):
            response = await client.get("/api/logo/health")

        assert response.json() == {
            "status": "unhealthy",
            "provider": "logo.dev",
            "available": False,
        }

    async def test_logo_unconfigured(self, client: AsyncClient, unconfigured):
        response = await client.get("/api/logo/health")

        assert response.json() == {
            "status": "not_configured",
            "provider": "logo.dev",
            "available": False,
        }

    async def test_recognition_healthy(self, client: AsyncClient, recognizer):
        recognizer.health_check.return_value = True

        with patch(
            "allergen_api.api.routes.menu.get_menu_recognition_service", return_value=recognizer
        ):
            response = await client.get("/api/menu/recognition/health")

        assert response.json() == {
            "status": "healthy",
            "provider": "gemini/test",
            "available": True,
        }

    async def test_recognition_unconfigured_reports_error(self, client: AsyncClient, unconfigured):
        response = await client.get("/api/menu/recognition/health")

        body = response.json()
        assert body["status"] == "error"
        assert "GEMINI_API_KEY" in body["error"]
