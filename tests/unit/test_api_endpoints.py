"""
Unit tests for the estimator API endpoints.
"""
import json

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport

from config.settings import Settings
from internal.transport.http.app import create_app
from internal.transport.http.v1.handlers import router, set_dependencies


@pytest.fixture
def app(service):
    """Application with the router wired to the sample service."""
    set_dependencies(service)
    application = FastAPI()
    application.include_router(router)
    yield application
    set_dependencies(None)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


def price_body(selections, size_id="small", low=300, high=700, category_id="sofas"):
    return {
        "category_id": category_id,
        "feature_selections": selections,
        "size_id": size_id,
        "price_range": {"min": low, "max": high},
    }


class TestCategoryEndpoints:
    """Tests for /api/v1/categories."""

    @pytest.mark.asyncio
    async def test_list_categories(self, client):
        response = await client.get("/api/v1/categories")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [c["id"] for c in data] == ["sofas", "stools"]
        assert data[0]["features"][0]["selection_type"] == "single"
        assert data[0]["sizes"][0]["label"] == "Small (50-69 inches)"

    @pytest.mark.asyncio
    async def test_create_category(self, client):
        response = await client.post("/api/v1/categories", json={"name": "Armchairs"})

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Armchairs"
        assert body["features"] == []
        assert body["image_hint"] == "armchairs"

    @pytest.mark.asyncio
    async def test_create_category_requires_name(self, client):
        response = await client.post("/api/v1/categories", json={"name": ""})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_unknown_category(self, client):
        response = await client.get("/api/v1/categories/chairs")

        assert response.status_code == 404
        error = response.json()["detail"]
        assert error["code"] == "CategoryNotFoundError"
        assert "chairs" in error["detail"]

    @pytest.mark.asyncio
    async def test_update_category_prunes_prices(self, client, service, sofa_selection):
        service.save_price("sofas", sofa_selection, "large", 1, 2)

        response = await client.put(
            "/api/v1/categories/sofas",
            json={
                "name": "Couches",
                "features": [
                    {"id": "seats", "name": "Seats", "options": [{"id": "seats-2", "label": "2-Seater"}]},
                    {"id": "material", "name": "Material", "options": [{"id": "fabric", "label": "Fabric"}]},
                ],
                "sizes": [{"id": "small", "label": "Small"}],
            },
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Couches"
        assert service.list_prices() == []

    @pytest.mark.asyncio
    async def test_delete_category(self, client, service):
        response = await client.delete("/api/v1/categories/sofas")

        assert response.status_code == 200
        assert response.json() == {"deleted": True}
        assert service.get_category("stools")

        again = await client.delete("/api/v1/categories/sofas")
        assert again.json() == {"deleted": False}


class TestChildEndpoints:
    """Tests for feature, option and size endpoints."""

    @pytest.mark.asyncio
    async def test_feature_option_size_lifecycle(self, client, service):
        feature = await client.post(
            "/api/v1/categories/stools/features",
            json={"name": "Finish", "selection_type": "multiple"},
        )
        assert feature.status_code == 201
        feature_id = feature.json()["id"]
        assert feature.json()["selection_type"] == "multiple"

        option = await client.post(
            f"/api/v1/categories/stools/features/{feature_id}/options",
            json={"label": "Matte Black"},
        )
        assert option.status_code == 201
        option_id = option.json()["id"]
        assert option.json()["image_hint"] == "matte black"

        size = await client.post("/api/v1/categories/stools/sizes", json={"label": "Tall"})
        assert size.status_code == 201

        updated = await client.put(
            f"/api/v1/categories/stools/features/{feature_id}/options/{option_id}",
            json={"label": "Gloss Black"},
        )
        assert updated.status_code == 200
        assert updated.json()["label"] == "Gloss Black"

        deleted = await client.delete(f"/api/v1/categories/stools/features/{feature_id}")
        assert deleted.json() == {"deleted": True}
        assert service.get_category("stools").features == []

    @pytest.mark.asyncio
    async def test_feature_on_unknown_category(self, client):
        response = await client.post("/api/v1/categories/chairs/features", json={"name": "Legs"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_unknown_size(self, client):
        response = await client.put("/api/v1/categories/sofas/sizes/huge", json={"label": "Huge"})

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "SizeNotFoundError"

    @pytest.mark.asyncio
    async def test_delete_size_cascades(self, client, service, sofa_selection):
        service.save_price("sofas", sofa_selection, "small", 1, 2)

        response = await client.delete("/api/v1/categories/sofas/sizes/small")

        assert response.json() == {"deleted": True}
        assert service.list_prices() == []


class TestPriceEndpoints:
    """Tests for /api/v1/prices."""

    @pytest.mark.asyncio
    async def test_upsert_then_lookup(self, client, sofa_selection):
        saved = await client.put("/api/v1/prices", json=price_body(sofa_selection))
        assert saved.status_code == 200
        assert saved.json()["price_range"] == {"min": 300.0, "max": 700.0}

        lookup = await client.post(
            "/api/v1/prices/lookup",
            json={"category_id": "sofas", "feature_selections": sofa_selection, "size_id": "small"},
        )

        assert lookup.status_code == 200
        assert lookup.json()["priced"] is True
        assert lookup.json()["entry"]["price_range"]["max"] == 700.0

    @pytest.mark.asyncio
    async def test_partial_lookup_is_unpriced(self, client, sofa_selection):
        await client.put("/api/v1/prices", json=price_body(sofa_selection))

        lookup = await client.post(
            "/api/v1/prices/lookup",
            json={"category_id": "sofas", "feature_selections": {"seats": "seats-2"}, "size_id": "small"},
        )

        assert lookup.json() == {"priced": False, "entry": None}

    @pytest.mark.asyncio
    async def test_inverted_range_rejected(self, client, service, sofa_selection):
        response = await client.put("/api/v1/prices", json=price_body(sofa_selection, low=6, high=5))

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "InvalidPriceRangeError"
        assert service.list_prices() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("low, high", [(0, float("inf")), (float("nan"), 5)])
    async def test_non_finite_range_rejected(self, client, service, sofa_selection, low, high):
        """Test NaN and Infinity bounds are invalid ranges, not stored prices."""
        body = json.dumps(price_body(sofa_selection, low=low, high=high))

        response = await client.put(
            "/api/v1/prices",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "InvalidPriceRangeError"
        assert service.list_prices() == []

    @pytest.mark.asyncio
    async def test_incomplete_selection_rejected(self, client):
        response = await client.put("/api/v1/prices", json=price_body({"seats": "seats-2"}))

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "IncompleteSelectionError"

    @pytest.mark.asyncio
    async def test_unknown_category_rejected(self, client, sofa_selection):
        response = await client.put(
            "/api/v1/prices",
            json=price_body(sofa_selection, category_id="chairs"),
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_prices(self, client, sofa_selection):
        await client.put("/api/v1/prices", json=price_body(sofa_selection))
        await client.put("/api/v1/prices", json=price_body({}, size_id="std", category_id="stools"))

        response = await client.get("/api/v1/prices", params={"category_id": "stools"})

        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["feature_selections"] == {}

    @pytest.mark.asyncio
    async def test_combination_image(self, client, sofa_selection):
        body = {"category_id": "sofas", "feature_selections": sofa_selection, "size_id": "small"}

        missing = await client.put("/api/v1/prices/image", json={**body, "image_url": "X"})
        assert missing.status_code == 404

        await client.put("/api/v1/prices", json=price_body(sofa_selection))
        response = await client.put("/api/v1/prices/image", json={**body, "image_url": "X"})

        assert response.status_code == 200
        assert response.json()["override_image_url"] == "X"


class TestCombinationEndpoints:
    """Tests for /api/v1/combinations."""

    @pytest.mark.asyncio
    async def test_full_grid(self, client, sofa_selection):
        await client.put("/api/v1/prices", json=price_body(sofa_selection))

        response = await client.get("/api/v1/combinations")

        body = response.json()
        assert body["total"] == 13
        assert body["priced"] == 1
        assert body["data"][0]["is_priced"] is True
        assert body["data"][1]["price_range"] == {"min": 0.0, "max": 0.0}

    @pytest.mark.asyncio
    async def test_filter_unpriced(self, client, sofa_selection):
        await client.put("/api/v1/prices", json=price_body(sofa_selection))

        response = await client.get("/api/v1/combinations", params={"priced": "false"})

        body = response.json()
        assert body["total"] == 12
        assert body["priced"] == 0


class TestEstimateEndpoint:
    """Tests for POST /api/v1/estimates."""

    @pytest.mark.asyncio
    async def test_priced_estimate(self, client, sofa_selection):
        await client.put("/api/v1/prices", json=price_body(sofa_selection))

        response = await client.post(
            "/api/v1/estimates",
            json={
                "selection": {"category_id": "sofas", "feature_selections": sofa_selection, "size_id": "small"},
                "name": "Den",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["description"] == "Sofas (2-Seater, Fabric), Size: Small (50-69 inches)"
        assert body["price_range"] == {"min": 300.0, "max": 700.0}
        assert body["name"] == "Den"
        assert body["image_url"] == "A"

    @pytest.mark.asyncio
    async def test_empty_estimate(self, client):
        response = await client.post("/api/v1/estimates", json={"selection": {}})

        body = response.json()
        assert body["description"] == "No item selected"
        assert body["price_range"] is None
        assert body["image_url"] is None


class TestServiceEndpoints:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/api/v1/health")

        assert response.json() == {"status": "healthy", "service": "furniture-estimator"}

    @pytest.mark.asyncio
    async def test_uninitialized_service(self):
        set_dependencies(None)
        application = FastAPI()
        application.include_router(router)

        async with AsyncClient(transport=ASGITransport(app=application), base_url="http://test") as client:
            response = await client.get("/api/v1/categories")

        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_metrics(self, client):
        response = await client.get("/api/v1/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]


class TestApplicationFactory:
    """Tests for the assembled application."""

    def test_seeded_app(self):
        settings = Settings(seed_catalog=True, log_format="text")

        with TestClient(create_app(settings)) as client:
            categories = client.get("/api/v1/categories")
            root = client.get("/", headers={"X-Request-ID": "req-1"})
            prices = client.get("/api/v1/prices")

        assert [c["id"] for c in categories.json()["data"]] == ["sofas", "tables", "beds"]
        assert root.headers["X-Request-ID"] == "req-1"
        assert root.json()["status"] == "running"
        assert len(prices.json()["data"]) == 12

    def test_empty_app(self):
        with TestClient(create_app(Settings(seed_catalog=False))) as client:
            response = client.get("/api/v1/combinations")

        assert response.json() == {"data": [], "total": 0, "priced": 0}
