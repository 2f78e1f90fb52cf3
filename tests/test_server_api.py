"""HTTP surface tests using FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from aurafit_app.app import AuraFitApp
from aurafit_app.config import AuraFitConfig
from server.api import create_app


@pytest.fixture()
def client() -> TestClient:
    return TestClient(create_app(AuraFitApp(config=AuraFitConfig(genai_provider="offline"))))


def test_healthz(client) -> None:
    response = client.get("/healthz")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["provider"] == "offline"
    assert body["catalog_size"] > 0
    assert body["config"]["api_key_configured"] is False
    assert "api_key" not in body["config"]


def test_recommendation_endpoint(client) -> None:
    response = client.post("/recommendations", json={"prompt": "wedding makeup for the bride"})

    assert response.status_code == 200
    body = response.json()
    assert body["occasion"] == "Bridal Makeup"
    assert body["filters"]["lipstick"]["colorHex"] == "#D2527F"
    assert body["source"] == "fallback"
    assert len(body["products"]) <= 5


def test_recommendation_endpoint_rejects_blank_prompt(client) -> None:
    assert client.post("/recommendations", json={"prompt": ""}).status_code == 422
    assert client.post("/recommendations", json={}).status_code == 422


def test_catalog_search_endpoint(client) -> None:
    response = client.post("/catalog/search", json={"query": "pastel sarees"})

    assert response.status_code == 200
    body = response.json()
    assert body["products"]
    assert all(product["type"] == "saree" for product in body["products"])
