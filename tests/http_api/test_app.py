# tests/http_api/test_app.py

from fastapi.testclient import TestClient

from ecommerce_http_api.config import AppEnv
from ecommerce_http_api.errors import StoreError
from ecommerce_http_api.main import create_app
from ecommerce_http_api.services.products_service import ProductsService


def test_health_is_served_at_root_and_under_prefix(client):
    for path in ("/health", "/api/health"):
        resp = client.get(path)
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["status"] == "OK"
        assert body["database"] == "Connected"
        assert "timestamp" in body


def test_banner(client):
    body = client.get("/").json()
    assert body["success"] is True
    assert body["environment"] == "testing"


def test_banner_is_not_mounted_under_api_prefix(client):
    resp = client.get("/api/")
    assert resp.status_code == 404
    assert resp.json()["success"] is False


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/api/orders")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Route not found: /api/orders"}


def test_openapi_groups_routes_by_resource(client):
    schema = client.get("/openapi.json").json()
    tags = {
        tag
        for methods in schema["paths"].values()
        for operation in methods.values()
        for tag in operation.get("tags", [])
    }
    assert {"users", "products"} <= tags
    assert "/api/products/{id}/stock" in schema["paths"]


def test_request_id_is_echoed_or_generated(client):
    echoed = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert echoed.headers["X-Request-ID"] == "abc-123"

    generated = client.get("/health")
    assert len(generated.headers["X-Request-ID"]) == 32


def test_store_error_is_masked_outside_development(client, monkeypatch):
    def boom(self):
        raise StoreError("disk I/O error")

    monkeypatch.setattr(ProductsService, "categories", boom)

    resp = client.get("/api/products/categories")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Internal server error"}


def test_store_error_detail_is_shown_in_development(settings, seeded, hasher, monkeypatch):
    def boom(self):
        raise StoreError("disk I/O error")

    monkeypatch.setattr(ProductsService, "categories", boom)
    dev_settings = settings.model_copy(update={"APP_ENV": AppEnv.DEVELOPMENT})
    app = create_app(dev_settings, database=seeded, password_hasher=hasher)

    with TestClient(app) as client:
        resp = client.get("/api/products/categories")

    assert resp.status_code == 500
    assert resp.json() == {
        "success": False,
        "message": "Internal server error",
        "error": "disk I/O error",
    }


def test_unexpected_exception_becomes_500(app, monkeypatch):
    def boom(self):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(ProductsService, "brands", boom)

    with TestClient(app, raise_server_exceptions=False) as client:
        resp = client.get("/api/products/brands")

    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Internal server error"
    assert "error" not in body


def test_malformed_json_body_is_400(client):
    resp = client.post(
        "/api/products",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["success"] is False
