"""Test health, root and error fallbacks."""
from unittest.mock import patch

from nivaasi.app import create_app


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["status"] == "OK"
    assert "timestamp" in data


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["message"] == "Nivaasi API"
    assert isinstance(data["version"], str)


def test_unknown_api_route_is_not_implemented(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 501
    assert resp.get_json()["endpoint"] == "/api/does-not-exist"


def test_unknown_page_is_404(client):
    assert client.get("/nowhere").status_code == 404


def test_unexpected_error_returns_500_with_stack(client):
    with patch("nivaasi.services.properties.list_properties", side_effect=RuntimeError("boom")):
        resp = client.get("/api/properties/list", query_string={"ownerEmail": "o@x.com"})
    assert resp.status_code == 500
    data = resp.get_json()
    assert data["success"] is False
    assert data["message"] == "boom"
    assert "stack" in data


def test_production_hides_stack():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "NIVAASI_ENV": "production",
    })
    client = app.test_client()
    with patch("nivaasi.services.properties.list_properties", side_effect=RuntimeError("boom")):
        resp = client.get("/api/properties/list", query_string={"ownerEmail": "o@x.com"})
    assert resp.status_code == 500
    assert "stack" not in resp.get_json()
